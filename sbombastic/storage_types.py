"""Image, SBOM and VulnerabilityReport resources of the storage API group."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar

from sbombastic.meta import ObjectMeta

GROUP_NAME = "storage.sbombastic.rancher.io"
VERSION = "v1alpha1"
API_VERSION = f"{GROUP_NAME}/{VERSION}"

FIELD_SELECTOR_LABELS = (
    "metadata.name",
    "metadata.namespace",
    "spec.imageMetadata.registry",
    "spec.imageMetadata.registryURI",
    "spec.imageMetadata.repository",
    "spec.imageMetadata.tag",
    "spec.imageMetadata.platform",
    "spec.imageMetadata.digest",
)


@dataclass(frozen=True)
class GroupKind:
    """A kind qualified by its API group."""

    group: str
    kind: str


@dataclass(frozen=True)
class GroupResource:
    """A resource qualified by its API group."""

    group: str
    resource: str


class FieldSelectorError(ValueError):
    """Raised for a field selector label the storage types do not support."""


def kind(kind: str) -> GroupKind:
    """Qualify a kind with the storage API group."""
    return GroupKind(group=GROUP_NAME, kind=kind)


def resource(resource: str) -> GroupResource:
    """Qualify a resource with the storage API group."""
    return GroupResource(group=GROUP_NAME, resource=resource)


def convert_field_selector(label: str, value: str) -> tuple[str, str]:
    """Check a field selector label and return the label and value unchanged."""
    if label in FIELD_SELECTOR_LABELS:
        return label, value
    raise FieldSelectorError(
        f'"{label}" is not a known field selector: only '
        f'"metadata.name", "metadata.namespace", "spec.imageMetadata.*"'
    )


@dataclass
class ImageMetadata:
    """Where an image lives and which exact artifact it is."""

    registry: str = ""
    registry_uri: str = ""
    repository: str = ""
    tag: str = ""
    platform: str = ""
    digest: str = ""


@dataclass
class ImageLayer:
    """One layer of an OCI image; the command is base64 encoded."""

    command: str = ""
    digest: str = ""
    diff_id: str = ""


@dataclass
class ImageSpec:
    """Desired state of an Image."""

    image_metadata: ImageMetadata = field(default_factory=ImageMetadata)
    layers: list[ImageLayer] = field(default_factory=list)


@dataclass
class Image:
    """An image found in a registry."""

    KIND: ClassVar[str] = "Image"

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: ImageSpec = field(default_factory=ImageSpec)


@dataclass
class SBOMSpec:
    """Desired state of an SBOM; spdx holds the SPDX JSON document."""

    image_metadata: ImageMetadata = field(default_factory=ImageMetadata)
    spdx: Any = None


@dataclass
class SBOM:
    """A software bill of materials of an OCI artifact."""

    KIND: ClassVar[str] = "SBOM"

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: SBOMSpec = field(default_factory=SBOMSpec)


@dataclass
class VulnerabilityReportSpec:
    """Desired state of a VulnerabilityReport; sarif holds the SARIF report."""

    image_metadata: ImageMetadata = field(default_factory=ImageMetadata)
    sarif: Any = None


@dataclass
class VulnerabilityReport:
    """The result of scanning an image for vulnerabilities."""

    KIND: ClassVar[str] = "VulnerabilityReport"

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: VulnerabilityReportSpec = field(default_factory=VulnerabilityReportSpec)