import pytest

from sbombastic.meta import ObjectMeta
from sbombastic.storage_types import (
    FIELD_SELECTOR_LABELS,
    GROUP_NAME,
    SBOM,
    FieldSelectorError,
    GroupKind,
    GroupResource,
    Image,
    ImageLayer,
    ImageMetadata,
    ImageSpec,
    SBOMSpec,
    VulnerabilityReport,
    VulnerabilityReportSpec,
    convert_field_selector,
    kind,
    resource,
)


def test_kind_is_group_qualified():
    assert kind("Image") == GroupKind(group="storage.sbombastic.rancher.io", kind="Image")


def test_resource_is_group_qualified():
    assert resource("sboms") == GroupResource(
        group="storage.sbombastic.rancher.io", resource="sboms"
    )


@pytest.mark.parametrize(
    "label",
    [
        "metadata.name",
        "metadata.namespace",
        "spec.imageMetadata.registry",
        "spec.imageMetadata.registryURI",
        "spec.imageMetadata.repository",
        "spec.imageMetadata.tag",
        "spec.imageMetadata.platform",
        "spec.imageMetadata.digest",
    ],
)
def test_known_field_selectors_pass_through(label):
    assert convert_field_selector(label, "value-1") == (label, "value-1")


def test_every_listed_label_is_accepted():
    assert len(FIELD_SELECTOR_LABELS) == 8
    converted = [convert_field_selector(label, "v") for label in FIELD_SELECTOR_LABELS]
    assert converted == [(label, "v") for label in FIELD_SELECTOR_LABELS]


@pytest.mark.parametrize("label", ["spec.layers", "metadata.labels", "", "spec.imageMetadata"])
def test_unknown_field_selector_raises(label):
    with pytest.raises(FieldSelectorError) as info:
        convert_field_selector(label, "x")
    assert str(info.value).startswith(f'"{label}" is not a known field selector')
    assert '"spec.imageMetadata.*"' in str(info.value)


def test_field_selector_error_is_value_error():
    with pytest.raises(ValueError):
        convert_field_selector("status.phase", "x")


def test_image_holds_its_metadata():
    metadata = ImageMetadata(
        registry="test-registry",
        repository="sbombastic-dev",
        tag="latest",
        digest="sha256:123",
        platform="linux/amd64",
    )
    image = Image(
        metadata=ObjectMeta(name="img", namespace="default"),
        spec=ImageSpec(image_metadata=metadata, layers=[ImageLayer(digest="sha256:234")]),
    )
    assert image.spec.image_metadata.repository == "sbombastic-dev"
    assert image.spec.layers[0].digest == "sha256:234"
    assert image.metadata.namespace == "default"


def test_defaults_are_independent():
    first = Image()
    second = Image()
    first.spec.layers.append(ImageLayer(command="cmd"))
    first.metadata.labels["k"] = "v"
    assert second.spec.layers == []
    assert second.metadata.labels == {}


def test_sbom_and_report_carry_payloads():
    sbom = SBOM(spec=SBOMSpec(image_metadata=ImageMetadata(tag="latest"), spdx={"a": 1}))
    report = VulnerabilityReport(spec=VulnerabilityReportSpec(sarif={}))
    assert sbom.spec.spdx == {"a": 1}
    assert sbom.spec.image_metadata.tag == "latest"
    assert report.spec.sarif == {}
    assert report.spec.image_metadata == ImageMetadata()


def test_kind_names_qualify_with_group():
    qualified = [kind(cls.KIND) for cls in (Image, SBOM, VulnerabilityReport)]
    assert qualified == [
        GroupKind(group=GROUP_NAME, kind="Image"),
        GroupKind(group=GROUP_NAME, kind="SBOM"),
        GroupKind(group=GROUP_NAME, kind="VulnerabilityReport"),
    ]