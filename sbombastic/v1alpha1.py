"""Registry and ScanJob resources of the sbombastic.rancher.io/v1alpha1 group."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from sbombastic.meta import (
    Condition,
    ConditionStatus,
    ObjectMeta,
    is_status_condition_true,
    set_status_condition,
)

LABEL_MANAGED_BY_KEY = "app.kubernetes.io/managed-by"
LABEL_MANAGED_BY_VALUE = "sbombastic"
LABEL_PART_OF_KEY = "app.kubernetes.io/part-of"
LABEL_PART_OF_VALUE = "sbombastic"
LABEL_SCAN_JOB = "sbombastic.rancher.io/scanjob"

GROUP = "sbombastic.rancher.io"
VERSION = "v1alpha1"
API_VERSION = f"{GROUP}/{VERSION}"

REGISTRY_LAST_DISCOVERED_AT_ANNOTATION = "sbombastic.rancher.io/last-discovered-at"
REGISTRY_LAST_SCANNED_AT_ANNOTATION = "sbombastic.rancher.io/last-scanned-at"
REGISTRY_DISCOVERING_CONDITION = "Discovering"
REGISTRY_DISCOVERED_CONDITION = "Discovered"
REGISTRY_DISCOVERY_REQUESTED_REASON = "DiscoveryRequested"
REGISTRY_FAILED_TO_REQUEST_DISCOVERY_REASON = "FailedToRequestDiscovery"

REGISTRY_ANNOTATION = "sbombastic.rancher.io/registry"

CONDITION_TYPE_SCHEDULED = "Scheduled"
CONDITION_TYPE_IN_PROGRESS = "InProgress"
CONDITION_TYPE_COMPLETE = "Complete"
CONDITION_TYPE_FAILED = "Failed"

REASON_PENDING = "Pending"
REASON_SCHEDULED = "Scheduled"
REASON_IN_PROGRESS = "InProgress"
REASON_CATALOG_CREATION_IN_PROGRESS = "CatalogCreationInProgress"
REASON_SBOM_GENERATION_IN_PROGRESS = "SBOMGenerationInProgress"
REASON_IMAGE_SCAN_IN_PROGRESS = "ImageScanInProgress"
REASON_COMPLETE = "Complete"
REASON_FAILED = "Failed"
REASON_NO_IMAGES_TO_SCAN = "NoImagesToScan"
REASON_ALL_IMAGES_SCANNED = "AllImagesScanned"
REASON_REGISTRY_NOT_FOUND = "RegistryNotFound"
REASON_INTERNAL_ERROR = "InternalError"

_MESSAGE_PENDING = "ScanJob is pending"
_MESSAGE_SCHEDULED = "ScanJob is scheduled"
_MESSAGE_IN_PROGRESS = "ScanJob is in progress"
_MESSAGE_COMPLETED = "ScanJob completed successfully"
_MESSAGE_FAILED = "ScanJob failed"

_SCAN_JOB_CONDITION_TYPES = (
    CONDITION_TYPE_SCHEDULED,
    CONDITION_TYPE_IN_PROGRESS,
    CONDITION_TYPE_COMPLETE,
    CONDITION_TYPE_FAILED,
)


def _format_time(value: datetime) -> str:
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def _parse_time(text: str) -> datetime:
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def _meta_to_dict(meta: ObjectMeta) -> dict[str, Any]:
    data: dict[str, Any] = {}
    if meta.name:
        data["name"] = meta.name
    if meta.namespace:
        data["namespace"] = meta.namespace
    if meta.uid:
        data["uid"] = meta.uid
    if meta.resource_version:
        data["resourceVersion"] = meta.resource_version
    if meta.generation:
        data["generation"] = meta.generation
    if meta.deletion_timestamp is not None:
        data["deletionTimestamp"] = _format_time(meta.deletion_timestamp)
    if meta.labels:
        data["labels"] = dict(meta.labels)
    if meta.annotations:
        data["annotations"] = dict(meta.annotations)
    return data


def _meta_from_dict(data: dict[str, Any]) -> ObjectMeta:
    deletion = data.get("deletionTimestamp")
    return ObjectMeta(
        name=data.get("name", ""),
        namespace=data.get("namespace", ""),
        uid=data.get("uid", ""),
        generation=data.get("generation", 0),
        resource_version=data.get("resourceVersion", ""),
        labels=dict(data.get("labels") or {}),
        annotations=dict(data.get("annotations") or {}),
        deletion_timestamp=_parse_time(deletion) if deletion else None,
    )


def _condition_to_dict(condition: Condition) -> dict[str, Any]:
    data: dict[str, Any] = {
        "type": condition.type,
        "status": ConditionStatus(condition.status).value,
    }
    if condition.observed_generation:
        data["observedGeneration"] = condition.observed_generation
    if condition.last_transition_time is not None:
        data["lastTransitionTime"] = _format_time(condition.last_transition_time)
    data["reason"] = condition.reason
    data["message"] = condition.message
    return data


def _condition_from_dict(data: dict[str, Any]) -> Condition:
    when = data.get("lastTransitionTime")
    return Condition(
        type=data["type"],
        status=ConditionStatus(data["status"]),
        reason=data.get("reason", ""),
        message=data.get("message", ""),
        observed_generation=data.get("observedGeneration", 0),
        last_transition_time=_parse_time(when) if when else None,
    )


@dataclass
class RegistrySpec:
    """Desired state of a container registry to scan.

    An empty repositories list means every repository found is scanned.
    """

    uri: str = ""
    repositories: list[str] = field(default_factory=list)
    auth_secret: str = ""
    ca_bundle: str = ""
    insecure: bool = False


@dataclass
class Registry:
    """A container registry known to the scanner."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: RegistrySpec = field(default_factory=RegistrySpec)
    conditions: list[Condition] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready form of the registry."""
        spec: dict[str, Any] = {}
        if self.spec.uri:
            spec["uri"] = self.spec.uri
        if self.spec.repositories:
            spec["repositories"] = list(self.spec.repositories)
        if self.spec.auth_secret:
            spec["authSecret"] = self.spec.auth_secret
        if self.spec.ca_bundle:
            spec["caBundle"] = self.spec.ca_bundle
        if self.spec.insecure:
            spec["insecure"] = True
        status: dict[str, Any] = {}
        if self.conditions:
            status["conditions"] = [_condition_to_dict(c) for c in self.conditions]
        return {
            "apiVersion": API_VERSION,
            "kind": "Registry",
            "metadata": _meta_to_dict(self.metadata),
            "spec": spec,
            "status": status,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Registry:
        """Build a registry from its JSON-ready form."""
        kind = data.get("kind")
        if kind not in (None, "", "Registry"):
            raise ValueError(f"expected kind Registry, got {kind!r}")
        spec = data.get("spec") or {}
        status = data.get("status") or {}
        return cls(
            metadata=_meta_from_dict(data.get("metadata") or {}),
            spec=RegistrySpec(
                uri=spec.get("uri", ""),
                repositories=list(spec.get("repositories") or []),
                auth_secret=spec.get("authSecret", ""),
                ca_bundle=spec.get("caBundle", ""),
                insecure=bool(spec.get("insecure", False)),
            ),
            conditions=[_condition_from_dict(c) for c in status.get("conditions") or []],
        )


@dataclass
class ScanJobSpec:
    """Desired state of a ScanJob: the registry, in the same namespace, to scan."""

    registry: str


@dataclass
class ScanJobStatus:
    """Observed state of a ScanJob."""

    conditions: list[Condition] = field(default_factory=list)
    images_count: int = 0
    scanned_images_count: int = 0
    start_time: datetime | None = None
    completion_time: datetime | None = None


@dataclass
class ScanJob:
    """A request to scan every image of a registry."""

    metadata: ObjectMeta
    spec: ScanJobSpec
    status: ScanJobStatus = field(default_factory=ScanJobStatus)

    def _set(self, condition_type: str, status: ConditionStatus, reason: str, message: str) -> None:
        set_status_condition(
            self.status.conditions,
            Condition(
                type=condition_type,
                status=status,
                reason=reason,
                message=message,
                observed_generation=self.metadata.generation,
            ),
        )

    def _transition(
        self, target: str, reason: str, message: str, other_reason: str, other_message: str
    ) -> None:
        for condition_type in _SCAN_JOB_CONDITION_TYPES:
            if condition_type == target:
                self._set(condition_type, ConditionStatus.TRUE, reason, message)
            else:
                self._set(condition_type, ConditionStatus.FALSE, other_reason, other_message)

    def initialize_conditions(self) -> None:
        """Reset the conditions to Unknown/Pending."""
        self.status.conditions = []
        for condition_type in _SCAN_JOB_CONDITION_TYPES:
            self._set(condition_type, ConditionStatus.UNKNOWN, REASON_PENDING, _MESSAGE_PENDING)

    def mark_scheduled(self, reason: str, message: str) -> None:
        """Mark the job as scheduled."""
        self._transition(
            CONDITION_TYPE_SCHEDULED, reason, message, REASON_SCHEDULED, _MESSAGE_SCHEDULED
        )

    def mark_in_progress(self, reason: str, message: str) -> None:
        """Mark the job as in progress and record its start time."""
        self.status.start_time = datetime.now(timezone.utc)
        self._transition(
            CONDITION_TYPE_IN_PROGRESS, reason, message, REASON_IN_PROGRESS, _MESSAGE_IN_PROGRESS
        )

    def mark_complete(self, reason: str, message: str) -> None:
        """Mark the job as complete and record its completion time."""
        self.status.completion_time = datetime.now(timezone.utc)
        self._transition(
            CONDITION_TYPE_COMPLETE, reason, message, REASON_COMPLETE, _MESSAGE_COMPLETED
        )

    def mark_failed(self, reason: str, message: str) -> None:
        """Mark the job as failed and record its completion time."""
        self.status.completion_time = datetime.now(timezone.utc)
        self._transition(CONDITION_TYPE_FAILED, reason, message, REASON_FAILED, _MESSAGE_FAILED)

    def is_pending(self) -> bool:
        """True when the job is in no other state."""
        return not (
            self.is_scheduled() or self.is_in_progress() or self.is_complete() or self.is_failed()
        )

    def is_scheduled(self) -> bool:
        return is_status_condition_true(self.status.conditions, CONDITION_TYPE_SCHEDULED)

    def is_in_progress(self) -> bool:
        return is_status_condition_true(self.status.conditions, CONDITION_TYPE_IN_PROGRESS)

    def is_complete(self) -> bool:
        return is_status_condition_true(self.status.conditions, CONDITION_TYPE_COMPLETE)

    def is_failed(self) -> bool:
        return is_status_condition_true(self.status.conditions, CONDITION_TYPE_FAILED)