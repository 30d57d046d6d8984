"""Reconcilers that keep Images and ScanJob progress in line with the cluster state."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sbombastic.cluster import InMemoryClient, NotFoundError, ObjectKey
from sbombastic.storage_types import Image, VulnerabilityReport
from sbombastic.v1alpha1 import (
    LABEL_SCAN_JOB,
    REASON_ALL_IMAGES_SCANNED,
    REASON_IMAGE_SCAN_IN_PROGRESS,
    Registry,
    ScanJob,
)

logger = logging.getLogger(__name__)

_REGISTRY_FIELD = "spec.imageMetadata.registry"


class ReconcileError(Exception):
    """Raised when a reconciliation cannot be completed."""


@dataclass(frozen=True)
class ReconcileRequest:
    """Identifies the object to reconcile."""

    namespace: str
    name: str

    @property
    def key(self) -> ObjectKey:
        return ObjectKey(namespace=self.namespace, name=self.name)


class RegistryReconciler:
    """Deletes the Images of a Registry whose repository is no longer listed."""

    def __init__(self, client: InMemoryClient) -> None:
        self.client = client

    def reconcile(self, request: ReconcileRequest) -> None:
        """Reconcile one Registry; a missing Registry is ignored."""
        try:
            registry = self.client.get(Registry, request.key)
        except NotFoundError:
            return

        repositories = registry.spec.repositories
        if not repositories:
            return

        logger.debug(
            "Deleting Images that are not in the current list of repositories: "
            "name=%s namespace=%s repositories=%s",
            registry.metadata.name,
            registry.metadata.namespace,
            repositories,
        )
        images = self.client.list(
            Image,
            namespace=request.namespace,
            fields={_REGISTRY_FIELD: registry.metadata.name},
        )
        allowed = set(repositories)
        for image in images:
            repository = image.spec.image_metadata.repository
            if repository in allowed:
                continue
            try:
                self.client.delete(image)
            except NotFoundError as err:
                raise ReconcileError(
                    f"unable to delete Image {image.metadata.name}: {err}"
                ) from err
            logger.debug("Deleted Image name=%s repository=%s", image.metadata.name, repository)


class VulnerabilityReportReconciler:
    """Counts a ScanJob's VulnerabilityReports and updates the job's progress."""

    def __init__(self, client: InMemoryClient) -> None:
        self.client = client

    def reconcile(self, request: ReconcileRequest) -> None:
        """Reconcile one VulnerabilityReport; a missing or deleted report is ignored."""
        try:
            report = self.client.get(VulnerabilityReport, request.key)
        except NotFoundError:
            return

        if report.metadata.deletion_timestamp is not None:
            return

        scan_job_name = report.metadata.labels.get(LABEL_SCAN_JOB)
        if scan_job_name is None:
            raise ReconcileError(
                f"scan job name not found in labels for VulnerabilityReport {request.key}"
            )

        try:
            scan_job = self.client.get(
                ScanJob, ObjectKey(namespace=request.namespace, name=scan_job_name)
            )
        except NotFoundError as err:
            raise ReconcileError(f"failed to get ScanJob {scan_job_name}: {err}") from err

        reports = self.client.list(
            VulnerabilityReport,
            namespace=request.namespace,
            labels={LABEL_SCAN_JOB: scan_job_name},
        )
        logger.debug(
            "counted VulnerabilityReports scanJob=%s imagesCount=%d scannedImagesCount=%d",
            scan_job_name,
            scan_job.status.images_count,
            len(reports),
        )

        scan_job.status.scanned_images_count = len(reports)
        if scan_job.status.scanned_images_count == scan_job.status.images_count:
            scan_job.mark_complete(REASON_ALL_IMAGES_SCANNED, "All images scanned successfully")
        else:
            scan_job.mark_in_progress(REASON_IMAGE_SCAN_IN_PROGRESS, "Image scan in progress")

        try:
            self.client.update_status(scan_job)
        except NotFoundError as err:
            raise ReconcileError(f"failed to update ScanJob status: {err}") from err