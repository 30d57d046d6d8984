# sbombastic

Building blocks for a container registry scanning service: resource types
for registries, scan jobs, images, SBOMs and vulnerability reports; the
status condition logic that moves a scan job through its lifecycle; an
in-memory object store; and reconcilers that keep those resources
consistent with one another.

The package has no dependencies outside the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `sbombastic.meta`: `ConditionStatus` (`TRUE`, `FALSE`, `UNKNOWN`),
  `Condition` and `ObjectMeta`. `set_status_condition` adds or updates a
  condition in a list and returns whether anything changed; the transition
  time moves only when the status changes. `find_status_condition` and
  `is_status_condition_true` look conditions up by type.
- `sbombastic.v1alpha1`: `Registry` and `RegistrySpec`, with
  `Registry.to_dict` and `Registry.from_dict` for the JSON form; `ScanJob`,
  `ScanJobSpec` and `ScanJobStatus`. A `ScanJob` holds four conditions
  (`Scheduled`, `InProgress`, `Complete`, `Failed`) that are set by
  `initialize_conditions`, `mark_scheduled`, `mark_in_progress`,
  `mark_complete` and `mark_failed`; `mark_in_progress` records a start time
  and the last two a completion time. Its state is read with `is_pending`,
  `is_scheduled`, `is_in_progress`, `is_complete` and `is_failed`. The module
  also defines the label, annotation, condition type and reason constants,
  such as `LABEL_SCAN_JOB` and `REASON_ALL_IMAGES_SCANNED`.
- `sbombastic.storage_types`: `Image`, `ImageSpec`, `ImageLayer`, `SBOM`,
  `SBOMSpec`, `VulnerabilityReport` and `VulnerabilityReportSpec`, all
  carrying an `ImageMetadata`. `kind` and `resource` qualify names with the
  `storage.sbombastic.rancher.io` group as `GroupKind` and `GroupResource`;
  `convert_field_selector` accepts `metadata.name`, `metadata.namespace` and
  the `spec.imageMetadata.*` fields and raises `FieldSelectorError` for any
  other label.
- `sbombastic.logutil`: `parse_log_level` turns `debug`, `INFO`, `warn`,
  `error` and forms with an offset such as `DEBUG+2` into `logging` levels,
  raising `ValueError` for anything else.
- `sbombastic.versioning`: `Version` (with `parse` and `offset_minor`) and
  `wardle_version_to_kube_version`, which maps the storage component's
  version onto a Kubernetes version: 1.2 maps to the Kubernetes binary
  version (1.33 by default), lower minors to older Kubernetes minors, higher
  ones are capped, and major versions other than 1 give `None`.
- `sbombastic.apiserver_options`: `get_rest_options` returns `RESTOptions`
  with garbage collection enabled, one delete-collection worker and a
  `/<group>/<resource>` prefix.
- `sbombastic.cluster`: `InMemoryClient`, a store keyed by type, namespace
  and name with `create`, `get`, `list`, `update`, `update_status` and
  `delete`. Objects go in and come out as copies. `list` filters by
  namespace, labels and dotted field paths such as
  `spec.imageMetadata.registry`. `update` keeps the stored status and
  `update_status` changes nothing else. A missing object raises
  `NotFoundError`; `ObjectKey` names an object.
- `sbombastic.controllers`: `RegistryReconciler` deletes the Images of a
  Registry whose repository is no longer in the Registry's repository list;
  `VulnerabilityReportReconciler` counts the reports labelled with a ScanJob's
  name, stores the count and marks the job complete once it equals the job's
  image count, or in progress until then. Both take a `ReconcileRequest`.
  Both raise `ReconcileError` when a resource they depend on is missing or
  lacks the scan job label. A request for an object that no longer exists is
  ignored.

## Example

```python
from sbombastic.cluster import InMemoryClient, ObjectKey
from sbombastic.controllers import ReconcileRequest, VulnerabilityReportReconciler
from sbombastic.meta import ObjectMeta
from sbombastic.storage_types import VulnerabilityReport
from sbombastic.v1alpha1 import LABEL_SCAN_JOB, ScanJob, ScanJobSpec

client = InMemoryClient()

job = ScanJob(metadata=ObjectMeta(name="nightly", namespace="default"),
              spec=ScanJobSpec(registry="my-registry"))
client.create(job)
job.status.images_count = 1
client.update_status(job)

report = VulnerabilityReport(
    metadata=ObjectMeta(name="report-1", namespace="default",
                        labels={LABEL_SCAN_JOB: "nightly"}))
client.create(report)

VulnerabilityReportReconciler(client).reconcile(
    ReconcileRequest(namespace="default", name="report-1"))

job = client.get(ScanJob, ObjectKey(namespace="default", name="nightly"))
print(job.status.scanned_images_count, job.is_complete())  # 1 True
```

## What the package does not do

- It provides no command-line program and no long-running service: no API
  server, no watch loop that calls the reconcilers on changes, and no
  connection to a real cluster. Reconcilers are called by hand against an
  `InMemoryClient`.
- It keeps objects in memory only; there is no persistent storage.
- It does not contact container registries, generate SBOMs, scan for
  vulnerabilities or publish messages to workers. It has no reconciler that
  schedules a `ScanJob`; the `mark_*` methods are there for code that does.