"""REST storage options for the resources served by the storage API server."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RESTOptions:
    """Options the generic API machinery needs for one resource."""

    enable_garbage_collection: bool
    delete_collection_workers: int
    resource_prefix: str


def get_rest_options(group: str, resource: str) -> RESTOptions:
    """Return options with garbage collection on and a "/<group>/<resource>" prefix.

    The prefix matches the storage key format
    /<group>/<resource>/<namespace>/<name>.
    """
    return RESTOptions(
        enable_garbage_collection=True,
        delete_collection_workers=1,
        resource_prefix=f"/{group}/{resource}",
    )