"""Resource types, status conditions, an in-memory store and reconcilers for registry scanning."""

__version__ = "0.1.0"

__all__ = [
    "apiserver_options",
    "cluster",
    "controllers",
    "logutil",
    "meta",
    "storage_types",
    "v1alpha1",
    "versioning",
]