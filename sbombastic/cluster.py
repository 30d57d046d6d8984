"""An in-memory object store with the client operations the controllers use."""

from __future__ import annotations

import copy
import itertools
import re
import uuid
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, TypeVar

T = TypeVar("T")

_STATUS_ATTRIBUTES = ("status", "conditions")
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])([A-Z])")


class NotFoundError(LookupError):
    """Raised when an object does not exist in the store."""

    def __init__(self, kind: str, key: ObjectKey) -> None:
        super().__init__(f'{kind} "{key.name}" not found in namespace "{key.namespace}"')
        self.kind = kind
        self.key = key


@dataclass(frozen=True)
class ObjectKey:
    """The namespace and name that identify an object of a given kind."""

    namespace: str
    name: str

    def __str__(self) -> str:
        return f"{self.namespace}/{self.name}"


def _snake(part: str) -> str:
    return _CAMEL_BOUNDARY.sub(r"_\1", part).lower()


def _field_value(obj: Any, path: str) -> Any:
    value = obj
    for part in path.split("."):
        attribute = _snake(part)
        if not hasattr(value, attribute):
            raise ValueError(f"field {path!r} is not supported by {type(obj).__name__}")
        value = getattr(value, attribute)
    return value


def _status_attribute(obj: Any) -> str | None:
    return next((name for name in _STATUS_ATTRIBUTES if hasattr(obj, name)), None)


def _key_of(obj: Any) -> ObjectKey:
    return ObjectKey(namespace=obj.metadata.namespace, name=obj.metadata.name)


class InMemoryClient:
    """Stores API objects by kind, namespace and name.

    Objects handed in and out are copies, so callers never share state with
    the store. Updates leave the status alone; status updates touch nothing else.
    """

    def __init__(self) -> None:
        self._objects: dict[tuple[type, ObjectKey], Any] = {}
        self._versions = itertools.count(1)

    def _next_version(self) -> str:
        return str(next(self._versions))

    def _stored(self, kind: type, key: ObjectKey) -> Any:
        try:
            return self._objects[(kind, key)]
        except KeyError:
            raise NotFoundError(kind.__name__, key) from None

    @staticmethod
    def _sync_meta(target: Any, source: Any) -> None:
        target.metadata.uid = source.metadata.uid
        target.metadata.generation = source.metadata.generation
        target.metadata.resource_version = source.metadata.resource_version

    def create(self, obj: Any) -> None:
        """Store a new object; raise ValueError if it already exists."""
        key = _key_of(obj)
        if not key.name:
            raise ValueError("object must have a name")
        kind = type(obj)
        if (kind, key) in self._objects:
            raise ValueError(f'{kind.__name__} "{key}" already exists')
        stored = copy.deepcopy(obj)
        if not stored.metadata.uid:
            stored.metadata.uid = str(uuid.uuid4())
        stored.metadata.generation = 1
        stored.metadata.resource_version = self._next_version()
        self._objects[(kind, key)] = stored
        self._sync_meta(obj, stored)

    def get(self, kind: type[T], key: ObjectKey) -> T:
        """Return a copy of the stored object of the given kind and key."""
        return copy.deepcopy(self._stored(kind, key))

    def list(
        self,
        kind: type[T],
        namespace: str | None = None,
        labels: Mapping[str, str] | None = None,
        fields: Mapping[str, Any] | None = None,
    ) -> list[T]:
        """Return copies of the matching objects, ordered by namespace and name."""
        labels = labels or {}
        fields = fields or {}
        found = []
        for (stored_kind, key), obj in self._objects.items():
            if stored_kind is not kind:
                continue
            if namespace is not None and key.namespace != namespace:
                continue
            if any(obj.metadata.labels.get(k) != v for k, v in labels.items()):
                continue
            if any(_field_value(obj, path) != v for path, v in fields.items()):
                continue
            found.append((key.namespace, key.name, obj))
        found.sort(key=lambda item: (item[0], item[1]))
        return [copy.deepcopy(obj) for _, _, obj in found]

    def update(self, obj: Any) -> None:
        """Replace the stored object's metadata and spec, keeping its status."""
        kind = type(obj)
        key = _key_of(obj)
        current = self._stored(kind, key)
        updated = copy.deepcopy(obj)
        status_name = _status_attribute(current)
        if status_name is not None:
            setattr(updated, status_name, copy.deepcopy(getattr(current, status_name)))
        updated.metadata.uid = current.metadata.uid
        updated.metadata.generation = current.metadata.generation
        if getattr(current, "spec", None) != getattr(updated, "spec", None):
            updated.metadata.generation += 1
        updated.metadata.resource_version = self._next_version()
        self._objects[(kind, key)] = updated
        self._sync_meta(obj, updated)

    def update_status(self, obj: Any) -> None:
        """Replace only the stored object's status."""
        kind = type(obj)
        key = _key_of(obj)
        current = self._stored(kind, key)
        status_name = _status_attribute(current)
        if status_name is None:
            raise ValueError(f"{kind.__name__} has no status")
        setattr(current, status_name, copy.deepcopy(getattr(obj, status_name)))
        current.metadata.resource_version = self._next_version()
        self._sync_meta(obj, current)

    def delete(self, obj: Any) -> None:
        """Remove the object from the store."""
        kind = type(obj)
        key = _key_of(obj)
        self._stored(kind, key)
        del self._objects[(kind, key)]