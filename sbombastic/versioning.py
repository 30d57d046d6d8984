"""Version numbers and the mapping of the storage component's version to Kubernetes."""

from __future__ import annotations

import functools
import re
from dataclasses import dataclass

DEFAULT_WARDLE_VERSION = "1.2"
DEFAULT_KUBE_BINARY_VERSION = "1.33"

_MAX_INT32 = 2**31 - 1
_VERSION_RE = re.compile(r"^\s*v?(\d+)\.(\d+)(?:\.(\d+))?\s*$")


@functools.total_ordering
@dataclass(frozen=True, eq=False)
class Version:
    """A major.minor[.patch] version; a missing patch compares as zero."""

    major: int
    minor: int
    patch: int | None = None

    @classmethod
    def parse(cls, text: str) -> Version:
        """Parse "1.33", "v1.2" or "1.2.3"; raise ValueError for anything else."""
        match = _VERSION_RE.match(text)
        if match is None:
            raise ValueError(f"could not parse {text!r} as version")
        major, minor, patch = match.groups()
        return cls(int(major), int(minor), int(patch) if patch is not None else None)

    def _key(self) -> tuple[int, int, int]:
        return (self.major, self.minor, self.patch or 0)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._key() < other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __str__(self) -> str:
        if self.patch is None:
            return f"{self.major}.{self.minor}"
        return f"{self.major}.{self.minor}.{self.patch}"

    def offset_minor(self, offset: int) -> Version:
        """Return major.minor shifted by offset; the minor never drops below zero."""
        return Version(self.major, max(self.minor + offset, 0))


def wardle_version_to_kube_version(
    ver: Version, kube_version: Version | str = DEFAULT_KUBE_BINARY_VERSION
) -> Version | None:
    """Map the storage component's version onto the Kubernetes version it emulates.

    Version 1.2 maps to the Kubernetes binary version; lower minors map to
    correspondingly older Kubernetes minors, and higher ones are capped at
    the binary version. Only major version 1 has a mapping; others give None.
    """
    if ver.major != 1:
        return None
    kube = Version.parse(kube_version) if isinstance(kube_version, str) else kube_version
    if ver.minor > _MAX_INT32:
        raise ValueError("minor version is too large")
    mapped = kube.offset_minor(ver.minor - 2)
    if mapped > kube:
        return kube
    return mapped