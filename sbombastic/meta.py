"""Object metadata and status conditions shared by the API types."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone


class ConditionStatus(str, enum.Enum):
    """The state of a condition."""

    TRUE = "True"
    FALSE = "False"
    UNKNOWN = "Unknown"


@dataclass
class Condition:
    """One observation of an object's state."""

    type: str
    status: ConditionStatus
    reason: str = ""
    message: str = ""
    observed_generation: int = 0
    last_transition_time: datetime | None = None


@dataclass
class ObjectMeta:
    """Identity and bookkeeping data carried by every API object."""

    name: str = ""
    namespace: str = ""
    uid: str = ""
    generation: int = 0
    resource_version: str = ""
    labels: dict[str, str] = field(default_factory=dict)
    annotations: dict[str, str] = field(default_factory=dict)
    deletion_timestamp: datetime | None = None


def _now() -> datetime:
    return datetime.now(timezone.utc)


def find_status_condition(
    conditions: list[Condition], condition_type: str
) -> Condition | None:
    """Return the condition of the given type, or None if there is none."""
    return next((c for c in conditions if c.type == condition_type), None)


def is_status_condition_true(conditions: list[Condition], condition_type: str) -> bool:
    """Tell whether the condition of the given type exists and is True."""
    condition = find_status_condition(conditions, condition_type)
    return condition is not None and condition.status == ConditionStatus.TRUE


def set_status_condition(conditions: list[Condition], new_condition: Condition) -> bool:
    """Add or update a condition in place; return True if anything changed.

    The transition time moves only when the status changes; when the new
    condition carries no transition time, the current time is used.
    """
    existing = find_status_condition(conditions, new_condition.type)
    if existing is None:
        added = replace(new_condition)
        if added.last_transition_time is None:
            added.last_transition_time = _now()
        conditions.append(added)
        return True

    changed = False
    if existing.status != new_condition.status:
        existing.status = new_condition.status
        existing.last_transition_time = new_condition.last_transition_time or _now()
        changed = True
    if existing.reason != new_condition.reason:
        existing.reason = new_condition.reason
        changed = True
    if existing.message != new_condition.message:
        existing.message = new_condition.message
        changed = True
    if existing.observed_generation != new_condition.observed_generation:
        existing.observed_generation = new_condition.observed_generation
        changed = True
    return changed