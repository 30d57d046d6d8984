from datetime import datetime, timezone

from sbombastic.meta import (
    Condition,
    ConditionStatus,
    ObjectMeta,
    find_status_condition,
    is_status_condition_true,
    set_status_condition,
)

EARLIER = datetime(2024, 1, 1, tzinfo=timezone.utc)
LATER = datetime(2024, 6, 1, tzinfo=timezone.utc)


def test_set_appends_new_condition_with_time():
    conditions: list[Condition] = []
    changed = set_status_condition(
        conditions, Condition(type="Ready", status=ConditionStatus.TRUE, reason="Ok")
    )
    assert changed is True
    assert len(conditions) == 1
    assert conditions[0].reason == "Ok"
    assert conditions[0].last_transition_time is not None
    assert conditions[0].last_transition_time.tzinfo is not None


def test_set_keeps_explicit_time_for_new_condition():
    conditions: list[Condition] = []
    set_status_condition(
        conditions,
        Condition(type="Ready", status=ConditionStatus.TRUE, last_transition_time=EARLIER),
    )
    assert conditions[0].last_transition_time == EARLIER


def test_set_does_not_alias_caller_object():
    conditions: list[Condition] = []
    original = Condition(type="Ready", status=ConditionStatus.TRUE, reason="Ok")
    set_status_condition(conditions, original)
    original.reason = "Changed"
    assert conditions[0].reason == "Ok"


def test_same_status_keeps_transition_time_but_updates_reason():
    conditions = [
        Condition(type="Ready", status=ConditionStatus.TRUE, reason="A", last_transition_time=EARLIER)
    ]
    changed = set_status_condition(
        conditions,
        Condition(type="Ready", status=ConditionStatus.TRUE, reason="B", last_transition_time=LATER),
    )
    assert changed is True
    assert conditions[0].reason == "B"
    assert conditions[0].last_transition_time == EARLIER


def test_status_change_moves_transition_time():
    conditions = [
        Condition(type="Ready", status=ConditionStatus.FALSE, last_transition_time=EARLIER)
    ]
    set_status_condition(
        conditions,
        Condition(type="Ready", status=ConditionStatus.TRUE, last_transition_time=LATER),
    )
    assert conditions[0].status == ConditionStatus.TRUE
    assert conditions[0].last_transition_time == LATER


def test_status_change_without_time_uses_now():
    conditions = [
        Condition(type="Ready", status=ConditionStatus.FALSE, last_transition_time=EARLIER)
    ]
    set_status_condition(conditions, Condition(type="Ready", status=ConditionStatus.UNKNOWN))
    assert conditions[0].last_transition_time > EARLIER


def test_identical_condition_reports_no_change():
    conditions = [
        Condition(type="Ready", status=ConditionStatus.TRUE, reason="Ok", last_transition_time=EARLIER)
    ]
    changed = set_status_condition(
        conditions, Condition(type="Ready", status=ConditionStatus.TRUE, reason="Ok")
    )
    assert changed is False
    assert len(conditions) == 1


def test_observed_generation_is_updated():
    conditions = [Condition(type="Ready", status=ConditionStatus.TRUE, observed_generation=1)]
    assert set_status_condition(
        conditions, Condition(type="Ready", status=ConditionStatus.TRUE, observed_generation=2)
    )
    assert conditions[0].observed_generation == 2


def test_find_and_is_true():
    conditions = [
        Condition(type="A", status=ConditionStatus.TRUE),
        Condition(type="B", status=ConditionStatus.FALSE),
    ]
    assert find_status_condition(conditions, "B") is conditions[1]
    assert find_status_condition(conditions, "C") is None
    assert is_status_condition_true(conditions, "A") is True
    assert is_status_condition_true(conditions, "B") is False
    assert is_status_condition_true(conditions, "C") is False


def test_condition_status_values():
    assert ConditionStatus.TRUE.value == "True"
    assert ConditionStatus("Unknown") is ConditionStatus.UNKNOWN


def test_object_meta_defaults_are_independent():
    first = ObjectMeta(name="a")
    second = ObjectMeta(name="b")
    first.labels["x"] = "y"
    assert second.labels == {}