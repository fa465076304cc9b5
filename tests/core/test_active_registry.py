"""Active Registry — verifies pure activation planning and active-record selection.

Tests:
    - plan_activation lists every other active id for deactivation
    - Activating the sole active record is a no-op plan
    - pick_active returns None for an uninitialized scope, newest on legacy duplicates
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from uuid import uuid4

from rigbench.core.active_registry import ActivationPlan, pick_active, plan_activation
from rigbench.core.domain_types import ConfigKind


@dataclass
class _Record:
    id: object
    is_active: bool
    created_at: datetime | None


def test_plan_deactivates_previous_active():
    a, b = uuid4(), uuid4()
    plan = plan_activation(ConfigKind.ACTUATOR_CALIBRATION, "global", b, [a])
    assert plan.activate_id == b
    assert plan.deactivate_ids == (a,)
    assert not plan.is_noop


def test_plan_excludes_target_from_deactivation():
    a, b, c = uuid4(), uuid4(), uuid4()
    plan = plan_activation(ConfigKind.DISPLAY_CALIBRATION, "seven_segment", b, [a, b, c])
    assert set(plan.deactivate_ids) == {a, c}
    assert b not in plan.deactivate_ids
    assert plan.already_active
    assert not plan.is_noop


def test_activating_already_active_is_noop():
    a = uuid4()
    plan = plan_activation(ConfigKind.DETECTION_SETTINGS, "global", a, [a])
    assert plan.is_noop
    assert plan == ActivationPlan(
        ConfigKind.DETECTION_SETTINGS, "global", a, (), already_active=True,
    )


def test_first_activation_in_empty_scope():
    a = uuid4()
    plan = plan_activation(ConfigKind.ACTUATOR_CALIBRATION, "global", a, [])
    assert plan.deactivate_ids == ()
    assert not plan.is_noop


def test_pick_active_none_when_nothing_active():
    now = datetime.now(timezone.utc)
    assert pick_active([]) is None
    assert pick_active([_Record(uuid4(), False, now)]) is None


def test_pick_active_prefers_newest_on_duplicates():
    now = datetime.now(timezone.utc)
    old = _Record(uuid4(), True, now - timedelta(days=1))
    new = _Record(uuid4(), True, now)
    inactive = _Record(uuid4(), False, now + timedelta(days=1))
    assert pick_active([new, old, inactive]) is new


def test_pick_active_mixes_naive_and_aware_timestamps():
    now = datetime.now(timezone.utc)
    naive_old = _Record(uuid4(), True, (now - timedelta(hours=1)).replace(tzinfo=None))
    aware_new = _Record(uuid4(), True, now)
    assert pick_active([naive_old, aware_new]) is aware_new
