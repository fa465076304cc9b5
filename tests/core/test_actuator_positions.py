"""Actuator Positions — verifies travel-window arithmetic around the midpoint.

Tests:
    - is_calibrated requires both distances > 0
    - validate_position bounds are inclusive, midpoint classified as right
    - Uncalibrated and missing calibrations give the same is_valid=False report
    - compute_limit_update requires a set midpoint and recomputes is_calibrated
"""

from dataclasses import dataclass

import pytest

from rigbench.core.actuator_positions import (
    NOT_CALIBRATED_MESSAGE, assert_non_negative_distances,
    compute_limit_update, is_calibrated, max_position, min_position, total_range,
    validate_position,
)
from rigbench.core.domain_types import Direction
from rigbench.core.errors import InvalidInputError, PreconditionFailedError


@dataclass
class _Calibration:
    midpoint: float = 0.0
    max_distance_left: float = 0.0
    max_distance_right: float = 0.0
    is_calibrated: bool = False


def _calibrated(midpoint=100.0, left=30.0, right=50.0) -> _Calibration:
    return _Calibration(midpoint, left, right, True)


# ─── Calibration state ───────────────────────────────────────────

@pytest.mark.parametrize("left, right, expected", [
    (10.0, 20.0, True),
    (0.0, 20.0, False),
    (10.0, 0.0, False),
    (0.0, 0.0, False),
])
def test_is_calibrated_requires_both_sides(left, right, expected):
    assert is_calibrated(left, right) is expected


def test_negative_distance_rejected():
    with pytest.raises(InvalidInputError) as exc:
        assert_non_negative_distances(-1.0, 5.0)
    assert exc.value.field == "max_distance_left"


def test_derived_range_values():
    cal = _calibrated()
    assert min_position(cal) == 70.0
    assert max_position(cal) == 150.0
    assert total_range(cal) == 80.0


# ─── Validation ──────────────────────────────────────────────────

def test_validate_inside_window():
    report = validate_position(_calibrated(), 120.0)
    assert report.is_valid
    assert report.within_limits
    assert report.distance_from_midpoint == 20.0
    assert report.absolute_distance == 20.0
    assert report.direction == Direction.RIGHT
    assert report.max_allowed_distance == 50.0


def test_validate_left_side_uses_left_limit():
    report = validate_position(_calibrated(), 80.0)
    assert report.direction == Direction.LEFT
    assert report.distance_from_midpoint == -20.0
    assert report.max_allowed_distance == 30.0


def test_validate_bounds_are_inclusive():
    cal = _calibrated()
    assert validate_position(cal, 70.0).is_valid
    assert validate_position(cal, 150.0).is_valid
    assert not validate_position(cal, 69.9).is_valid
    assert not validate_position(cal, 150.1).is_valid


def test_midpoint_is_classified_right():
    report = validate_position(_calibrated(), 100.0)
    assert report.direction == Direction.RIGHT
    assert report.distance_from_midpoint == 0.0


def test_missing_and_incomplete_calibration_report_the_same():
    missing = validate_position(None, 10.0)
    incomplete = validate_position(_Calibration(100.0, 30.0, 0.0, False), 10.0)
    for report in (missing, incomplete):
        assert report.is_valid is False
        assert report.message == NOT_CALIBRATED_MESSAGE
        assert report.direction is None


def test_report_to_dict_serializes_direction():
    data = validate_position(_calibrated(), 80.0).to_dict()
    assert data["direction"] == "left"
    assert data["within_limits"] is True


def test_validate_does_not_mutate_calibration():
    cal = _calibrated()
    validate_position(cal, 1000.0)
    assert cal == _calibrated()


# ─── Limits ──────────────────────────────────────────────────────

def test_limit_without_calibration_fails():
    with pytest.raises(PreconditionFailedError):
        compute_limit_update(None, Direction.LEFT, 10.0)


def test_limit_without_midpoint_fails():
    with pytest.raises(PreconditionFailedError) as exc:
        compute_limit_update(_Calibration(), Direction.LEFT, 10.0)
    assert exc.value.http_status == 400


def test_left_limit_stores_absolute_distance():
    cal = _Calibration(midpoint=100.0)
    update = compute_limit_update(cal, Direction.LEFT, 60.0)
    assert update == {"max_distance_left": 40.0, "is_calibrated": False}


def test_second_side_completes_calibration():
    cal = _Calibration(midpoint=100.0, max_distance_left=40.0)
    update = compute_limit_update(cal, Direction.RIGHT, 125.0)
    assert update == {"max_distance_right": 25.0, "is_calibrated": True}


def test_limit_at_midpoint_uncalibrates():
    cal = _calibrated()
    update = compute_limit_update(cal, Direction.RIGHT, 100.0)
    assert update["max_distance_right"] == 0.0
    assert update["is_calibrated"] is False
