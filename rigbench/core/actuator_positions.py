"""Position Validation Engine — actuator travel arithmetic around a calibrated midpoint.

Invariants:
    - is_calibrated == (max_distance_left > 0 and max_distance_right > 0); a zero side
      keeps the calibration incomplete even when the other side is positive
    - validate_position is PURE: returns a PositionReport, never mutates the calibration
    - No calibration and an incomplete calibration give the SAME result: is_valid=False
      with NOT_CALIBRATED_MESSAGE (never an error)
    - Bounds are inclusive on both ends: midpoint - left <= position <= midpoint + right
    - position == midpoint is classified as Direction.RIGHT
    - Limits require a non-zero midpoint (PreconditionFailedError otherwise)

Design Decisions:
    - Limit updates returned as a field dict: the shell applies and persists them
      (ADR: ExMA impureim sandwich — same shape as derived-field updates)
    - Negative distances are rejected by request schemas; assert_non_negative_distances
      re-checks at the core boundary because a negative side would invert the bounds
"""

from dataclasses import dataclass, asdict

from rigbench.core.domain_types import Direction
from rigbench.core.errors import InvalidInputError, PreconditionFailedError
from rigbench.core.repository_protocols import ActuatorCalibrationLike


NOT_CALIBRATED_MESSAGE = "Actuator not calibrated"

ZERO_STATE: dict = {
    "midpoint": 0.0,
    "max_distance_left": 0.0,
    "max_distance_right": 0.0,
    "is_calibrated": False,
}


@dataclass(frozen=True)
class PositionReport:
    """Outcome of validating one raw actuator position."""
    is_valid: bool
    position: float
    message: str | None = None
    midpoint: float | None = None
    distance_from_midpoint: float | None = None
    absolute_distance: float | None = None
    direction: Direction | None = None
    max_allowed_distance: float | None = None
    min_position: float | None = None
    max_position: float | None = None

    @property
    def within_limits(self) -> bool:
        return self.is_valid

    def to_dict(self) -> dict:
        data = asdict(self)
        if self.direction is not None:
            data["direction"] = self.direction.value
        data["within_limits"] = self.within_limits
        return data


# ─── Calibration state ───────────────────────────────────────────

def is_calibrated(max_distance_left: float, max_distance_right: float) -> bool:
    """Both travel limits are required for a complete calibration."""
    return max_distance_left > 0 and max_distance_right > 0


def assert_non_negative_distances(
    max_distance_left: float, max_distance_right: float,
) -> None:
    if max_distance_left < 0:
        raise InvalidInputError(
            "max_distance_left must be >= 0", "max_distance_left",
        )
    if max_distance_right < 0:
        raise InvalidInputError(
            "max_distance_right must be >= 0", "max_distance_right",
        )


def min_position(calibration: ActuatorCalibrationLike) -> float:
    return calibration.midpoint - calibration.max_distance_left


def max_position(calibration: ActuatorCalibrationLike) -> float:
    return calibration.midpoint + calibration.max_distance_right


def total_range(calibration: ActuatorCalibrationLike) -> float:
    return calibration.max_distance_left + calibration.max_distance_right


def direction_from_midpoint(position: float, midpoint: float) -> Direction:
    return Direction.LEFT if position < midpoint else Direction.RIGHT


# ─── Limits ──────────────────────────────────────────────────────

def compute_limit_update(
    calibration: ActuatorCalibrationLike | None,
    direction: Direction,
    current_position: float,
) -> dict:
    """Distance from midpoint stored on the given side. Pure — no state mutation.

    Returns the field updates to apply, including the recomputed is_calibrated.
    """
    if calibration is None:
        raise PreconditionFailedError(
            "No active calibration found. Please set midpoint first.",
        )
    if calibration.midpoint == 0:
        raise PreconditionFailedError("Please set midpoint first")

    distance = abs(current_position - calibration.midpoint)
    left = calibration.max_distance_left
    right = calibration.max_distance_right
    if direction == Direction.LEFT:
        left = distance
        update = {"max_distance_left": distance}
    else:
        right = distance
        update = {"max_distance_right": distance}
    update["is_calibrated"] = is_calibrated(left, right)
    return update


# ─── Validation ──────────────────────────────────────────────────

def validate_position(
    calibration: ActuatorCalibrationLike | None, position: float,
) -> PositionReport:
    """Check a raw position against the calibrated travel window. Pure."""
    if calibration is None or not calibration.is_calibrated:
        return PositionReport(
            is_valid=False, position=position, message=NOT_CALIBRATED_MESSAGE,
        )

    low = min_position(calibration)
    high = max_position(calibration)
    distance = position - calibration.midpoint
    direction = direction_from_midpoint(position, calibration.midpoint)
    max_allowed = (
        calibration.max_distance_left
        if direction == Direction.LEFT
        else calibration.max_distance_right
    )

    return PositionReport(
        is_valid=low <= position <= high,
        position=position,
        midpoint=calibration.midpoint,
        distance_from_midpoint=distance,
        absolute_distance=abs(distance),
        direction=direction,
        max_allowed_distance=max_allowed,
        min_position=low,
        max_position=high,
    )
