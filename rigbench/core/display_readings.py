"""Display Readings — number formatting and seven-segment overlay geometry.

Invariants:
    - format_number never raises: unknown digits ('?') or short readings pass through unchanged
    - decimal_position is counted from the right (1 → XX.X, 2 → X.XX)
    - default_segment_boxes returns num_digits lists of exactly 7 boxes each
"""

from typing import Mapping

from rigbench.core.errors import InvalidInputError
from rigbench.core.repository_protocols import DisplayCalibrationLike


UNREADABLE_DIGIT = "?"

# (x_ratio, y_ratio, width_ratio, height_ratio) per segment a..g
SEGMENT_TEMPLATES: tuple[tuple[float, float, float, float], ...] = (
    (0.2, 0.05, 0.6, 0.1),
    (0.7, 0.1, 0.2, 0.35),
    (0.7, 0.55, 0.2, 0.35),
    (0.2, 0.85, 0.6, 0.1),
    (0.1, 0.55, 0.2, 0.35),
    (0.1, 0.1, 0.2, 0.35),
    (0.2, 0.45, 0.6, 0.1),
)


def format_number(calibration: DisplayCalibrationLike, raw: str) -> str:
    """Insert the calibrated decimal point into a raw digit string."""
    if not calibration.has_decimal_point or UNREADABLE_DIGIT in raw:
        return raw
    if len(raw) < calibration.decimal_position:
        return raw
    insert_at = len(raw) - calibration.decimal_position
    return f"{raw[:insert_at]}.{raw[insert_at:]}"


def decimal_format(calibration: DisplayCalibrationLike) -> str | None:
    if not calibration.has_decimal_point:
        return None
    if calibration.decimal_position == 1:
        return "XX.X (e.g., 31.9)"
    return "X.XX (e.g., 3.19)"


def default_segment_boxes(display_box: Mapping, num_digits: int = 3) -> list[list[dict]]:
    """Evenly split the display box into digits and lay out 7 segments per digit."""
    if num_digits < 1:
        raise InvalidInputError("num_digits must be >= 1", "num_digits")

    digit_width = display_box["width"] / num_digits
    display_height = display_box["height"]
    digits = []
    for index in range(num_digits):
        digit_x = display_box["x"] + index * digit_width
        digit_y = display_box["y"]
        digits.append([
            {
                "x": digit_x + x_ratio * digit_width,
                "y": digit_y + y_ratio * display_height,
                "width": w_ratio * digit_width,
                # height scales with digit width, not display height
                "height": h_ratio * digit_width,
            }
            for x_ratio, y_ratio, w_ratio, h_ratio in SEGMENT_TEMPLATES
        ])
    return digits
