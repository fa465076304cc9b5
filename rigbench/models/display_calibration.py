"""DisplayCalibration ORM — persists the seven-segment display reading geometry.

Invariants:
    - scope holds the setting type (default "seven_segment"); one active record per type
    - num_digits >= 1, decimal_position counted from the right (1-based)
    - display_box / segment_boxes / calibration_image_size are opaque JSON to the core

Design Decisions:
    - JSON columns for geometry: stored as sent by the calibration UI (ADR: opaque payload)
"""

from sqlalchemy import Boolean, Integer, JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from rigbench.db.base import Base
from rigbench.models.mixins import ActiveConfigMixin


class DisplayCalibration(ActiveConfigMixin, Base):
    """Display calibration — digit layout and decimal formatting for a readout."""
    __tablename__ = "display_calibrations"

    device_name: Mapped[str | None] = mapped_column(String(191), nullable=True)
    display_box: Mapped[dict] = mapped_column(JSON, nullable=False)
    segment_boxes: Mapped[list] = mapped_column(JSON, nullable=False)
    calibration_image_size: Mapped[dict | None] = mapped_column(
        JSON, nullable=True,
    )
    num_digits: Mapped[int] = mapped_column(Integer, nullable=False, default=3)
    has_decimal_point: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    decimal_position: Mapped[int] = mapped_column(
        Integer, nullable=False, default=1,
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
