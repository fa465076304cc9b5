"""ActuatorCalibration ORM — persists the actuator travel window around its midpoint.

Invariants:
    - At most one active record per scope (scope is always "global" for this kind)
    - max_distance_left/right >= 0 (validated by request schemas, re-asserted in core)
    - is_calibrated follows (left > 0 and right > 0) unless explicitly overridden on save

Design Decisions:
    - Float over Numeric: positions are rig readings, core arithmetic stays in float
"""

from sqlalchemy import Boolean, Float, Text
from sqlalchemy.orm import Mapped, mapped_column

from rigbench.db.base import Base
from rigbench.models.mixins import ActiveConfigMixin


class ActuatorCalibration(ActiveConfigMixin, Base):
    """Actuator calibration — midpoint plus asymmetric travel limits."""
    __tablename__ = "actuator_calibrations"

    midpoint: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    max_distance_left: Mapped[float] = mapped_column(
        Float, nullable=False, default=0.0,
    )
    max_distance_right: Mapped[float] = mapped_column(
        Float, nullable=False, default=0.0,
    )
    is_calibrated: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
