"""DetectionSetting ORM — persists image-detection thresholds for dimension capture.

Invariants:
    - One active record (scope "global"); saving always creates a new record
    - blur_kernel stored odd (normalised in core/detection_defaults.py)
"""

from sqlalchemy import Float, Integer
from sqlalchemy.orm import Mapped, mapped_column

from rigbench.db.base import Base
from rigbench.models.mixins import ActiveConfigMixin


class DetectionSetting(ActiveConfigMixin, Base):
    """Edge/contour detection parameters and pixel scale."""
    __tablename__ = "detection_settings"

    threshold1: Mapped[int] = mapped_column(Integer, nullable=False, default=52)
    threshold2: Mapped[int] = mapped_column(Integer, nullable=False, default=104)
    min_area: Mapped[int] = mapped_column(Integer, nullable=False, default=1000)
    blur_kernel: Mapped[int] = mapped_column(Integer, nullable=False, default=21)
    dilation: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    erosion: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    roi_size: Mapped[int] = mapped_column(Integer, nullable=False, default=60)
    brightness: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    contrast: Mapped[int] = mapped_column(Integer, nullable=False, default=101)
    mm_per_pixel: Mapped[float] = mapped_column(Float, nullable=False, default=0.1)
