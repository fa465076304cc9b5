"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Configuration kinds share ActiveConfigMixin (single-active per scope)
    - Specimen kinds share SpecimenColumnsMixin (raw inputs + derived values)

Design Decisions:
    - One file per entity for locality (ADR: ExMA max 3-4 files to understand a feature)
    - All models imported here so Base.metadata is complete before create_all/autogenerate
"""

from rigbench.models.reference_value import ReferenceValue  # noqa: F401
from rigbench.models.actuator_calibration import ActuatorCalibration  # noqa: F401
from rigbench.models.display_calibration import DisplayCalibration  # noqa: F401
from rigbench.models.detection_setting import DetectionSetting  # noqa: F401
from rigbench.models.specimen_test import (  # noqa: F401
    CompressiveTest, ShearTest, FlexureTest, SPECIMEN_MODELS,
)
