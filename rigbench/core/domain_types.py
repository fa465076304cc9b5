"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - RecordId types the ids the repository protocols look up; the shell hands over
      the UUID FastAPI parsed from the path
    - Every configuration kind, test kind and travel direction is an Enum — no raw string matching
    - GLOBAL_SCOPE is the scope of kinds that are not partitioned (actuator, detection);
      SEVEN_SEGMENT_SCOPE is the default display setting type

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders, usable as FastAPI path params
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

RecordId = NewType("RecordId", UUID)
Scope = NewType("Scope", str)


# ─── Constants ───────────────────────────────────────────────────

GLOBAL_SCOPE = Scope("global")
SEVEN_SEGMENT_SCOPE = Scope("seven_segment")


# ─── Enums ───────────────────────────────────────────────────────

class ConfigKind(str, Enum):
    """Configuration kinds that follow the single-active rule."""
    ACTUATOR_CALIBRATION = "actuator_calibration"
    DISPLAY_CALIBRATION = "display_calibration"
    DETECTION_SETTINGS = "detection_settings"


class SpecimenKind(str, Enum):
    """Mechanical test kinds — each carries its own stress formula."""
    COMPRESSIVE = "compressive"
    SHEAR = "shear"
    FLEXURE = "flexure"


class Direction(str, Enum):
    """Actuator travel direction relative to the midpoint."""
    LEFT = "left"
    RIGHT = "right"


class StrengthGroup(str, Enum):
    """Reference species strength classification."""
    HIGH = "high"
    MODERATELY_HIGH = "moderately_high"
    MEDIUM = "medium"


STRENGTH_GROUP_LABELS: dict[str, str] = {
    StrengthGroup.HIGH.value: "High Strength Group",
    StrengthGroup.MODERATELY_HIGH.value: "Moderately High Strength Group",
    StrengthGroup.MEDIUM.value: "Medium Strength Group",
}


def strength_group_label(group: str) -> str:
    """Human-readable strength group; unknown groups are returned as-is."""
    return STRENGTH_GROUP_LABELS.get(group, group)
