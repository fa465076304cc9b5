"""Configuration Schemas — request/response models for the three configuration kinds.

Invariants:
    - Distances >= 0, num_digits 1-10, decimal_position 1-9, detection ranges enforced here
      (core re-asserts what it depends on)
    - Display responses expose the record scope as setting_type
    - Actuator responses carry the derived total_range / min_position / max_position

Design Decisions:
    - from_record classmethods over ORM mode: derived read-only values are computed
      from core helpers, not stored
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from rigbench.core.actuator_positions import (
    PositionReport, max_position, min_position, total_range,
)
from rigbench.core.display_readings import decimal_format
from rigbench.core.domain_types import Direction


# --- Actuator calibration ----------------------------------------------------

class ActuatorCalibrationCreate(BaseModel):
    """Complete calibration entry; is_calibrated derived unless given."""
    midpoint: float
    max_distance_left: float = Field(ge=0)
    max_distance_right: float = Field(ge=0)
    is_calibrated: bool | None = None
    notes: str | None = Field(None, max_length=5000)


class ActuatorCalibrationUpdate(BaseModel):
    midpoint: float | None = None
    max_distance_left: float | None = Field(None, ge=0)
    max_distance_right: float | None = Field(None, ge=0)
    notes: str | None = Field(None, max_length=5000)
    is_active: bool = False


class MidpointRequest(BaseModel):
    midpoint: float


class LimitRequest(BaseModel):
    direction: Direction
    current_position: float


class PositionRequest(BaseModel):
    position: float


class ActuatorCalibrationResponse(BaseModel):
    id: UUID
    scope: str
    midpoint: float
    max_distance_left: float
    max_distance_right: float
    is_calibrated: bool
    is_active: bool
    notes: str | None = None
    total_range: float
    min_position: float
    max_position: float
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_record(cls, record) -> "ActuatorCalibrationResponse":
        return cls(
            id=record.id,
            scope=record.scope,
            midpoint=record.midpoint,
            max_distance_left=record.max_distance_left,
            max_distance_right=record.max_distance_right,
            is_calibrated=record.is_calibrated,
            is_active=record.is_active,
            notes=record.notes,
            total_range=total_range(record),
            min_position=min_position(record),
            max_position=max_position(record),
            created_at=record.created_at,
            updated_at=record.updated_at,
        )


class LimitResponse(BaseModel):
    direction: Direction
    distance: float
    calibration: ActuatorCalibrationResponse


class PositionReportResponse(BaseModel):
    """Outcome of validate-position; numeric fields absent when not calibrated."""
    is_valid: bool
    within_limits: bool
    position: float
    message: str | None = None
    midpoint: float | None = None
    distance_from_midpoint: float | None = None
    absolute_distance: float | None = None
    direction: Direction | None = None
    max_allowed_distance: float | None = None
    min_position: float | None = None
    max_position: float | None = None

    @classmethod
    def from_report(cls, report: PositionReport) -> "PositionReportResponse":
        return cls(**report.to_dict())


# --- Display calibration -----------------------------------------------------

class DisplayBox(BaseModel):
    x: float = Field(ge=0)
    y: float = Field(ge=0)
    width: float = Field(gt=0)
    height: float = Field(gt=0)


class ImageSize(BaseModel):
    width: float = Field(gt=0)
    height: float = Field(gt=0)


class DisplayCalibrationCreate(BaseModel):
    setting_type: str | None = Field(None, min_length=1, max_length=191)
    device_name: str | None = Field(None, max_length=191)
    display_box: DisplayBox
    segment_boxes: list
    calibration_image_size: ImageSize | None = None
    num_digits: int = Field(3, ge=1, le=10)
    has_decimal_point: bool = False
    decimal_position: int = Field(1, ge=1, le=9)
    notes: str | None = Field(None, max_length=5000)


class DisplayCalibrationUpdate(BaseModel):
    device_name: str | None = Field(None, max_length=191)
    display_box: DisplayBox | None = None
    segment_boxes: list | None = None
    calibration_image_size: ImageSize | None = None
    num_digits: int | None = Field(None, ge=1, le=10)
    has_decimal_point: bool | None = None
    decimal_position: int | None = Field(None, ge=1, le=9)
    notes: str | None = Field(None, max_length=5000)
    is_active: bool = False


class DisplayCalibrationResponse(BaseModel):
    id: UUID
    setting_type: str
    device_name: str | None = None
    display_box: dict
    segment_boxes: list
    calibration_image_size: dict | None = None
    num_digits: int
    has_decimal_point: bool
    decimal_position: int
    decimal_format: str | None = None
    is_active: bool
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_record(cls, record) -> "DisplayCalibrationResponse":
        return cls(
            id=record.id,
            setting_type=record.scope,
            device_name=record.device_name,
            display_box=record.display_box,
            segment_boxes=record.segment_boxes,
            calibration_image_size=record.calibration_image_size,
            num_digits=record.num_digits,
            has_decimal_point=record.has_decimal_point,
            decimal_position=record.decimal_position,
            decimal_format=decimal_format(record),
            is_active=record.is_active,
            notes=record.notes,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )


class DefaultSegmentsRequest(BaseModel):
    display_box: DisplayBox
    num_digits: int = Field(3, ge=1, le=10)


class DefaultSegmentsResponse(BaseModel):
    num_digits: int
    segment_boxes: list[list[dict]]


class FormatReadingRequest(BaseModel):
    raw: str = Field(min_length=1, max_length=32)
    setting_type: str | None = Field(None, min_length=1, max_length=191)


class FormatReadingResponse(BaseModel):
    raw: str
    formatted: str
    decimal_format: str | None = None


# --- Detection settings ------------------------------------------------------

class DetectionSettingsCreate(BaseModel):
    threshold1: int = Field(ge=0, le=255)
    threshold2: int = Field(ge=0, le=255)
    min_area: int = Field(ge=0)
    blur_kernel: int = Field(ge=1)
    dilation: int = Field(ge=0)
    erosion: int = Field(ge=0)
    roi_size: int = Field(ge=10, le=100)
    brightness: int = Field(ge=-100, le=100)
    contrast: int = Field(ge=0, le=200)
    mm_per_pixel: float = Field(ge=0)


class DetectionSettingsResponse(BaseModel):
    """Active settings, or the factory defaults (is_default, no id) when none exist."""
    id: UUID | None = None
    is_default: bool = False
    threshold1: int
    threshold2: int
    min_area: int
    blur_kernel: int
    dilation: int
    erosion: int
    roi_size: int
    brightness: int
    contrast: int
    mm_per_pixel: float
    created_at: datetime | None = None

    @classmethod
    def from_record(cls, record) -> "DetectionSettingsResponse":
        return cls(
            id=record.id,
            threshold1=record.threshold1,
            threshold2=record.threshold2,
            min_area=record.min_area,
            blur_kernel=record.blur_kernel,
            dilation=record.dilation,
            erosion=record.erosion,
            roi_size=record.roi_size,
            brightness=record.brightness,
            contrast=record.contrast,
            mm_per_pixel=record.mm_per_pixel,
            created_at=record.created_at,
        )
