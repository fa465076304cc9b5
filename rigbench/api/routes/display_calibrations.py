"""Display Calibration Routes — seven-segment readout geometry and reading format.

Invariants:
    - Saving a calibration always creates a new record and activates it within its
      setting_type (stored as the record scope)
    - setting_type defaults to settings.display_default_setting_type everywhere
    - default-segments is pure geometry: nothing is read or written
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from rigbench.api.routes.listing import Page, page_params
from rigbench.config import get_settings
from rigbench.core.display_readings import (
    decimal_format, default_segment_boxes, format_number,
)
from rigbench.core.domain_types import ConfigKind
from rigbench.core.errors import ErrorContext, ResourceNotFoundError
from rigbench.infrastructure.database import get_db
from rigbench.schemas.configuration import (
    DefaultSegmentsRequest, DefaultSegmentsResponse, DisplayCalibrationCreate,
    DisplayCalibrationResponse, DisplayCalibrationUpdate, FormatReadingRequest,
    FormatReadingResponse,
)
from rigbench.services.configuration_registry import ConfigurationRegistry

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/api/v1/display-calibrations", tags=["display-calibrations"],
)

KIND = ConfigKind.DISPLAY_CALIBRATION
REQUIRED_FIELDS: tuple[str, ...] = (
    "display_box", "segment_boxes", "num_digits", "has_decimal_point",
    "decimal_position",
)


def _setting_type(value: str | None) -> str:
    return value or get_settings().display_default_setting_type


async def _active_or_404(registry: ConfigurationRegistry, setting_type: str):
    calibration = await registry.get_active(KIND, setting_type)
    if calibration is None:
        raise ResourceNotFoundError(
            "Active display calibration", setting_type,
            ErrorContext(config_kind=KIND.value, scope=setting_type),
        )
    return calibration


@router.get("", response_model=list[DisplayCalibrationResponse])
async def list_calibrations(
    setting_type: str | None = Query(None, max_length=191),
    page: Page = Depends(page_params),
    db: AsyncSession = Depends(get_db),
):
    records = await ConfigurationRegistry(db).list_records(
        KIND, page.limit, page.offset, scope=setting_type,
    )
    return [DisplayCalibrationResponse.from_record(r) for r in records]


@router.post(
    "", response_model=DisplayCalibrationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def save_calibration(
    body: DisplayCalibrationCreate, db: AsyncSession = Depends(get_db),
):
    """Create a calibration and make it the active one for its setting type."""
    payload = body.model_dump(exclude={"setting_type"})
    calibration = await ConfigurationRegistry(db).create_and_activate(
        KIND, _setting_type(body.setting_type), payload,
    )
    return DisplayCalibrationResponse.from_record(calibration)


@router.get("/active", response_model=DisplayCalibrationResponse)
async def get_active_calibration(
    setting_type: str | None = Query(None, max_length=191),
    db: AsyncSession = Depends(get_db),
):
    calibration = await _active_or_404(
        ConfigurationRegistry(db), _setting_type(setting_type),
    )
    return DisplayCalibrationResponse.from_record(calibration)


@router.post("/default-segments", response_model=DefaultSegmentsResponse)
async def default_segments(body: DefaultSegmentsRequest):
    boxes = default_segment_boxes(body.display_box.model_dump(), body.num_digits)
    return DefaultSegmentsResponse(num_digits=body.num_digits, segment_boxes=boxes)


@router.post("/active/format", response_model=FormatReadingResponse)
async def format_reading(
    body: FormatReadingRequest, db: AsyncSession = Depends(get_db),
):
    """Apply the active calibration's decimal point to a raw digit string."""
    calibration = await _active_or_404(
        ConfigurationRegistry(db), _setting_type(body.setting_type),
    )
    return FormatReadingResponse(
        raw=body.raw,
        formatted=format_number(calibration, body.raw),
        decimal_format=decimal_format(calibration),
    )


@router.get("/{calibration_id}", response_model=DisplayCalibrationResponse)
async def get_calibration(
    calibration_id: UUID, db: AsyncSession = Depends(get_db),
):
    calibration = await ConfigurationRegistry(db).get(KIND, calibration_id)
    return DisplayCalibrationResponse.from_record(calibration)


@router.put("/{calibration_id}", response_model=DisplayCalibrationResponse)
async def update_calibration(
    calibration_id: UUID,
    body: DisplayCalibrationUpdate,
    db: AsyncSession = Depends(get_db),
):
    changes = {
        k: v
        for k, v in body.model_dump(exclude_unset=True, exclude={"is_active"}).items()
        if v is not None or k not in REQUIRED_FIELDS
    }
    registry = ConfigurationRegistry(db)
    calibration = await registry.update(KIND, calibration_id, changes)
    if body.is_active:
        calibration = await registry.activate(
            KIND, calibration.scope, calibration_id,
        )
    return DisplayCalibrationResponse.from_record(calibration)


@router.delete("/{calibration_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_calibration(
    calibration_id: UUID, db: AsyncSession = Depends(get_db),
):
    await ConfigurationRegistry(db).delete(KIND, calibration_id)


@router.post(
    "/{calibration_id}/activate", response_model=DisplayCalibrationResponse,
)
async def activate_calibration(
    calibration_id: UUID, db: AsyncSession = Depends(get_db),
):
    registry = ConfigurationRegistry(db)
    calibration = await registry.get(KIND, calibration_id)
    calibration = await registry.activate(KIND, calibration.scope, calibration_id)
    return DisplayCalibrationResponse.from_record(calibration)
