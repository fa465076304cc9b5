"""Actuator Calibration Routes — midpoint/limit workflow and position validation.

Invariants:
    - Fixed paths (/active, /set-midpoint, ...) registered before /{calibration_id}
    - GET /active returns 404 when nothing is active; validate-position never 404s
      (an uncalibrated rig is a normal is_valid=false report)
    - Routes only translate HTTP <-> service calls; no arithmetic here
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from rigbench.api.routes.listing import Page, page_params
from rigbench.core.domain_types import ConfigKind
from rigbench.core.errors import ErrorContext, ResourceNotFoundError
from rigbench.infrastructure.database import get_db
from rigbench.schemas.configuration import (
    ActuatorCalibrationCreate, ActuatorCalibrationResponse,
    ActuatorCalibrationUpdate, LimitRequest, LimitResponse, MidpointRequest,
    PositionReportResponse, PositionRequest,
)
from rigbench.services.actuator_calibration import ActuatorCalibrationService
from rigbench.services.configuration_registry import ConfigurationRegistry

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/api/v1/actuator-calibrations", tags=["actuator-calibrations"],
)

KIND = ConfigKind.ACTUATOR_CALIBRATION


@router.get("", response_model=list[ActuatorCalibrationResponse])
async def list_calibrations(
    page: Page = Depends(page_params), db: AsyncSession = Depends(get_db),
):
    records = await ConfigurationRegistry(db).list_records(
        KIND, page.limit, page.offset,
    )
    return [ActuatorCalibrationResponse.from_record(r) for r in records]


@router.post(
    "", response_model=ActuatorCalibrationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def save_calibration(
    body: ActuatorCalibrationCreate, db: AsyncSession = Depends(get_db),
):
    """Create a calibration and make it the active one."""
    calibration = await ActuatorCalibrationService(db).save_calibration(
        body.midpoint,
        body.max_distance_left,
        body.max_distance_right,
        notes=body.notes,
        is_calibrated_override=body.is_calibrated,
    )
    return ActuatorCalibrationResponse.from_record(calibration)


@router.get("/active", response_model=ActuatorCalibrationResponse)
async def get_active_calibration(db: AsyncSession = Depends(get_db)):
    service = ActuatorCalibrationService(db)
    calibration = await service.get_active()
    if calibration is None:
        raise ResourceNotFoundError(
            "Active actuator calibration", service.scope,
            ErrorContext(config_kind=KIND.value, scope=service.scope),
        )
    return ActuatorCalibrationResponse.from_record(calibration)


@router.post("/set-midpoint", response_model=ActuatorCalibrationResponse)
async def set_midpoint(
    body: MidpointRequest, db: AsyncSession = Depends(get_db),
):
    calibration = await ActuatorCalibrationService(db).set_midpoint(body.midpoint)
    return ActuatorCalibrationResponse.from_record(calibration)


@router.post("/set-limits", response_model=LimitResponse)
async def set_limit(body: LimitRequest, db: AsyncSession = Depends(get_db)):
    calibration, distance = await ActuatorCalibrationService(db).set_limit(
        body.direction, body.current_position,
    )
    return LimitResponse(
        direction=body.direction,
        distance=distance,
        calibration=ActuatorCalibrationResponse.from_record(calibration),
    )


@router.post("/validate-position", response_model=PositionReportResponse)
async def validate_position(
    body: PositionRequest, db: AsyncSession = Depends(get_db),
):
    report = await ActuatorCalibrationService(db).validate(body.position)
    return PositionReportResponse.from_report(report)


@router.post("/reset", response_model=ActuatorCalibrationResponse)
async def reset_calibration(db: AsyncSession = Depends(get_db)):
    calibration = await ActuatorCalibrationService(db).reset()
    return ActuatorCalibrationResponse.from_record(calibration)


@router.get("/{calibration_id}", response_model=ActuatorCalibrationResponse)
async def get_calibration(
    calibration_id: UUID, db: AsyncSession = Depends(get_db),
):
    calibration = await ConfigurationRegistry(db).get(KIND, calibration_id)
    return ActuatorCalibrationResponse.from_record(calibration)


@router.put("/{calibration_id}", response_model=ActuatorCalibrationResponse)
async def update_calibration(
    calibration_id: UUID,
    body: ActuatorCalibrationUpdate,
    db: AsyncSession = Depends(get_db),
):
    changes = body.model_dump(exclude_unset=True, exclude={"is_active"})
    calibration = await ActuatorCalibrationService(db).update_calibration(
        calibration_id, changes, activate=body.is_active,
    )
    return ActuatorCalibrationResponse.from_record(calibration)


@router.delete("/{calibration_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_calibration(
    calibration_id: UUID, db: AsyncSession = Depends(get_db),
):
    await ConfigurationRegistry(db).delete(KIND, calibration_id)


@router.post(
    "/{calibration_id}/activate", response_model=ActuatorCalibrationResponse,
)
async def activate_calibration(
    calibration_id: UUID, db: AsyncSession = Depends(get_db),
):
    registry = ConfigurationRegistry(db)
    calibration = await registry.get(KIND, calibration_id)
    calibration = await registry.activate(KIND, calibration.scope, calibration_id)
    return ActuatorCalibrationResponse.from_record(calibration)
