"""Detection Settings Routes — image-detection thresholds for dimension capture.

Invariants:
    - GET /active never 404s: factory defaults are returned when nothing is active
    - POST always inserts a new record and activates it (history kept)
    - blur_kernel normalised to an odd value before storage
"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from rigbench.core.detection_defaults import (
    DETECTION_DEFAULTS, normalize_detection_payload,
)
from rigbench.core.domain_types import GLOBAL_SCOPE, ConfigKind
from rigbench.infrastructure.database import get_db
from rigbench.schemas.configuration import (
    DetectionSettingsCreate, DetectionSettingsResponse,
)
from rigbench.services.configuration_registry import ConfigurationRegistry

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/api/v1/detection-settings", tags=["detection-settings"],
)

KIND = ConfigKind.DETECTION_SETTINGS


@router.get("/active", response_model=DetectionSettingsResponse)
async def get_active_settings(db: AsyncSession = Depends(get_db)):
    settings = await ConfigurationRegistry(db).get_active(KIND, GLOBAL_SCOPE)
    if settings is None:
        return DetectionSettingsResponse(is_default=True, **DETECTION_DEFAULTS)
    return DetectionSettingsResponse.from_record(settings)


@router.post(
    "", response_model=DetectionSettingsResponse,
    status_code=status.HTTP_201_CREATED,
)
async def save_settings(
    body: DetectionSettingsCreate, db: AsyncSession = Depends(get_db),
):
    payload = normalize_detection_payload(body.model_dump())
    settings = await ConfigurationRegistry(db).create_and_activate(
        KIND, GLOBAL_SCOPE, payload,
    )
    return DetectionSettingsResponse.from_record(settings)
