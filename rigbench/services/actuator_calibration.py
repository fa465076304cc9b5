"""Actuator Calibration Service — midpoint/limit workflow over the active calibration.

Invariants:
    - All arithmetic delegated to core/actuator_positions.py (pure)
    - Every "create" path goes through ConfigurationRegistry.create_and_activate:
      a new calibration is always the sole active one in its scope
    - validate() never writes: it reads the active calibration and returns a PositionReport
    - set_limit() before a midpoint exists raises PreconditionFailedError, nothing written

Design Decisions:
    - Scope taken from settings.actuator_scope (single rig per deployment by default)
    - reset() creates a fresh zero-state record instead of zeroing the active one:
      previous calibrations stay listed for audit
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from rigbench.config import get_settings
from rigbench.core.actuator_positions import (
    ZERO_STATE, PositionReport, assert_non_negative_distances,
    compute_limit_update, is_calibrated, validate_position,
)
from rigbench.core.domain_types import ConfigKind, Direction
from rigbench.services.configuration_registry import ConfigurationRegistry

logger = logging.getLogger(__name__)

KIND = ConfigKind.ACTUATOR_CALIBRATION
EDITABLE_FIELDS: tuple[str, ...] = (
    "midpoint", "max_distance_left", "max_distance_right", "notes",
)
DISTANCE_FIELDS = frozenset({"max_distance_left", "max_distance_right"})


class ActuatorCalibrationService:
    """set_midpoint / set_limit / validate / reset on the active calibration."""

    def __init__(self, db: AsyncSession, scope: str | None = None):
        self._db = db
        self._registry = ConfigurationRegistry(db)
        self.scope = scope or get_settings().actuator_scope

    async def get_active(self):
        return await self._registry.get_active(KIND, self.scope)

    async def save_calibration(
        self,
        midpoint: float,
        max_distance_left: float,
        max_distance_right: float,
        notes: str | None = None,
        is_calibrated_override: bool | None = None,
    ):
        """Create a complete calibration and make it the active one."""
        assert_non_negative_distances(max_distance_left, max_distance_right)
        calibrated = (
            is_calibrated(max_distance_left, max_distance_right)
            if is_calibrated_override is None
            else is_calibrated_override
        )
        return await self._registry.create_and_activate(KIND, self.scope, {
            "midpoint": midpoint,
            "max_distance_left": max_distance_left,
            "max_distance_right": max_distance_right,
            "is_calibrated": calibrated,
            "notes": notes,
        })

    async def update_calibration(
        self, record_id: UUID, changes: dict, activate: bool = False,
    ):
        """Patch editable fields; touching a distance re-derives is_calibrated."""
        calibration = await self._registry.get(KIND, record_id)
        patch = {
            k: v for k, v in changes.items()
            if k in EDITABLE_FIELDS and (v is not None or k == "notes")
        }
        merged = {
            "max_distance_left": calibration.max_distance_left,
            "max_distance_right": calibration.max_distance_right,
            **patch,
        }
        assert_non_negative_distances(
            merged["max_distance_left"], merged["max_distance_right"],
        )
        if DISTANCE_FIELDS & patch.keys():
            patch["is_calibrated"] = is_calibrated(
                merged["max_distance_left"], merged["max_distance_right"],
            )

        calibration = await self._registry.update(KIND, record_id, patch)
        if activate:
            calibration = await self._registry.activate(
                KIND, calibration.scope, record_id,
            )
        return calibration

    async def set_midpoint(self, midpoint: float):
        calibration = await self.get_active()
        if calibration is None:
            logger.info(
                "No active calibration, creating one from midpoint",
                extra={"config_kind": KIND.value, "scope": self.scope},
            )
            return await self._registry.create_and_activate(
                KIND, self.scope, {**ZERO_STATE, "midpoint": midpoint},
            )
        calibration.midpoint = midpoint
        await self._db.commit()
        return calibration

    async def set_limit(
        self, direction: Direction, current_position: float,
    ) -> tuple:
        """Store |position - midpoint| on one side. Returns (calibration, distance)."""
        calibration = await self.get_active()
        update = compute_limit_update(calibration, direction, current_position)
        for name, value in update.items():
            setattr(calibration, name, value)
        await self._db.commit()
        distance = update[f"max_distance_{direction.value}"]
        logger.info(
            f"Set {direction.value} limit to {distance}",
            extra={
                "config_kind": KIND.value, "scope": self.scope,
                "record_id": calibration.id,
            },
        )
        return calibration, distance

    async def validate(self, position: float) -> PositionReport:
        return validate_position(await self.get_active(), position)

    async def reset(self):
        """Deactivate every calibration in scope, activate a zero-state one."""
        calibration = await self._registry.create_and_activate(
            KIND, self.scope, dict(ZERO_STATE),
        )
        logger.info(
            "Actuator calibration reset",
            extra={
                "config_kind": KIND.value, "scope": self.scope,
                "record_id": calibration.id,
            },
        )
        return calibration
