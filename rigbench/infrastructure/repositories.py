"""SQL Repositories — SQLAlchemy implementations of the core repository protocols.

Invariants:
    - SqlConfigurationRepository satisfies core.repository_protocols.ConfigurationRepository
    - SqlSpecimenRepository satisfies core.repository_protocols.SpecimenRepository
    - apply_activation is the ONLY place is_active flips to True, and it commits the
      whole unit of work (deactivations + activation + any pending inserts) at once
    - A unique-index violation during the swap becomes ActivationConflictError, never
      a partially committed state (session rolled back first)
    - save() flushes but never commits — services own the commit (delete and
      apply_activation are single-step operations and commit themselves)

Design Decisions:
    - Optimistic swap: deactivations target the ids named in the ActivationPlan; if another
      writer activated a record since the plan was built, the partial unique index
      rejects the flush and the caller sees 409 (ADR: compare-and-set over table locks)
    - Target row read with FOR UPDATE where supported (no-op on SQLite)
    - Listing filters restricted to known columns: no arbitrary query construction
"""

import logging
from typing import Sequence
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from rigbench.core.active_registry import ActivationPlan, pick_active
from rigbench.core.domain_types import ConfigKind, SpecimenKind
from rigbench.core.errors import (
    ActivationConflictError, ErrorContext, ResourceNotFoundError,
)
from rigbench.models.actuator_calibration import ActuatorCalibration
from rigbench.models.display_calibration import DisplayCalibration
from rigbench.models.detection_setting import DetectionSetting
from rigbench.models.specimen_test import SPECIMEN_MODELS

logger = logging.getLogger(__name__)

CONFIG_MODELS: dict[ConfigKind, type] = {
    ConfigKind.ACTUATOR_CALIBRATION: ActuatorCalibration,
    ConfigKind.DISPLAY_CALIBRATION: DisplayCalibration,
    ConfigKind.DETECTION_SETTINGS: DetectionSetting,
}

RESOURCE_NAMES: dict[ConfigKind, str] = {
    ConfigKind.ACTUATOR_CALIBRATION: "Actuator calibration",
    ConfigKind.DISPLAY_CALIBRATION: "Display calibration",
    ConfigKind.DETECTION_SETTINGS: "Detection settings",
}


class SqlConfigurationRepository:
    """Persistence for one configuration kind."""

    def __init__(self, db: AsyncSession, kind: ConfigKind):
        self._db = db
        self.kind = kind
        self.model = CONFIG_MODELS[kind]

    def not_found(self, record_id: UUID | str) -> ResourceNotFoundError:
        return ResourceNotFoundError(
            RESOURCE_NAMES[self.kind], str(record_id),
            ErrorContext(config_kind=self.kind.value),
        )

    async def get(self, record_id: UUID):
        return await self._db.get(self.model, record_id)

    async def get_active(self, scope: str):
        result = await self._db.execute(
            select(self.model)
            .where(self.model.scope == scope)
            .where(self.model.is_active.is_(True)),
        )
        return pick_active(result.scalars().all())

    async def list_active(self) -> Sequence:
        result = await self._db.execute(
            select(self.model)
            .where(self.model.is_active.is_(True))
            .order_by(self.model.scope),
        )
        return result.scalars().all()

    async def list_records(
        self, limit: int, offset: int = 0, scope: str | None = None,
    ) -> Sequence:
        query = select(self.model).order_by(self.model.created_at.desc())
        if scope:
            query = query.where(self.model.scope == scope)
        result = await self._db.execute(query.limit(limit).offset(offset))
        return result.scalars().all()

    async def save(self, record):
        self._db.add(record)
        await self._db.flush()
        return record

    async def delete(self, record_id: UUID) -> None:
        record = await self.get(record_id)
        if record is None:
            raise self.not_found(record_id)
        await self._db.delete(record)
        await self._db.commit()

    async def apply_activation(self, plan: ActivationPlan):
        """Apply the swap atomically and commit. Raises NotFound / ActivationConflict."""
        target = await self._db.get(
            self.model, plan.activate_id, with_for_update=True,
        )
        if target is None or target.scope != plan.scope:
            raise self.not_found(plan.activate_id)

        try:
            if plan.deactivate_ids:
                await self._db.execute(
                    update(self.model)
                    .where(self.model.id.in_(plan.deactivate_ids))
                    .values(is_active=False),
                )
            target.is_active = True
            await self._db.flush()
            await self._db.commit()
        except IntegrityError as e:
            await self._db.rollback()
            logger.warning(
                f"Activation conflict: {e.orig}",
                extra={
                    "config_kind": self.kind.value,
                    "scope": plan.scope,
                    "record_id": plan.activate_id,
                },
            )
            raise ActivationConflictError(self.kind.value, plan.scope) from e
        return target


class SqlSpecimenRepository:
    """Persistence for one specimen test kind."""

    def __init__(self, db: AsyncSession, kind: SpecimenKind):
        self._db = db
        self.kind = kind
        self.model = SPECIMEN_MODELS[kind]

    def not_found(self, record_id: UUID | str) -> ResourceNotFoundError:
        return ResourceNotFoundError(
            f"{self.kind.value.title()} test", str(record_id),
        )

    async def get(self, record_id: UUID):
        return await self._db.get(self.model, record_id)

    async def save(self, record):
        self._db.add(record)
        await self._db.flush()
        return record

    async def list_all(self) -> Sequence:
        result = await self._db.execute(
            select(self.model).order_by(self.model.created_at),
        )
        return result.scalars().all()

    async def list_filtered(
        self,
        limit: int,
        offset: int = 0,
        test_type: str | None = None,
        species_id: UUID | None = None,
        search: str | None = None,
    ) -> Sequence:
        query = select(self.model).order_by(self.model.created_at.desc())
        if test_type:
            query = query.where(self.model.test_type == test_type)
        if species_id:
            query = query.where(self.model.species_id == species_id)
        if search:
            query = query.where(self.model.specimen_name.ilike(f"%{search}%"))
        result = await self._db.execute(query.limit(limit).offset(offset))
        return result.scalars().all()

    async def delete(self, record_id: UUID) -> None:
        result = await self._db.execute(
            delete(self.model).where(self.model.id == record_id),
        )
        if result.rowcount == 0:
            raise self.not_found(record_id)
        await self._db.commit()
