"""Configuration Registry — shell around the single-active-per-scope rule.

Invariants:
    - Every activation goes through core.active_registry.plan_activation and one
      repository.apply_activation call (one transaction)
    - get_active returns None (not an error) for an uninitialized scope
    - create_and_activate inserts and activates in the same unit of work: a failed
      activation leaves no orphan record behind
    - Activating a missing/deleted record raises ResourceNotFoundError, no state change
    - Re-activating the sole active record writes nothing

Design Decisions:
    - One registry for all three kinds, parameterized by ConfigKind: the rule is
      identical, only the table differs (ADR: ExMA no god objects)
    - repository_factory injectable so the registry can be exercised against any
      ConfigurationRepository implementation
"""

import logging
from typing import Callable
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from rigbench.core.active_registry import plan_activation
from rigbench.core.domain_types import ConfigKind
from rigbench.infrastructure.repositories import SqlConfigurationRepository

logger = logging.getLogger(__name__)


class ConfigurationRegistry:
    """activate / get_active / create_and_activate per (kind, scope)."""

    def __init__(
        self,
        db: AsyncSession,
        repository_factory: Callable[
            [AsyncSession, ConfigKind], SqlConfigurationRepository
        ] = SqlConfigurationRepository,
    ):
        self._db = db
        self._repository_factory = repository_factory

    def repository(self, kind: ConfigKind) -> SqlConfigurationRepository:
        return self._repository_factory(self._db, kind)

    async def get(self, kind: ConfigKind, record_id: UUID):
        repo = self.repository(kind)
        record = await repo.get(record_id)
        if record is None:
            raise repo.not_found(record_id)
        return record

    async def get_active(self, kind: ConfigKind, scope: str):
        return await self.repository(kind).get_active(scope)

    async def activate(self, kind: ConfigKind, scope: str, record_id: UUID):
        """Make record_id the sole active record of (kind, scope)."""
        repo = self.repository(kind)
        active_ids = [r.id for r in await repo.list_active() if r.scope == scope]
        plan = plan_activation(kind, scope, record_id, active_ids)
        if plan.is_noop:
            logger.debug(
                f"{kind.value} {record_id} already active",
                extra={"config_kind": kind.value, "scope": scope, "record_id": record_id},
            )
            return await self.get(kind, record_id)
        record = await repo.apply_activation(plan)
        logger.info(
            f"Activated {kind.value} {record_id} "
            f"(deactivated {len(plan.deactivate_ids)})",
            extra={
                "config_kind": kind.value, "scope": scope, "record_id": record_id,
            },
        )
        return record

    async def create_and_activate(
        self, kind: ConfigKind, scope: str, payload: dict,
    ):
        repo = self.repository(kind)
        record = repo.model(**payload, scope=scope, is_active=False)
        await repo.save(record)
        return await self.activate(kind, scope, record.id)

    async def update(self, kind: ConfigKind, record_id: UUID, changes: dict):
        """Patch payload fields. is_active is never written here — use activate()."""
        record = await self.get(kind, record_id)
        for name, value in changes.items():
            if name in ("id", "is_active", "created_at"):
                continue
            setattr(record, name, value)
        await self.repository(kind).save(record)
        await self._db.commit()
        return record

    async def list_records(
        self, kind: ConfigKind, limit: int, offset: int = 0,
        scope: str | None = None,
    ):
        return await self.repository(kind).list_records(limit, offset, scope)

    async def delete(self, kind: ConfigKind, record_id: UUID) -> None:
        await self.repository(kind).delete(record_id)
        logger.info(
            f"Deleted {kind.value} {record_id}",
            extra={"config_kind": kind.value, "record_id": record_id},
        )
