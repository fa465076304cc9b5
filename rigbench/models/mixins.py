"""Model Mixins — columns shared by every configuration kind and every specimen kind.

Invariants:
    - ActiveConfigMixin tables carry a partial unique index on scope WHERE is_active:
      the store itself rejects a second active record in the same scope
    - SpecimenColumnsMixin tables hold raw inputs plus the derived pressure/stress
    - created_at is set once at insert; updated_at moves on every UPDATE

Design Decisions:
    - One table per kind over a single discriminated table: kinds have disjoint
      payloads and are never queried together (ADR: one file per entity)
    - Partial index declared for both postgresql and sqlite dialects so tests
      exercise the same constraint as production
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Boolean, DateTime, Float, ForeignKey, Index, String, Text, text,
)
from sqlalchemy.orm import Mapped, declared_attr, mapped_column
from sqlalchemy.dialects.postgresql import UUID


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow,
    )


class ActiveConfigMixin(TimestampMixin):
    """Identity, scope and the single-active flag for configuration records."""

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    scope: Mapped[str] = mapped_column(
        String(191), nullable=False, default="global", index=True,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )

    @declared_attr.directive
    def __table_args__(cls) -> tuple:
        return (
            Index(
                f"uq_{cls.__tablename__}_active_scope",
                "scope",
                unique=True,
                postgresql_where=text("is_active"),
                sqlite_where=text("is_active"),
            ),
        )


class SpecimenColumnsMixin(TimestampMixin):
    """Raw inputs and derived outputs common to compressive, shear and flexure tests."""

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    specimen_name: Mapped[str] = mapped_column(String(255), nullable=False)
    test_type: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    # Raw inputs (mm, mm², kN, %)
    base: Mapped[float] = mapped_column(Float, nullable=False)
    height: Mapped[float] = mapped_column(Float, nullable=False)
    length: Mapped[float] = mapped_column(Float, nullable=False)
    area: Mapped[float] = mapped_column(Float, nullable=False)
    max_force: Mapped[float] = mapped_column(Float, nullable=False)
    moisture_content: Mapped[float | None] = mapped_column(Float, nullable=True)

    # Derived (N/mm² = MPa), written only by the derived measurement engine
    pressure: Mapped[float | None] = mapped_column(Float, nullable=True)
    stress: Mapped[float | None] = mapped_column(Float, nullable=True)

    photo: Mapped[str | None] = mapped_column(Text, nullable=True)

    @declared_attr
    def species_id(cls) -> Mapped[uuid.UUID | None]:
        return mapped_column(
            UUID(as_uuid=True),
            ForeignKey("reference_values.id", ondelete="SET NULL"),
            nullable=True,
            index=True,
        )

    def snapshot(self) -> dict:
        """Plain-dict view of the fields the derived measurement engine reads."""
        return {
            "test_type": self.test_type,
            "base": self.base,
            "height": self.height,
            "length": self.length,
            "area": self.area,
            "max_force": self.max_force,
            "moisture_content": self.moisture_content,
            "pressure": self.pressure,
            "stress": self.stress,
        }
