"""ReferenceValue ORM — published strength values per timber species.

Invariants:
    - common_name is non-nullable; strength values are MPa, nullable when unpublished
    - Specimen tests reference rows by id (species_id); deleting a row nulls the reference
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Float, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from rigbench.db.base import Base


class ReferenceValue(Base):
    """Reference species — comparison baseline for measured stresses."""
    __tablename__ = "reference_values"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    strength_group: Mapped[str] = mapped_column(
        String(50), nullable=False, index=True,
    )
    common_name: Mapped[str] = mapped_column(String(255), nullable=False)
    botanical_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    compression_parallel: Mapped[float | None] = mapped_column(Float, nullable=True)
    compression_perpendicular: Mapped[float | None] = mapped_column(
        Float, nullable=True,
    )
    shear_parallel: Mapped[float | None] = mapped_column(Float, nullable=True)
    bending_tension_parallel: Mapped[float | None] = mapped_column(
        Float, nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
