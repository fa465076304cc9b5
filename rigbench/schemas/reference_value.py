"""Reference Value Schemas — species strength data."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from rigbench.core.domain_types import StrengthGroup, strength_group_label


class ReferenceValueCreate(BaseModel):
    strength_group: StrengthGroup
    common_name: str = Field(min_length=1, max_length=255)
    botanical_name: str | None = Field(None, max_length=255)
    compression_parallel: float | None = Field(None, ge=0)
    compression_perpendicular: float | None = Field(None, ge=0)
    shear_parallel: float | None = Field(None, ge=0)
    bending_tension_parallel: float | None = Field(None, ge=0)

    @field_validator("common_name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("cannot be empty or whitespace")
        return v


class ReferenceValueUpdate(BaseModel):
    """Partial update — unsent fields keep their stored value."""
    strength_group: StrengthGroup | None = None
    common_name: str | None = Field(None, min_length=1, max_length=255)
    botanical_name: str | None = Field(None, max_length=255)
    compression_parallel: float | None = Field(None, ge=0)
    compression_perpendicular: float | None = Field(None, ge=0)
    shear_parallel: float | None = Field(None, ge=0)
    bending_tension_parallel: float | None = Field(None, ge=0)

    @field_validator("common_name")
    @classmethod
    def strip_name(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("cannot be empty or whitespace")
        return v

    def changes(self) -> dict:
        """Sent fields only; strength_group and common_name cannot be cleared."""
        sent = self.model_dump(mode="json", exclude_unset=True)
        return {
            k: v for k, v in sent.items()
            if v is not None or k not in ("strength_group", "common_name")
        }


class ReferenceValueResponse(BaseModel):
    id: UUID
    strength_group: str
    strength_group_label: str
    common_name: str
    botanical_name: str | None = None
    compression_parallel: float | None = None
    compression_perpendicular: float | None = None
    shear_parallel: float | None = None
    bending_tension_parallel: float | None = None
    created_at: datetime | None = None

    @classmethod
    def from_record(cls, record) -> "ReferenceValueResponse":
        return cls(
            id=record.id,
            strength_group=record.strength_group,
            strength_group_label=strength_group_label(record.strength_group),
            common_name=record.common_name,
            botanical_name=record.botanical_name,
            compression_parallel=record.compression_parallel,
            compression_perpendicular=record.compression_perpendicular,
            shear_parallel=record.shear_parallel,
            bending_tension_parallel=record.bending_tension_parallel,
            created_at=record.created_at,
        )


class StrengthGroupResponse(BaseModel):
    strength_group: str
    label: str


class SpeciesMatch(BaseModel):
    """Slim row for species pickers."""
    id: UUID
    common_name: str
    botanical_name: str | None = None
    strength_group: str
