"""Specimen Schemas — raw-input validation and derived-value responses for test records.

Invariants:
    - Dimensions and force >= 0; moisture_content within 0-100
    - pressure/stress are never accepted as input (not declared on request models)
    - Responses carry both raw numbers and their formatted strings
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from rigbench.core.derived_measurements import format_pressure, format_stress


class SpecimenTestCreate(BaseModel):
    specimen_name: str = Field(min_length=1, max_length=255)
    test_type: str = Field(min_length=1, max_length=255)
    base: float = Field(ge=0)
    height: float = Field(ge=0)
    length: float = Field(ge=0)
    area: float = Field(ge=0)
    max_force: float = Field(ge=0)
    moisture_content: float | None = Field(None, ge=0, le=100)
    species_id: UUID | None = None
    photo: str | None = None

    @field_validator("specimen_name", "test_type")
    @classmethod
    def strip_label(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("cannot be empty or whitespace")
        return v


class SpecimenTestUpdate(BaseModel):
    """Partial update — only fields explicitly sent are applied."""
    specimen_name: str | None = Field(None, min_length=1, max_length=255)
    test_type: str | None = Field(None, min_length=1, max_length=255)
    base: float | None = Field(None, ge=0)
    height: float | None = Field(None, ge=0)
    length: float | None = Field(None, ge=0)
    area: float | None = Field(None, ge=0)
    max_force: float | None = Field(None, ge=0)
    moisture_content: float | None = Field(None, ge=0, le=100)
    species_id: UUID | None = None
    photo: str | None = None

    @field_validator("specimen_name", "test_type")
    @classmethod
    def strip_label(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("cannot be empty or whitespace")
        return v

    def changes(self) -> dict:
        """Fields the client sent; required columns cannot be nulled."""
        data = self.model_dump(exclude_unset=True)
        nullable = ("moisture_content", "species_id", "photo")
        return {
            k: v for k, v in data.items() if v is not None or k in nullable
        }


class SpecimenTestResponse(BaseModel):
    id: UUID
    kind: str
    specimen_name: str
    test_type: str
    base: float
    height: float
    length: float
    area: float
    max_force: float
    moisture_content: float | None = None
    species_id: UUID | None = None
    photo: str | None = None
    pressure: float | None = None
    stress: float | None = None
    formatted_pressure: str
    formatted_stress: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_record(cls, record, kind: str) -> "SpecimenTestResponse":
        return cls(
            id=record.id,
            kind=kind,
            specimen_name=record.specimen_name,
            test_type=record.test_type,
            base=record.base,
            height=record.height,
            length=record.length,
            area=record.area,
            max_force=record.max_force,
            moisture_content=record.moisture_content,
            species_id=record.species_id,
            photo=record.photo,
            pressure=record.pressure,
            stress=record.stress,
            formatted_pressure=format_pressure(record.pressure),
            formatted_stress=format_stress(record.stress),
            created_at=record.created_at,
            updated_at=record.updated_at,
        )


class RecalculateAllResponse(BaseModel):
    kind: str
    updated: int
