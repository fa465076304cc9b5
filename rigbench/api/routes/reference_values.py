"""Reference Value Routes — species strength lookup data.

Invariants:
    - Listing filters restricted to strength_group and a name search
    - Ordered by common_name for stable dropdowns
    - Deleting a species clears species_id on every specimen test that pointed at
      it, in the same commit (SQLite does not enforce ON DELETE SET NULL)
    - Species search returns at most SPECIES_SEARCH_LIMIT rows

Design Decisions:
    - /meta/strength-groups and /search/species are two-segment paths, so they
      never collide with /{reference_id}
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from rigbench.api.routes.listing import Page, page_params
from rigbench.core.domain_types import StrengthGroup, strength_group_label
from rigbench.core.errors import ResourceNotFoundError
from rigbench.infrastructure.database import get_db
from rigbench.models.reference_value import ReferenceValue
from rigbench.models.specimen_test import SPECIMEN_MODELS
from rigbench.schemas.reference_value import (
    ReferenceValueCreate, ReferenceValueResponse, ReferenceValueUpdate,
    SpeciesMatch, StrengthGroupResponse,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/reference-values", tags=["reference-values"])

SPECIES_SEARCH_LIMIT = 10


def _name_matches(search: str):
    pattern = f"%{search}%"
    return or_(
        ReferenceValue.common_name.ilike(pattern),
        ReferenceValue.botanical_name.ilike(pattern),
    )


async def _get_or_404(db: AsyncSession, reference_id: UUID) -> ReferenceValue:
    record = await db.get(ReferenceValue, reference_id)
    if record is None:
        raise ResourceNotFoundError("Reference value", str(reference_id))
    return record


@router.get("", response_model=list[ReferenceValueResponse])
async def list_reference_values(
    strength_group: StrengthGroup | None = None,
    search: str | None = Query(None, max_length=255),
    page: Page = Depends(page_params),
    db: AsyncSession = Depends(get_db),
):
    query = select(ReferenceValue).order_by(ReferenceValue.common_name)
    if strength_group:
        query = query.where(ReferenceValue.strength_group == strength_group.value)
    if search:
        query = query.where(_name_matches(search))
    result = await db.execute(query.limit(page.limit).offset(page.offset))
    return [ReferenceValueResponse.from_record(r) for r in result.scalars().all()]


@router.post(
    "", response_model=ReferenceValueResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_reference_value(
    body: ReferenceValueCreate, db: AsyncSession = Depends(get_db),
):
    record = ReferenceValue(**body.model_dump(mode="json"))
    db.add(record)
    await db.commit()
    logger.info(f"Created reference value {record.id}", extra={"record_id": record.id})
    return ReferenceValueResponse.from_record(record)


@router.get("/meta/strength-groups", response_model=list[StrengthGroupResponse])
async def list_strength_groups(db: AsyncSession = Depends(get_db)):
    """Groups actually present in the table, with display labels."""
    result = await db.execute(
        select(ReferenceValue.strength_group)
        .distinct()
        .order_by(ReferenceValue.strength_group),
    )
    return [
        StrengthGroupResponse(strength_group=g, label=strength_group_label(g))
        for g in result.scalars().all()
    ]


@router.get("/search/species", response_model=list[SpeciesMatch])
async def search_species(
    q: str = Query("", max_length=255),
    db: AsyncSession = Depends(get_db),
):
    query = select(ReferenceValue).order_by(ReferenceValue.common_name)
    if q.strip():
        query = query.where(_name_matches(q.strip()))
    result = await db.execute(query.limit(SPECIES_SEARCH_LIMIT))
    return [
        SpeciesMatch(
            id=r.id, common_name=r.common_name,
            botanical_name=r.botanical_name, strength_group=r.strength_group,
        )
        for r in result.scalars().all()
    ]


@router.get("/{reference_id}", response_model=ReferenceValueResponse)
async def get_reference_value(
    reference_id: UUID, db: AsyncSession = Depends(get_db),
):
    return ReferenceValueResponse.from_record(await _get_or_404(db, reference_id))


@router.put("/{reference_id}", response_model=ReferenceValueResponse)
async def update_reference_value(
    reference_id: UUID,
    body: ReferenceValueUpdate,
    db: AsyncSession = Depends(get_db),
):
    record = await _get_or_404(db, reference_id)
    for name, value in body.changes().items():
        setattr(record, name, value)
    await db.commit()
    logger.info(f"Updated reference value {record.id}", extra={"record_id": record.id})
    return ReferenceValueResponse.from_record(record)


@router.delete("/{reference_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_reference_value(
    reference_id: UUID, db: AsyncSession = Depends(get_db),
):
    record = await _get_or_404(db, reference_id)
    for model in SPECIMEN_MODELS.values():
        await db.execute(
            update(model)
            .where(model.species_id == reference_id)
            .values(species_id=None),
        )
    await db.delete(record)
    await db.commit()
    logger.info(
        f"Deleted reference value {reference_id}",
        extra={"record_id": reference_id},
    )
