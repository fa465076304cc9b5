"""Listing Helpers — limit/offset query parameters shared by list endpoints.

Invariants:
    - limit defaults to settings.list_default_limit and is clamped to settings.list_max_limit
    - offset >= 0
"""

from dataclasses import dataclass

from fastapi import Query

from rigbench.config import get_settings


@dataclass(frozen=True)
class Page:
    limit: int
    offset: int


def page_params(
    limit: int | None = Query(None, ge=1),
    offset: int = Query(0, ge=0),
) -> Page:
    """FastAPI dependency resolving limit/offset against configured bounds."""
    settings = get_settings()
    resolved = min(limit or settings.list_default_limit, settings.list_max_limit)
    return Page(limit=resolved, offset=offset)
