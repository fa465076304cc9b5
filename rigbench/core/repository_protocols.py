"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell (infrastructure/repositories.py)

Design Decisions:
    - Protocol over ABC: structural subtyping, ORM models satisfy the *Like
      protocols without inheriting from them (ADR: ExMA anti-pattern)
    - Async in Protocol: boundary methods are async because implementations do IO,
      but core pure functions that USE these shapes are never async themselves —
      the shell orchestrates the async calls around the pure logic
    - apply_activation takes a whole ActivationPlan: the repository owns the
      transaction, so "deactivate others + activate one" cannot be split
"""

from datetime import datetime
from typing import Any, Protocol, Sequence

from rigbench.core.active_registry import ActivationPlan
from rigbench.core.domain_types import RecordId


class ConfigRecordLike(Protocol):
    """Structural contract shared by every configuration record."""
    id: Any
    scope: str
    is_active: bool
    created_at: datetime


class ActuatorCalibrationLike(Protocol):
    """Fields the position engine reads from an actuator calibration."""
    midpoint: float
    max_distance_left: float
    max_distance_right: float
    is_calibrated: bool


class DisplayCalibrationLike(Protocol):
    """Fields the number formatter reads from a display calibration."""
    num_digits: int
    has_decimal_point: bool
    decimal_position: int


class ConfigurationRepository(Protocol):
    """Contract for one configuration kind's persistence — implemented by shell."""
    async def get(self, record_id: RecordId) -> Any | None: ...
    async def get_active(self, scope: str) -> Any | None: ...
    async def list_active(self) -> Sequence[Any]: ...
    async def save(self, record: Any) -> Any: ...
    async def apply_activation(self, plan: ActivationPlan) -> Any: ...


class SpecimenRepository(Protocol):
    """Contract for one specimen kind's persistence — implemented by shell."""
    async def get(self, record_id: RecordId) -> Any | None: ...
    async def save(self, record: Any) -> Any: ...
    async def list_all(self) -> Sequence[Any]: ...
