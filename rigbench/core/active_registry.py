"""Active-Configuration Registry — pure planning for the single-active-per-scope rule.

Invariants:
    - For every (kind, scope) at most one record has is_active = True
    - plan_activation is PURE: returns an ActivationPlan, does NOT mutate records
    - A plan always names exactly one record to activate; every other active id
      in the scope is listed for deactivation
    - Activating the record that is already the sole active one yields an empty
      deactivation list (no-op transition)

Design Decisions:
    - Plan object over two separate "deactivate"/"activate" calls: the shell must
      apply it in ONE transaction (ADR: atomic swap keyed by (kind, scope))
    - Last-writer-wins: the most recent activation is the sole active record;
      no priority between concurrent activations beyond atomicity
    - pick_active tolerates legacy rows with several active records: newest wins
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Iterable, Sequence

from rigbench.core.domain_types import ConfigKind


@dataclass(frozen=True)
class ActivationPlan:
    """Descriptor of an atomic swap within one (kind, scope)."""
    kind: ConfigKind
    scope: str
    activate_id: Any
    deactivate_ids: tuple = ()
    already_active: bool = False

    @property
    def is_noop(self) -> bool:
        """Target is already the sole active record: nothing to write."""
        return self.already_active and not self.deactivate_ids


def plan_activation(
    kind: ConfigKind, scope: str, target_id: Any, active_ids: Iterable[Any],
) -> ActivationPlan:
    """Build the swap that leaves target_id as the only active record in scope."""
    active_ids = tuple(active_ids)
    return ActivationPlan(
        kind=kind,
        scope=scope,
        activate_id=target_id,
        deactivate_ids=tuple(i for i in active_ids if i != target_id),
        already_active=target_id in active_ids,
    )


def pick_active(records: Sequence[Any]) -> Any | None:
    """Return the active record of a scope, or None. Pure, no IO.

    Records must expose is_active and created_at. When legacy data holds more
    than one active record, the most recently created one is returned.
    """
    active = [r for r in records if r.is_active]
    if not active:
        return None
    return max(active, key=_created_key)


def _created_key(record: Any) -> tuple:
    # SQLite drops tzinfo on reload; naive timestamps are stored as UTC
    created = record.created_at
    if created is None:
        return (False, datetime.min.replace(tzinfo=timezone.utc))
    if created.tzinfo is None:
        created = created.replace(tzinfo=timezone.utc)
    return (True, created)
