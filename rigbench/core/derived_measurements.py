"""Derived Measurement Engine — pressure and stress from raw specimen inputs.

Invariants:
    - pressure = max_force * 1000 / area (kN -> N, result in N/mm² = MPa)
    - Every divisor (area, second moment of area I) <= 0 yields 0.0 — never inf/NaN/raise
    - Each SpecimenKind carries exactly one StressFormula and its dependency set
    - On create both values are computed unconditionally (derive_all)
    - On update a value is recomputed IFF a dependency changed or the stored value is absent
      (plan_recompute); otherwise it is left byte-identical
    - All functions are PURE: inputs are snapshots (mappings), outputs are field dicts

Design Decisions:
    - Tagged variant (STRESS_FORMULAS) over if/elif per call site: adding a test kind
      means adding one table entry (ADR: ExMA explicit dict over getattr)
    - Dirty tracking is an explicit diff of stored vs incoming snapshots, not an ORM
      event hook — the service decides when to call it
    - Double shear detected by case-insensitive substring "double" in test_type:
      the label is free text entered at the rig
"""

from dataclasses import dataclass
from typing import Callable, Mapping

from rigbench.core.domain_types import SpecimenKind
from rigbench.core.errors import InvalidInputError


KN_TO_N: float = 1000.0

DERIVED_FIELDS: tuple[str, ...] = ("pressure", "stress")
NON_NEGATIVE_FIELDS: tuple[str, ...] = (
    "base", "height", "length", "area", "max_force", "moisture_content",
)

PRESSURE_DEPENDENCIES: frozenset[str] = frozenset({"max_force", "area"})


@dataclass(frozen=True)
class SpecimenInputs:
    """Snapshot of the raw fields the formulas read."""
    base: float = 0.0
    height: float = 0.0
    length: float = 0.0
    area: float = 0.0
    max_force: float = 0.0
    test_type: str = ""

    @classmethod
    def from_mapping(cls, data: Mapping) -> "SpecimenInputs":
        """Build from a record snapshot; missing numbers read as 0, missing label as ''."""
        return cls(
            base=float(data.get("base") or 0.0),
            height=float(data.get("height") or 0.0),
            length=float(data.get("length") or 0.0),
            area=float(data.get("area") or 0.0),
            max_force=float(data.get("max_force") or 0.0),
            test_type=str(data.get("test_type") or ""),
        )


# ─── Formulas ────────────────────────────────────────────────────

def force_in_newtons(inputs: SpecimenInputs) -> float:
    return inputs.max_force * KN_TO_N


def compute_pressure(inputs: SpecimenInputs) -> float:
    if inputs.area <= 0:
        return 0.0
    return force_in_newtons(inputs) / inputs.area


def compressive_stress(inputs: SpecimenInputs) -> float:
    """σc = P / A — identical to pressure."""
    return compute_pressure(inputs)


def is_double_shear(test_type: str | None) -> bool:
    return "double" in (test_type or "").lower()


def shear_stress(inputs: SpecimenInputs) -> float:
    """τ = V / A, with V halved across two shear planes for double shear."""
    if inputs.area <= 0:
        return 0.0
    force = force_in_newtons(inputs)
    if is_double_shear(inputs.test_type):
        force = force / 2
    return force / inputs.area


def bending_moment(inputs: SpecimenInputs) -> float:
    """M = F·L / 4 for center-point loading (N·mm)."""
    return force_in_newtons(inputs) * inputs.length / 4


def moment_of_inertia(inputs: SpecimenInputs) -> float:
    """I = b·h³ / 12 for a rectangular section (mm⁴)."""
    return inputs.base * inputs.height ** 3 / 12


def flexure_stress(inputs: SpecimenInputs) -> float:
    """f = M·c / I, three-point bending."""
    inertia = moment_of_inertia(inputs)
    if inertia <= 0:
        return 0.0
    c = inputs.height / 2
    return bending_moment(inputs) * c / inertia


@dataclass(frozen=True)
class StressFormula:
    """One variant of the stress computation, with the fields it depends on."""
    kind: SpecimenKind
    dependencies: frozenset[str]
    compute: Callable[[SpecimenInputs], float]


STRESS_FORMULAS: dict[SpecimenKind, StressFormula] = {
    SpecimenKind.COMPRESSIVE: StressFormula(
        SpecimenKind.COMPRESSIVE,
        frozenset({"max_force", "area"}),
        compressive_stress,
    ),
    SpecimenKind.SHEAR: StressFormula(
        SpecimenKind.SHEAR,
        frozenset({"max_force", "area", "test_type"}),
        shear_stress,
    ),
    SpecimenKind.FLEXURE: StressFormula(
        SpecimenKind.FLEXURE,
        frozenset({"max_force", "base", "height", "length"}),
        flexure_stress,
    ),
}


# ─── Recompute policy ────────────────────────────────────────────

def assert_non_negative_inputs(data: Mapping) -> None:
    """Re-assert the dimensional invariants the request schemas already check."""
    for name in NON_NEGATIVE_FIELDS:
        value = data.get(name)
        if value is not None and value < 0:
            raise InvalidInputError(f"{name} must be >= 0", name)
    moisture = data.get("moisture_content")
    if moisture is not None and moisture > 100:
        raise InvalidInputError(
            "moisture_content must be <= 100", "moisture_content",
        )


def derive_all(kind: SpecimenKind, data: Mapping) -> dict:
    """Both derived values from a full snapshot. Used on create and recalculate."""
    inputs = SpecimenInputs.from_mapping(data)
    return {
        "pressure": compute_pressure(inputs),
        "stress": STRESS_FORMULAS[kind].compute(inputs),
    }


def changed_fields(stored: Mapping, incoming: Mapping) -> frozenset[str]:
    """Names of incoming fields whose value differs from the stored snapshot."""
    return frozenset(
        name for name, value in incoming.items()
        if name not in DERIVED_FIELDS and stored.get(name) != value
    )


def plan_recompute(kind: SpecimenKind, stored: Mapping, incoming: Mapping) -> dict:
    """Derived-field updates an update must apply. Empty dict = leave values untouched.

    stored is the full pre-update snapshot (raw + derived); incoming holds only
    the fields the update sets.
    """
    changed = changed_fields(stored, incoming)
    inputs = SpecimenInputs.from_mapping({**stored, **incoming})
    formula = STRESS_FORMULAS[kind]

    updates: dict = {}
    if changed & PRESSURE_DEPENDENCIES or stored.get("pressure") is None:
        updates["pressure"] = compute_pressure(inputs)
    if changed & formula.dependencies or stored.get("stress") is None:
        updates["stress"] = formula.compute(inputs)
    return updates


# ─── Presentation ────────────────────────────────────────────────

def format_stress(value: float | None) -> str:
    return f"{value or 0.0:,.2f} MPa"


def format_pressure(value: float | None) -> str:
    return f"{value or 0.0:,.2f} N/mm²"
