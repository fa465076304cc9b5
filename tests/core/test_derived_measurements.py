"""Derived Measurements — verifies pressure/stress formulas and the recompute policy.

Tests:
    - Compressive stress equals pressure; zero area yields 0
    - Double shear halves the stress (case-insensitive)
    - Flexure worked example: base 10, height 20, length 300, force 5 kN
    - plan_recompute only touches values whose dependencies changed
"""

import pytest

from rigbench.core.derived_measurements import (
    STRESS_FORMULAS, SpecimenInputs, assert_non_negative_inputs, bending_moment,
    changed_fields, compute_pressure, derive_all, format_pressure, format_stress,
    is_double_shear, moment_of_inertia, plan_recompute,
)
from rigbench.core.domain_types import SpecimenKind
from rigbench.core.errors import InvalidInputError


def _raw(**overrides) -> dict:
    data = {
        "test_type": "Single Shear",
        "base": 10.0,
        "height": 20.0,
        "length": 300.0,
        "area": 200.0,
        "max_force": 5.0,
        "moisture_content": 12.0,
    }
    data.update(overrides)
    return data


# ─── Formulas ────────────────────────────────────────────────────

def test_pressure_converts_kilonewtons():
    assert compute_pressure(SpecimenInputs(area=200.0, max_force=5.0)) == 25.0


def test_zero_area_yields_zero():
    assert compute_pressure(SpecimenInputs(area=0.0, max_force=5.0)) == 0.0
    assert derive_all(SpecimenKind.SHEAR, _raw(area=0.0)) == {
        "pressure": 0.0, "stress": 0.0,
    }


def test_compressive_stress_equals_pressure():
    derived = derive_all(SpecimenKind.COMPRESSIVE, _raw())
    assert derived["stress"] == derived["pressure"] == 25.0


@pytest.mark.parametrize("label", ["Double Shear", "double", "DOUBLE shear test"])
def test_double_shear_halves_stress(label):
    single = derive_all(SpecimenKind.SHEAR, _raw())["stress"]
    double = derive_all(SpecimenKind.SHEAR, _raw(test_type=label))["stress"]
    assert is_double_shear(label)
    assert double == single / 2


def test_missing_test_type_is_single_shear():
    assert not is_double_shear(None)


def test_flexure_worked_example():
    inputs = SpecimenInputs(base=10.0, height=20.0, length=300.0, max_force=5.0)
    assert bending_moment(inputs) == 375000.0
    assert moment_of_inertia(inputs) == pytest.approx(6666.67, abs=0.01)
    assert STRESS_FORMULAS[SpecimenKind.FLEXURE].compute(inputs) == pytest.approx(562.5)


def test_flexure_zero_inertia_yields_zero():
    assert derive_all(SpecimenKind.FLEXURE, _raw(height=0.0))["stress"] == 0.0


def test_every_kind_has_a_formula():
    assert set(STRESS_FORMULAS) == set(SpecimenKind)
    assert STRESS_FORMULAS[SpecimenKind.SHEAR].dependencies == {
        "max_force", "area", "test_type",
    }


# ─── Validation ──────────────────────────────────────────────────

def test_negative_dimension_rejected():
    with pytest.raises(InvalidInputError) as exc:
        assert_non_negative_inputs({"area": -1.0})
    assert exc.value.field == "area"


def test_moisture_above_hundred_rejected():
    with pytest.raises(InvalidInputError):
        assert_non_negative_inputs({"moisture_content": 101.0})


# ─── Recompute policy ────────────────────────────────────────────

def _stored(kind: SpecimenKind) -> dict:
    raw = _raw()
    return {**raw, **derive_all(kind, raw)}


def test_changed_fields_ignores_derived_and_equal_values():
    stored = _stored(SpecimenKind.COMPRESSIVE)
    incoming = {"area": 200.0, "stress": 1.0, "max_force": 6.0}
    assert changed_fields(stored, incoming) == {"max_force"}


def test_moisture_only_update_leaves_derived_values():
    for kind in SpecimenKind:
        assert plan_recompute(kind, _stored(kind), {"moisture_content": 15.0}) == {}


def test_force_change_recomputes_both():
    updates = plan_recompute(
        SpecimenKind.COMPRESSIVE, _stored(SpecimenKind.COMPRESSIVE), {"max_force": 10.0},
    )
    assert updates == {"pressure": 50.0, "stress": 50.0}


def test_flexure_height_change_recomputes_stress_only():
    stored = _stored(SpecimenKind.FLEXURE)
    updates = plan_recompute(SpecimenKind.FLEXURE, stored, {"height": 10.0})
    assert set(updates) == {"stress"}


def test_shear_test_type_change_recomputes_stress_only():
    stored = _stored(SpecimenKind.SHEAR)
    updates = plan_recompute(SpecimenKind.SHEAR, stored, {"test_type": "Double Shear"})
    assert updates == {"stress": stored["stress"] / 2}


def test_absent_stored_value_is_filled():
    stored = {**_raw(), "pressure": None, "stress": None}
    updates = plan_recompute(SpecimenKind.COMPRESSIVE, stored, {"photo": "x.jpg"})
    assert updates == {"pressure": 25.0, "stress": 25.0}


def test_derive_all_is_idempotent():
    raw = _raw()
    assert derive_all(SpecimenKind.FLEXURE, raw) == derive_all(SpecimenKind.FLEXURE, raw)


# ─── Presentation ────────────────────────────────────────────────

def test_formatting():
    assert format_stress(1234.5) == "1,234.50 MPa"
    assert format_pressure(12.346) == "12.35 N/mm²"
    assert format_stress(None) == "0.00 MPa"
