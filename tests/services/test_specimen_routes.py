"""Specimen Test Routes — verifies derived values stay consistent with raw inputs.

Invariants:
    - Create computes pressure/stress and ignores client-supplied derived values
    - Updating moisture_content alone leaves pressure/stress byte-identical
    - Updating a dependency recomputes; recalculate is idempotent
    - Unknown kind or negative dimension is rejected with 400
"""

from uuid import UUID, uuid4

import pytest
from sqlalchemy import update

from rigbench.models.specimen_test import CompressiveTest

BASE = "/api/v1/specimen-tests"


def _payload(**overrides) -> dict:
    payload = {
        "specimen_name": "Narra-01",
        "test_type": "Single Shear",
        "base": 10.0,
        "height": 20.0,
        "length": 300.0,
        "area": 200.0,
        "max_force": 5.0,
        "moisture_content": 12.5,
    }
    payload.update(overrides)
    return payload


async def _create(client, kind="compressive", **overrides) -> dict:
    res = await client.post(f"{BASE}/{kind}", json=_payload(**overrides))
    assert res.status_code == 201
    return res.json()


async def test_create_compressive_computes_stress(client):
    body = await _create(client)
    assert body["kind"] == "compressive"
    assert body["pressure"] == 25.0
    assert body["stress"] == 25.0
    assert body["formatted_stress"] == "25.00 MPa"


async def test_create_ignores_client_derived_values(client):
    res = await client.post(
        f"{BASE}/compressive", json={**_payload(), "pressure": 999.0, "stress": 999.0},
    )
    assert res.json()["stress"] == 25.0


async def test_double_shear_halves_stress(client):
    single = await _create(client, "shear")
    double = await _create(client, "shear", test_type="Double Shear")
    assert double["stress"] == single["stress"] / 2
    assert double["pressure"] == single["pressure"]


async def test_flexure_worked_example(client):
    body = await _create(client, "flexure")
    assert body["stress"] == pytest.approx(562.5)


async def test_zero_area_yields_zero(client):
    body = await _create(client, area=0.0)
    assert body["pressure"] == 0.0
    assert body["stress"] == 0.0


async def test_moisture_only_update_keeps_derived_values(client, test_db):
    created = await _create(client)
    # Drift the stored stress so an unwanted recompute would be visible
    await test_db.execute(
        update(CompressiveTest)
        .where(CompressiveTest.id == UUID(created["id"]))
        .values(stress=1.0),
    )
    await test_db.commit()

    res = await client.put(
        f"{BASE}/compressive/{created['id']}", json={"moisture_content": 18.0},
    )
    body = res.json()
    assert body["moisture_content"] == 18.0
    assert body["pressure"] == created["pressure"]
    assert body["stress"] == 1.0


async def test_dependency_update_recomputes(client):
    created = await _create(client)
    res = await client.put(
        f"{BASE}/compressive/{created['id']}", json={"max_force": 10.0},
    )
    body = res.json()
    assert body["pressure"] == 50.0
    assert body["stress"] == 50.0


async def test_shear_label_update_recomputes_stress(client):
    created = await _create(client, "shear")
    res = await client.put(
        f"{BASE}/shear/{created['id']}", json={"test_type": "double shear"},
    )
    assert res.json()["stress"] == created["stress"] / 2


async def test_update_rejects_blank_label(client):
    created = await _create(client, "shear")
    res = await client.put(
        f"{BASE}/shear/{created['id']}", json={"test_type": "   "},
    )
    assert res.status_code == 400
    fetched = (await client.get(f"{BASE}/shear/{created['id']}")).json()
    assert fetched["test_type"] == "Single Shear"


async def test_update_strips_padded_labels(client):
    created = await _create(client, "shear")
    res = await client.put(
        f"{BASE}/shear/{created['id']}",
        json={"specimen_name": "  Narra-02 ", "test_type": " Double Shear  "},
    )
    body = res.json()
    assert body["specimen_name"] == "Narra-02"
    assert body["test_type"] == "Double Shear"
    assert body["stress"] == created["stress"] / 2


async def test_recalculate_is_idempotent(client):
    created = await _create(client, "flexure")
    first = (await client.post(f"{BASE}/flexure/{created['id']}/recalculate")).json()
    second = (await client.post(f"{BASE}/flexure/{created['id']}/recalculate")).json()
    assert first["stress"] == second["stress"] == created["stress"]


async def test_recalculate_all_counts_changed_rows(client, test_db):
    drifted = await _create(client)
    await _create(client, specimen_name="Narra-02")
    await test_db.execute(
        update(CompressiveTest)
        .where(CompressiveTest.id == UUID(drifted["id"]))
        .values(pressure=None, stress=None),
    )
    await test_db.commit()

    res = await client.post(f"{BASE}/compressive/recalculate")
    assert res.json() == {"kind": "compressive", "updated": 1}
    fixed = (await client.get(f"{BASE}/compressive/{drifted['id']}")).json()
    assert fixed["stress"] == 25.0


async def test_negative_dimension_rejected(client):
    res = await client.post(f"{BASE}/compressive", json=_payload(area=-1.0))
    assert res.status_code == 400


async def test_moisture_above_hundred_rejected(client):
    res = await client.post(f"{BASE}/compressive", json=_payload(moisture_content=120.0))
    assert res.status_code == 400


async def test_unknown_kind_rejected(client):
    res = await client.post(f"{BASE}/tension", json=_payload())
    assert res.status_code == 400


async def test_missing_test_returns_404(client):
    res = await client.get(f"{BASE}/shear/{uuid4()}")
    assert res.status_code == 404


async def test_unknown_species_rejected(client):
    res = await client.post(
        f"{BASE}/compressive", json=_payload(species_id=str(uuid4())),
    )
    assert res.status_code == 404


async def test_list_filters(client, seed_species):
    await _create(client, species_id=str(seed_species.id))
    await _create(client, specimen_name="Yakal-07", test_type="Parallel")

    by_species = await client.get(
        f"{BASE}/compressive", params={"species_id": str(seed_species.id)},
    )
    assert [t["specimen_name"] for t in by_species.json()] == ["Narra-01"]

    by_type = await client.get(f"{BASE}/compressive", params={"test_type": "Parallel"})
    assert [t["specimen_name"] for t in by_type.json()] == ["Yakal-07"]

    by_name = await client.get(f"{BASE}/compressive", params={"search": "yakal"})
    assert len(by_name.json()) == 1


async def test_kinds_are_separate_tables(client):
    await _create(client, "shear")
    assert (await client.get(f"{BASE}/compressive")).json() == []


async def test_delete(client):
    created = await _create(client)
    assert (await client.delete(f"{BASE}/compressive/{created['id']}")).status_code == 204
    assert (await client.delete(f"{BASE}/compressive/{created['id']}")).status_code == 404
