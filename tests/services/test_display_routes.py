"""Display Calibration Routes — verifies per-setting-type activation and reading format.

Invariants:
    - POST creates a record and makes it the only active one for its setting type
    - Different setting types keep their own active record
    - active/format applies the active decimal point; default-segments is pure geometry
"""

BASE = "/api/v1/display-calibrations"

DISPLAY_BOX = {"x": 10, "y": 20, "width": 300, "height": 100}


def _payload(**overrides) -> dict:
    payload = {
        "display_box": DISPLAY_BOX,
        "segment_boxes": [[{"x": 0, "y": 0, "width": 1, "height": 1}]],
        "num_digits": 3,
        "has_decimal_point": True,
        "decimal_position": 1,
        "device_name": "UTM readout",
    }
    payload.update(overrides)
    return payload


async def test_save_defaults_to_seven_segment(client):
    res = await client.post(BASE, json=_payload())
    assert res.status_code == 201
    body = res.json()
    assert body["setting_type"] == "seven_segment"
    assert body["is_active"] is True
    assert body["decimal_format"] == "XX.X (e.g., 31.9)"


async def test_active_404_when_none(client):
    res = await client.get(f"{BASE}/active", params={"setting_type": "lcd"})
    assert res.status_code == 404


async def test_new_save_replaces_active_in_same_type(client):
    first = (await client.post(BASE, json=_payload())).json()
    second = (await client.post(BASE, json=_payload(decimal_position=2))).json()

    active = (await client.get(f"{BASE}/active")).json()
    assert active["id"] == second["id"]
    assert (await client.get(f"{BASE}/{first['id']}")).json()["is_active"] is False


async def test_setting_types_are_independent(client):
    seven = (await client.post(BASE, json=_payload())).json()
    lcd = (await client.post(BASE, json=_payload(setting_type="lcd"))).json()

    assert (await client.get(f"{BASE}/active")).json()["id"] == seven["id"]
    active_lcd = await client.get(f"{BASE}/active", params={"setting_type": "lcd"})
    assert active_lcd.json()["id"] == lcd["id"]


async def test_format_reading_uses_active_calibration(client):
    await client.post(BASE, json=_payload(decimal_position=2))
    res = await client.post(f"{BASE}/active/format", json={"raw": "319"})
    assert res.status_code == 200
    assert res.json() == {
        "raw": "319", "formatted": "3.19", "decimal_format": "X.XX (e.g., 3.19)",
    }


async def test_format_reading_passes_unreadable_through(client):
    await client.post(BASE, json=_payload())
    res = await client.post(f"{BASE}/active/format", json={"raw": "3?9"})
    assert res.json()["formatted"] == "3?9"


async def test_format_reading_without_calibration_is_404(client):
    res = await client.post(f"{BASE}/active/format", json={"raw": "319"})
    assert res.status_code == 404


async def test_default_segments(client):
    res = await client.post(
        f"{BASE}/default-segments", json={"display_box": DISPLAY_BOX, "num_digits": 4},
    )
    body = res.json()
    assert body["num_digits"] == 4
    assert len(body["segment_boxes"]) == 4
    assert all(len(digit) == 7 for digit in body["segment_boxes"])


async def test_num_digits_out_of_range_rejected(client):
    res = await client.post(BASE, json=_payload(num_digits=11))
    assert res.status_code == 400


async def test_update_and_activate(client):
    first = (await client.post(BASE, json=_payload())).json()
    await client.post(BASE, json=_payload())

    res = await client.put(
        f"{BASE}/{first['id']}", json={"has_decimal_point": False, "is_active": True},
    )
    body = res.json()
    assert body["has_decimal_point"] is False
    assert body["decimal_format"] is None
    assert (await client.get(f"{BASE}/active")).json()["id"] == first["id"]


async def test_list_filters_by_setting_type(client):
    await client.post(BASE, json=_payload())
    await client.post(BASE, json=_payload(setting_type="lcd"))
    res = await client.get(BASE, params={"setting_type": "lcd"})
    assert [c["setting_type"] for c in res.json()] == ["lcd"]
