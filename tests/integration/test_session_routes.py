import pytest


HEADERS = {"X-Session-Id": "browser-1"}


async def add_filled_row(client, identifier, payout, price):
    row = (await client.post("/api/v1/session/rows", headers=HEADERS)).json()
    resp = await client.patch(
        f"/api/v1/session/rows/{row['row_id']}",
        headers=HEADERS,
        json={"identifier": identifier, "payout_per_unit": payout, "price_per_unit": price},
    )
    assert resp.status_code == 200
    return resp.json()


@pytest.mark.asyncio
@pytest.mark.integration
async def test_form_flow_calculates_from_draft(client):
    await client.put("/api/v1/session/goal", headers=HEADERS, json={"goal": "1000"})
    await add_filled_row(client, "A", "1.0", "100.0")
    await add_filled_row(client, "B", "2.0", "50.0")
    # half-filled row does not block the calculation
    await client.post("/api/v1/session/rows", headers=HEADERS)

    resp = await client.post("/api/v1/session/calculate", headers=HEADERS)

    assert resp.status_code == 200
    assert resp.json()["total_cost"] == "40000.00"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_draft_is_restored_and_pruned(client):
    await client.put("/api/v1/session/goal", headers=HEADERS, json={"goal": "300"})
    row = await add_filled_row(client, "A", "1", "10")

    restored = (await client.get("/api/v1/session", headers=HEADERS)).json()
    assert restored["goal"] == "300"
    assert [r["identifier"] for r in restored["rows"]] == ["A"]

    # other sessions do not see it
    other = (await client.get("/api/v1/session", headers={"X-Session-Id": "browser-2"})).json()
    assert other == {"goal": "", "rows": []}

    resp = await client.delete(f"/api/v1/session/rows/{row['row_id']}", headers=HEADERS)
    assert resp.json() == {"goal": "", "rows": []}


@pytest.mark.asyncio
@pytest.mark.integration
async def test_unknown_row_is_404(client):
    resp = await client.patch("/api/v1/session/rows/999", headers=HEADERS, json={"identifier": "X"})
    assert resp.status_code == 404

    resp = await client.delete("/api/v1/session/rows/999", headers=HEADERS)
    assert resp.status_code == 404


@pytest.mark.asyncio
@pytest.mark.integration
async def test_price_refresh_updates_only_successful_rows(client):
    slow = await add_filled_row(client, "SLOW11", "1.00", "99.00")
    fast = await add_filled_row(client, "HGLG11", "1.10", "150.00")
    broken = await add_filled_row(client, "BROKEN11", "0.50", "50.00")

    resp = await client.post("/api/v1/session/prices/refresh", headers=HEADERS)

    assert resp.status_code == 200
    data = resp.json()
    prices = {row["row_id"]: row["price_per_unit"] for row in data["draft"]["rows"]}
    assert prices[slow["row_id"]] == "99.00"
    assert prices[fast["row_id"]] == "160.50"
    assert prices[broken["row_id"]] == "50.00"
    assert data["updated"] == ["HGLG11"]
    assert sorted(data["failed"]) == ["BROKEN11", "SLOW11"]


@pytest.mark.asyncio
@pytest.mark.integration
async def test_save_and_load_named_configuration_through_draft(client):
    await client.put("/api/v1/session/goal", headers=HEADERS, json={"goal": "750"})
    await add_filled_row(client, "MXRF11", "0.09", "10.12")

    resp = await client.post("/api/v1/session/save/mine", headers=HEADERS)
    assert resp.status_code == 200

    await client.delete("/api/v1/session", headers=HEADERS)
    assert (await client.get("/api/v1/session", headers=HEADERS)).json()["rows"] == []

    resp = await client.post("/api/v1/session/load/mine", headers=HEADERS)
    assert resp.status_code == 200
    data = resp.json()
    assert data["goal"] == "750"
    assert data["rows"][0]["identifier"] == "MXRF11"
    assert data["rows"][0]["row_id"] is not None

    resp = await client.post("/api/v1/session/load/ghost", headers=HEADERS)
    assert resp.status_code == 404
