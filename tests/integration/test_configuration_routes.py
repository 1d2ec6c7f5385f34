import pytest


PLAN = {
    "goal": "1000",
    "assets": [
        {"identifier": "HGLG11", "payout_per_unit": "1.10", "price_per_unit": "160.50"},
        {"identifier": "MXRF11", "payout_per_unit": "0.09", "price_per_unit": "10.12"},
    ],
}


@pytest.mark.asyncio
@pytest.mark.integration
async def test_save_list_load_delete(client):
    resp = await client.put("/api/v1/configurations/FIIs", json=PLAN)
    assert resp.status_code == 200
    assert resp.json()["name"] == "FIIs"

    resp = await client.get("/api/v1/configurations")
    assert resp.json() == ["FIIs"]

    resp = await client.get("/api/v1/configurations/FIIs")
    assert resp.status_code == 200
    data = resp.json()
    assert data["goal"] == "1000"
    assert [a["identifier"] for a in data["assets"]] == ["HGLG11", "MXRF11"]

    resp = await client.delete("/api/v1/configurations/FIIs")
    assert resp.status_code == 204

    resp = await client.get("/api/v1/configurations")
    assert resp.json() == []


@pytest.mark.asyncio
@pytest.mark.integration
async def test_missing_configuration_is_404(client):
    resp = await client.get("/api/v1/configurations/ghost")
    assert resp.status_code == 404
    assert resp.json()["detail"]["error_code"] == "CONFIGURATION_NOT_FOUND"

    resp = await client.delete("/api/v1/configurations/ghost")
    assert resp.status_code == 404


@pytest.mark.asyncio
@pytest.mark.integration
async def test_sync_upload_sends_every_configuration(client, sync_client):
    await client.put("/api/v1/configurations/a", json=PLAN)
    await client.put("/api/v1/configurations/b", json={"goal": "50", "assets": []})

    resp = await client.post("/api/v1/sync/upload")

    assert resp.status_code == 202
    assert resp.json() == {"scheduled": True, "configurations": 2}
    assert [c.name for c in sync_client.uploads[0]] == ["a", "b"]


@pytest.mark.asyncio
@pytest.mark.integration
async def test_error_shape_is_documented(client):
    schema = (await client.get("/openapi.json")).json()

    not_found = schema["paths"]["/api/v1/configurations/{name}"]["get"]["responses"]["404"]
    assert not_found["content"]["application/json"]["schema"]["$ref"].endswith("/ErrorResponse")
    assert set(schema["components"]["schemas"]["ErrorDetail"]["properties"]) == {"error_code", "message"}
