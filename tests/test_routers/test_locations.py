import json

import respx
from httpx import AsyncClient, Response

DATA_API_URL = "http://data-api.test"

QUERY_URL = f"{DATA_API_URL}/locations/query"


@respx.mock
async def test_location_search_ranks_and_dedupes(client: AsyncClient):
    route = respx.post(QUERY_URL).mock(
        return_value=Response(
            200,
            json={"items": [
                {"locationId": "zl", "name": "Zlatibor", "searchName": "zlatibor", "listingsCount": 12},
                {"locationId": "zl", "name": "Златибор", "searchName": "zlatibor", "listingsCount": 12},
                {"locationId": "zb", "name": "Žabljak", "searchName": "zabljak", "listingsCount": 30},
            ]},
        )
    )

    resp = await client.get("/locations/search", params={"q": "Z"})
    assert resp.status_code == 400

    resp = await client.get("/locations/search", params={"q": "ZLA"})

    assert resp.status_code == 200
    ids = [loc["locationId"] for loc in resp.json()["locations"]]
    assert ids == ["zb", "zl"]
    assert json.loads(route.calls.last.request.content)["prefix"] == "zla"


async def test_location_search_requires_query(client: AsyncClient):
    resp = await client.get("/locations/search")

    assert resp.status_code == 400
    assert resp.json() == {"error": 'Query parameter "q" is required', "code": "VALIDATION_ERROR"}


async def test_location_search_rate_limit(client: AsyncClient):
    for _ in range(20):
        await client.get("/locations/search", params={"q": "x"})

    resp = await client.get("/locations/search", params={"q": "x"})

    assert resp.status_code == 429
    assert resp.json()["code"] == "RATE_LIMIT_EXCEEDED"


@respx.mock
async def test_location_search_skips_malformed_variants(client: AsyncClient):
    respx.post(QUERY_URL).mock(
        return_value=Response(
            200,
            json={"items": [
                {"locationId": "bad", "listingsCount": "many"},
                {"locationId": "zl", "name": "Zlatibor", "searchName": "zlatibor", "listingsCount": 12},
            ]},
        )
    )

    resp = await client.get("/locations/search", params={"q": "zla"})

    assert resp.status_code == 200
    assert [loc["locationId"] for loc in resp.json()["locations"]] == ["zl"]
