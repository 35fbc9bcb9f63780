import json

import httpx
import pytest

from src.integrations.clients.real_http.supabase_product_catalogues import SupabaseCatalogueClient


class FakePostgrest:
    def __init__(self, responses):
        self.responses = list(responses)
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responses.pop(0)


def _client(fake):
    return SupabaseCatalogueClient(
        base_url="https://abc.supabase.co/",
        api_key="anon-key",
        transport=httpx.MockTransport(fake),
    )


@pytest.mark.asyncio
async def test_list_products_filters_active_and_orders_by_name():
    fake = FakePostgrest([httpx.Response(200, json=[{"id": "1", "name": "Açaí"}])])

    rows = await _client(fake).list_products()

    request = fake.requests[0]
    assert request.method == "GET"
    assert request.url.path == "/rest/v1/delivery_products"
    assert request.url.params["is_active"] == "eq.true"
    assert request.url.params["order"] == "name.asc"
    assert request.headers["apikey"] == "anon-key"
    assert request.headers["Authorization"] == "Bearer anon-key"
    assert rows == [{"id": "1", "name": "Açaí"}]


@pytest.mark.asyncio
async def test_list_products_without_active_filter():
    fake = FakePostgrest([httpx.Response(200, json=[])])

    rows = await _client(fake).list_products(active_only=False)

    assert "is_active" not in fake.requests[0].url.params
    assert rows == []


@pytest.mark.asyncio
async def test_insert_asks_for_representation_and_returns_the_row():
    stored = {"id": "uuid-1", "name": "Açaí", "created_at": "2024-01-01T00:00:00Z"}
    fake = FakePostgrest([httpx.Response(201, json=[stored])])

    row = await _client(fake).insert_product({"name": "Açaí"})

    request = fake.requests[0]
    assert request.method == "POST"
    assert request.headers["Prefer"] == "return=representation"
    assert json.loads(request.content) == [{"name": "Açaí"}]
    assert row == stored


@pytest.mark.asyncio
async def test_update_targets_the_id():
    fake = FakePostgrest([httpx.Response(200, json=[{"id": "p-1", "is_active": False}])])

    row = await _client(fake).update_product("p-1", {"is_active": False})

    request = fake.requests[0]
    assert request.method == "PATCH"
    assert request.url.params["id"] == "eq.p-1"
    assert json.loads(request.content) == {"is_active": False}
    assert row["is_active"] is False


@pytest.mark.asyncio
async def test_update_matching_no_row_raises_lookup_error():
    fake = FakePostgrest([httpx.Response(200, json=[])])

    with pytest.raises(LookupError):
        await _client(fake).update_product("missing", {"price": 1})


@pytest.mark.asyncio
async def test_http_errors_propagate_unclassified():
    fake = FakePostgrest([httpx.Response(500, json={"message": "boom"})])

    with pytest.raises(httpx.HTTPStatusError):
        await _client(fake).list_products()
