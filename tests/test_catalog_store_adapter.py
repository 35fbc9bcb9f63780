import asyncio
from decimal import Decimal

import httpx
import pytest

from src.integrations.clients.mocks.local_product_catalogues import LocalCatalogueClient
from src.integrations.clients.real_http.supabase_product_catalogues import SupabaseCatalogueClient
from src.integrations.contracts.interfaces import ProductDraft, SyncErrorKind
from src.integrations.errors import NotConfiguredError, RemoteError, StoreTimeoutError
from src.integrations.policy.catalog_store_adapter import CatalogStoreAdapter
from src.utils.config_loader import CatalogSettings, StoreConfig


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "url, key",
    [
        ("", "anon-key"),
        ("https://abc.supabase.co", ""),
        ("your_supabase_url_here", "anon-key"),
        ("https://abc.supabase.co", "your_supabase_anon_key_here"),
        ("https://placeholder.supabase.co", "anon-key"),
        ("https://abc.supabase.co", "PLACEHOLDER"),
        ("   ", "anon-key"),
    ],
)
async def test_unset_configuration_short_circuits_without_io(url, key):
    client = LocalCatalogueClient()
    adapter = CatalogStoreAdapter(client, CatalogSettings(store=StoreConfig(url=url, anon_key=key)))

    with pytest.raises(NotConfiguredError) as exc_info:
        await adapter.fetch_all()

    assert exc_info.value.kind is SyncErrorKind.NOT_CONFIGURED
    assert client.calls == []


@pytest.mark.asyncio
async def test_not_configured_also_guards_writes(unconfigured_settings):
    client = LocalCatalogueClient()
    adapter = CatalogStoreAdapter(client, unconfigured_settings)

    with pytest.raises(NotConfiguredError):
        await adapter.create(ProductDraft(name="Açaí", description="Açaí", price=10))
    with pytest.raises(NotConfiguredError):
        await adapter.soft_delete("p-1")
    assert client.calls == []


@pytest.mark.asyncio
async def test_fetch_all_returns_products_ordered_by_name(adapter):
    products = await adapter.fetch_all()

    assert [p.name for p in products] == ["Açaí 300ml", "Combo Casal", "Milkshake Morango", "Água Mineral"]
    assert products[0].price == Decimal("15.9")


@pytest.mark.asyncio
async def test_slow_store_times_out_and_the_call_is_cancelled(configured_settings):
    client = LocalCatalogueClient(latency=5)
    adapter = CatalogStoreAdapter(client, configured_settings, timeout_seconds=0.05)

    with pytest.raises(StoreTimeoutError) as exc_info:
        await adapter.fetch_all()

    assert isinstance(exc_info.value, TimeoutError)
    assert exc_info.value.kind is SyncErrorKind.TIMEOUT
    assert client.cancelled_calls == 1


@pytest.mark.asyncio
async def test_create_returns_store_assigned_fields(adapter):
    product = await adapter.create(ProductDraft(name="Vitamina de Banana", description="300ml", category="vitamina", price=12))

    assert product.id
    assert product.created_at is not None
    assert product.name == "Vitamina de Banana"


@pytest.mark.asyncio
async def test_update_sends_only_given_fields_and_returns_full_record(adapter, local_client):
    product = await adapter.update("p-2", {"price": Decimal("45.00"), "id": "ignored"})

    assert product.id == "p-2"
    assert product.price == Decimal("45.0")
    assert product.name == "Combo Casal"
    stored = {row["id"]: row for row in local_client.rows()}
    assert stored["p-2"]["price"] == 45.0


@pytest.mark.asyncio
async def test_soft_delete_keeps_the_row(adapter, local_client):
    product = await adapter.soft_delete("p-1")

    assert product.is_active is False
    assert any(row["id"] == "p-1" and row["is_active"] is False for row in local_client.rows())
    assert "p-1" not in [p.id for p in await adapter.fetch_all()]


@pytest.mark.asyncio
async def test_unknown_id_is_a_remote_error(adapter):
    with pytest.raises(RemoteError) as exc_info:
        await adapter.update("missing", {"price": 1})
    assert exc_info.value.status_code == 404


def _supabase_adapter(handler, settings):
    client = SupabaseCatalogueClient(
        base_url=settings.store.url,
        api_key=settings.store.anon_key,
        transport=httpx.MockTransport(handler),
    )
    return CatalogStoreAdapter(client, settings)


@pytest.mark.asyncio
async def test_http_error_is_classified_as_remote_error(configured_settings):
    def handler(request):
        return httpx.Response(401, json={"message": "Invalid API key", "code": "401"})

    adapter = _supabase_adapter(handler, configured_settings)

    with pytest.raises(RemoteError) as exc_info:
        await adapter.fetch_all()
    assert exc_info.value.message == "Invalid API key"
    assert exc_info.value.status_code == 401
    assert exc_info.value.kind is SyncErrorKind.REMOTE


@pytest.mark.asyncio
async def test_connection_error_is_classified_as_remote_error(configured_settings):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    adapter = _supabase_adapter(handler, configured_settings)

    with pytest.raises(RemoteError) as exc_info:
        await adapter.fetch_all()
    assert "connection refused" in exc_info.value.message


@pytest.mark.asyncio
async def test_transport_timeout_is_classified_as_timeout(configured_settings):
    def handler(request):
        raise httpx.ReadTimeout("read timed out", request=request)

    adapter = _supabase_adapter(handler, configured_settings)

    with pytest.raises(StoreTimeoutError):
        await adapter.fetch_all()


@pytest.mark.asyncio
async def test_malformed_record_is_a_remote_error(configured_settings):
    def handler(request):
        return httpx.Response(200, json=[{"id": "p-1", "name": "Açaí", "price": -3}])

    adapter = _supabase_adapter(handler, configured_settings)

    with pytest.raises(RemoteError) as exc_info:
        await adapter.fetch_all()
    assert "validation failed" in exc_info.value.message.lower()


@pytest.mark.asyncio
async def test_timeout_bound_applies_to_writes(configured_settings):
    client = LocalCatalogueClient(latency=5)
    adapter = CatalogStoreAdapter(client, configured_settings, timeout_seconds=0.05)

    with pytest.raises(StoreTimeoutError) as exc_info:
        await adapter.create(ProductDraft(name="Açaí", description="Açaí", price=10))
    assert exc_info.value.operation == "create"
    assert client.cancelled_calls == 1


@pytest.mark.asyncio
async def test_default_timeout_comes_from_settings(local_client):
    settings = CatalogSettings(store=StoreConfig(url="https://abc.supabase.co", anon_key="k"))
    adapter = CatalogStoreAdapter(local_client, settings)
    assert adapter.timeout_seconds == 10.0
    assert await asyncio.wait_for(adapter.fetch_all(), timeout=1)


@pytest.mark.asyncio
async def test_non_json_body_is_a_remote_error(configured_settings):
    def handler(request):
        return httpx.Response(200, text="<html>gateway</html>", headers={"Content-Type": "text/html"})

    adapter = _supabase_adapter(handler, configured_settings)

    with pytest.raises(RemoteError) as exc_info:
        await adapter.fetch_all()
    assert "invalid response body" in exc_info.value.message
