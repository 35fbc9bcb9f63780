"""Pytest fixtures for the catalog store and synchronizer tests."""

import pytest

from src.catalog.synchronizer import CatalogSynchronizer
from src.integrations.clients.mocks.local_product_catalogues import LocalCatalogueClient
from src.integrations.policy.catalog_store_adapter import CatalogStoreAdapter
from src.utils.config_loader import CatalogSettings, StoreConfig


def make_row(product_id: str, name: str, **overrides):
    row = {
        "id": product_id,
        "name": name,
        "description": f"{name} description",
        "category": "acai",
        "price": 10.0,
        "is_active": True,
        "is_weighable": False,
        "availability_type": "always",
        "scheduled_days": None,
        "created_at": "2024-01-01T12:00:00+00:00",
        "updated_at": "2024-01-01T12:00:00+00:00",
    }
    row.update(overrides)
    return row


@pytest.fixture
def store_rows():
    return [
        make_row("p-1", "Açaí 300ml", description="Açaí tradicional 300ml", price=15.9),
        make_row("p-2", "Combo Casal", category="combo", description="1kg de açaí + milkshake 300ml", price=49.99),
        make_row("p-3", "Milkshake Morango", category="milkshake", description="Milkshake cremoso", price=16.5),
        make_row("p-4", "Água Mineral", category="bebidas", description="500ml sem gás", price=3.5),
    ]


@pytest.fixture
def configured_settings():
    return CatalogSettings(store=StoreConfig(url="https://abc.supabase.co", anon_key="anon-key", timeout_seconds=0.2))


@pytest.fixture
def unconfigured_settings():
    return CatalogSettings(store=StoreConfig(url="https://placeholder.supabase.co", anon_key="placeholder-key"))


@pytest.fixture
def local_client(store_rows):
    return LocalCatalogueClient(rows=store_rows)


@pytest.fixture
def adapter(local_client, configured_settings):
    return CatalogStoreAdapter(local_client, configured_settings)


@pytest.fixture
def sync(adapter):
    return CatalogSynchronizer(adapter)


@pytest.fixture
def row_factory():
    return make_row
