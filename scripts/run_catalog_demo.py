#!/usr/bin/env python3
"""
Run the catalog engine end to end and print each stage to the terminal.
Shows the demo fallback, a load from a store, create/update/schedule/soft
delete, filtering and scheduled availability.

Without SUPABASE_URL / SUPABASE_ANON_KEY the store stages run against the
in-memory local client.

Usage (from repo root):
  python scripts/run_catalog_demo.py
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from datetime import datetime
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from src.catalog import ProductValidationError, build_synchronizer
from src.error_handler import ErrorHandler
from src.integrations.clients.mocks.local_product_catalogues import LocalCatalogueClient
from src.utils.config_loader import CatalogSettings, StoreConfig, load_catalog_settings


def setup_logging():
    """Log to terminal at INFO so every stage is visible."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stdout,
    )


def print_stage(title: str, data: dict | list | str):
    """Print a stage header and data to the terminal."""
    print("\n" + "=" * 60)
    print(f"  {title}")
    print("=" * 60)
    if isinstance(data, (dict, list)):
        print(json.dumps(data, indent=2, default=str, ensure_ascii=False))
    else:
        print(data)
    print()


def summary(products) -> list:
    return [f"{p.id} | {p.name} | {p.category.value} | {p.price} | active={p.is_active}" for p in products]


async def main():
    setup_logging()
    errors = ErrorHandler()
    settings = load_catalog_settings()

    # --- 1. Configured store, or the demo fallback when it is missing ---
    sync = build_synchronizer(settings)
    state = await sync.load()
    print_stage(f"LOAD: source={state.source.value}", summary(sync.products))
    banner = errors.describe_sync_state(state)
    if banner:
        print_stage("LOAD: error banner", banner)

    if not settings.is_configured():
        # --- 2. Same engine against the in-memory store ---
        local_settings = CatalogSettings(store=StoreConfig(url="http://local.store", anon_key="local-key"))
        client = LocalCatalogueClient(latency=0.05)
        sync = build_synchronizer(local_settings, client=client)
        state = await sync.load()
        print_stage(f"LOCAL LOAD: source={state.source.value}", summary(sync.products))

    # --- 3. Mutations ---
    acai = await sync.create({
        "name": "Açaí Premium 500g",
        "description": "Açaí com granola, banana e leite condensado.",
        "category": "acai",
        "price": "24.90",
    })
    shake = await sync.create({
        "name": "Milkshake de Morango 300ml",
        "description": "Milkshake cremoso de morango.",
        "category": "milkshake",
        "price": "16.50",
    })
    print_stage("CREATE: two products", summary(sync.products))

    await sync.update(acai.id, {"price": "26.90", "original_price": "29.90"})
    await sync.save_schedule(shake.id, {
        "saturday": {"enabled": True, "start_time": "14:00", "end_time": "22:00"},
        "sunday": {"enabled": True, "start_time": "14:00", "end_time": "20:00"},
    })
    print_stage("UPDATE + SCHEDULE", summary(sync.products))

    # --- 4. Filtering and availability ---
    print_stage("FILTER: text='açaí'", summary(sync.view(text="açaí")))
    print_stage("FILTER: category='milkshake'", summary(sync.view(category="milkshake")))
    now = datetime.now()
    print_stage(f"VISIBLE NOW ({now:%A %H:%M})", summary(sync.visible_products(now)))

    # --- 5. Soft delete and a failing validation ---
    await sync.soft_delete(shake.id)
    print_stage("SOFT DELETE: milkshake", summary(sync.products))

    try:
        await sync.create({"name": "", "description": "", "category": "acai", "price": 10})
    except ProductValidationError as exc:
        print_stage("CREATE: invalid draft", errors.handle_exception(exc))

    state = await sync.refresh()
    print_stage(f"REFRESH: source={state.source.value}", summary(sync.products))


if __name__ == "__main__":
    asyncio.run(main())
