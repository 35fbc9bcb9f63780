"""
Configuration loader for the delivery catalog
"""

import os
import yaml
from pathlib import Path
from typing import Dict, Any, Optional
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError
import logging

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "catalog_config.yml"

# Values shipped in .env templates; they mean "not filled in yet".
PLACEHOLDER_URL = "your_supabase_url_here"
PLACEHOLDER_KEY = "your_supabase_anon_key_here"


def is_unset(value: Optional[str]) -> bool:
    """True for empty, template or placeholder credential values."""
    if value is None:
        return True
    cleaned = value.strip()
    if not cleaned:
        return True
    if cleaned in (PLACEHOLDER_URL, PLACEHOLDER_KEY):
        return True
    return "placeholder" in cleaned.lower()


class StoreConfig(BaseModel):
    """Remote store connection configuration"""

    url: str = ""
    anon_key: str = ""
    table: str = "delivery_products"
    timeout_seconds: float = Field(default=10.0, gt=0, le=300)


class CatalogOptions(BaseModel):
    """Synchronizer behaviour"""

    include_inactive: bool = False


class CatalogSettings(BaseModel):
    """Complete catalog configuration"""

    store: StoreConfig = Field(default_factory=StoreConfig)
    catalog: CatalogOptions = Field(default_factory=CatalogOptions)

    def is_configured(self) -> bool:
        return not (is_unset(self.store.url) or is_unset(self.store.anon_key))


def _env_overrides() -> Dict[str, Any]:
    store: Dict[str, Any] = {}

    url = os.getenv("SUPABASE_URL") or os.getenv("VITE_SUPABASE_URL")
    key = os.getenv("SUPABASE_ANON_KEY") or os.getenv("VITE_SUPABASE_ANON_KEY")
    if url is not None:
        store["url"] = url
    if key is not None:
        store["anon_key"] = key
    if os.getenv("CATALOG_TABLE"):
        store["table"] = os.environ["CATALOG_TABLE"]
    if os.getenv("CATALOG_STORE_TIMEOUT_SECONDS"):
        store["timeout_seconds"] = os.environ["CATALOG_STORE_TIMEOUT_SECONDS"]

    return {"store": store} if store else {}


def _merge(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_catalog_settings(config_path: Optional[Path] = None, *, use_dotenv: bool = True) -> CatalogSettings:
    """
    Load and validate catalog configuration

    Reads the optional YAML file, then applies environment variables on top
    (environment wins).

    Args:
        config_path: Path to config file. Defaults to config/catalog_config.yml
        use_dotenv: Load a local .env file into the environment first

    Returns:
        Validated CatalogSettings object

    Raises:
        ValidationError: If config doesn't match schema
    """
    if use_dotenv:
        load_dotenv()

    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    config_data: Dict[str, Any] = {}
    if config_path.exists():
        with open(config_path, "r", encoding="utf-8") as f:
            config_data = yaml.safe_load(f) or {}
    else:
        logger.debug("No catalog config file at %s, using defaults", config_path)

    try:
        settings = CatalogSettings(**_merge(config_data, _env_overrides()))
    except ValidationError as e:
        logger.error("Catalog config validation failed: %s", e)
        raise

    if not settings.is_configured():
        logger.warning("Supabase not configured - the catalog will use demo products")
    return settings
