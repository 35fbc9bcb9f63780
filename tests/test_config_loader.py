import pytest
from pydantic import ValidationError

from src.utils.config_loader import is_unset, load_catalog_settings

ENV_VARS = (
    "SUPABASE_URL",
    "VITE_SUPABASE_URL",
    "SUPABASE_ANON_KEY",
    "VITE_SUPABASE_ANON_KEY",
    "CATALOG_TABLE",
    "CATALOG_STORE_TIMEOUT_SECONDS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, True),
        ("", True),
        ("  ", True),
        ("your_supabase_url_here", True),
        ("your_supabase_anon_key_here", True),
        ("https://PLACEHOLDER.supabase.co", True),
        ("https://abc.supabase.co", False),
        ("eyJhbGciOi", False),
    ],
)
def test_is_unset(value, expected):
    assert is_unset(value) is expected


def test_defaults_without_file_or_env(tmp_path):
    settings = load_catalog_settings(tmp_path / "missing.yml", use_dotenv=False)
    assert settings.store.table == "delivery_products"
    assert settings.store.timeout_seconds == 10.0
    assert settings.catalog.include_inactive is False
    assert settings.is_configured() is False


def test_yaml_file_is_read(tmp_path):
    path = tmp_path / "catalog.yml"
    path.write_text(
        "store:\n"
        "  url: https://abc.supabase.co\n"
        "  anon_key: anon-key\n"
        "  timeout_seconds: 5\n"
        "catalog:\n"
        "  include_inactive: true\n",
        encoding="utf-8",
    )
    settings = load_catalog_settings(path, use_dotenv=False)
    assert settings.is_configured() is True
    assert settings.store.timeout_seconds == 5.0
    assert settings.catalog.include_inactive is True


def test_environment_wins_over_file(tmp_path, monkeypatch):
    path = tmp_path / "catalog.yml"
    path.write_text("store:\n  url: https://file.supabase.co\n  table: from_file\n", encoding="utf-8")
    monkeypatch.setenv("VITE_SUPABASE_URL", "https://env.supabase.co")
    monkeypatch.setenv("VITE_SUPABASE_ANON_KEY", "env-key")
    monkeypatch.setenv("CATALOG_STORE_TIMEOUT_SECONDS", "3")

    settings = load_catalog_settings(path, use_dotenv=False)

    assert settings.store.url == "https://env.supabase.co"
    assert settings.store.anon_key == "env-key"
    assert settings.store.table == "from_file"
    assert settings.store.timeout_seconds == 3.0


def test_placeholder_env_means_not_configured(tmp_path, monkeypatch):
    monkeypatch.setenv("SUPABASE_URL", "your_supabase_url_here")
    monkeypatch.setenv("SUPABASE_ANON_KEY", "your_supabase_anon_key_here")
    assert load_catalog_settings(tmp_path / "none.yml", use_dotenv=False).is_configured() is False


def test_invalid_timeout_is_rejected(tmp_path, monkeypatch):
    monkeypatch.setenv("CATALOG_STORE_TIMEOUT_SECONDS", "0")
    with pytest.raises(ValidationError):
        load_catalog_settings(tmp_path / "none.yml", use_dotenv=False)
