"""
Utility modules for the delivery catalog
"""
from .config_loader import CatalogSettings, StoreConfig, CatalogOptions, is_unset, load_catalog_settings

__all__ = [
    'CatalogSettings',
    'StoreConfig',
    'CatalogOptions',
    'is_unset',
    'load_catalog_settings',
]
