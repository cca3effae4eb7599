"""birdcatalog configuration package.

This package provides centralized configuration management with:
- Pydantic models for every configurable setting
- YAML parsing with defaults for missing files
"""

from .manager import ConfigManager
from .models import CatalogConfig

__all__ = [
    "CatalogConfig",
    "ConfigManager",
]
