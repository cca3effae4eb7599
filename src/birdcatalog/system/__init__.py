"""System domain package.

This package contains filesystem-level helpers:
- PathResolver: Path resolution for configuration and catalog data files
"""

from birdcatalog.system.path_resolver import CatalogSources, PathResolver

__all__ = [
    "CatalogSources",
    "PathResolver",
]
