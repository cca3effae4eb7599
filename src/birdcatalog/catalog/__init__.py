"""Catalog domain package.

This package contains the static bird catalog:
- Catalog: Read-only index of groups, species details and image metadata
- load_catalog: Fail-fast loading of the bundled JSON documents
- Record models: Group, Species, SpeciesDetail, ImageMeta and friends
"""

from birdcatalog.catalog.index import DEFAULT_DENYLIST, Catalog
from birdcatalog.catalog.loader import CatalogLoadError, load_catalog
from birdcatalog.catalog.models import (
    Group,
    ImageInfo,
    ImageMeta,
    ResponsiveImage,
    Species,
    SpeciesDetail,
    Tag,
    UnresolvableAsset,
    VideoAsset,
)

__all__ = [
    "DEFAULT_DENYLIST",
    "Catalog",
    "CatalogLoadError",
    "Group",
    "ImageInfo",
    "ImageMeta",
    "ResponsiveImage",
    "Species",
    "SpeciesDetail",
    "Tag",
    "UnresolvableAsset",
    "VideoAsset",
    "load_catalog",
]
