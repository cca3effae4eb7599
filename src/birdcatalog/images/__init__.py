"""Image domain package.

This package contains image resolution and retrieval:
- resolve_images / ImageResolver: Catalog records to displayable image URLs
- ImageFetchCache: Single-flight in-memory cache of downloaded images
"""

from birdcatalog.images.fetch_cache import ImageBytes, ImageFetchCache, ImageFetchError
from birdcatalog.images.resolver import ImageResolver, resolve_images

__all__ = [
    "ImageBytes",
    "ImageFetchCache",
    "ImageFetchError",
    "ImageResolver",
    "resolve_images",
]
