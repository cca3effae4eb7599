"""Startup loading of the catalog from JSON documents.

Any problem with a source is fatal: the catalog is either loaded whole or
``CatalogLoadError`` is raised and initialization stops.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from birdcatalog.catalog.index import DEFAULT_DENYLIST, Catalog
from birdcatalog.catalog.models import Group, ImageMeta, SpeciesDetail

logger = logging.getLogger(__name__)

_GROUPS = TypeAdapter(list[Group])
_DETAILS = TypeAdapter(list[SpeciesDetail])
_IMAGE_META = TypeAdapter(list[ImageMeta])


class CatalogLoadError(RuntimeError):
    """A bundled catalog source is missing or malformed."""

    def __init__(self, source: Path, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Failed to load catalog source {source}: {reason}")


def _read_source(source: Path, adapter: TypeAdapter) -> list[Any]:
    """Read one JSON document and validate it against the record shape."""
    try:
        raw = json.loads(Path(source).read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise CatalogLoadError(source, "file not found") from e
    except OSError as e:
        raise CatalogLoadError(source, str(e)) from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise CatalogLoadError(source, f"invalid JSON: {e}") from e

    try:
        return adapter.validate_python(raw)
    except ValidationError as e:
        raise CatalogLoadError(source, f"unexpected record shape: {e}") from e


def load_catalog(
    groups_source: Path,
    details_source: Path,
    image_meta_source: Path,
    group_image_meta_source: Path,
    denylist: frozenset[str] = DEFAULT_DENYLIST,
) -> Catalog:
    """Load the four catalog documents into a Catalog.

    Args:
        groups_source: Group catalog with member species
        details_source: Per-species detail records
        image_meta_source: Image metadata for species detail images
        group_image_meta_source: Image metadata for group images
        denylist: Filenames excluded from both image indexes

    Returns:
        The loaded catalog

    Raises:
        CatalogLoadError: If any source is missing or malformed
    """
    groups = _read_source(groups_source, _GROUPS)
    details = _read_source(details_source, _DETAILS)
    image_meta = _read_source(image_meta_source, _IMAGE_META)
    group_image_meta = _read_source(group_image_meta_source, _IMAGE_META)

    catalog = Catalog(groups, details, image_meta, group_image_meta, denylist=denylist)
    logger.info("Catalog loaded: %r", catalog)
    return catalog
