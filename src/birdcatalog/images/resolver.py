"""Resolution of catalog records to displayable image URLs."""

from collections.abc import Callable, Iterable

from birdcatalog.catalog.index import Catalog
from birdcatalog.catalog.models import Group, ImageMeta, Species
from birdcatalog.config.models import ResponsiveUrlOrder

ImageLookup = Callable[[str], ImageMeta | None]


def unique_in_order(items: Iterable[str]) -> list[str]:
    """Drop repeated items, keeping the first occurrence of each."""
    return list(dict.fromkeys(items))


def resolve_images(
    filenames: Iterable[str],
    lookup: ImageLookup,
    limit: int | None = None,
    order: ResponsiveUrlOrder = ResponsiveUrlOrder.DOCUMENT,
) -> list[str]:
    """Turn image filenames into displayable URLs.

    Candidates are deduplicated and truncated to ``limit`` *before* they are
    resolved, so fewer than ``limit`` URLs come back when some candidates have
    no metadata or no responsive URL.

    Args:
        filenames: Image filenames in display order, possibly repeated
        lookup: Filename to metadata lookup against an image index
        limit: Maximum number of candidate filenames to resolve
        order: Responsive URL selection rule

    Returns:
        Displayable URLs in first-occurrence order
    """
    candidates = unique_in_order(filenames)
    if limit is not None:
        candidates = candidates[:limit]

    found: dict[str, ImageMeta] = {}
    for filename in candidates:
        meta = lookup(filename)
        if meta is None:
            continue
        found.setdefault(meta.filename, meta)

    urls = []
    for meta in found.values():
        url = meta.display_url(order)
        if url is not None:
            urls.append(url)
    return urls


class ImageResolver:
    """Image URL lists for species and groups of a catalog."""

    def __init__(
        self,
        catalog: Catalog,
        preview_limit: int = 3,
        order: ResponsiveUrlOrder = ResponsiveUrlOrder.DOCUMENT,
    ):
        self.catalog = catalog
        self.preview_limit = preview_limit
        self.order = order

    def all_images(self, species: Species) -> list[str] | None:
        """Every displayable image of a species.

        Returns:
            URLs in detail-record order, or None when the species has no detail record
        """
        detail = self.catalog.detail_for(species)
        if detail is None:
            return None
        return resolve_images(detail.image_files, self.catalog.image_meta_for, order=self.order)

    def preview_images(self, record: Species | Group, limit: int | None = None) -> list[str] | None:
        """A short preview strip for a species or a group.

        Args:
            record: Species (images from its detail record) or group (its own images)
            limit: Candidate count; defaults to the configured preview limit

        Returns:
            Preview URLs, or None for a species without a detail record
        """
        limit = self.preview_limit if limit is None else limit
        if isinstance(record, Group):
            return resolve_images(
                record.image_filenames,
                self.catalog.group_image_meta_for,
                limit=limit,
                order=self.order,
            )

        detail = self.catalog.detail_for(record)
        if detail is None:
            return None
        return resolve_images(
            detail.image_files, self.catalog.image_meta_for, limit=limit, order=self.order
        )

    def group_images(self, group: Group) -> list[str]:
        """Every displayable image attached to a group."""
        return resolve_images(
            group.image_filenames, self.catalog.group_image_meta_for, order=self.order
        )
