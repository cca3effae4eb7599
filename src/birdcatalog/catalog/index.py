"""Read-only lookups over a loaded catalog."""

import logging
from collections.abc import Iterable

from birdcatalog.catalog.models import Group, ImageMeta, Species, SpeciesDetail

logger = logging.getLogger(__name__)

# Page furniture scraped alongside bird photographs: editing icons, folder
# icons, featured-content badges and sister-project logos.
DEFAULT_DENYLIST: frozenset[str] = frozenset(
    {
        "OOjs_UI_icon_edit-ltr-progressive.svg",
        "OOjs_UI_icon_edit-ltr.svg",
        "Edit-clear.svg",
        "Folder_Hexagonal_Icon.svg",
        "Symbol_category_class.svg",
        "Featured_article_star.svg",
        "Cscr-featured.svg",
        "Symbol_support_vote.svg",
        "Commons-logo.svg",
        "Wikispecies-logo.svg",
        "Wiktionary-logo-v2.svg",
        "Wikidata-logo.svg",
        "Question_book-new.svg",
    }
)


def build_image_index(
    entries: Iterable[ImageMeta], denylist: frozenset[str]
) -> dict[str, ImageMeta]:
    """Index image metadata by filename.

    The first entry for a filename wins and denylisted filenames are dropped.

    Args:
        entries: Decoded image metadata in document order
        denylist: Filenames that never enter the index

    Returns:
        Mapping of filename to image metadata
    """
    index: dict[str, ImageMeta] = {}
    skipped = 0
    for entry in entries:
        if entry.filename in denylist:
            skipped += 1
            continue
        index.setdefault(entry.filename, entry)
    if skipped:
        logger.debug("Excluded %d denylisted image entries", skipped)
    return index


class Catalog:
    """Groups, species details and image metadata loaded at startup.

    The catalog is built once and shared read-only; lookups go through
    hash indexes computed at construction, keeping the first record seen
    for any duplicated key.
    """

    def __init__(
        self,
        groups: Iterable[Group],
        details: Iterable[SpeciesDetail],
        image_meta: Iterable[ImageMeta],
        group_image_meta: Iterable[ImageMeta],
        denylist: frozenset[str] = DEFAULT_DENYLIST,
    ):
        self.groups: tuple[Group, ...] = tuple(groups)
        self.details: tuple[SpeciesDetail, ...] = tuple(details)
        self.denylist = frozenset(denylist)

        self._details_by_title: dict[str, SpeciesDetail] = {}
        for detail in self.details:
            self._details_by_title.setdefault(detail.bird_title, detail)

        self._image_index = build_image_index(image_meta, self.denylist)
        self._group_image_index = build_image_index(group_image_meta, self.denylist)

    def detail_for(self, species: Species) -> SpeciesDetail | None:
        """Return the detail record whose title matches the species, if any."""
        return self._details_by_title.get(species.title)

    def image_meta_for(self, filename: str) -> ImageMeta | None:
        """Return species image metadata for a filename, if indexed."""
        return self._image_index.get(filename)

    def group_image_meta_for(self, filename: str) -> ImageMeta | None:
        """Return group image metadata for a filename, if indexed."""
        return self._group_image_index.get(filename)

    def group_named(self, category: str) -> Group | None:
        """Return the group with the given category name, ignoring case."""
        wanted = category.casefold()
        return next((g for g in self.groups if g.category.casefold() == wanted), None)

    def species_named(self, name: str) -> Species | None:
        """Return the first species with the given display name or title, ignoring case."""
        wanted = name.casefold()
        for group in self.groups:
            for species in group.birds:
                if wanted in (species.name.casefold(), species.title.casefold()):
                    return species
        return None

    def __repr__(self) -> str:
        """Return string representation of Catalog."""
        species_count = sum(len(group.birds) for group in self.groups)
        return (
            f"<Catalog groups={len(self.groups)} species={species_count} "
            f"images={len(self._image_index)}>"
        )
