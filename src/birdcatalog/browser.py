"""Consumer interface over the catalog, image resolver and fetch cache."""

from birdcatalog.catalog.index import Catalog
from birdcatalog.catalog.models import Group, Species, SpeciesDetail
from birdcatalog.images.fetch_cache import ImageBytes, ImageFetchCache
from birdcatalog.images.resolver import ImageResolver


class CatalogBrowser:
    """Everything a display layer needs to browse groups, species and photos."""

    def __init__(self, catalog: Catalog, resolver: ImageResolver, fetch_cache: ImageFetchCache):
        self.catalog = catalog
        self.resolver = resolver
        self.fetch_cache = fetch_cache

    def list_groups(self) -> list[Group]:
        return list(self.catalog.groups)

    def list_species(self, group: Group) -> list[Species]:
        return list(group.birds)

    def detail_for(self, species: Species) -> SpeciesDetail | None:
        return self.catalog.detail_for(species)

    def preview_images(self, record: Species | Group, limit: int | None = None) -> list[str] | None:
        return self.resolver.preview_images(record, limit)

    def all_images(self, species: Species) -> list[str] | None:
        return self.resolver.all_images(species)

    def group_images(self, group: Group) -> list[str]:
        return self.resolver.group_images(group)

    async def fetch_image(self, url: str) -> ImageBytes:
        """Fetch an image through the shared cache.

        Raises:
            ImageFetchError: If the image cannot be fetched or decoded
        """
        return await self.fetch_cache.fetch(url)

    async def aclose(self) -> None:
        await self.fetch_cache.aclose()
