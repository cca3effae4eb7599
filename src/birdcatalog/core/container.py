"""Dependency injection container for the birdcatalog application."""

from dependency_injector import containers, providers

from birdcatalog.browser import CatalogBrowser
from birdcatalog.catalog.index import DEFAULT_DENYLIST, Catalog
from birdcatalog.catalog.loader import load_catalog
from birdcatalog.config import CatalogConfig, ConfigManager
from birdcatalog.images.fetch_cache import ImageFetchCache
from birdcatalog.images.resolver import ImageResolver
from birdcatalog.system.path_resolver import PathResolver


def load_config(path_resolver: PathResolver) -> CatalogConfig:
    """Load configuration through the resolver's config path."""
    return ConfigManager(path_resolver).load()


def create_catalog(path_resolver: PathResolver, config: CatalogConfig) -> Catalog:
    """Load the catalog named by the configuration.

    Raises:
        CatalogLoadError: If any source is missing or malformed
    """
    sources = path_resolver.get_catalog_sources(config)
    return load_catalog(
        sources.groups,
        sources.details,
        sources.image_meta,
        sources.group_image_meta,
        denylist=DEFAULT_DENYLIST | frozenset(config.extra_denylist),
    )


def create_resolver(catalog: Catalog, config: CatalogConfig) -> ImageResolver:
    return ImageResolver(
        catalog,
        preview_limit=config.preview_limit,
        order=config.responsive_url_order,
    )


def create_fetch_cache(config: CatalogConfig) -> ImageFetchCache:
    return ImageFetchCache(
        timeout=config.fetch.timeout,
        max_concurrent_fetches=config.fetch.max_concurrent_fetches,
        user_agent=config.fetch.user_agent,
    )


class Container(containers.DeclarativeContainer):
    """Application dependency injection container.

    Everything is a singleton: the catalog is loaded once and a single
    fetch cache is shared by every consumer.
    """

    path_resolver = providers.Singleton(PathResolver)

    config = providers.Singleton(load_config, path_resolver=path_resolver)

    catalog = providers.Singleton(create_catalog, path_resolver=path_resolver, config=config)

    image_resolver = providers.Singleton(create_resolver, catalog=catalog, config=config)

    fetch_cache = providers.Singleton(create_fetch_cache, config=config)

    browser = providers.Singleton(
        CatalogBrowser,
        catalog=catalog,
        resolver=image_resolver,
        fetch_cache=fetch_cache,
    )
