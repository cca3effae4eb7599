import os
from pathlib import Path
from typing import TYPE_CHECKING, NamedTuple

if TYPE_CHECKING:
    from birdcatalog.config.models import CatalogConfig


class CatalogSources(NamedTuple):
    """Paths of the four JSON documents a catalog is built from."""

    groups: Path
    details: Path
    image_meta: Path
    group_image_meta: Path


class PathResolver:
    """Central authority for all file path resolution in birdcatalog.

    Uses environment variables for configuration with sensible defaults.
    Catalog data defaults to the JSON files bundled with the package.
    """

    def __init__(self) -> None:
        """Initialize PathResolver with environment-based configuration."""
        self.home_dir = Path(os.getenv("BIRDCATALOG_HOME", "~/.birdcatalog")).expanduser()
        self.package_dir = Path(__file__).resolve().parent.parent

    def get_config_path(self) -> Path:
        """Get the path to the main configuration file.

        Checks BIRDCATALOG_CONFIG environment variable first, then falls back to default.
        """
        config_path = os.getenv("BIRDCATALOG_CONFIG")
        if config_path:
            return Path(config_path)

        return self.home_dir / "birdcatalog.yaml"

    def get_bundled_data_dir(self) -> Path:
        """Get the directory holding the JSON data shipped with the package."""
        return self.package_dir / "data"

    def get_data_dir(self, config: "CatalogConfig") -> Path:
        """Get the directory catalog sources are read from.

        Args:
            config: Loaded configuration; its data_dir overrides the bundled data

        Returns:
            Directory containing the catalog JSON documents
        """
        if config.data_dir:
            return Path(config.data_dir).expanduser()
        return self.get_bundled_data_dir()

    def get_catalog_sources(self, config: "CatalogConfig") -> CatalogSources:
        """Get the paths of every catalog source named by the configuration."""
        data_dir = self.get_data_dir(config)
        return CatalogSources(
            groups=data_dir / config.groups_file,
            details=data_dir / config.details_file,
            image_meta=data_dir / config.image_meta_file,
            group_image_meta=data_dir / config.group_image_meta_file,
        )
