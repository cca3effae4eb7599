"""Configuration loading."""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from birdcatalog.config.models import CatalogConfig
from birdcatalog.system.path_resolver import PathResolver

logger = logging.getLogger(__name__)


class ConfigManager:
    """Manages configuration loading and saving."""

    def __init__(
        self, path_resolver: PathResolver | None = None, config_path: Path | None = None
    ):
        """Initialize ConfigManager.

        Args:
            path_resolver: Optional PathResolver instance. If None, creates a new one.
            config_path: Explicit configuration file, overriding the resolver's location.
        """
        self.path_resolver = path_resolver or PathResolver()
        self.config_path = config_path or self.path_resolver.get_config_path()

    def load(self) -> CatalogConfig:
        """Load and validate configuration.

        A missing configuration file yields the defaults.

        Returns:
            CatalogConfig: Loaded and validated configuration

        Raises:
            ValueError: If the file is not valid YAML or fails validation
        """
        if not self.config_path.exists():
            logger.debug("No configuration at %s, using defaults", self.config_path)
            return CatalogConfig()

        raw_config = self._read_yaml()
        return self._create_config_object(raw_config)

    def save(self, config: CatalogConfig) -> None:
        """Save configuration to file.

        Args:
            config: Configuration to save
        """
        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        config_dict = config.model_dump(mode="json")
        config_yaml = yaml.dump(config_dict, default_flow_style=False, sort_keys=False)
        self.config_path.write_text(config_yaml)
        logger.info("Configuration saved successfully to %s", self.config_path)

    def _read_yaml(self) -> dict[str, Any]:
        """Read YAML config file.

        Returns:
            dict: Raw configuration dictionary
        """
        try:
            raw_config = yaml.safe_load(self.config_path.read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid configuration file {self.config_path}: {e}") from e

        if not isinstance(raw_config, dict):
            raise ValueError(f"Configuration file {self.config_path} must contain a mapping")
        return raw_config

    def _create_config_object(self, raw_config: dict[str, Any]) -> CatalogConfig:
        """Create CatalogConfig object from dictionary.

        Args:
            raw_config: Configuration dictionary

        Returns:
            CatalogConfig: Typed configuration object
        """
        expected_fields = set(CatalogConfig.model_fields.keys())
        filtered_config = {k: v for k, v in raw_config.items() if k in expected_fields}

        unexpected_fields = set(raw_config.keys()) - expected_fields
        if unexpected_fields:
            logger.warning("Ignoring unknown config fields: %s", sorted(unexpected_fields))

        try:
            return CatalogConfig(**filtered_config)
        except ValidationError as e:
            raise ValueError(f"Configuration validation failed: {e}") from e
