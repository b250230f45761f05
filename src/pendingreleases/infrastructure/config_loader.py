"""
Configuration loader module.

Handles loading and validation of JSON configuration files:
- pending_releases.json: catalog + Banner instance connections, GA switch
- products.json (optional): replacement product catalog
"""

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from pendingreleases.domain.catalog import DEFAULT_CATALOG, ProductCatalog
from pendingreleases.domain.config import AppConfig
from pendingreleases.domain.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "pending_releases.json"


class ConfigLoader:
    """
    Load and validate configuration files.

    Every failure is reported as ConfigurationError, before any database
    is contacted.
    """

    def __init__(self, config_dir: str | Path = "config"):
        """
        Initialize config loader.

        Args:
            config_dir: Directory containing configuration files. File names
                passed to the load methods are resolved against it unless
                they are absolute.
        """
        self.config_dir = Path(config_dir)
        logger.debug("ConfigLoader initialized with directory: %s", self.config_dir)

    def _load_json_file(self, filepath: Path) -> dict:
        """
        Load and parse a JSON file with clear error messages.

        Raises:
            ConfigurationError: If the file is missing, unreadable, empty,
                not valid JSON, or not a JSON object
        """
        if not filepath.exists():
            raise ConfigurationError(
                f"Configuration file not found: {filepath} "
                "(hint: copy the .example.json file and customize it)"
            )

        try:
            content = filepath.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(f"Failed to read configuration file {filepath}: {e}") from e

        if not content.strip():
            raise ConfigurationError(f"Configuration file is empty: {filepath}")

        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Invalid JSON in config file: {filepath}: "
                f"error at line {e.lineno}, column {e.colno}: {e.msg}"
            ) from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration file must contain a JSON object: {filepath}")
        return data

    def load_config(self, filename: str | Path = DEFAULT_CONFIG_FILE) -> AppConfig:
        """
        Load the connection configuration and check it is complete.

        Args:
            filename: Config file name (or absolute path)

        Returns:
            Validated AppConfig

        Raises:
            ConfigurationError: If the file is invalid or a connection is
                partially configured
        """
        filepath = self.config_dir / filename
        logger.info("Loading configuration from: %s", filepath)

        data = self._load_json_file(filepath)

        try:
            config = AppConfig.model_validate(data)
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or 'config'}: {err['msg']}"
                for err in e.errors()
            )
            raise ConfigurationError(f"Invalid configuration in {filepath}: {problems}") from e

        config.check_connections()

        logger.info(
            "Loaded configuration: %d instance(s), ga_releases_only=%s",
            len(config.active_instances()), config.ga_releases_only,
        )
        return config

    def load_catalog(self, filename: str | Path | None = None) -> ProductCatalog:
        """
        Load a product catalog file, or return the built-in catalog.

        Args:
            filename: Catalog JSON file ({"products": [...]}); None for default

        Returns:
            ProductCatalog
        """
        if filename is None:
            return DEFAULT_CATALOG

        filepath = self.config_dir / filename
        logger.info("Loading product catalog from: %s", filepath)

        data = self._load_json_file(filepath)
        records = data.get("products")
        if not isinstance(records, list) or not records:
            raise ConfigurationError(f"Catalog file has no 'products' list: {filepath}")

        catalog = ProductCatalog.from_records(records)
        logger.info("Loaded %d products", len(catalog))
        return catalog
