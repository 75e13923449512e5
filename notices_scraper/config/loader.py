"""
YAML source catalog loader.

sources.yml maps category -> list of sources. Site base URLs are written
as ${NAME_BASE_URL:-https://...} placeholders so a mirror or a local
test server can stand in for a government host without editing the file.
"""

import os
import re
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

import yaml
import structlog

from notices_scraper.core.models import DataSource

logger = structlog.get_logger(__name__)


DEFAULT_SOURCES_FILE = "sources.yml"

# Sources the scheduled scrape uses by default (most reliable markup)
PRIORITY_SOURCE_NAMES = (
    "Income Tax Notifications",
    "RBI Notifications",
    "CBIC GST",
    "SEBI Circulars",
    "Maharashtra GST Notifications",
)

ENV_PLACEHOLDER = re.compile(r"\$\{([^}]+)\}")

Catalog = Mapping[str, tuple[DataSource, ...]]


def substitute_env_vars(text: str) -> str:
    """
    Expand ${VAR} and ${VAR:-default} placeholders.

    An unset or empty variable takes its default. Without a default it
    expands to "" and logs env_var_not_set.
    """
    def replace(match):
        name, _, default = match.group(1).partition(":-")
        value = os.getenv(name)
        if value:
            return value
        if not default:
            logger.warning("env_var_not_set", var=name)
        return default

    return ENV_PLACEHOLDER.sub(replace, text)


class ConfigLoader:
    """Reads source catalogs from a config directory (the package one by default)."""

    def __init__(self, config_dir: Optional[str] = None):
        self.config_dir = Path(config_dir) if config_dir else Path(__file__).parent

    def load_file(self, filename: str) -> dict:
        """
        Read one YAML file with placeholders expanded.

        Raises:
            FileNotFoundError: If the file is not in config_dir
        """
        filepath = self.config_dir / filename
        if not filepath.is_file():
            raise FileNotFoundError(f"Config file not found: {filepath}")

        logger.debug("loading_config", file=str(filepath))
        raw = filepath.read_text(encoding="utf-8")
        return yaml.safe_load(substitute_env_vars(raw)) or {}

    def load_catalog(self, filename: str = DEFAULT_SOURCES_FILE) -> dict[str, tuple[DataSource, ...]]:
        """
        Load the source catalog grouped by category.

        Args:
            filename: Sources config file name

        Returns:
            Mapping of category -> sources, in declaration order
        """
        config = self.load_file(filename)

        catalog: dict[str, tuple[DataSource, ...]] = {}
        for category, entries in config.items():
            sources = []
            for source_data in entries or []:
                try:
                    sources.append(self._parse_source(source_data, category))
                except Exception as e:
                    logger.error(
                        "source_load_failed",
                        category=category,
                        source=source_data.get("name", "unknown") if isinstance(source_data, dict) else "unknown",
                        error=str(e),
                    )
            catalog[str(category)] = tuple(sources)

        logger.debug(
            "catalog_loaded",
            categories=len(catalog),
            sources=sum(len(s) for s in catalog.values()),
        )
        return catalog

    def _parse_source(self, data: dict, category: str) -> DataSource:
        """
        Parse source definition into DataSource.

        Raises:
            ValueError: If required fields missing or type is unknown
        """
        required = ["name", "url"]
        for field in required:
            if not data.get(field):
                raise ValueError(f"Missing required field: {field}")

        return DataSource.from_dict(data, category=str(category))


@lru_cache(maxsize=None)
def _default_catalog() -> Catalog:
    return MappingProxyType(ConfigLoader().load_catalog())


def load_catalog(config_path: Optional[str] = None) -> Catalog:
    """
    Load the source catalog as a read-only mapping.

    The packaged catalog is loaded once per process and cached.

    Args:
        config_path: Optional path to an alternative sources.yml
    """
    if config_path:
        path = Path(config_path)
        return MappingProxyType(ConfigLoader(str(path.parent)).load_catalog(path.name))
    return _default_catalog()


def get_all_data_sources(config_path: Optional[str] = None) -> list[DataSource]:
    """Return every source across all categories, in declaration order."""
    catalog = load_catalog(config_path)
    return [source for sources in catalog.values() for source in sources]


def get_data_sources_by_category(category: str, config_path: Optional[str] = None) -> list[DataSource]:
    """Return sources in `category`; empty list for an unknown category."""
    return list(load_catalog(config_path).get(category, ()))


def list_categories(config_path: Optional[str] = None) -> list[str]:
    return list(load_catalog(config_path))


def get_data_sources_by_name(names: Iterable[str], config_path: Optional[str] = None) -> list[DataSource]:
    """
    Select sources by exact name, keeping catalog order.

    Unknown names are ignored.
    """
    wanted = set(names)
    return [source for source in get_all_data_sources(config_path) if source.name in wanted]
