"""
Extractor registry for routing source URLs to extraction strategies.

The registry keeps an ordered list of site-specific extractors and one
default extractor used for sites nobody registered for.
"""

from typing import Optional

import structlog

from .base import BaseExtractor

logger = structlog.get_logger(__name__)


class ExtractorRegistry:
    """Registry for managing and routing to extractors"""

    def __init__(self, default: Optional[BaseExtractor] = None):
        self._extractors: list[BaseExtractor] = []
        self._default = default

    def register(self, extractor: BaseExtractor) -> None:
        """
        Register a new site-specific extractor.

        Args:
            extractor: Instance of a BaseExtractor implementation
        """
        if not isinstance(extractor, BaseExtractor):
            raise TypeError(f"Extractor must inherit from BaseExtractor, got {type(extractor)}")

        self._extractors.append(extractor)
        logger.debug("extractor_registered", extractor=extractor.get_extractor_name())

    def set_default(self, extractor: BaseExtractor) -> None:
        if not isinstance(extractor, BaseExtractor):
            raise TypeError(f"Extractor must inherit from BaseExtractor, got {type(extractor)}")
        self._default = extractor

    @property
    def default(self) -> Optional[BaseExtractor]:
        return self._default

    def get_extractor_for_url(self, url: str) -> BaseExtractor:
        """
        Find the extractor for a source URL.

        Args:
            url: Source URL

        Returns:
            Matching extractor, or the default when no domain matches

        Raises:
            LookupError: If nothing matches and no default is set
        """
        for extractor in self._extractors:
            if extractor.can_handle(url):
                return extractor

        if self._default is None:
            raise LookupError(f"No extractor found for URL: {url}")

        logger.debug("using_default_extractor", url=url, extractor=self._default.get_extractor_name())
        return self._default

    def list_extractors(self) -> list[str]:
        """Return names of registered extractors, default excluded."""
        return [extractor.get_extractor_name() for extractor in self._extractors]

    def count(self) -> int:
        return len(self._extractors)


# Global registry, populated by @register_extractor on module import
REGISTRY = ExtractorRegistry()


def register_extractor(cls: type[BaseExtractor]) -> type[BaseExtractor]:
    """Class decorator: instantiate the extractor and add it to REGISTRY."""
    REGISTRY.register(cls())
    return cls


def register_default_extractor(cls: type[BaseExtractor]) -> type[BaseExtractor]:
    REGISTRY.set_default(cls())
    return cls
