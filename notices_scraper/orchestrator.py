"""
Fetch-and-extract orchestration for regulatory notice sources.

Coordinates:
- Per-source fetch with a bounded timeout
- Extractor selection by source domain
- Concurrent fan-out with per-source failure isolation
- Date parsing and recency filtering of the merged result
"""

import asyncio
import json
from pathlib import Path
from typing import Iterable, Optional, Sequence

import structlog
from bs4 import BeautifulSoup

from .core.dates import is_within_days, parse_indian_date
from .core.http_client import HttpClient
from .core.models import DataSource, ScrapedItem, ScrapeOutcome
from .extractors import REGISTRY, ExtractorRegistry

logger = structlog.get_logger(__name__)


DEFAULT_MAX_ITEMS = 5
DEFAULT_MAX_ITEMS_PER_SOURCE = 3
DEFAULT_FILTER_DAYS = 14


async def _fetch_and_extract(
    source: DataSource,
    max_items: int,
    client: HttpClient,
    registry: ExtractorRegistry,
) -> ScrapeOutcome:
    """Fetch one source and run its extractor, capturing any failure."""
    try:
        logger.info("fetching_source", source=source.name, url=source.url)

        html = await client.get_text(source.url)
        soup = BeautifulSoup(html, "lxml")

        extractor = registry.get_extractor_for_url(source.url)
        items = extractor.extract(soup, source, max_items)

        logger.info(
            "source_extracted",
            source=source.name,
            extractor=extractor.get_extractor_name(),
            count=len(items),
        )
        return ScrapeOutcome(source=source, items=items[:max(max_items, 0)])

    except Exception as e:
        return ScrapeOutcome(source=source, error=f"{type(e).__name__}: {e}")


async def scrape_data_source(
    source: DataSource,
    max_items: int = DEFAULT_MAX_ITEMS,
    client: Optional[HttpClient] = None,
    registry: ExtractorRegistry = REGISTRY,
) -> list[ScrapedItem]:
    """
    Scrape a single source.

    Never raises: network errors, non-2xx responses and extraction
    errors are logged and yield an empty list.

    Args:
        source: Source to fetch
        max_items: Maximum items to return
        client: Open HttpClient to reuse (a private one is created if None)
        registry: Extractor registry used for routing

    Returns:
        At most max_items items in document order
    """
    if client is None:
        async with HttpClient() as own_client:
            return await scrape_data_source(source, max_items, own_client, registry)

    outcome = await _fetch_and_extract(source, max_items, client, registry)
    if not outcome.ok:
        logger.error("source_scrape_failed", source=source.name, error=outcome.error)
        return []
    return outcome.items


def attach_parsed_dates(items: Iterable[ScrapedItem]) -> list[ScrapedItem]:
    """Set parsed_date on every item whose raw date is recognized."""
    result = []
    for item in items:
        if item.date:
            parsed = parse_indian_date(item.date)
            if parsed:
                item.parsed_date = parsed
        result.append(item)
    return result


def filter_recent(items: Iterable[ScrapedItem], filter_days: float) -> list[ScrapedItem]:
    """
    Keep items dated within the window.

    Undated items are kept: an unknown date may still be recent.
    """
    return [
        item for item in items
        if item.parsed_date is None or is_within_days(item.parsed_date, filter_days)
    ]


async def scrape_multiple_sources(
    sources: Sequence[DataSource],
    max_items_per_source: int = DEFAULT_MAX_ITEMS_PER_SOURCE,
    filter_days: float = DEFAULT_FILTER_DAYS,
    client: Optional[HttpClient] = None,
    registry: ExtractorRegistry = REGISTRY,
) -> list[ScrapedItem]:
    """
    Scrape all sources concurrently and return recent items.

    Every source is awaited regardless of how the others finish; a
    failing source contributes nothing and is logged.

    Args:
        sources: Sources to scrape, in the order results should appear
        max_items_per_source: Cap applied to each source
        filter_days: Recency window in days
        client: Open HttpClient shared by all fetches (created if None)
        registry: Extractor registry used for routing

    Returns:
        Items in source order, then extraction order, filtered by recency
    """
    if client is None:
        async with HttpClient() as own_client:
            return await scrape_multiple_sources(
                sources, max_items_per_source, filter_days, own_client, registry
            )

    logger.info("starting_scrape", sources=len(sources), max_items=max_items_per_source)

    results = await asyncio.gather(
        *(scrape_data_source(source, max_items_per_source, client, registry) for source in sources),
        return_exceptions=True,
    )

    all_items: list[ScrapedItem] = []
    failed = 0
    for source, result in zip(sources, results):
        if isinstance(result, BaseException):
            failed += 1
            logger.error("source_failed", source=source.name, error=str(result))
            continue
        all_items.extend(result)

    dated_items = attach_parsed_dates(all_items)
    filtered = filter_recent(dated_items, filter_days)

    logger.info(
        "filter_complete",
        kept=len(filtered),
        total=len(all_items),
        days=filter_days,
        failed_sources=failed,
    )

    return filtered


def save_json(records: list[dict], output_path: str) -> Path:
    """
    Write records to a JSON file.

    Args:
        records: Serialized items
        output_path: Destination file path

    Returns:
        Path of the written file
    """
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        json.dump(records, f, ensure_ascii=False, indent=2)

    logger.info("saved_json", path=str(path), count=len(records))
    return path
