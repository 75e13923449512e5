"""
CLI entry point for notices-scraper.

Usage:
    python -m notices_scraper
    python -m notices_scraper --categories regulators --days 7
    python -m notices_scraper --priority --analyze --output notices.json
"""

import argparse
import asyncio
import json
import logging
import sys

import structlog

# Log level mapping
LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


def setup_logging(level: str = "INFO", json_output: bool = False):
    """Configure structured logging on stderr so stdout stays clean JSON."""
    log_level = LOG_LEVELS.get(level.upper(), logging.INFO)

    if json_output:
        renderer_processors = [
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer(),
        ]
    else:
        renderer_processors = [
            structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ]

    structlog.configure(
        processors=[structlog.processors.add_log_level, *renderer_processors],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def _split(value):
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Aggregate recent Indian financial and tax regulatory notices",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Scrape every configured source
  python -m notices_scraper

  # Only regulators, last 7 days
  python -m notices_scraper --categories regulators --days 7

  # Priority sources with action items, saved to file
  python -m notices_scraper --priority --analyze --output notices.json
        """,
    )

    parser.add_argument(
        "--categories",
        type=str,
        help="Comma-separated categories to scrape (e.g. central,regulators)",
    )

    parser.add_argument(
        "--sources",
        type=str,
        help="Comma-separated source names to scrape",
    )

    parser.add_argument(
        "--priority",
        action="store_true",
        help="Scrape the default priority sources only",
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to an alternative sources.yml",
    )

    parser.add_argument(
        "--max-items",
        type=int,
        default=3,
        help="Maximum items per source (default: 3)",
    )

    parser.add_argument(
        "--days",
        type=int,
        default=14,
        help="Recency window in days (default: 14)",
    )

    parser.add_argument(
        "--sort",
        choices=["desc", "asc", "none"],
        default="desc",
        help="Sort by parsed date; undated items always last (default: desc)",
    )

    parser.add_argument(
        "--analyze",
        action="store_true",
        help="Add LLM action items to each notice",
    )

    parser.add_argument(
        "--output",
        type=str,
        help="Write JSON to this file instead of stdout",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Logging level (default: INFO)",
    )

    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Output logs as JSON (for production)",
    )

    parser.add_argument(
        "--version",
        action="store_true",
        help="Show version and exit",
    )

    return parser.parse_args(argv)


def select_sources(args):
    """Resolve CLI selection flags to a list of DataSources."""
    from .config import (
        PRIORITY_SOURCE_NAMES,
        get_all_data_sources,
        get_data_sources_by_category,
        get_data_sources_by_name,
    )

    names = _split(args.sources)
    if args.priority:
        names.extend(PRIORITY_SOURCE_NAMES)
    categories = _split(args.categories)

    if not names and not categories:
        return get_all_data_sources(args.config)

    selected = []
    for category in categories:
        selected.extend(get_data_sources_by_category(category, args.config))
    for source in get_data_sources_by_name(names, args.config):
        if source not in selected:
            selected.append(source)
    return selected


def render_items(items, analyses=None):
    """Serialize items, adding display dates and action items when present."""
    from .core.dates import format_date, get_relative_time
    from .plugins.llm import analysis_key

    records = []
    for item in items:
        record = item.to_dict()
        if item.parsed_date:
            record["displayDate"] = format_date(item.parsed_date)
            record["relativeTime"] = get_relative_time(item.parsed_date)
        if analyses is not None:
            analysis = analyses.get(analysis_key(item.title, item.source))
            if analysis:
                record["actionItems"] = analysis.to_dict()
        records.append(record)
    return records


async def main_async(args):
    """Async main function."""
    from .core.dates import sort_by_date
    from .orchestrator import save_json, scrape_multiple_sources
    from .plugins.llm import RegulationAnalyzer

    logger = structlog.get_logger(__name__)

    sources = select_sources(args)
    if not sources:
        logger.warning("no_sources_selected", categories=args.categories, sources=args.sources)
        return []

    items = await scrape_multiple_sources(sources, args.max_items, args.days)

    if args.sort != "none":
        items = sort_by_date(items, descending=args.sort == "desc")

    analyses = None
    if args.analyze and items:
        analyses = await RegulationAnalyzer().analyze_batch(items)

    records = render_items(items, analyses)

    if args.output:
        save_json(records, args.output)
    else:
        json.dump(records, sys.stdout, ensure_ascii=False, indent=2)
        sys.stdout.write("\n")

    if not items:
        logger.warning("no_items_scraped", sources=len(sources))

    return items


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)

    if args.version:
        from . import __version__
        print(f"notices-scraper {__version__}")
        sys.exit(0)

    setup_logging(args.log_level, args.json_logs)

    try:
        items = asyncio.run(main_async(args))
        sys.exit(0 if items else 1)
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        sys.exit(130)
    except Exception as e:
        logger = structlog.get_logger(__name__)
        logger.exception("fatal_error", error=str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
