"""
Data models for the notices scraper.

Records flowing through the pipeline: source descriptors, scraped
notices and the action items produced by enrichment.
"""

from dataclasses import dataclass, field, asdict
from datetime import datetime
from enum import Enum
from typing import Optional
from urllib.parse import urlparse


class SourceType(str, Enum):
    """Content type served by a source. Only HTML is scraped."""
    HTML = "html"
    PDF = "pdf"
    RSS = "rss"


@dataclass(frozen=True)
class DataSource:
    """A named, categorized fetch target from the source catalog."""

    name: str
    url: str
    category: str
    type: SourceType = SourceType.HTML
    rss: Optional[str] = None

    @property
    def origin(self) -> str:
        """Scheme and host of the source URL, e.g. https://www.rbi.org.in"""
        parsed = urlparse(self.url)
        return f"{parsed.scheme}://{parsed.netloc}"

    @classmethod
    def from_dict(cls, data: dict, category: Optional[str] = None) -> "DataSource":
        """Create from dictionary (e.g., from YAML)."""
        return cls(
            name=data["name"],
            url=data["url"],
            category=data.get("category") or category,
            type=SourceType(data.get("type", "html")),
            rss=data.get("rss"),
        )

    def to_dict(self) -> dict:
        data = {
            "name": self.name,
            "url": self.url,
            "type": self.type.value,
            "category": self.category,
        }
        if self.rss:
            data["rss"] = self.rss
        return data


@dataclass
class ScrapedItem:
    """
    A single notice extracted from a source page.

    `date` is the raw text found on the page. `parsed_date` is filled
    in by the aggregator, never by an extractor.
    """

    title: str
    url: str
    source: str
    category: str
    date: Optional[str] = None
    parsed_date: Optional[datetime] = None

    def __post_init__(self):
        if not self.title or not self.url:
            raise ValueError("ScrapedItem requires both title and url")

    def to_dict(self) -> dict:
        """Convert to the JSON shape consumed by the route and email layers."""
        data = {
            "title": self.title,
            "url": self.url,
            "source": self.source,
            "category": self.category,
        }
        if self.date:
            data["date"] = self.date
        if self.parsed_date:
            data["parsedDate"] = self.parsed_date.isoformat()
        return data


@dataclass
class ActionItems:
    """Structured analysis of a notice. Every field is always populated."""

    affected: list[str] = field(default_factory=list)
    deadlines: list[str] = field(default_factory=list)
    actions: list[str] = field(default_factory=list)
    related_regulations: list[str] = field(default_factory=list)
    summary: str = ""

    def to_dict(self) -> dict:
        data = asdict(self)
        data["relatedRegulations"] = data.pop("related_regulations")
        return data


@dataclass
class ScrapeOutcome:
    """Result of fetching one source: items on success, a reason on failure."""

    source: DataSource
    items: list[ScrapedItem] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None
