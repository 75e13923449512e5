"""
LLM-based action-item analysis for regulatory notices.

Supports multiple providers:
- Hugging Face Inference API (Mistral instruct models)
- Anthropic Claude

Analysis is best-effort: any provider failure falls back to a
deterministic, source-keyed analysis, so callers always receive a
fully populated ActionItems.
"""

import asyncio
import json
import os
import re
from abc import ABC, abstractmethod
from typing import Iterable, Optional

import structlog

from notices_scraper.core.http_client import HttpClient
from notices_scraper.core.models import ActionItems

logger = structlog.get_logger(__name__)


HF_API_BASE = "https://api-inference.huggingface.co/models"
DEFAULT_HF_MODEL = "mistralai/Mistral-7B-Instruct-v0.2"
DEFAULT_CLAUDE_MODEL = "claude-3-5-haiku-latest"

BATCH_SIZE = 3
BATCH_PAUSE_SECONDS = 1.0

PENDING_SUMMARY = "Impact assessment pending"
FALLBACK_SUMMARY = "Regulatory update requiring attention"
FALLBACK_DEADLINE = "Check official notification for specific dates"


ANALYSIS_PROMPT = """Analyze this Indian financial/tax regulation and provide structured insights:

Regulation: {title}
Source: {source}
Date: {date}

Provide a JSON response with:
1. "affected": List of who is impacted (e.g., "Businesses", "Individual taxpayers", "Financial advisors", "Specific sectors")
2. "deadlines": Any compliance deadlines or effective dates mentioned
3. "actions": Specific action steps that affected parties should take
4. "relatedRegulations": Related regulations or compliance areas
5. "summary": One-line impact summary

Format as valid JSON only, no markdown:
{{
  "affected": [],
  "deadlines": [],
  "actions": [],
  "relatedRegulations": [],
  "summary": ""
}}"""


class AnalysisError(Exception):
    """Raised when a provider response cannot be turned into ActionItems."""


def build_analysis_prompt(title: str, source: str, date: Optional[str] = None) -> str:
    return ANALYSIS_PROMPT.format(title=title, source=source, date=date or "Recent")


# (source substrings, affected, actions, related regulations)
FALLBACK_RULES = [
    (
        ("Income Tax", "CBDT"),
        ["Individual taxpayers", "Tax professionals", "Businesses"],
        ["Review notification details", "Consult with tax advisor", "Update compliance procedures"],
        ["Income Tax Act, 1961"],
    ),
    (
        ("GST", "CBIC"),
        ["GST-registered businesses", "Tax practitioners"],
        ["Review GST portal for updates", "Assess impact on current filings", "Update GST compliance"],
        ["GST Act"],
    ),
    (
        ("RBI",),
        ["Banks", "Financial institutions", "NBFCs"],
        ["Review RBI circular", "Update internal policies", "Ensure compliance by deadline"],
        ["Banking Regulation Act", "RBI guidelines"],
    ),
    (
        ("SEBI",),
        ["Listed companies", "Stock brokers", "Investors"],
        ["Review SEBI circular", "Update disclosure requirements", "Assess impact on operations"],
        ["SEBI regulations", "Securities laws"],
    ),
]

GENERIC_AFFECTED = ["Businesses", "Compliance officers"]
GENERIC_ACTIONS = ["Review official notification", "Assess applicability", "Consult legal advisor"]


def generate_fallback_analysis(title: str, source: str) -> ActionItems:
    """
    Build action items from the source label alone.

    Deterministic: the same source always yields the same defaults.
    """
    affected, actions, related = GENERIC_AFFECTED, GENERIC_ACTIONS, []
    for keywords, rule_affected, rule_actions, rule_related in FALLBACK_RULES:
        if any(keyword in source for keyword in keywords):
            affected, actions, related = rule_affected, rule_actions, rule_related
            break

    return ActionItems(
        affected=list(affected),
        deadlines=[FALLBACK_DEADLINE],
        actions=list(actions),
        related_regulations=list(related),
        summary=FALLBACK_SUMMARY,
    )


def _as_str_list(value) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(v) for v in value if v is not None and str(v).strip()]


def parse_action_items(text: str) -> ActionItems:
    """
    Parse model output into ActionItems.

    The first {...} span is taken as JSON, so prose or code fences
    around it are ignored.

    Raises:
        AnalysisError: If no JSON object can be decoded
    """
    if not isinstance(text, str):
        raise AnalysisError(f"Expected text response, got {type(text).__name__}")

    match = re.search(r"\{[\s\S]*\}", text)
    if not match:
        raise AnalysisError("No JSON object in response")

    try:
        data = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise AnalysisError(f"Invalid JSON in response: {e}") from e

    if not isinstance(data, dict):
        raise AnalysisError("Response JSON is not an object")

    summary = data.get("summary")
    return ActionItems(
        affected=_as_str_list(data.get("affected")),
        deadlines=_as_str_list(data.get("deadlines")),
        actions=_as_str_list(data.get("actions")),
        related_regulations=_as_str_list(data.get("relatedRegulations")),
        summary=str(summary) if summary else PENDING_SUMMARY,
    )


class LLMProvider(ABC):
    """Abstract base class for text generation providers."""

    @abstractmethod
    async def generate(self, prompt: str) -> str:
        """Return the generated text for a prompt."""
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """Check if provider is configured and available."""
        pass


class HuggingFaceProvider(LLMProvider):
    """Hugging Face Inference API provider."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        timeout: float = 30.0,
        client: Optional[HttpClient] = None,
    ):
        self.api_key = api_key or os.getenv("HUGGINGFACE_API_KEY")
        self.model = model or os.getenv("HUGGINGFACE_MODEL_ID", DEFAULT_HF_MODEL)
        self.timeout = timeout
        self.client = client

    @property
    def endpoint(self) -> str:
        return f"{HF_API_BASE}/{self.model}"

    def is_available(self) -> bool:
        """Check if Hugging Face API key is configured."""
        return bool(self.api_key)

    async def generate(self, prompt: str) -> str:
        if not self.is_available():
            raise AnalysisError("HUGGINGFACE_API_KEY is not configured")

        payload = {
            "inputs": prompt,
            "parameters": {
                "max_new_tokens": 500,
                "temperature": 0.3,
                "top_p": 0.9,
                "return_full_text": False,
            },
        }
        headers = {"Authorization": f"Bearer {self.api_key}"}

        if self.client is None:
            async with HttpClient(timeout=self.timeout) as client:
                response = await client.post(self.endpoint, json=payload, headers=headers)
        else:
            response = await self.client.post(self.endpoint, json=payload, headers=headers)

        return self._unwrap(response.json())

    @staticmethod
    def _unwrap(result) -> str:
        """HF returns [{"generated_text": ...}] for text generation."""
        if isinstance(result, list) and result:
            result = result[0]
        if isinstance(result, dict):
            if "error" in result:
                raise AnalysisError(f"HF API error: {result['error']}")
            result = result.get("generated_text", result)
        if not isinstance(result, str):
            raise AnalysisError("HF response has no generated text")
        return result


class ClaudeProvider(LLMProvider):
    """Anthropic Claude provider."""

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        self.api_key = api_key or os.getenv("ANTHROPIC_API_KEY")
        self.model = model or os.getenv("ANTHROPIC_MODEL_ID", DEFAULT_CLAUDE_MODEL)
        self._client = None

    def is_available(self) -> bool:
        """Check if Anthropic API key is configured."""
        return bool(self.api_key)

    def _get_client(self):
        """Lazy-load Anthropic client."""
        if self._client is None:
            try:
                import anthropic
                self._client = anthropic.AsyncAnthropic(api_key=self.api_key)
            except ImportError:
                logger.warning("anthropic_not_installed", hint="pip install notices-scraper[llm]")
                raise
        return self._client

    async def generate(self, prompt: str) -> str:
        if not self.is_available():
            raise AnalysisError("ANTHROPIC_API_KEY is not configured")

        client = self._get_client()
        message = await client.messages.create(
            model=self.model,
            max_tokens=500,
            temperature=0.3,
            messages=[{"role": "user", "content": prompt}],
        )
        return message.content[0].text


class RegulationAnalyzer:
    """
    Action-item analysis with guaranteed results.

    Selects the first available provider (Hugging Face, then Claude).
    Without a provider every notice gets the fallback analysis.

    Usage:
        analyzer = RegulationAnalyzer()
        items = await analyzer.analyze("Circular on KYC", "RBI Notifications")
    """

    def __init__(self, provider: Optional[LLMProvider] = None):
        self.providers: list[LLMProvider] = (
            [provider] if provider else [HuggingFaceProvider(), ClaudeProvider()]
        )

    def get_provider(self) -> Optional[LLMProvider]:
        for provider in self.providers:
            if provider.is_available():
                return provider
        return None

    def is_available(self) -> bool:
        return self.get_provider() is not None

    async def analyze(self, title: str, source: str, date: Optional[str] = None) -> ActionItems:
        """
        Analyze one notice.

        Never raises: provider errors, HTTP failures and unparseable
        output all produce the fallback analysis.
        """
        provider = self.get_provider()
        if provider is None:
            logger.debug("no_llm_provider_available", source=source)
            return generate_fallback_analysis(title, source)

        try:
            text = await provider.generate(build_analysis_prompt(title, source, date))
            return parse_action_items(text)
        except Exception as e:
            logger.warning(
                "llm_analysis_failed",
                provider=provider.__class__.__name__,
                title=title[:80],
                error=str(e),
            )
            return generate_fallback_analysis(title, source)

    async def analyze_batch(
        self,
        items: Iterable,
        batch_size: int = BATCH_SIZE,
        pause: float = BATCH_PAUSE_SECONDS,
    ) -> dict[str, ActionItems]:
        """
        Analyze items in small batches to respect provider rate limits.

        Args:
            items: Objects with title, source and optional date attributes
                   (ScrapedItem) or dicts with the same keys
            batch_size: Concurrent analyses per batch
            pause: Seconds to wait between batches

        Returns:
            Mapping of "title|source" to ActionItems, one per input item
        """
        entries = [_entry(item) for item in items]
        batch_size = max(1, batch_size)
        results: dict[str, ActionItems] = {}

        for start in range(0, len(entries), batch_size):
            batch = entries[start:start + batch_size]
            outcomes = await asyncio.gather(
                *(self.analyze(title, source, date) for title, source, date in batch),
                return_exceptions=True,
            )

            for (title, source, _), outcome in zip(batch, outcomes):
                if isinstance(outcome, BaseException):
                    logger.warning("batch_item_failed", title=title[:80], error=str(outcome))
                    outcome = generate_fallback_analysis(title, source)
                results[analysis_key(title, source)] = outcome

            if start + batch_size < len(entries):
                await asyncio.sleep(pause)

        logger.info("batch_analysis_complete", count=len(results))
        return results


def analysis_key(title: str, source: str) -> str:
    return f"{title}|{source}"


def _entry(item) -> tuple[str, str, Optional[str]]:
    if isinstance(item, dict):
        return item["title"], item["source"], item.get("date")
    return item.title, item.source, getattr(item, "date", None)
