"""Core data models for Crisis Profiles."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class Credibility(StrEnum):
    """Provenance class of a report, derived from its source name."""

    VERIFIED_UN = "verified_un"
    VERIFIED_ACADEMIC = "verified_academic"
    NEWS_MEDIA = "news_media"


class Sentiment(StrEnum):
    """Polarity class of an article body."""

    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


class SeverityLevel(StrEnum):
    """Severity of a published crisis record."""

    CRITICAL = "Critical"
    HIGH = "High"
    MODERATE = "Moderate"


class ReviewPolicy(StrEnum):
    """What happens to a record whose quality control failed.

    - ``flag``: publish to the public store with ``needsReview`` set.
    - ``hold``: write to the review store only, never the public store.
    """

    FLAG = "flag"
    HOLD = "hold"


def _text(raw: Mapping[str, Any], key: str) -> str:
    value = raw.get(key)
    return "" if value is None else str(value)


def _optional_text(raw: Mapping[str, Any], key: str) -> str | None:
    value = raw.get(key)
    return None if value is None or value == "" else str(value)


@dataclass(frozen=True)
class RawArticle:
    """An unvalidated report as handed over by the upstream fetcher."""

    title: str
    body: str
    source: str
    url: str | None = None
    date: str | None = None

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "RawArticle":
        """Build an article from a loosely-shaped mapping.

        Missing or ``None`` text fields become empty strings so that a
        malformed article can still flow through preprocessing.

        Raises:
            TypeError: If ``raw`` is not a mapping.
        """
        if not isinstance(raw, Mapping):
            raise TypeError(f"article must be a mapping, got {type(raw).__name__}")
        return cls(
            title=_text(raw, "title"),
            body=_text(raw, "body"),
            source=_text(raw, "source"),
            url=_optional_text(raw, "url"),
            date=_optional_text(raw, "date"),
        )


@dataclass(frozen=True)
class ScrapedArticle(RawArticle):
    """A raw article with its source credibility classified."""

    credibility: Credibility = Credibility.NEWS_MEDIA


@dataclass(frozen=True)
class Entities:
    """Named entities extracted from one or more articles."""

    locations: tuple[str, ...] = ()
    organizations: tuple[str, ...] = ()
    persons: tuple[str, ...] = ()
    dates: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, list[str]]:
        return {
            "locations": list(self.locations),
            "organizations": list(self.organizations),
            "persons": list(self.persons),
            "dates": list(self.dates),
        }


@dataclass(frozen=True)
class ProcessedArticle(ScrapedArticle):
    """A scraped article with its cleaned body and derived analysis."""

    entities: Entities = field(default_factory=Entities)
    readability: int = 0
    sentiment: Sentiment = Sentiment.NEUTRAL
    word_count: int = 0
    key_phrases: tuple[str, ...] = ()


@dataclass(frozen=True)
class AggregatedContext:
    """Summary of a set of processed articles for one generation request."""

    entities: Entities = field(default_factory=Entities)
    avg_readability: int = 0
    sentiment_distribution: dict[str, int] = field(
        default_factory=lambda: {s.value: 0 for s in Sentiment}
    )
    total_word_count: int = 0
    top_key_phrases: tuple[str, ...] = ()
    sources: tuple[str, ...] = ()


@dataclass(frozen=True)
class CountryInput:
    """One country's worth of raw articles from the upstream fetcher.

    Batches also accept plain ``{country, region, articles}`` mappings,
    which are read per country so one malformed entry fails on its own.
    """

    country: str
    region: str = ""
    articles: tuple[RawArticle, ...] = ()


@dataclass(frozen=True)
class ValidationResult:
    """Structural validation outcome for a generated artifact."""

    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.errors


@dataclass(frozen=True)
class QualityControlResult:
    """Bias, tone and fact-check scores for a generated profile."""

    bias_score: int
    emotional_tone_score: int
    factcheck_warnings: tuple[str, ...]
    overall_score: int
    passed: bool
    issues: tuple[str, ...] = ()


@dataclass(frozen=True)
class APICallUsage:
    """Usage from a single language-model call."""

    model: str
    input_tokens: int = 0
    output_tokens: int = 0
    cache_creation_input_tokens: int = 0
    cache_read_input_tokens: int = 0


@dataclass
class Usage:
    """Accumulated language-model usage across a run or batch."""

    api_calls: list[APICallUsage] = field(default_factory=list)

    @property
    def input_tokens(self) -> int:
        return sum(c.input_tokens for c in self.api_calls)

    @property
    def output_tokens(self) -> int:
        return sum(c.output_tokens for c in self.api_calls)

    @property
    def cache_creation_input_tokens(self) -> int:
        return sum(c.cache_creation_input_tokens for c in self.api_calls)

    @property
    def cache_read_input_tokens(self) -> int:
        return sum(c.cache_read_input_tokens for c in self.api_calls)

    def __add__(self, other: "Usage") -> "Usage":
        return Usage(api_calls=self.api_calls + other.api_calls)

    def __iadd__(self, other: "Usage") -> "Usage":
        self.api_calls.extend(other.api_calls)
        return self


@dataclass
class PipelineResult:
    """Terminal outcome of one country's pipeline run."""

    success: bool
    country: str
    conflict_id: str | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    quality_score: int | None = None
    held_for_review: bool = False
    usage: Usage = field(default_factory=Usage)

    def to_dict(self) -> dict[str, Any]:
        return {
            "country": self.country,
            "success": self.success,
            "conflictId": self.conflict_id,
            "qualityScore": self.quality_score,
            "heldForReview": self.held_for_review,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
            "inputTokens": self.usage.input_tokens,
            "outputTokens": self.usage.output_tokens,
        }
