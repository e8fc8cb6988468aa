"""Data models for Crisis Profiles."""

from crisis_profiles.data.content import (
    AffectedGroup,
    ContextBackground,
    CurrentSituation,
    DetailedViewContent,
    KeyNeed,
    OrganizationIntervention,
    SwipeCardContent,
    TimelineEvent,
    WaysToHelp,
    strict_json_schema,
)
from crisis_profiles.data.models import (
    AggregatedContext,
    APICallUsage,
    CountryInput,
    Credibility,
    Entities,
    PipelineResult,
    ProcessedArticle,
    QualityControlResult,
    RawArticle,
    ReviewPolicy,
    ScrapedArticle,
    Sentiment,
    SeverityLevel,
    Usage,
    ValidationResult,
)

__all__ = [
    "APICallUsage",
    "AffectedGroup",
    "AggregatedContext",
    "ContextBackground",
    "CountryInput",
    "Credibility",
    "CurrentSituation",
    "DetailedViewContent",
    "Entities",
    "KeyNeed",
    "OrganizationIntervention",
    "PipelineResult",
    "ProcessedArticle",
    "QualityControlResult",
    "RawArticle",
    "ReviewPolicy",
    "ScrapedArticle",
    "Sentiment",
    "SeverityLevel",
    "SwipeCardContent",
    "TimelineEvent",
    "Usage",
    "ValidationResult",
    "WaysToHelp",
    "strict_json_schema",
]
