"""Crisis Profiles: vetted humanitarian crisis profiles from raw report text."""

from crisis_profiles.config import CrisisProfilesConfig, load_config
from crisis_profiles.config.factory import create_from_config
from crisis_profiles.data import (
    AggregatedContext,
    APICallUsage,
    CountryInput,
    Credibility,
    DetailedViewContent,
    Entities,
    PipelineResult,
    ProcessedArticle,
    QualityControlResult,
    RawArticle,
    ReviewPolicy,
    ScrapedArticle,
    Sentiment,
    SeverityLevel,
    SwipeCardContent,
    Usage,
    ValidationResult,
)
from crisis_profiles.errors import CrisisProfilesError, GenerationFailure
from crisis_profiles.generation import (
    ClaudeLanguageModel,
    ContentGenerator,
    GenerationResult,
    LanguageModel,
)
from crisis_profiles.pipeline import (
    BatchScheduler,
    ContentPipeline,
    CrisisStore,
    FixedDelayScheduler,
    TokenBucketScheduler,
    summarize_results,
)
from crisis_profiles.preprocess import ContentPreprocessor, classify_credibility
from crisis_profiles.quality import QualityController
from crisis_profiles.run_logger import RunLogger
from crisis_profiles.store import InMemoryCrisisStore, JsonlCrisisStore

__all__ = [
    # Models
    "APICallUsage",
    "AggregatedContext",
    "CountryInput",
    "Credibility",
    "DetailedViewContent",
    "Entities",
    "PipelineResult",
    "ProcessedArticle",
    "QualityControlResult",
    "RawArticle",
    "ReviewPolicy",
    "ScrapedArticle",
    "Sentiment",
    "SeverityLevel",
    "SwipeCardContent",
    "Usage",
    "ValidationResult",
    # Errors
    "CrisisProfilesError",
    "GenerationFailure",
    # Protocols
    "BatchScheduler",
    "CrisisStore",
    "LanguageModel",
    # Components
    "ClaudeLanguageModel",
    "ContentGenerator",
    "ContentPreprocessor",
    "GenerationResult",
    "QualityController",
    "classify_credibility",
    # Pipeline
    "ContentPipeline",
    "FixedDelayScheduler",
    "TokenBucketScheduler",
    "summarize_results",
    # Stores
    "InMemoryCrisisStore",
    "JsonlCrisisStore",
    # Logging
    "RunLogger",
    # Config
    "CrisisProfilesConfig",
    "create_from_config",
    "load_config",
]
