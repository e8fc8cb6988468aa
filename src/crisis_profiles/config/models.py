"""Pydantic configuration models for Crisis Profiles components."""

from typing import Annotated, Literal

from pydantic import BaseModel, Field

from crisis_profiles.data import ReviewPolicy

# ============================================================
# Preprocessor Config
# ============================================================


class PreprocessorConfig(BaseModel):
    """Configuration for ContentPreprocessor."""

    spacy_model: str = "en_core_web_sm"
    max_locations: int = 10
    max_organizations: int = 10
    max_persons: int = 10
    max_dates: int = 5
    max_key_phrases: int = 20
    aggregate_max_locations: int = 20
    aggregate_max_organizations: int = 15
    aggregate_max_persons: int = 15
    aggregate_max_dates: int = 10
    aggregate_max_key_phrases: int = 30

    model_config = {"frozen": True}


# ============================================================
# Generator Configs
# ============================================================


class ClaudeLanguageModelConfig(BaseModel):
    """Configuration for ClaudeLanguageModel."""

    type: Literal["claude"] = "claude"
    model: str = "claude-sonnet-4-5"
    api_key: str | None = None
    max_tokens: int = 4096
    temperature: float = 0.3

    model_config = {"frozen": True}


# Only one provider today; becomes a discriminated union when another is added
LanguageModelConfig = ClaudeLanguageModelConfig


class GeneratorConfig(BaseModel):
    """Configuration for ContentGenerator and its validation ranges."""

    language_model: ClaudeLanguageModelConfig = Field(default_factory=ClaudeLanguageModelConfig)
    swipe_card_context_chars: int = 5000
    detailed_view_context_chars: int = 10000
    headline_chars: tuple[int, int] = (40, 60)
    summary_words: tuple[int, int] = (30, 80)
    affected_groups: tuple[int, int] = (3, 5)
    key_needs: tuple[int, int] = (3, 5)
    extended_summary_words: tuple[int, int] = (300, 500)

    model_config = {"frozen": True}


# ============================================================
# Quality Control Config
# ============================================================


class QualityConfig(BaseModel):
    """Term lists, penalties and threshold for QualityController."""

    quality_pass_threshold: int = 70

    # Bias
    optimistic_terms: tuple[str, ...] = ("hope", "improving", "better", "progress", "recovery")
    political_bias_terms: tuple[str, ...] = (
        "terrorist",
        "regime",
        "dictator",
        "enemy",
        "radical",
        "extremist",
        "militant",
        "insurgent",
    )
    attribution_phrases: tuple[str, ...] = (
        "according to",
        "reported by",
        "sources indicate",
        "organizations state",
        "data shows",
    )
    optimism_penalty: int = 15
    political_term_penalty: int = 8
    missing_attribution_penalty: int = 10

    # Emotional tone
    exploitative_terms: tuple[str, ...] = (
        "devastating",
        "horrific",
        "tragic",
        "nightmare",
        "catastrophic",
        "apocalyptic",
        "hellish",
        "terrible",
        "awful",
        "dire",
        "desperate",
    )
    poverty_porn_patterns: dict[str, str] = Field(
        default_factory=lambda: {
            "starving children": r"starving children",
            "dying babies": r"dying (babies|infants)",
            "hopeless": r"hopeless",
            "helpless victims": r"helpless victims",
            "suffering focus": r"suffering (children|families)",
        }
    )
    victim_terms: tuple[str, ...] = ("victims", "displaced", "refugees", "crisis")
    agency_terms: tuple[str, ...] = ("families", "communities", "people", "residents", "survivors")
    solution_terms: tuple[str, ...] = (
        "support",
        "help",
        "aid",
        "assistance",
        "relief",
        "organizations",
    )
    exploitative_term_penalty: int = 8
    sensationalism_threshold: int = 2
    sensationalism_penalty: int = 10
    poverty_porn_penalty: int = 15
    victim_framing_min_terms: int = 2
    victim_framing_penalty: int = 12
    missing_solution_penalty: int = 8

    # Fact check
    severe_claim_terms: tuple[str, ...] = ("genocide", "war crime", "massacre", "ethnic cleansing")
    large_scale_impact_terms: tuple[str, ...] = ("million", "thousand")
    large_scale_source_terms: tuple[str, ...] = ("million", "thousand", "hundreds", "many")
    timeline_keyword_min_length: int = 4

    model_config = {"frozen": True}


# ============================================================
# Scheduler Configs
# ============================================================


class FixedDelaySchedulerConfig(BaseModel):
    """Wait a fixed delay after each country."""

    type: Literal["fixed_delay"] = "fixed_delay"
    delay_seconds: float = 1.0

    model_config = {"frozen": True}


class TokenBucketSchedulerConfig(BaseModel):
    """Admit countries at a sustained rate with an initial burst."""

    type: Literal["token_bucket"] = "token_bucket"
    rate_per_second: float = 1.0
    capacity: int = 1

    model_config = {"frozen": True}


SchedulerConfig = Annotated[
    FixedDelaySchedulerConfig | TokenBucketSchedulerConfig,
    Field(discriminator="type"),
]


# ============================================================
# Pipeline Config
# ============================================================


class PipelineConfig(BaseModel):
    """Configuration for the ContentPipeline orchestrator."""

    min_articles_required: int = 2
    min_total_word_count: int = 500
    enable_quality_control: bool = True
    review_policy: ReviewPolicy = ReviewPolicy.FLAG
    process_limit: int | None = None
    record_source: str = "reliefweb"

    model_config = {"frozen": True}


# ============================================================
# Logging & Storage Configs
# ============================================================


class LoggingConfig(BaseModel):
    """Configuration for per-run JSON logging."""

    enabled: bool = False
    log_dir: str = "logs"

    model_config = {"frozen": True}


class StorageConfig(BaseModel):
    """Where the CLI writes published and held records."""

    records_path: str = "records/crises.jsonl"
    review_path: str | None = "records/review.jsonl"

    model_config = {"frozen": True}


# ============================================================
# Root Config
# ============================================================


class CrisisProfilesConfig(BaseModel):
    """Root configuration for Crisis Profiles."""

    preprocessor: PreprocessorConfig = Field(default_factory=PreprocessorConfig)
    generator: GeneratorConfig = Field(default_factory=GeneratorConfig)
    quality: QualityConfig = Field(default_factory=QualityConfig)
    pipeline: PipelineConfig = Field(default_factory=PipelineConfig)
    scheduler: FixedDelaySchedulerConfig | TokenBucketSchedulerConfig = Field(
        default_factory=FixedDelaySchedulerConfig, discriminator="type"
    )
    storage: StorageConfig = Field(default_factory=StorageConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"frozen": True}
