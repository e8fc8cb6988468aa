"""Factory functions to create components from configuration."""

import logging
import os
from pathlib import Path

from crisis_profiles.config.models import (
    ClaudeLanguageModelConfig,
    CrisisProfilesConfig,
    FixedDelaySchedulerConfig,
    GeneratorConfig,
    SchedulerConfig,
    TokenBucketSchedulerConfig,
)
from crisis_profiles.generation.base import LanguageModel
from crisis_profiles.generation.claude import ClaudeLanguageModel
from crisis_profiles.generation.generator import ContentGenerator
from crisis_profiles.pipeline.base import BatchScheduler, CrisisStore
from crisis_profiles.pipeline.orchestrator import ContentPipeline
from crisis_profiles.pipeline.scheduler import FixedDelayScheduler, TokenBucketScheduler
from crisis_profiles.preprocess.preprocessor import ContentPreprocessor
from crisis_profiles.quality.controller import QualityController
from crisis_profiles.run_logger import RunLogger

logger = logging.getLogger(__name__)


def create_language_model(config: ClaudeLanguageModelConfig) -> LanguageModel | None:
    """Create a language model from config.

    Returns None when no API key is configured or set in the environment,
    which the pipeline reports as "service not configured".
    """
    if isinstance(config, ClaudeLanguageModelConfig):
        api_key = config.api_key or os.environ.get("CLAUDE_API_KEY")
        if not api_key:
            logger.warning("No CLAUDE_API_KEY configured; content generation is disabled")
            return None
        return ClaudeLanguageModel(
            model=config.model,
            api_key=api_key,
            max_tokens=config.max_tokens,
            temperature=config.temperature,
        )
    msg = f"Unknown language model config type: {type(config)}"
    raise ValueError(msg)


def create_generator(config: GeneratorConfig) -> ContentGenerator | None:
    """Create a content generator, or None without a language model."""
    model = create_language_model(config.language_model)
    if model is None:
        return None
    return ContentGenerator(model, config)


def create_scheduler(config: SchedulerConfig) -> BatchScheduler:
    """Create a batch scheduler from config."""
    if isinstance(config, FixedDelaySchedulerConfig):
        return FixedDelayScheduler(delay_seconds=config.delay_seconds)
    if isinstance(config, TokenBucketSchedulerConfig):
        return TokenBucketScheduler(
            rate_per_second=config.rate_per_second,
            capacity=config.capacity,
        )
    msg = f"Unknown scheduler config type: {type(config)}"
    raise ValueError(msg)


def create_from_config(
    config: CrisisProfilesConfig,
    store: CrisisStore,
    *,
    review_store: CrisisStore | None = None,
    language_model: LanguageModel | None = None,
    log_override: bool | None = None,
    log_dir_override: str | None = None,
) -> tuple[ContentPipeline, RunLogger | None]:
    """Create a complete pipeline from root config.

    Args:
        config: Root configuration.
        store: Public crisis record store.
        review_store: Store for records held back for review.
        language_model: Use this model instead of building one from config.
        log_override: Override the config's logging.enabled setting.
        log_dir_override: Override the config's logging.log_dir setting.

    Returns:
        Tuple of (pipeline, run_logger). run_logger is None if logging is disabled.
    """
    log_enabled = log_override if log_override is not None else config.logging.enabled
    log_dir = Path(log_dir_override if log_dir_override is not None else config.logging.log_dir)

    run_logger: RunLogger | None = None
    if log_enabled:
        run_logger = RunLogger(log_dir=log_dir, enabled=True)

    if language_model is not None:
        generator: ContentGenerator | None = ContentGenerator(language_model, config.generator)
    else:
        generator = create_generator(config.generator)

    pipeline = ContentPipeline(
        store,
        generator,
        preprocessor=ContentPreprocessor(config.preprocessor),
        quality_controller=QualityController(config.quality),
        config=config.pipeline,
        scheduler=create_scheduler(config.scheduler),
        review_store=review_store,
        run_logger=run_logger,
    )
    return (pipeline, run_logger)
