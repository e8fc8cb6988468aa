"""Configuration module for Crisis Profiles.

Factories are in ``crisis_profiles.config.factory``.
"""

from crisis_profiles.config.loader import get_default_config_path, load_config
from crisis_profiles.config.models import (
    ClaudeLanguageModelConfig,
    CrisisProfilesConfig,
    FixedDelaySchedulerConfig,
    GeneratorConfig,
    LanguageModelConfig,
    LoggingConfig,
    PipelineConfig,
    PreprocessorConfig,
    QualityConfig,
    SchedulerConfig,
    StorageConfig,
    TokenBucketSchedulerConfig,
)

__all__ = [
    "ClaudeLanguageModelConfig",
    "CrisisProfilesConfig",
    "FixedDelaySchedulerConfig",
    "GeneratorConfig",
    "LanguageModelConfig",
    "LoggingConfig",
    "PipelineConfig",
    "PreprocessorConfig",
    "QualityConfig",
    "SchedulerConfig",
    "StorageConfig",
    "TokenBucketSchedulerConfig",
    "get_default_config_path",
    "load_config",
]
