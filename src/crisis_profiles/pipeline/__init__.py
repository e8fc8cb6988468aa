"""Pipeline orchestration for crisis profile generation."""

from crisis_profiles.pipeline.base import BatchScheduler, CrisisStore
from crisis_profiles.pipeline.orchestrator import (
    ContentPipeline,
    apply_process_limit,
    summarize_results,
)
from crisis_profiles.pipeline.records import build_record, determine_severity, infer_region
from crisis_profiles.pipeline.scheduler import FixedDelayScheduler, TokenBucketScheduler

__all__ = [
    "BatchScheduler",
    "ContentPipeline",
    "CrisisStore",
    "FixedDelayScheduler",
    "TokenBucketScheduler",
    "apply_process_limit",
    "build_record",
    "determine_severity",
    "infer_region",
    "summarize_results",
]
