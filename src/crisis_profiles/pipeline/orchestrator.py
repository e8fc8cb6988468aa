"""Per-country orchestration of preprocess, generate, quality control and persist."""

import logging
import time
from collections.abc import Iterable, Mapping
from typing import Any

from crisis_profiles.config.models import PipelineConfig
from crisis_profiles.data import (
    CountryInput,
    PipelineResult,
    RawArticle,
    ReviewPolicy,
    Usage,
)
from crisis_profiles.generation.generator import ContentGenerator
from crisis_profiles.pipeline.base import BatchScheduler, CrisisStore
from crisis_profiles.pipeline.records import build_record, infer_region
from crisis_profiles.pipeline.scheduler import FixedDelayScheduler
from crisis_profiles.preprocess.preprocessor import ContentPreprocessor
from crisis_profiles.quality.controller import QualityController
from crisis_profiles.run_logger import RunLogger

logger = logging.getLogger(__name__)


def _coerce_articles(raw_articles: Iterable[Any] | None) -> tuple[list[RawArticle], int]:
    """Convert articles to RawArticle, counting entries that are not mappings."""
    articles: list[RawArticle] = []
    skipped = 0
    for article in raw_articles or ():
        if isinstance(article, RawArticle):
            articles.append(article)
        elif isinstance(article, Mapping):
            articles.append(RawArticle.from_dict(article))
        else:
            skipped += 1
    return (articles, skipped)


def _input_country(item: Any) -> str:
    if isinstance(item, CountryInput):
        return item.country
    if isinstance(item, Mapping) and item.get("country") is not None:
        return str(item["country"])
    return ""


def apply_process_limit(inputs: Iterable[Any], limit: int | None) -> list[Any]:
    """Keep the first ``limit`` batch inputs, or all of them when limit is None."""
    items = list(inputs)
    if limit is not None and len(items) > limit:
        logger.info(f"[Pipeline] Process limit {limit} reached, skipping {len(items) - limit}")
        return items[:limit]
    return items


class ContentPipeline:
    """Turn raw reports for a country into a persisted crisis record.

    Flow per country:
    1. Reject inputs with fewer than ``min_articles_required`` articles
    2. Preprocess and aggregate the articles
    3. Reject if no language model is configured
    4. Generate the swipe card, then the detailed view conditioned on it
    5. Run quality control (if enabled)
    6. Persist the record according to the review policy

    Validation errors and a failed quality control are reported on the
    result but do not stop persistence. Any unexpected exception in steps
    2-6 turns into a failed result.

    Args:
        store: Public crisis record store.
        generator: Content generator, or None when no language model is configured.
        preprocessor: Article preprocessor.
        quality_controller: Quality controller.
        config: Orchestrator settings.
        scheduler: Pacing between countries in a batch.
        review_store: Store for records held back under the ``hold`` review policy.
        run_logger: Optional RunLogger for intermediate result logging.
    """

    def __init__(
        self,
        store: CrisisStore,
        generator: ContentGenerator | None,
        *,
        preprocessor: ContentPreprocessor | None = None,
        quality_controller: QualityController | None = None,
        config: PipelineConfig | None = None,
        scheduler: BatchScheduler | None = None,
        review_store: CrisisStore | None = None,
        run_logger: RunLogger | None = None,
    ) -> None:
        self._store = store
        self._generator = generator
        self._preprocessor = preprocessor or ContentPreprocessor()
        self._quality = quality_controller or QualityController()
        self._config = config or PipelineConfig()
        self._scheduler = scheduler or FixedDelayScheduler()
        self._review_store = review_store
        self._run_logger = run_logger

        if self._config.review_policy == ReviewPolicy.HOLD and review_store is None:
            logger.warning(
                "Review policy 'hold' has no review store; "
                "failing records will be published with needsReview set"
            )

    async def process_country(
        self,
        country: str,
        region: str,
        raw_articles: Iterable[RawArticle | Mapping[str, Any]],
    ) -> PipelineResult:
        """Run the full pipeline for one country. Never raises.

        Articles that are not mappings are skipped with a warning.
        """
        cfg = self._config
        errors: list[str] = []
        warnings: list[str] = []
        usage = Usage()

        try:
            region = region or infer_region(country)
            articles, skipped = _coerce_articles(raw_articles)
        except Exception as e:
            logger.error(f"[Pipeline] Invalid input for {country}: {e}")
            return PipelineResult(False, country, errors=[f"Invalid input: {e}"])

        if self._run_logger:
            self._run_logger.start_run(country, region, len(articles))

        if skipped:
            warnings.append(f"Skipped {skipped} malformed articles")
            logger.warning(f"[Pipeline] {country}: {warnings[-1]}")

        if len(articles) < cfg.min_articles_required:
            errors.append(
                f"Insufficient articles: {len(articles)} (minimum: {cfg.min_articles_required})"
            )
            logger.info(f"[Pipeline] Skipping {country}: {errors[-1]}")
            return self._finish(PipelineResult(False, country, errors=errors, warnings=warnings))

        try:
            # Step 2: preprocess
            logger.info(f"[Pipeline] Preprocessing {len(articles)} articles for {country}")
            t0 = time.monotonic()
            processed = self._preprocessor.preprocess_articles(articles)
            context = self._preprocessor.aggregate(processed)
            if self._run_logger:
                self._run_logger.log_stage(
                    stage="preprocess",
                    component=type(self._preprocessor).__name__,
                    input_data={"article_count": len(articles)},
                    output_data=context,
                    usage=None,
                    duration_seconds=time.monotonic() - t0,
                )

            if context.total_word_count < cfg.min_total_word_count:
                warnings.append("Low total word count - may result in thin content")

            # Step 3: language model guard
            if self._generator is None:
                errors.append("Language model service not configured - cannot generate content")
                return self._finish(
                    PipelineResult(False, country, errors=errors, warnings=warnings)
                )

            # Step 4: generate
            logger.info(f"[Pipeline] Generating swipe card for {country}")
            t0 = time.monotonic()
            card = await self._generator.generate_swipe_card(country, region, processed)
            usage += card.usage
            errors.extend(card.validation.errors)
            warnings.extend(card.validation.warnings)
            if self._run_logger:
                self._run_logger.log_stage(
                    stage="swipe_card",
                    component=type(self._generator).__name__,
                    input_data={"country": country, "region": region},
                    output_data={"content": card.content, "validation": card.validation},
                    usage=card.usage,
                    duration_seconds=time.monotonic() - t0,
                )

            logger.info(f"[Pipeline] Generating detailed view for {country}")
            t0 = time.monotonic()
            view = await self._generator.generate_detailed_view(
                country, region, processed, card.content
            )
            usage += view.usage
            errors.extend(view.validation.errors)
            warnings.extend(view.validation.warnings)
            if self._run_logger:
                self._run_logger.log_stage(
                    stage="detailed_view",
                    component=type(self._generator).__name__,
                    input_data={"country": country, "region": region},
                    output_data={"content": view.content, "validation": view.validation},
                    usage=view.usage,
                    duration_seconds=time.monotonic() - t0,
                )

            # Step 5: quality control
            quality_score = 100
            if cfg.enable_quality_control:
                logger.info(f"[Pipeline] Running quality control for {country}")
                t0 = time.monotonic()
                qc = self._quality.run_quality_control(card.content, view.content, processed)
                quality_score = qc.overall_score
                warnings.extend(qc.factcheck_warnings)
                if not qc.passed:
                    errors.append(f"Quality control failed: score {qc.overall_score}/100")
                if self._run_logger:
                    self._run_logger.log_stage(
                        stage="quality_control",
                        component=type(self._quality).__name__,
                        input_data={"article_count": len(processed)},
                        output_data=qc,
                        usage=None,
                        duration_seconds=time.monotonic() - t0,
                    )

            # Step 6: persist
            needs_review = quality_score < self._quality.pass_threshold
            record = build_record(
                country=country,
                region=region,
                swipe_card=card.content,
                detailed_view=view.content,
                context=context,
                quality_score=quality_score,
                warnings=warnings,
                needs_review=needs_review,
                source=cfg.record_source,
                source_urls=list(dict.fromkeys(a.url for a in processed if a.url)),
            )
            target: CrisisStore = self._store
            if (
                needs_review
                and cfg.review_policy == ReviewPolicy.HOLD
                and self._review_store is not None
            ):
                target = self._review_store
            hold = target is not self._store
            t0 = time.monotonic()
            conflict_id = await target.create(record)
            if hold:
                logger.info(
                    f"[Pipeline] Held {country} for review as {conflict_id} "
                    f"(quality: {quality_score}/100)"
                )
            else:
                logger.info(
                    f"[Pipeline] Published {conflict_id} for {country} "
                    f"(quality: {quality_score}/100)"
                )
            if self._run_logger:
                self._run_logger.log_stage(
                    stage="persist",
                    component=type(target).__name__,
                    input_data={"needs_review": needs_review, "held_for_review": hold},
                    output_data={"conflict_id": conflict_id},
                    usage=None,
                    duration_seconds=time.monotonic() - t0,
                )

            return self._finish(
                PipelineResult(
                    success=True,
                    country=country,
                    conflict_id=conflict_id,
                    errors=errors,
                    warnings=warnings,
                    quality_score=quality_score,
                    held_for_review=hold,
                    usage=usage,
                )
            )
        except Exception as e:
            logger.error(f"[Pipeline] Error processing {country}: {e}")
            return self._finish(
                PipelineResult(
                    False,
                    country,
                    errors=[f"Processing error: {e}"],
                    warnings=warnings,
                    usage=usage,
                )
            )

    async def process_batch(
        self,
        inputs: Iterable[CountryInput | Mapping[str, Any]],
    ) -> list[PipelineResult]:
        """Process countries one after another, pacing with the scheduler.

        Returns one result per input in input order. Mappings are read as
        ``{country, region, articles}``; an entry that cannot be read fails
        on its own without affecting the rest of the batch. Callers apply
        ``process_limit`` beforehand with ``apply_process_limit``.
        """
        items = list(inputs)
        logger.info(f"[Pipeline] Processing batch of {len(items)} countries")
        results: list[PipelineResult] = []
        for item in items:
            country = _input_country(item)
            try:
                if isinstance(item, CountryInput):
                    region, articles = item.region, item.articles
                elif isinstance(item, Mapping):
                    region = str(item.get("region") or "")
                    articles = item.get("articles") or ()
                else:
                    raise TypeError(f"expected a country mapping, got {type(item).__name__}")
            except Exception as e:
                logger.error(f"[Pipeline] Invalid input for {country or 'unnamed country'}: {e}")
                result = PipelineResult(False, country, errors=[f"Invalid input: {e}"])
            else:
                try:
                    result = await self.process_country(country, region, articles)
                except Exception as e:
                    logger.error(f"[Pipeline] Unhandled error for {country}: {e}")
                    result = PipelineResult(False, country, errors=[f"Processing error: {e}"])
            results.append(result)
            await self._scheduler.wait()

        return results

    def _finish(self, result: PipelineResult) -> PipelineResult:
        if self._run_logger:
            self._run_logger.finish_run(result)
        return result


def summarize_results(results: list[PipelineResult]) -> dict[str, Any]:
    """Counts and per-country outcomes for operator reporting."""
    usage = Usage()
    for r in results:
        usage += r.usage
    return {
        "total": len(results),
        "successful": sum(1 for r in results if r.success),
        "failed": sum(1 for r in results if not r.success),
        "heldForReview": sum(1 for r in results if r.held_for_review),
        "inputTokens": usage.input_tokens,
        "outputTokens": usage.output_tokens,
        "results": [r.to_dict() for r in results],
    }
