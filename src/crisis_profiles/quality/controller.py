"""Heuristic bias, emotional tone and fact-check scoring.

Scores start at 100 and lose fixed penalties per finding, floored at 0.
All term matching is case-insensitive substring matching, so "aid" also
matches inside longer words. Penalties for listed terms apply once per
occurrence.
"""

import logging
import re

from crisis_profiles.config.models import QualityConfig
from crisis_profiles.data import (
    DetailedViewContent,
    ProcessedArticle,
    QualityControlResult,
    Sentiment,
    SwipeCardContent,
)

logger = logging.getLogger(__name__)

_GENERATED_NUMBER_RE = re.compile(
    r"\d+(?:,\d+)*(?:\.\d+)?(?:\s*(?:million|thousand|billion|k|m))?", re.IGNORECASE
)
_SOURCE_NUMBER_RE = re.compile(r"\d+(?:,\d+)*(?:\.\d+)?")


def _bias_text(swipe_card: SwipeCardContent, detailed_view: DetailedViewContent) -> str:
    return f"{swipe_card.summary} {detailed_view.extended_summary}"


def _tone_text(swipe_card: SwipeCardContent) -> str:
    return f"{swipe_card.headline} {swipe_card.summary} {swipe_card.emotional_hook}"


def _source_text(articles: list[ProcessedArticle]) -> str:
    return " ".join(a.body.lower() for a in articles)


class QualityController:
    """Score generated crisis content against its source articles.

    Never raises: every outcome is a score or a warning string.

    Args:
        config: Term lists, penalties and the pass threshold.
    """

    def __init__(self, config: QualityConfig | None = None) -> None:
        self._config = config or QualityConfig()
        self._poverty_porn = {
            name: re.compile(pattern, re.IGNORECASE)
            for name, pattern in self._config.poverty_porn_patterns.items()
        }
        self._severe_claims = {
            term: re.compile(re.escape(term), re.IGNORECASE)
            for term in self._config.severe_claim_terms
        }

    @property
    def pass_threshold(self) -> int:
        return self._config.quality_pass_threshold

    # ------------------------------------------------------------
    # Bias
    # ------------------------------------------------------------

    def detect_bias(
        self,
        swipe_card: SwipeCardContent,
        detailed_view: DetailedViewContent,
        articles: list[ProcessedArticle],
    ) -> int:
        score, _ = self._bias(swipe_card, detailed_view, articles)
        return score

    def _bias(
        self,
        swipe_card: SwipeCardContent,
        detailed_view: DetailedViewContent,
        articles: list[ProcessedArticle],
    ) -> tuple[int, list[str]]:
        cfg = self._config
        score = 100
        issues: list[str] = []
        text = _bias_text(swipe_card, detailed_view).lower()

        negative = sum(1 for a in articles if a.sentiment == Sentiment.NEGATIVE)
        positive = sum(1 for a in articles if a.sentiment == Sentiment.POSITIVE)
        neutral = sum(1 for a in articles if a.sentiment == Sentiment.NEUTRAL)
        if negative > positive * 2 and negative > neutral:
            if any(term in text for term in cfg.optimistic_terms):
                score -= cfg.optimism_penalty
                issues.append("Overly positive tone given negative source sentiment")

        for term in cfg.political_bias_terms:
            hits = text.count(term)
            if hits:
                score -= cfg.political_term_penalty * hits
                issues.append(f'Political bias keyword detected: "{term}"')

        if not any(phrase in text for phrase in cfg.attribution_phrases):
            score -= cfg.missing_attribution_penalty
            issues.append("Lacks attribution or source references")

        if issues:
            logger.warning(f"[QC] Bias issues found: {'; '.join(issues)}")
        return (max(0, score), issues)

    # ------------------------------------------------------------
    # Emotional tone
    # ------------------------------------------------------------

    def analyze_emotional_tone(self, swipe_card: SwipeCardContent) -> int:
        score, _ = self._tone(swipe_card)
        return score

    def _tone(self, swipe_card: SwipeCardContent) -> tuple[int, list[str]]:
        cfg = self._config
        score = 100
        issues: list[str] = []
        text = _tone_text(swipe_card).lower()

        distinct = 0
        for term in cfg.exploitative_terms:
            hits = text.count(term)
            if hits:
                distinct += 1
                score -= cfg.exploitative_term_penalty * hits
                issues.append(f'Exploitative term: "{term}"')

        if distinct > cfg.sensationalism_threshold:
            score -= cfg.sensationalism_penalty
            issues.append("Excessive sensationalism")

        for name, pattern in self._poverty_porn.items():
            if pattern.search(text):
                score -= cfg.poverty_porn_penalty
                issues.append(f'Poverty porn pattern: "{name}"')

        has_agency = any(term in text for term in cfg.agency_terms)
        victim_terms = sum(1 for term in cfg.victim_terms if term in text)
        if victim_terms >= cfg.victim_framing_min_terms and not has_agency:
            score -= cfg.victim_framing_penalty
            issues.append("Lacks agency - focuses only on victimhood")

        if not any(term in text for term in cfg.solution_terms):
            score -= cfg.missing_solution_penalty
            issues.append("Lacks solution-oriented language")

        if issues:
            logger.warning(f"[QC] Emotional tone issues: {'; '.join(issues)}")
        return (max(0, score), issues)

    # ------------------------------------------------------------
    # Fact check
    # ------------------------------------------------------------

    def check_facts(
        self,
        swipe_card: SwipeCardContent,
        detailed_view: DetailedViewContent,
        articles: list[ProcessedArticle],
    ) -> list[str]:
        """Flag generated claims that the source articles do not support."""
        cfg = self._config
        warnings: list[str] = []
        source_text = _source_text(articles)
        generated = _bias_text(swipe_card, detailed_view)

        if not _GENERATED_NUMBER_RE.search(generated):
            warnings.append("No specific statistics provided - content may be too vague")
        elif not _SOURCE_NUMBER_RE.search(source_text):
            warnings.append("Generated content contains statistics not found in source material")

        has_large_scale_source = any(t in source_text for t in cfg.large_scale_source_terms)
        for group in swipe_card.affected_groups:
            name = group.group.lower()
            # Naive singular: "refugees" -> "refugee"
            if name not in source_text and name[:-1] not in source_text:
                warnings.append(f'Affected group "{group.group}" not found in source articles')

            impact = group.impact.lower()
            overstated = any(t in impact for t in cfg.large_scale_impact_terms)
            if overstated and not has_large_scale_source:
                warnings.append(
                    f'Large-scale impact for "{group.group}" not supported by source material'
                )

        for claim, pattern in self._severe_claims.items():
            if pattern.search(generated) and not pattern.search(source_text):
                warnings.append(f'Critical claim "{claim}" not supported by source material')

        if detailed_view.timeline:
            min_len = cfg.timeline_keyword_min_length
            matched = 0
            for item in detailed_view.timeline:
                keywords = [w for w in item.event.lower().split(" ") if len(w) > min_len]
                if any(w in source_text for w in keywords):
                    matched += 1
            if matched < len(detailed_view.timeline) / 2:
                warnings.append("Timeline events not well-supported by source material")

        if warnings:
            logger.warning(f"[QC] Fact-check warnings: {'; '.join(warnings)}")
        return warnings

    # ------------------------------------------------------------
    # Combined
    # ------------------------------------------------------------

    def run_quality_control(
        self,
        swipe_card: SwipeCardContent,
        detailed_view: DetailedViewContent,
        articles: list[ProcessedArticle],
    ) -> QualityControlResult:
        bias_score, bias_issues = self._bias(swipe_card, detailed_view, articles)
        tone_score, tone_issues = self._tone(swipe_card)
        factcheck_warnings = self.check_facts(swipe_card, detailed_view, articles)

        # Half-up rounding of the mean of two integers
        overall = (bias_score + tone_score + 1) // 2

        return QualityControlResult(
            bias_score=bias_score,
            emotional_tone_score=tone_score,
            factcheck_warnings=tuple(factcheck_warnings),
            overall_score=overall,
            passed=overall >= self._config.quality_pass_threshold,
            issues=tuple(bias_issues + tone_issues),
        )
