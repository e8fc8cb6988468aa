"""Swipe card and detailed view generation with structural validation."""

import json
import logging
from dataclasses import dataclass
from typing import Generic, TypeVar

from pydantic import BaseModel, ValidationError

from crisis_profiles.config.models import GeneratorConfig
from crisis_profiles.data import (
    DetailedViewContent,
    ProcessedArticle,
    SwipeCardContent,
    Usage,
    ValidationResult,
    strict_json_schema,
)
from crisis_profiles.errors import GenerationFailure
from crisis_profiles.generation.base import LanguageModel
from crisis_profiles.generation.prompts import (
    ARTICLE_CONTEXT_TEMPLATE,
    DETAILED_VIEW_SYSTEM_PROMPT,
    DETAILED_VIEW_USER_PROMPT,
    SWIPE_CARD_SYSTEM_PROMPT,
    SWIPE_CARD_USER_PROMPT,
)

logger = logging.getLogger(__name__)

ContentT = TypeVar("ContentT", bound=BaseModel)


@dataclass(frozen=True)
class GenerationResult(Generic[ContentT]):
    """A generated artifact with its validation annotations."""

    content: ContentT
    validation: ValidationResult
    raw_response: str
    usage: Usage


def _outside(value: int, bounds: tuple[int, int]) -> bool:
    low, high = bounds
    return value < low or value > high


def prepare_context(articles: list[ProcessedArticle], max_length: int) -> str:
    """Concatenate article blocks greedily until the next one would exceed ``max_length``."""
    context = ""
    for article in articles:
        block = ARTICLE_CONTEXT_TEMPLATE.format(
            source=article.source,
            title=article.title,
            date=article.date or "Unknown",
            credibility=article.credibility.value,
            body=article.body,
            entities=json.dumps(article.entities.to_dict()),
        )
        if len(context) + len(block) > max_length:
            break
        context += block
    return context


class ContentGenerator:
    """Generate crisis profile content through a structured language model.

    Each artifact is one atomic request. A service error or a response that
    does not validate against the content schema raises ``GenerationFailure``;
    nothing is retried here.

    Args:
        model: Structured language model to call.
        config: Context budgets and validation ranges.
    """

    def __init__(self, model: LanguageModel, config: GeneratorConfig | None = None) -> None:
        self._model = model
        self._config = config or GeneratorConfig()

    async def generate_swipe_card(
        self,
        country: str,
        region: str,
        articles: list[ProcessedArticle],
    ) -> GenerationResult[SwipeCardContent]:
        cfg = self._config
        prompt = SWIPE_CARD_USER_PROMPT.format(
            country=country,
            region=region or "region unknown",
            context=prepare_context(articles, cfg.swipe_card_context_chars),
            headline_min=cfg.headline_chars[0],
            headline_max=cfg.headline_chars[1],
            summary_min=cfg.summary_words[0],
            summary_max=cfg.summary_words[1],
            groups_min=cfg.affected_groups[0],
            groups_max=cfg.affected_groups[1],
            needs_min=cfg.key_needs[0],
            needs_max=cfg.key_needs[1],
        )
        content, raw, usage = await self._request(
            "swipe_card", SwipeCardContent, SWIPE_CARD_SYSTEM_PROMPT, prompt
        )
        return GenerationResult(
            content=content,
            validation=self.validate_swipe_card(content),
            raw_response=raw,
            usage=usage,
        )

    async def generate_detailed_view(
        self,
        country: str,
        region: str,
        articles: list[ProcessedArticle],
        swipe_card: SwipeCardContent,
    ) -> GenerationResult[DetailedViewContent]:
        cfg = self._config
        prompt = DETAILED_VIEW_USER_PROMPT.format(
            country=country,
            region=region or "region unknown",
            swipe_card=json.dumps(swipe_card.to_payload(), indent=2),
            context=prepare_context(articles, cfg.detailed_view_context_chars),
            summary_min=cfg.extended_summary_words[0],
            summary_max=cfg.extended_summary_words[1],
        )
        content, raw, usage = await self._request(
            "detailed_view", DetailedViewContent, DETAILED_VIEW_SYSTEM_PROMPT, prompt
        )
        return GenerationResult(
            content=content,
            validation=self.validate_detailed_view(content),
            raw_response=raw,
            usage=usage,
        )

    async def _request(
        self,
        name: str,
        model_cls: type[ContentT],
        system: str,
        prompt: str,
    ) -> tuple[ContentT, str, Usage]:
        try:
            payload, usage = await self._model.generate(
                name=name,
                schema=strict_json_schema(model_cls),
                system=system,
                prompt=prompt,
            )
        except GenerationFailure:
            raise
        except Exception as e:
            raise GenerationFailure(f"Failed to generate {name}: {e}") from e

        raw = json.dumps(payload)
        try:
            content = model_cls.model_validate(payload)
        except ValidationError as e:
            logger.warning(f"{name} response does not match schema: {e.error_count()} errors")
            msg = f"Failed to generate {name}: response does not match schema"
            raise GenerationFailure(msg) from e
        return (content, raw, usage)

    def validate_swipe_card(self, content: SwipeCardContent) -> ValidationResult:
        """Check card lengths and counts. Only ``sourcesUsed`` can produce an error."""
        cfg = self._config
        errors: list[str] = []
        warnings: list[str] = []

        headline_len = len(content.headline)
        if _outside(headline_len, cfg.headline_chars):
            low, high = cfg.headline_chars
            warnings.append(f"Headline length ({headline_len}) should be {low}-{high} characters")

        summary_words = len(content.summary.split())
        if _outside(summary_words, cfg.summary_words):
            low, high = cfg.summary_words
            warnings.append(f"Summary word count ({summary_words}) should be {low}-{high} words")

        groups = len(content.affected_groups)
        if _outside(groups, cfg.affected_groups):
            low, high = cfg.affected_groups
            warnings.append(f"Should have {low}-{high} affected groups, got {groups}")

        needs = len(content.key_needs)
        if _outside(needs, cfg.key_needs):
            low, high = cfg.key_needs
            warnings.append(f"Should have {low}-{high} key needs, got {needs}")

        if not content.sources_used:
            errors.append("No sources referenced")

        return ValidationResult(errors=tuple(errors), warnings=tuple(warnings))

    def validate_detailed_view(self, content: DetailedViewContent) -> ValidationResult:
        """Check detailed view lengths. Never produces errors."""
        cfg = self._config
        warnings: list[str] = []

        summary_words = len(content.extended_summary.split())
        if _outside(summary_words, cfg.extended_summary_words):
            low, high = cfg.extended_summary_words
            warnings.append(
                f"Extended summary word count ({summary_words}) should be {low}-{high} words"
            )

        if not content.timeline:
            warnings.append("Timeline should have at least some events")

        if not content.how_organizations_help:
            warnings.append("Should describe how organizations are helping")

        return ValidationResult(warnings=tuple(warnings))
