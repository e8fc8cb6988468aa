"""Tests for ContentGenerator."""

from typing import Any

import pytest

from conftest import FakeLanguageModel
from crisis_profiles.config import GeneratorConfig
from crisis_profiles.data import (
    DetailedViewContent,
    ProcessedArticle,
    SwipeCardContent,
    ValidationResult,
)
from crisis_profiles.errors import GenerationFailure
from crisis_profiles.generation import ContentGenerator, GenerationResult, prepare_context


@pytest.fixture
def articles() -> list[ProcessedArticle]:
    return [
        ProcessedArticle(
            title=f"Report {i}",
            body="Floods displaced families in Testland. " * 20,
            source="OCHA",
            date="2025-03-01" if i == 0 else None,
        )
        for i in range(3)
    ]


@pytest.fixture
def generator(fake_model: FakeLanguageModel) -> ContentGenerator:
    return ContentGenerator(fake_model)


class TestPrepareContext:
    """Tests for prepare_context."""

    def test_includes_article_fields(self, articles: list[ProcessedArticle]) -> None:
        context = prepare_context(articles[:1], 10_000)
        assert "SOURCE: OCHA" in context
        assert "TITLE: Report 0" in context
        assert "DATE: 2025-03-01" in context
        assert "CREDIBILITY: news_media" in context
        assert "KEY ENTITIES: " in context

    def test_missing_date_is_unknown(self, articles: list[ProcessedArticle]) -> None:
        context = prepare_context(articles[1:2], 10_000)
        assert "DATE: Unknown" in context

    def test_stops_before_exceeding_budget(self, articles: list[ProcessedArticle]) -> None:
        one = len(prepare_context(articles[:1], 10_000))
        context = prepare_context(articles, one * 2 + 10)
        assert len(context) <= one * 2 + 10
        assert "Report 1" in context
        assert "Report 2" not in context

    def test_first_article_too_large_gives_empty_context(
        self, articles: list[ProcessedArticle]
    ) -> None:
        assert prepare_context(articles, 50) == ""


class TestGenerateSwipeCard:
    """Tests for ContentGenerator.generate_swipe_card."""

    async def test_returns_validated_content(
        self, generator: ContentGenerator, articles: list[ProcessedArticle]
    ) -> None:
        result = await generator.generate_swipe_card("Testland", "Other", articles)

        assert isinstance(result, GenerationResult)
        assert isinstance(result.content, SwipeCardContent)
        assert result.validation == ValidationResult()
        assert result.usage.input_tokens == 100
        assert '"headline"' in result.raw_response

    async def test_prompt_carries_country_and_context(
        self,
        generator: ContentGenerator,
        fake_model: FakeLanguageModel,
        articles: list[ProcessedArticle],
    ) -> None:
        await generator.generate_swipe_card("Testland", "", articles)

        call = fake_model.calls[0]
        assert call["name"] == "swipe_card"
        assert "Testland" in call["prompt"]
        assert "region unknown" in call["prompt"]
        assert "Floods displaced families" in call["prompt"]
        assert call["schema"]["additionalProperties"] is False

    async def test_context_respects_budget(
        self, fake_model: FakeLanguageModel, articles: list[ProcessedArticle]
    ) -> None:
        generator = ContentGenerator(fake_model, GeneratorConfig(swipe_card_context_chars=10))
        await generator.generate_swipe_card("Testland", "Other", articles)
        assert "SOURCE: OCHA" not in fake_model.calls[0]["prompt"]

    async def test_schema_mismatch_raises(
        self, swipe_card_payload: dict[str, Any], articles: list[ProcessedArticle]
    ) -> None:
        del swipe_card_payload["headline"]
        generator = ContentGenerator(FakeLanguageModel({"swipe_card": swipe_card_payload}))

        with pytest.raises(GenerationFailure, match="does not match schema"):
            await generator.generate_swipe_card("Testland", "Other", articles)

    async def test_service_failure_propagates(
        self, failing_model: FakeLanguageModel, articles: list[ProcessedArticle]
    ) -> None:
        generator = ContentGenerator(failing_model)
        with pytest.raises(GenerationFailure, match="service unavailable"):
            await generator.generate_swipe_card("Testland", "Other", articles)

    async def test_unexpected_error_is_wrapped(self, articles: list[ProcessedArticle]) -> None:
        model = FakeLanguageModel({"swipe_card": RuntimeError("socket closed")})
        generator = ContentGenerator(model)
        with pytest.raises(GenerationFailure, match="Failed to generate swipe_card"):
            await generator.generate_swipe_card("Testland", "Other", articles)


class TestGenerateDetailedView:
    """Tests for ContentGenerator.generate_detailed_view."""

    async def test_conditions_on_swipe_card(
        self,
        generator: ContentGenerator,
        fake_model: FakeLanguageModel,
        swipe_card: SwipeCardContent,
        articles: list[ProcessedArticle],
    ) -> None:
        result = await generator.generate_detailed_view("Testland", "Other", articles, swipe_card)

        assert isinstance(result.content, DetailedViewContent)
        assert result.validation.is_valid
        call = fake_model.calls[0]
        assert call["name"] == "detailed_view"
        assert swipe_card.headline in call["prompt"]
        assert '"emotionalHook"' in call["prompt"]


class TestValidateSwipeCard:
    """Tests for ContentGenerator.validate_swipe_card."""

    def test_valid_card(self, generator: ContentGenerator, swipe_card: SwipeCardContent) -> None:
        assert generator.validate_swipe_card(swipe_card) == ValidationResult()

    def test_short_headline_warns(
        self, generator: ContentGenerator, swipe_card: SwipeCardContent
    ) -> None:
        card = swipe_card.model_copy(update={"headline": "Floods"})
        result = generator.validate_swipe_card(card)
        assert result.is_valid
        assert result.warnings == ("Headline length (6) should be 40-60 characters",)

    def test_summary_word_count_warns(
        self, generator: ContentGenerator, swipe_card: SwipeCardContent
    ) -> None:
        card = swipe_card.model_copy(update={"summary": "Too short."})
        result = generator.validate_swipe_card(card)
        assert result.warnings == ("Summary word count (2) should be 30-80 words",)

    def test_group_and_need_counts_warn(
        self, generator: ContentGenerator, swipe_card: SwipeCardContent
    ) -> None:
        card = swipe_card.model_copy(
            update={
                "affected_groups": swipe_card.affected_groups[:1],
                "key_needs": swipe_card.key_needs * 2,
            }
        )
        result = generator.validate_swipe_card(card)
        assert "Should have 3-5 affected groups, got 1" in result.warnings
        assert "Should have 3-5 key needs, got 6" in result.warnings

    def test_no_sources_is_error(
        self, generator: ContentGenerator, swipe_card: SwipeCardContent
    ) -> None:
        card = swipe_card.model_copy(update={"sources_used": []})
        result = generator.validate_swipe_card(card)
        assert not result.is_valid
        assert result.errors == ("No sources referenced",)


class TestValidateDetailedView:
    """Tests for ContentGenerator.validate_detailed_view."""

    def test_valid_view(
        self, generator: ContentGenerator, detailed_view: DetailedViewContent
    ) -> None:
        assert generator.validate_detailed_view(detailed_view) == ValidationResult()

    def test_empty_view_warns_but_never_errors(
        self, generator: ContentGenerator, detailed_view: DetailedViewContent
    ) -> None:
        view = detailed_view.model_copy(
            update={"extended_summary": "Brief.", "timeline": [], "how_organizations_help": []}
        )
        result = generator.validate_detailed_view(view)
        assert result.errors == ()
        assert result.warnings == (
            "Extended summary word count (1) should be 300-500 words",
            "Timeline should have at least some events",
            "Should describe how organizations are helping",
        )
