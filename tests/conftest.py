"""Shared fixtures: a deterministic language model and well-formed content."""

import copy
from typing import Any

import pytest
import spacy

from crisis_profiles.data import (
    APICallUsage,
    DetailedViewContent,
    RawArticle,
    SwipeCardContent,
    Usage,
)
from crisis_profiles.errors import GenerationFailure
from crisis_profiles.preprocess import ContentPreprocessor

# 20 words; repeated 15 times gives a 300-word body
SOURCE_SENTENCE = (
    "Displaced families, children and farmers in Testland received food from aid "
    "agencies after floods affected 120,000 people in river valley."
)


class FakeLanguageModel:
    """Returns canned payloads per artifact name and records every request."""

    def __init__(self, responses: dict[str, Any]) -> None:
        self.responses = responses
        self.calls: list[dict[str, Any]] = []

    async def generate(
        self,
        *,
        name: str,
        schema: dict[str, Any],
        system: str,
        prompt: str,
    ) -> tuple[dict[str, Any], Usage]:
        self.calls.append({"name": name, "schema": schema, "system": system, "prompt": prompt})
        response = self.responses[name]
        if isinstance(response, Exception):
            raise response
        usage = Usage(api_calls=[APICallUsage(model="fake", input_tokens=100, output_tokens=40)])
        return (copy.deepcopy(response), usage)


@pytest.fixture
def swipe_card_payload() -> dict[str, Any]:
    """A swipe card that passes validation and every quality check."""
    return {
        "headline": "Testland floods displace families across the river valley",
        "summary": (
            "According to OCHA, 120,000 people in Testland were displaced by floods in "
            "March 2025. Aid organizations are delivering food, clean water and shelter, "
            "and local communities are supporting relief efforts in the hardest hit "
            "districts of the river valley region today."
        ),
        "affectedGroups": [
            {
                "group": "Displaced families",
                "count": "120,000",
                "impact": "Lost homes to flooding",
                "urgency": "high",
            },
            {
                "group": "Children",
                "count": "45,000",
                "impact": "Schools closed",
                "urgency": "moderate",
            },
            {
                "group": "Farmers",
                "count": "8,000",
                "impact": "Crops destroyed",
                "urgency": "moderate",
            },
        ],
        "keyNeeds": [
            {"need": "Food", "description": "Emergency rations", "icon": "food"},
            {"need": "Shelter", "description": "Temporary housing", "icon": "home"},
            {"need": "Water", "description": "Clean drinking water", "icon": "water"},
        ],
        "emotionalHook": (
            "Families in Testland are rebuilding with the support of their neighbours."
        ),
        "sourcesUsed": ["OCHA", "UNICEF"],
        "contentWarnings": [],
    }


@pytest.fixture
def detailed_view_payload() -> dict[str, Any]:
    """A detailed view whose timeline is grounded in the source articles."""
    return {
        "extendedSummary": " ".join(["Aid workers support families in Testland."] * 60),
        "timeline": [
            {
                "date": "2025-03-01",
                "event": "Floods reach the river valley",
                "significance": "Start of displacement",
            },
            {
                "date": "2025-03-10",
                "event": "Agencies deliver food to families",
                "significance": "First relief",
            },
        ],
        "currentSituation": {
            "overview": "Water levels are falling.",
            "recentDevelopments": ["Roads reopened"],
            "outlook": "Recovery will take months.",
        },
        "howOrganizationsHelp": [
            {
                "interventionType": "Food",
                "description": "Distributing rations",
                "impactExample": "Meals for 10,000 people",
                "gaps": "Remote districts",
            }
        ],
        "contextBackground": {
            "rootCauses": "Seasonal flooding",
            "keyActors": "Local authorities and agencies",
            "regionalImpact": "Trade routes disrupted",
        },
        "waysToHelp": {
            "donationImpact": "$25 feeds a family for a week",
            "urgentNeeds": ["Food", "Shelter"],
            "longTermSupport": "Flood defences",
        },
    }


@pytest.fixture
def swipe_card(swipe_card_payload: dict[str, Any]) -> SwipeCardContent:
    return SwipeCardContent.model_validate(swipe_card_payload)


@pytest.fixture
def detailed_view(detailed_view_payload: dict[str, Any]) -> DetailedViewContent:
    return DetailedViewContent.model_validate(detailed_view_payload)


@pytest.fixture
def fake_model(
    swipe_card_payload: dict[str, Any], detailed_view_payload: dict[str, Any]
) -> FakeLanguageModel:
    return FakeLanguageModel(
        {"swipe_card": swipe_card_payload, "detailed_view": detailed_view_payload}
    )


@pytest.fixture
def failing_model() -> FakeLanguageModel:
    error = GenerationFailure("service unavailable")
    return FakeLanguageModel({"swipe_card": error, "detailed_view": error})


@pytest.fixture
def raw_articles() -> list[RawArticle]:
    """Three 300-word reports about Testland."""
    body = " ".join([SOURCE_SENTENCE] * 15)
    return [
        RawArticle(
            title="Floods in Testland",
            body=body,
            source="OCHA",
            url="https://reliefweb.int/report/1",
            date="2025-03-02",
        ),
        RawArticle(
            title="Testland flood response",
            body=body,
            source="UNICEF",
            url="https://reliefweb.int/report/2",
        ),
        RawArticle(
            title="River valley update",
            body=body,
            source="Testland Herald",
            url="https://reliefweb.int/report/1",
        ),
    ]


@pytest.fixture
def blank_nlp() -> spacy.Language:
    """Blank English pipeline with a few rule-based entities."""
    nlp = spacy.blank("en")
    ruler = nlp.add_pipe("entity_ruler")
    ruler.add_patterns(
        [
            {"label": "GPE", "pattern": "Testland"},
            {"label": "ORG", "pattern": "UNICEF"},
            {"label": "ORG", "pattern": "OCHA"},
            {"label": "PERSON", "pattern": "Jane Doe"},
        ]
    )
    return nlp


@pytest.fixture
def preprocessor(blank_nlp: spacy.Language) -> ContentPreprocessor:
    """Preprocessor with neutral sentiment and no model download."""
    return ContentPreprocessor(nlp=blank_nlp, sentiment_scorer=lambda text: 0)
