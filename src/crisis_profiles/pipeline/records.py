"""Crisis record assembly helpers."""

from collections.abc import Iterable
from typing import Any

from crisis_profiles.data import (
    AffectedGroup,
    AggregatedContext,
    DetailedViewContent,
    SeverityLevel,
    SwipeCardContent,
)

# Country-name fragments checked in order; first match wins
_REGION_KEYWORDS: list[tuple[str, tuple[str, ...]]] = [
    ("Middle East", ("syria", "yemen", "iraq", "lebanon", "gaza", "palestine")),
    ("Africa", ("somalia", "ethiopia", "kenya", "sudan", "uganda")),
    ("Eastern Europe", ("ukraine", "poland", "belarus")),
    ("South Asia", ("afghanistan", "pakistan", "bangladesh")),
    ("Southeast Asia", ("myanmar", "philippines")),
    ("Africa", ("nigeria", "cameroon", "mali", "burkina", "niger", "chad")),
    ("Caribbean & Latin America", ("haiti", "venezuela", "colombia")),
    ("Central Asia", ("tajikistan", "kyrgyzstan")),
    ("Africa", ("congo", "drc", "central african")),
]


def infer_region(country: str) -> str:
    """Map a country name to a coarse region, or "Other"."""
    lowered = country.lower()
    for region, keywords in _REGION_KEYWORDS:
        if any(k in lowered for k in keywords):
            return region
    return "Other"


def determine_severity(groups: Iterable[AffectedGroup]) -> SeverityLevel:
    """Take the maximum urgency across affected groups."""
    urgencies = {g.urgency for g in groups}
    if "critical" in urgencies:
        return SeverityLevel.CRITICAL
    if "high" in urgencies:
        return SeverityLevel.HIGH
    return SeverityLevel.MODERATE


def build_record(
    *,
    country: str,
    region: str,
    swipe_card: SwipeCardContent,
    detailed_view: DetailedViewContent,
    context: AggregatedContext,
    quality_score: int,
    warnings: list[str],
    needs_review: bool,
    source: str,
    source_urls: list[str],
) -> dict[str, Any]:
    """Assemble the JSON-compatible record handed to a ``CrisisStore``."""
    return {
        "country": country,
        "region": region,
        "title": swipe_card.headline,
        "summary": swipe_card.summary,
        "severityLevel": determine_severity(swipe_card.affected_groups).value,
        "affectedGroups": [g.group for g in swipe_card.affected_groups],
        "source": source,
        "needsReview": needs_review,
        "sourceData": {
            "qualityScore": quality_score,
            "warnings": list(warnings),
            "swipeCard": swipe_card.to_payload(),
            "detailedView": detailed_view.to_payload(),
            "preprocessing": {
                "entities": context.entities.to_dict(),
                "readability": context.avg_readability,
                "sentiment": dict(context.sentiment_distribution),
            },
            "sourceUrls": list(source_urls),
        },
    }
