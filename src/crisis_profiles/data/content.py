"""Pydantic schemas for language-model generated content.

Both artifacts are closed: every field is required and unknown fields are
rejected, so a response that drifts from the schema fails validation rather
than being partially accepted. Field names are snake_case in Python and
camelCase on the wire.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

Urgency = Literal["critical", "high", "moderate"]


class _Content(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_payload(self) -> dict[str, Any]:
        """Dump to the camelCase JSON structure used on the wire and in storage."""
        return self.model_dump(mode="json", by_alias=True)


# ============================================================
# Swipe card
# ============================================================


class AffectedGroup(_Content):
    group: str
    count: str
    impact: str
    urgency: Urgency


class KeyNeed(_Content):
    need: str
    description: str
    icon: str


class SwipeCardContent(_Content):
    """Short-form profile shown first to an end user."""

    headline: str
    summary: str
    affected_groups: list[AffectedGroup]
    key_needs: list[KeyNeed]
    emotional_hook: str
    sources_used: list[str]
    content_warnings: list[str]


# ============================================================
# Detailed view
# ============================================================


class TimelineEvent(_Content):
    date: str
    event: str
    significance: str


class CurrentSituation(_Content):
    overview: str
    recent_developments: list[str]
    outlook: str


class OrganizationIntervention(_Content):
    intervention_type: str
    description: str
    impact_example: str
    gaps: str


class ContextBackground(_Content):
    root_causes: str
    key_actors: str
    regional_impact: str


class WaysToHelp(_Content):
    donation_impact: str
    urgent_needs: list[str]
    long_term_support: str


class DetailedViewContent(_Content):
    """Long-form profile shown on request, consistent with the swipe card."""

    extended_summary: str
    timeline: list[TimelineEvent]
    current_situation: CurrentSituation
    how_organizations_help: list[OrganizationIntervention]
    context_background: ContextBackground
    ways_to_help: WaysToHelp


def _inline(node: Any, defs: dict[str, Any]) -> Any:
    if isinstance(node, dict):
        ref = node.get("$ref")
        if isinstance(ref, str):
            return _inline(defs[ref.rsplit("/", 1)[-1]], defs)
        return {
            key: _inline(value, defs)
            for key, value in node.items()
            # "title" is only dropped where it is schema metadata, not a property name
            if key != "$defs" and not (key == "title" and isinstance(value, str))
        }
    if isinstance(node, list):
        return [_inline(item, defs) for item in node]
    return node


def strict_json_schema(model: type[BaseModel]) -> dict[str, Any]:
    """Return the closed, self-contained JSON schema for a content model.

    References to nested models are inlined and every object keeps
    ``additionalProperties: false`` with all of its properties required.
    """
    schema = model.model_json_schema(by_alias=True)
    return _inline(schema, schema.get("$defs", {}))
