"""Article cleaning, analysis and aggregation."""

import logging
from collections import Counter
from collections.abc import Callable, Iterable
from dataclasses import asdict
from typing import TypeVar

import spacy
from afinn import Afinn
from spacy.tokens import Doc

from crisis_profiles.config.models import PreprocessorConfig
from crisis_profiles.data import (
    AggregatedContext,
    Credibility,
    Entities,
    ProcessedArticle,
    RawArticle,
    ScrapedArticle,
    Sentiment,
)
from crisis_profiles.preprocess.nlp import get_nlp
from crisis_profiles.preprocess.text import (
    clean_text,
    extract_dates,
    flesch_reading_ease,
    unique,
    words,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Sentiment is scored on a prefix only to bound cost on long reports
SENTIMENT_CHAR_LIMIT = 5000
POSITIVE_THRESHOLD = 1
NEGATIVE_THRESHOLD = -1

LOCATION_LABELS = frozenset({"GPE", "LOC", "FAC"})
ORGANIZATION_LABELS = frozenset({"ORG"})
PERSON_LABELS = frozenset({"PERSON"})

_UN_MARKERS = ("un ", "ocha", "unhcr", "unicef")
_ACADEMIC_MARKERS = ("acled", "icrc", "research")


def classify_credibility(source: str) -> Credibility:
    """Classify a free-text provider name by keyword matching."""
    lowered = source.lower().strip()
    if lowered == "un" or lowered.endswith(" un") or any(m in lowered for m in _UN_MARKERS):
        return Credibility.VERIFIED_UN
    if any(m in lowered for m in _ACADEMIC_MARKERS):
        return Credibility.VERIFIED_ACADEMIC
    return Credibility.NEWS_MEDIA


def to_scraped(article: RawArticle) -> ScrapedArticle:
    return ScrapedArticle(**asdict(article), credibility=classify_credibility(article.source))


class ContentPreprocessor:
    """Clean and analyze raw articles, then aggregate them into a context.

    No article is ever rejected here: each analysis step that fails is
    logged and degrades to an empty or zero value, so one malformed article
    cannot abort a batch.

    Args:
        config: Caps and the spaCy model name.
        nlp: spaCy pipeline to use (defaults to the configured model).
        sentiment_scorer: Callable returning a lexicon polarity score for a
            text (defaults to AFINN).
    """

    def __init__(
        self,
        config: PreprocessorConfig | None = None,
        *,
        nlp: spacy.Language | None = None,
        sentiment_scorer: Callable[[str], float] | None = None,
    ) -> None:
        self._config = config or PreprocessorConfig()
        self._nlp = nlp
        self._sentiment_scorer = sentiment_scorer or Afinn().score

    @property
    def nlp(self) -> spacy.Language:
        if self._nlp is None:
            self._nlp = get_nlp(self._config.spacy_model)
        return self._nlp

    # ------------------------------------------------------------
    # Single-text analysis
    # ------------------------------------------------------------

    def clean(self, text: str) -> str:
        return clean_text(text)

    def extract_entities(self, text: str) -> Entities:
        return self._safe("entities", lambda: self._entities(self.nlp(text), text), Entities())

    def readability(self, text: str) -> int:
        return self._safe("readability", lambda: flesch_reading_ease(text), 0)

    def sentiment(self, text: str) -> Sentiment:
        """Classify the polarity of the first 5000 characters."""
        return self._safe("sentiment", lambda: self._sentiment(text), Sentiment.NEUTRAL)

    def key_phrases(self, text: str) -> tuple[str, ...]:
        return self._safe("key phrases", lambda: self._key_phrases(self.nlp(text)), ())

    def _entities(self, doc: Doc, text: str) -> Entities:
        locations: list[str] = []
        organizations: list[str] = []
        persons: list[str] = []
        for ent in doc.ents:
            if ent.label_ in LOCATION_LABELS:
                locations.append(ent.text)
            elif ent.label_ in ORGANIZATION_LABELS:
                organizations.append(ent.text)
            elif ent.label_ in PERSON_LABELS:
                persons.append(ent.text)

        cfg = self._config
        return Entities(
            locations=unique(locations, cfg.max_locations),
            organizations=unique(organizations, cfg.max_organizations),
            persons=unique(persons, cfg.max_persons),
            dates=unique(extract_dates(text), cfg.max_dates),
        )

    def _sentiment(self, text: str) -> Sentiment:
        score = self._sentiment_scorer(text[:SENTIMENT_CHAR_LIMIT])
        if score > POSITIVE_THRESHOLD:
            return Sentiment.POSITIVE
        if score < NEGATIVE_THRESHOLD:
            return Sentiment.NEGATIVE
        return Sentiment.NEUTRAL

    def _key_phrases(self, doc: Doc) -> tuple[str, ...]:
        # noun_chunks needs a dependency parse; fall back to entity spans
        if doc.has_annotation("DEP"):
            phrases = [chunk.text for chunk in doc.noun_chunks]
        else:
            phrases = [ent.text for ent in doc.ents]
        phrases.extend(tok.text for tok in doc if not (tok.is_punct or tok.is_space))

        filtered = [p for p in unique(phrases) if len(p) > 3 and len(p.split()) <= 4]
        filtered.sort(key=len, reverse=True)
        return tuple(filtered[: self._config.max_key_phrases])

    def _safe(self, step: str, fn: Callable[[], T], default: T) -> T:
        try:
            return fn()
        except Exception as e:
            logger.warning(f"Preprocessing step '{step}' failed, using default: {e}")
            return default

    # ------------------------------------------------------------
    # Articles
    # ------------------------------------------------------------

    def preprocess_article(self, article: RawArticle) -> ProcessedArticle:
        """Clean one article and attach its derived analysis.

        The cleaned body replaces the raw body in the output.
        """
        scraped = article if isinstance(article, ScrapedArticle) else to_scraped(article)
        body = self._safe("clean", lambda: self.clean(scraped.body), "")
        doc = self._safe("parse", lambda: self.nlp(body), None)

        if doc is not None:
            entities = self._safe("entities", lambda: self._entities(doc, body), Entities())
            key_phrases = self._safe("key phrases", lambda: self._key_phrases(doc), ())
        else:
            entities, key_phrases = Entities(), ()

        return ProcessedArticle(
            title=scraped.title,
            body=body,
            source=scraped.source,
            url=scraped.url,
            date=scraped.date,
            credibility=scraped.credibility,
            entities=entities,
            readability=self.readability(body),
            sentiment=self.sentiment(body),
            word_count=len(words(body)),
            key_phrases=key_phrases,
        )

    def preprocess_articles(self, articles: Iterable[RawArticle]) -> list[ProcessedArticle]:
        return [self.preprocess_article(a) for a in articles]

    def aggregate(self, articles: list[ProcessedArticle]) -> AggregatedContext:
        """Summarize processed articles into one generation context."""
        cfg = self._config
        entities = Entities(
            locations=unique(
                (x for a in articles for x in a.entities.locations), cfg.aggregate_max_locations
            ),
            organizations=unique(
                (x for a in articles for x in a.entities.organizations),
                cfg.aggregate_max_organizations,
            ),
            persons=unique(
                (x for a in articles for x in a.entities.persons), cfg.aggregate_max_persons
            ),
            dates=unique((x for a in articles for x in a.entities.dates), cfg.aggregate_max_dates),
        )

        avg_readability = (
            round(sum(a.readability for a in articles) / len(articles)) if articles else 0
        )

        distribution = {s.value: 0 for s in Sentiment}
        for a in articles:
            distribution[a.sentiment.value] += 1

        # Counter preserves first-seen order and most_common() sorts stably
        phrase_counts = Counter(p for a in articles for p in a.key_phrases)
        top_phrases = tuple(
            p for p, _ in phrase_counts.most_common(cfg.aggregate_max_key_phrases)
        )

        return AggregatedContext(
            entities=entities,
            avg_readability=avg_readability,
            sentiment_distribution=distribution,
            total_word_count=sum(a.word_count for a in articles),
            top_key_phrases=top_phrases,
            sources=unique(a.source for a in articles),
        )
