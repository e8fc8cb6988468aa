"""Article preprocessing and aggregation."""

from crisis_profiles.preprocess.nlp import get_nlp
from crisis_profiles.preprocess.preprocessor import (
    ContentPreprocessor,
    classify_credibility,
    to_scraped,
)
from crisis_profiles.preprocess.text import clean_text, count_syllables, flesch_reading_ease

__all__ = [
    "ContentPreprocessor",
    "classify_credibility",
    "clean_text",
    "count_syllables",
    "flesch_reading_ease",
    "get_nlp",
    "to_scraped",
]
