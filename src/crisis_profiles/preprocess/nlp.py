"""Lazy, cached spaCy pipelines."""

import logging

import spacy

logger = logging.getLogger(__name__)

DEFAULT_SPACY_MODEL = "en_core_web_sm"

# Lazy load spaCy models (cached by model name)
_nlp_cache: dict[str, spacy.Language] = {}


def get_nlp(model_name: str = DEFAULT_SPACY_MODEL) -> spacy.Language:
    """Load a spaCy pipeline once per process.

    When the model package is not installed a blank English pipeline is
    cached instead: tokenization keeps working, named entities and noun
    chunks come back empty.
    """
    if model_name not in _nlp_cache:
        try:
            _nlp_cache[model_name] = spacy.load(model_name)
        except OSError:
            logger.warning(
                f"spaCy model {model_name!r} is not installed; "
                "entity and noun-phrase extraction will be empty"
            )
            _nlp_cache[model_name] = spacy.blank("en")
    return _nlp_cache[model_name]
