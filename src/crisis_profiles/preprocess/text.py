"""Pure text helpers: cleaning, readability, date patterns, dedup."""

import re
from collections.abc import Iterable

_TAG_RE = re.compile(r"<[^>]*>")
_WHITESPACE_RE = re.compile(r"\s+")
_URL_RE = re.compile(r"https?://\S+")
_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")
_NON_ALPHA_RE = re.compile(r"[^a-z]")

DATE_RE = re.compile(
    r"\d{1,2}/\d{1,2}/\d{2,4}"
    r"|\d{4}-\d{2}-\d{2}"
    r"|(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)[a-z]* \d{1,2},? \d{4}",
    re.IGNORECASE,
)

_VOWELS = "aeiouy"


def clean_text(text: str) -> str:
    """Strip markup tags and URLs and collapse whitespace."""
    cleaned = _TAG_RE.sub(" ", text)
    cleaned = _URL_RE.sub("", cleaned)
    return _WHITESPACE_RE.sub(" ", cleaned).strip()


def words(text: str) -> list[str]:
    return text.split()


def count_syllables(word: str) -> int:
    """Approximate syllables by counting vowel groups.

    A trailing silent ``e`` is discounted when the word has more than one
    group. Non-empty words always count at least one syllable.
    """
    word = _NON_ALPHA_RE.sub("", word.lower())
    if not word:
        return 0

    count = 0
    previous_was_vowel = False
    for char in word:
        is_vowel = char in _VOWELS
        if is_vowel and not previous_was_vowel:
            count += 1
        previous_was_vowel = is_vowel

    if word.endswith("e") and count > 1:
        count -= 1

    return max(1, count)


def flesch_reading_ease(text: str) -> int:
    """Flesch Reading Ease, rounded and clamped to [0, 100].

    Returns 0 when the text has no sentences or no words.
    """
    sentences = [s for s in _SENTENCE_SPLIT_RE.split(text) if s.strip()]
    tokens = words(text)
    if not sentences or not tokens:
        return 0

    syllables = sum(count_syllables(w) for w in tokens)
    words_per_sentence = len(tokens) / len(sentences)
    syllables_per_word = syllables / len(tokens)

    score = 206.835 - 1.015 * words_per_sentence - 84.6 * syllables_per_word
    return max(0, min(100, round(score)))


def extract_dates(text: str) -> list[str]:
    return [m.group(0) for m in DATE_RE.finditer(text)]


def unique(items: Iterable[str], limit: int | None = None) -> tuple[str, ...]:
    """Deduplicate case-sensitively in insertion order, then truncate."""
    result = tuple(dict.fromkeys(items))
    return result if limit is None else result[:limit]
