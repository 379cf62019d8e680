"""Local text metrics computed without calling the model.

Keyword frequency, Flesch reading ease and a heuristic syllable counter.
All functions are pure and tolerate empty input.
"""

import math
import re
from collections import Counter

TOP_KEYWORDS = 20
MIN_KEYWORD_LENGTH = 4

STOP_WORDS = frozenset(
    {
        "the", "and", "for", "are", "but", "not", "you", "all", "can", "had",
        "her", "was", "one", "our", "out", "has", "have", "been", "were", "will",
        "would", "there", "their", "what", "about", "which", "when", "make",
        "like", "time", "just", "know", "take", "people", "into", "year", "your",
        "good", "some", "could", "them", "other", "than", "then", "look", "only",
        "come", "over", "such", "also", "back", "after", "use", "two", "how",
        "first", "well", "even", "want", "because", "these", "give", "most",
        "this", "that", "with", "from", "they", "more", "being", "does", "doing",
    }
)

_NON_ALNUM = re.compile(r"[^a-z0-9\s]")
_SENTENCE_SPLIT = re.compile(r"[.!?]+")
_SILENT_SUFFIX = re.compile(r"(?:[^laeiouy]es|ed|[^laeiouy]e)$")
_VOWEL_GROUP = re.compile(r"[aeiouy]{1,2}")


def count_words(content: str) -> int:
    return len(content.split()) if content else 0


def extract_keywords(content: str, limit: int = TOP_KEYWORDS) -> dict[str, int]:
    """
    Return the most frequent non-stopword tokens, highest count first.
    Tokens shorter than four characters are ignored. Ties keep the order in
    which the words first appeared.
    """
    words = _NON_ALNUM.sub("", (content or "").lower()).split()
    counts = Counter(
        word for word in words if len(word) >= MIN_KEYWORD_LENGTH and word not in STOP_WORDS
    )
    return dict(counts.most_common(limit))


def count_syllables(word: str) -> int:
    word = word.lower()
    if len(word) <= 3:
        return 1

    word = _SILENT_SUFFIX.sub("", word)
    word = re.sub(r"^y", "", word)

    groups = _VOWEL_GROUP.findall(word)
    return len(groups) if groups else 1


def calculate_readability(content: str) -> int:
    """Flesch Reading Ease rounded and clamped to 0..100. Empty text scores 0."""
    text = content or ""
    sentences = [s for s in _SENTENCE_SPLIT.split(text) if s.strip()]
    words = text.split()

    if not sentences or not words:
        return 0

    syllables = sum(count_syllables(word) for word in words)
    avg_words_per_sentence = len(words) / len(sentences)
    avg_syllables_per_word = syllables / len(words)

    score = 206.835 - 1.015 * avg_words_per_sentence - 84.6 * avg_syllables_per_word
    return max(0, min(100, math.floor(score + 0.5)))
