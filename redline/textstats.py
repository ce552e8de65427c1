"""Plain text statistics used for feature extraction and comparison."""

from __future__ import annotations

STOPWORDS = frozenset(
    {
        "a", "an", "and", "are", "as", "at", "be", "been", "but", "by", "for",
        "from", "has", "have", "he", "in", "is", "it", "its", "of", "on", "or",
        "that", "the", "to", "was", "were", "will", "with",
    }
)

NEGATION_WORDS = frozenset(
    {"not", "no", "never", "neither", "none", "nobody", "nothing", "nowhere"}
)

_VOWELS = frozenset("aeiouy")
_SENTENCE_ENDS = frozenset(".!?")


def levenshtein_distance(s1: str, s2: str) -> int:
    """Number of single-character edits turning ``s1`` into ``s2``."""
    previous = list(range(len(s2) + 1))
    for i, c1 in enumerate(s1, start=1):
        current = [i]
        for j, c2 in enumerate(s2, start=1):
            cost = 0 if c1 == c2 else 1
            current.append(min(previous[j] + 1, current[j - 1] + 1, previous[j - 1] + cost))
        previous = current
    return previous[-1]


def char_similarity(s1: str, s2: str) -> float:
    """One minus the edit distance relative to the longer string."""
    max_len = max(len(s1), len(s2))
    if max_len == 0:
        return 1.0
    return 1.0 - levenshtein_distance(s1, s2) / max_len


def _lower_words(text: str) -> set[str]:
    return {word.lower() for word in text.split()}


def word_overlap(s1: str, s2: str) -> float:
    """Jaccard similarity of the case-folded word sets."""
    words1, words2 = _lower_words(s1), _lower_words(s2)
    if not words1 and not words2:
        return 1.0
    union = words1 | words2
    return len(words1 & words2) / len(union) if union else 0.0


def length_ratio(s1: str, s2: str) -> float:
    """Shorter length divided by longer length."""
    len1, len2 = len(s1), len(s2)
    if len1 == 0 and len2 == 0:
        return 1.0
    return min(len1, len2) / max(len1, len2)


def count_words(text: str) -> int:
    """Number of whitespace-separated words."""
    return len(text.split())


def count_syllables(word: str) -> int:
    """Rough syllable count: vowel groups, minus a silent final 'e'."""
    lower = word.lower()
    if not lower:
        return 0
    count = 0
    prev_was_vowel = False
    for ch in lower:
        is_vowel = ch in _VOWELS
        if is_vowel and not prev_was_vowel:
            count += 1
        prev_was_vowel = is_vowel
    if lower.endswith("e") and count > 1:
        count -= 1
    return max(count, 1)


def flesch_reading_ease(text: str) -> float:
    """Flesch reading ease score; 0.0 for text without words."""
    words = text.split()
    if not words:
        return 0.0
    sentences = max(sum(1 for ch in text if ch in _SENTENCE_ENDS), 1)
    syllables = sum(count_syllables(word) for word in words)
    avg_syllables_per_word = syllables / len(words)
    avg_words_per_sentence = len(words) / sentences
    return 206.835 - 1.015 * avg_words_per_sentence - 84.6 * avg_syllables_per_word


def stopword_ratio(text: str) -> float:
    """Fraction of words that are common stopwords."""
    words = text.split()
    if not words:
        return 0.0
    return sum(1 for word in words if word.lower() in STOPWORDS) / len(words)


def whitespace_ratio(text: str) -> float:
    """Fraction of characters that are whitespace."""
    if not text:
        return 0.0
    return sum(1 for ch in text if ch.isspace()) / len(text)


def contains_negation(text: str) -> bool:
    """True if the text holds a negation word or an n't contraction."""
    lower = text.lower()
    if any(word in NEGATION_WORDS for word in lower.split()):
        return True
    return "n't" in lower