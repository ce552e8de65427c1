"""Feature vectors extracted from diff operations for classification."""

from __future__ import annotations

import string
from dataclasses import dataclass, field

from redline.diff import DiffOperation, EditType
from redline.textstats import (
    char_similarity,
    contains_negation,
    count_words,
    flesch_reading_ease,
    length_ratio,
    stopword_ratio,
    whitespace_ratio,
    word_overlap,
)

_ASCII_PUNCTUATION = frozenset(string.punctuation)

FEATURE_NAMES = (
    "char_similarity",
    "word_overlap",
    "length_ratio",
    "orig_length",
    "mod_length",
    "length_diff",
    "is_insert",
    "is_delete",
    "is_modify",
    "case_only_change",
    "punct_diff",
    "readability_score_diff",
    "word_count_diff",
    "stopword_ratio",
    "whitespace_ratio_change",
    "negation_changed",
)


@dataclass
class FeatureVector:
    """Named numeric features, kept in insertion order."""

    features: list[float] = field(default_factory=list)
    feature_names: list[str] = field(default_factory=list)

    def add_feature(self, name: str, value: float) -> None:
        self.feature_names.append(name)
        self.features.append(float(value))

    def to_list(self) -> list[float]:
        """A copy of the feature values."""
        return list(self.features)

    def __len__(self) -> int:
        return len(self.features)

    def __getitem__(self, name: str) -> float:
        """The value of the feature called ``name``."""
        try:
            return self.features[self.feature_names.index(name)]
        except ValueError:
            raise KeyError(name) from None


def _punctuation_count(text: str) -> int:
    return sum(1 for ch in text if ch in _ASCII_PUNCTUATION)


def _flag(condition: bool) -> float:
    return 1.0 if condition else 0.0


class StandardFeatureExtractor:
    """Extracts the standard sixteen features from a diff operation."""

    def extract(self, operation: DiffOperation) -> FeatureVector:
        """Compute the feature vector for one operation."""
        original = operation.original_text or ""
        modified = operation.modified_text or ""
        vector = FeatureVector()

        vector.add_feature("char_similarity", char_similarity(original, modified))
        vector.add_feature("word_overlap", word_overlap(original, modified))
        vector.add_feature("length_ratio", length_ratio(original, modified))

        vector.add_feature("orig_length", len(original))
        vector.add_feature("mod_length", len(modified))
        vector.add_feature("length_diff", abs(len(modified) - len(original)))

        vector.add_feature("is_insert", _flag(operation.edit_type is EditType.INSERT))
        vector.add_feature("is_delete", _flag(operation.edit_type is EditType.DELETE))
        vector.add_feature("is_modify", _flag(operation.edit_type is EditType.MODIFY))

        vector.add_feature("case_only_change", _flag(original.lower() == modified.lower()))
        vector.add_feature(
            "punct_diff", abs(_punctuation_count(modified) - _punctuation_count(original))
        )
        vector.add_feature(
            "readability_score_diff",
            abs(flesch_reading_ease(modified) - flesch_reading_ease(original)),
        )
        vector.add_feature(
            "word_count_diff", abs(count_words(modified) - count_words(original))
        )
        vector.add_feature(
            "stopword_ratio", (stopword_ratio(original) + stopword_ratio(modified)) / 2.0
        )
        vector.add_feature(
            "whitespace_ratio_change",
            abs(whitespace_ratio(modified) - whitespace_ratio(original)),
        )
        vector.add_feature(
            "negation_changed",
            _flag(contains_negation(original) != contains_negation(modified)),
        )
        return vector

    def feature_names(self) -> list[str]:
        """Names of the features, in extraction order."""
        return list(FEATURE_NAMES)