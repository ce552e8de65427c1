"""Gaussian naive Bayes classification of diff operations."""

from __future__ import annotations

import math
from collections import defaultdict
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from redline.diff import Category, ChangeCategory, DiffOperation
from redline.features import FeatureVector, StandardFeatureExtractor

_MIN_STD_DEV = 1e-6
_MIN_LOG_PROB = -100.0
_SQRT_TWO_PI = math.sqrt(2.0 * math.pi)


@dataclass
class TrainingSample:
    """A feature vector with its known category."""

    features: FeatureVector
    label: Category


@dataclass(frozen=True)
class Classification:
    """The category chosen for an operation and how sure the model is."""

    category: Category
    confidence: float
    explanation: str = ""


def _gaussian_log_prob(x: float, mean: float, std_dev: float) -> float:
    exponent = -((x - mean) ** 2) / (2.0 * std_dev**2)
    prob = math.exp(exponent) / (std_dev * _SQRT_TWO_PI)
    if prob <= 0.0:
        return _MIN_LOG_PROB
    return max(math.log(prob), _MIN_LOG_PROB)


def _predicted_category(label: Category) -> ChangeCategory:
    return label if isinstance(label, ChangeCategory) else ChangeCategory.UNKNOWN


@dataclass
class NaiveBayesClassifier:
    """Classifies operations with per-category Gaussian feature models."""

    feature_extractor: StandardFeatureExtractor = field(
        default_factory=StandardFeatureExtractor
    )
    name: str = field(default="naive_bayes", init=False)
    _priors: dict[Category, float] = field(default_factory=dict, init=False, repr=False)
    _stats: dict[Category, list[tuple[float, float]]] = field(
        default_factory=dict, init=False, repr=False
    )
    _trained: bool = field(default=False, init=False, repr=False)

    @property
    def is_trained(self) -> bool:
        return self._trained

    def train(self, samples: Sequence[TrainingSample]) -> None:
        """Fit priors and per-feature mean and deviation for each category.

        An empty sequence leaves the classifier unchanged. Raises ValueError
        if samples of one category have feature vectors of different lengths.
        """
        if not samples:
            return

        grouped: dict[Category, list[list[float]]] = defaultdict(list)
        for sample in samples:
            grouped[sample.label].append(sample.features.to_list())

        total = len(samples)
        for category, rows in grouped.items():
            width = len(rows[0])
            if any(len(row) != width for row in rows):
                raise ValueError(
                    f"feature vectors for {category} have differing lengths"
                )
            self._priors[category] = len(rows) / total
            stats = []
            for column in zip(*rows):
                mean = math.fsum(column) / len(column)
                variance = math.fsum((value - mean) ** 2 for value in column) / len(column)
                stats.append((mean, max(math.sqrt(variance), _MIN_STD_DEV)))
            self._stats[category] = stats

        self._trained = True

    def predict(self, features: FeatureVector) -> tuple[ChangeCategory, float]:
        """Most probable category and a confidence in [0, 1]."""
        if not self._trained:
            return ChangeCategory.UNKNOWN, 0.0

        best_category = ChangeCategory.UNKNOWN
        max_posterior = -math.inf
        for category, prior in self._priors.items():
            log_posterior = math.log(prior)
            stats = self._stats.get(category, [])
            for value, (mean, std_dev) in zip(features.features, stats):
                log_posterior += _gaussian_log_prob(value, mean, std_dev)
            if log_posterior > max_posterior:
                max_posterior = log_posterior
                best_category = _predicted_category(category)

        if max_posterior == -math.inf:
            return best_category, 0.0
        scaled = max_posterior / 10.0
        confidence = 1.0 if scaled >= 0.0 else math.exp(scaled)
        return best_category, min(max(confidence, 0.0), 1.0)

    def classify_operation(self, operation: DiffOperation) -> Classification:
        """Extract features from ``operation`` and classify them."""
        category, confidence = self.predict(self.feature_extractor.extract(operation))
        return Classification(
            category, confidence, "Naive Bayes classification based on trained model"
        )


def create_training_samples(
    operations: Iterable[tuple[DiffOperation, Category]],
    extractor: StandardFeatureExtractor,
) -> list[TrainingSample]:
    """Turn labelled operations into training samples."""
    return [TrainingSample(extractor.extract(op), label) for op, label in operations]