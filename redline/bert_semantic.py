"""Semantic similarity analysis driven by learned distribution parameters."""

from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass, field
from typing import Optional

from redline.analysis import AnalysisResult, SingleDiffAnalyzer
from redline.bert_training import LearnedParameters
from redline.diff import DiffResult
from redline.textstats import word_overlap


@dataclass(frozen=True)
class InferenceConfig:
    """Settings that govern runtime analysis."""

    outlier_z_threshold: float = 2.5
    drift_std_multiplier: float = 2.0
    entropy_bins: int = 10
    include_all_metrics: bool = True


@dataclass(frozen=True)
class SimilarityMetrics:
    """Derived statistics for one similarity value."""

    similarity: float
    confidence: float
    is_drift: bool
    drift_magnitude: float
    is_outlier: bool
    z_score: float


@dataclass
class ThresholdLearningStats:
    """Statistics about threshold learning."""

    sample_count: int
    mean: float
    median: float
    std_dev: float
    min: float
    max: float
    current_threshold: Optional[float] = None
    auto_learning_enabled: bool = False

    def summary(self) -> str:
        """One-line description of the learning state."""
        threshold = self.current_threshold if self.current_threshold is not None else 0.0
        return (
            f"Learning Stats: {self.sample_count} samples, mean={self.mean:.3f}, "
            f"median={self.median:.3f}, std={self.std_dev:.3f}, threshold={threshold:.3f}"
        )


@dataclass
class BertSemanticAnalyzer(SingleDiffAnalyzer):
    """Scores semantic similarity against pre-learned parameters.

    Similarity is measured as the word-level Jaccard overlap of the two texts.
    """

    learned_params: LearnedParameters = field(default_factory=LearnedParameters.default_params)
    config: InferenceConfig = field(default_factory=InferenceConfig)

    name = "bert_semantic"
    description = "BERT-based semantic similarity with unsupervised threshold learning"

    @classmethod
    def with_defaults(cls) -> "BertSemanticAnalyzer":
        """An analyzer using default parameters (no prior training)."""
        return cls(LearnedParameters.default_params())

    def with_config(self, config: InferenceConfig) -> "BertSemanticAnalyzer":
        """Return a copy using ``config`` for inference."""
        return dataclasses.replace(self, config=config)

    @property
    def threshold(self) -> float:
        """The learned similarity threshold."""
        return self.learned_params.threshold

    def word_jaccard_similarity(self, text1: str, text2: str) -> float:
        """Jaccard similarity of the case-folded word sets; 1.0 for two empty texts."""
        return word_overlap(text1, text2)

    def compute_confidence(self, similarity: float) -> float:
        """Confidence in [0, 1] that falls with distance from the learned mean."""
        params = self.learned_params
        distance = abs(similarity - params.mean)
        normalized = distance / params.std_dev if params.std_dev > 0.0 else 0.0
        return min(max(1.0 / (1.0 + normalized), 0.0), 1.0)

    def detect_semantic_drift(self, similarity: float) -> tuple[bool, float]:
        """Return whether the value lies below the drift line, and by how many deviations."""
        params = self.learned_params
        drift_threshold = params.mean - self.config.drift_std_multiplier * params.std_dev
        is_drift = similarity < drift_threshold
        if not is_drift:
            return False, 0.0
        if params.std_dev == 0.0:
            return True, math.inf
        return True, abs((drift_threshold - similarity) / params.std_dev)

    def detect_outlier(self, similarity: float) -> tuple[bool, float]:
        """Return whether the value is an outlier, and its z-score."""
        params = self.learned_params
        z_score = (similarity - params.mean) / params.std_dev if params.std_dev > 0.0 else 0.0
        return abs(z_score) > self.config.outlier_z_threshold, z_score

    def get_similarity_metrics(self, similarity: float) -> SimilarityMetrics:
        """Confidence, drift and outlier statistics for one value."""
        is_drift, drift_magnitude = self.detect_semantic_drift(similarity)
        is_outlier, z_score = self.detect_outlier(similarity)
        return SimilarityMetrics(
            similarity=similarity,
            confidence=self.compute_confidence(similarity),
            is_drift=is_drift,
            drift_magnitude=drift_magnitude,
            is_outlier=is_outlier,
            z_score=z_score,
        )

    def _similarity_level(self, similarity: float) -> str:
        threshold = self.threshold
        if similarity >= threshold + 0.15:
            return "very_high"
        if similarity >= threshold:
            return "high"
        if similarity >= threshold - 0.15:
            return "moderate"
        if similarity >= threshold - 0.30:
            return "low"
        return "very_low"

    def analyze(self, diff: DiffResult) -> AnalysisResult:
        result = AnalysisResult(self.name)
        similarity = self.word_jaccard_similarity(diff.original_text, diff.modified_text)
        threshold = self.threshold
        metrics = self.get_similarity_metrics(similarity)

        result.add_metric("bert_semantic_similarity", similarity)
        result.add_metric("bert_semantic_distance", 1.0 - similarity)
        result.add_metric("learned_threshold", threshold)
        result.add_metric("confidence_score", metrics.confidence)
        result.add_metric("z_score", metrics.z_score)
        result.add_metric("drift_magnitude", metrics.drift_magnitude)
        result.add_metric("learned_mean", self.learned_params.mean)
        result.add_metric("learned_std_dev", self.learned_params.std_dev)

        result.add_metadata("similarity_level", self._similarity_level(similarity))
        if metrics.is_outlier:
            result.add_metadata("outlier_detected", "true")
        if metrics.is_drift:
            result.add_metadata("semantic_drift_detected", "true")

        result.add_insight("Using word-overlap similarity (no embedding model available)")
        if similarity >= threshold:
            result.add_insight(
                f"High semantic similarity ({similarity * 100.0:.1f}% ≥ "
                f"{threshold * 100.0:.1f}% threshold). Meaning preserved."
            )
        else:
            result.add_insight(
                f"Low semantic similarity ({similarity * 100.0:.1f}% < "
                f"{threshold * 100.0:.1f}% threshold). Substantial semantic changes."
            )

        sample_count = self.learned_params.sample_count
        if sample_count >= 10:
            result.add_metadata("learning_samples", str(sample_count))
            result.add_insight(f"Threshold learned from {sample_count} samples")

        return result