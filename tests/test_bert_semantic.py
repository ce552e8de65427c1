import math

import pytest

from redline.bert_semantic import (
    BertSemanticAnalyzer,
    InferenceConfig,
    SimilarityMetrics,
    ThresholdLearningStats,
)
from redline.bert_training import BertSemanticTrainer, LearnedParameters
from redline.diff import DiffResult


def _trained(values):
    trainer = BertSemanticTrainer()
    trainer.add_samples(values)
    return BertSemanticAnalyzer(trainer.train())


def test_basic_similarity_metrics_present():
    analyzer = BertSemanticAnalyzer.with_defaults()
    result = analyzer.analyze(DiffResult("hello world", "hello rust"))
    assert "bert_semantic_similarity" in result.metrics
    assert "bert_semantic_distance" in result.metrics
    assert "confidence_score" in result.metrics
    assert result.analyzer_name == "bert_semantic"


def test_analyze_pinned_values_with_defaults():
    analyzer = BertSemanticAnalyzer.with_defaults()
    result = analyzer.analyze(DiffResult("hello world", "hello rust"))
    assert result.metrics["bert_semantic_similarity"] == pytest.approx(1 / 3)
    assert result.metrics["bert_semantic_distance"] == pytest.approx(2 / 3)
    assert result.metrics["learned_threshold"] == 0.7
    assert result.metadata["similarity_level"] == "very_low"
    assert result.metadata["semantic_drift_detected"] == "true"
    assert "outlier_detected" not in result.metadata
    assert "learning_samples" not in result.metadata
    assert (
        "Low semantic similarity (33.3% < 70.0% threshold). Substantial semantic changes."
        in result.insights
    )


def test_analyze_identical_text_is_very_high():
    analyzer = BertSemanticAnalyzer.with_defaults()
    result = analyzer.analyze(DiffResult("hello world", "hello world"))
    assert result.metrics["bert_semantic_similarity"] == 1.0
    assert result.metadata["similarity_level"] == "very_high"
    assert result.metrics["confidence_score"] == pytest.approx(1 / 3)
    assert any(i.startswith("High semantic similarity (100.0%") for i in result.insights)


def test_analyze_with_all_metrics():
    analyzer = _trained([0.6 + (i - 15.0) * 0.01 for i in range(30)])
    result = analyzer.analyze(DiffResult("the quick brown fox", "the fast brown dog"))
    for key in (
        "bert_semantic_similarity",
        "bert_semantic_distance",
        "confidence_score",
        "z_score",
        "drift_magnitude",
        "learned_mean",
        "learned_std_dev",
    ):
        assert key in result.metrics
    assert "similarity_level" in result.metadata
    assert result.metadata["learning_samples"] == "30"
    assert "Threshold learned from 30 samples" in result.insights


def test_threshold_learning_between_modes():
    trainer = BertSemanticTrainer().with_threshold_percentile(0.5)
    trainer.add_samples([0.3] * 20 + [0.8] * 20)
    learned = trainer.train()
    assert 0.3 < learned.threshold < 0.8


def test_confidence_score():
    analyzer = _trained([min(max(0.6 + (i - 50.0) * 0.004, 0.0), 1.0) for i in range(100)])
    at_mean = analyzer.compute_confidence(0.6)
    one_std = analyzer.compute_confidence(0.7)
    far = analyzer.compute_confidence(0.2)
    assert at_mean > 0.9
    assert 0.4 < one_std < 0.6
    assert far < 0.3
    assert at_mean > one_std > far


def test_confidence_with_default_params():
    assert BertSemanticAnalyzer.with_defaults().compute_confidence(0.7) > 0.9


def test_confidence_zero_std_dev_is_one():
    params = LearnedParameters.default_params()
    params.std_dev = 0.0
    assert BertSemanticAnalyzer(params).compute_confidence(0.1) == 1.0


def test_semantic_drift_detection():
    analyzer = _trained([0.75 + (i - 10.0) * 0.01 for i in range(20)])
    is_drift, _ = analyzer.detect_semantic_drift(0.75)
    assert not is_drift
    is_drift, magnitude = analyzer.detect_semantic_drift(0.3)
    assert is_drift
    assert magnitude > 0.0


def test_drift_with_default_params():
    analyzer = BertSemanticAnalyzer.with_defaults()
    assert analyzer.detect_semantic_drift(0.7) == (False, 0.0)
    is_drift, magnitude = analyzer.detect_semantic_drift(0.3)
    assert is_drift
    assert magnitude == pytest.approx(0.1 / 0.15)


def test_drift_with_zero_std_dev_is_infinite():
    params = LearnedParameters.default_params()
    params.std_dev = 0.0
    is_drift, magnitude = BertSemanticAnalyzer(params).detect_semantic_drift(0.5)
    assert is_drift
    assert math.isinf(magnitude)


def test_outlier_detection():
    analyzer = _trained([0.6 + (i - 25.0) * 0.01 for i in range(50)])
    assert analyzer.detect_outlier(0.6)[0] is False
    is_outlier, z_score = analyzer.detect_outlier(0.1)
    assert is_outlier
    assert abs(z_score) > 2.5


def test_outlier_with_default_params():
    analyzer = BertSemanticAnalyzer.with_defaults()
    assert analyzer.detect_outlier(0.7) == (False, 0.0)
    is_outlier, z_score = analyzer.detect_outlier(0.2)
    assert is_outlier
    assert z_score == pytest.approx(-0.5 / 0.15)


def test_with_config_changes_outlier_threshold():
    base = BertSemanticAnalyzer.with_defaults()
    strict = base.with_config(InferenceConfig(outlier_z_threshold=1.0))
    assert strict.detect_outlier(0.5)[0] is True
    assert base.detect_outlier(0.5)[0] is False
    assert base.config.outlier_z_threshold == 2.5


def test_similarity_metrics_comprehensive():
    analyzer = _trained([0.6 + (i - 25.0) * 0.01 for i in range(50)])
    metrics = analyzer.get_similarity_metrics(0.6)
    assert isinstance(metrics, SimilarityMetrics)
    assert metrics.similarity == 0.6
    assert 0.0 < metrics.confidence <= 1.0
    assert not metrics.is_drift
    assert not metrics.is_outlier


def test_manual_threshold():
    params = LearnedParameters.default_params()
    params.threshold = 0.65
    assert BertSemanticAnalyzer(params).threshold == 0.65


def test_word_jaccard_similarity():
    analyzer = BertSemanticAnalyzer.with_defaults()
    assert analyzer.word_jaccard_similarity("hello world", "hello world") == 1.0
    partial = analyzer.word_jaccard_similarity("hello world", "goodbye world")
    assert 0.0 < partial < 1.0
    assert analyzer.word_jaccard_similarity("hello", "goodbye") == 0.0
    assert analyzer.word_jaccard_similarity("", "") == 1.0


def test_threshold_learning_stats_summary():
    stats = ThresholdLearningStats(
        sample_count=5, mean=0.5, median=0.4, std_dev=0.1, min=0.1, max=0.9
    )
    assert stats.summary() == (
        "Learning Stats: 5 samples, mean=0.500, median=0.400, std=0.100, threshold=0.000"
    )
    stats.current_threshold = 0.625
    assert stats.summary().endswith("threshold=0.625")