import pytest

from redline.analysis import AnalysisResult, SingleDiffAnalyzer
from redline.config import DiffAlgorithm, DiffConfig


class _NamedAnalyzer(SingleDiffAnalyzer):
    name = "named"

    def analyze(self, diff):
        return AnalysisResult(self.name)


def test_default_config():
    config = DiffConfig()
    assert config.algorithm is DiffAlgorithm.HISTOGRAM
    assert config.compute_semantic_similarity is True
    assert config.classify_edits is True
    assert config.analyze_style is True
    assert config.context_lines == 3
    assert config.ignore_whitespace is False
    assert config.ignore_case is False


def test_default_algorithm():
    assert DiffAlgorithm.default() is DiffAlgorithm.HISTOGRAM


def test_minimal_config():
    config = DiffConfig.minimal()
    assert config.algorithm is DiffAlgorithm.MYERS
    assert config.compute_semantic_similarity is False
    assert config.classify_edits is False
    assert config.analyze_style is False
    assert config.context_lines == 0


def test_comprehensive_config():
    config = DiffConfig.comprehensive()
    assert config.algorithm is DiffAlgorithm.HISTOGRAM
    assert config.compute_semantic_similarity is True
    assert config.classify_edits is True
    assert config.analyze_style is True
    assert config.context_lines == 5


def test_builder_pattern():
    config = (
        DiffConfig()
        .with_algorithm(DiffAlgorithm.PATIENCE)
        .with_context_lines(5)
        .with_ignore_case(True)
    )
    assert config.algorithm is DiffAlgorithm.PATIENCE
    assert config.context_lines == 5
    assert config.ignore_case is True


def test_builders_leave_original_unchanged():
    base = DiffConfig()
    changed = base.with_ignore_whitespace(True).with_style_analysis(False)
    assert base.ignore_whitespace is False
    assert base.analyze_style is True
    assert changed.ignore_whitespace is True
    assert changed.analyze_style is False


def test_flag_builders():
    config = (
        DiffConfig()
        .with_semantic_similarity(False)
        .with_edit_classification(False)
    )
    assert config.compute_semantic_similarity is False
    assert config.classify_edits is False


def test_pipeline_and_tokenizer_are_stored():
    pipeline = object()
    tokenizer = object()
    config = DiffConfig().with_pipeline(pipeline).with_tokenizer(tokenizer)
    assert config.pipeline is pipeline
    assert config.tokenizer is tokenizer


def test_add_analyzer_and_classifier():
    analyzer = _NamedAnalyzer()
    classifier = object()
    base = DiffConfig()
    config = base.add_analyzer(analyzer).add_classifier(classifier)
    assert config.analyzers == (analyzer,)
    assert config.classifiers == (classifier,)
    assert base.analyzers == ()
    assert base.classifiers == ()


def test_analyzers_keep_order():
    first, second = _NamedAnalyzer(), _NamedAnalyzer()
    config = DiffConfig().add_analyzer(first).add_analyzer(second)
    assert config.analyzers[0] is first
    assert config.analyzers[1] is second


def test_negative_context_lines_rejected():
    with pytest.raises(ValueError):
        DiffConfig().with_context_lines(-1)