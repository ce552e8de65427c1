"""Analysis results, analyzer interfaces and combined reports."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections import defaultdict
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from redline.diff import DiffResult


@dataclass
class AnalysisResult:
    """Metrics and insights produced by one analyzer."""

    analyzer_name: str
    metrics: dict[str, float] = field(default_factory=dict)
    insights: list[str] = field(default_factory=list)
    confidence: float = 1.0
    metadata: dict[str, str] = field(default_factory=dict)

    def add_metric(self, name: str, value: float) -> None:
        self.metrics[name] = value

    def add_insight(self, insight: str) -> None:
        self.insights.append(insight)

    def with_confidence(self, confidence: float) -> "AnalysisResult":
        """Set the confidence and return this result."""
        self.confidence = confidence
        return self

    def add_metadata(self, key: str, value: str) -> None:
        self.metadata[key] = value


class SingleDiffAnalyzer(ABC):
    """An analyzer that inspects one diff result."""

    name: str = ""
    description: str = ""

    @abstractmethod
    def analyze(self, diff: DiffResult) -> AnalysisResult:
        """Analyze a single diff result."""

    def dependencies(self) -> list[Any]:
        """Metric dependencies this analyzer needs; none by default."""
        return []


class MultiDiffAnalyzer(ABC):
    """An analyzer that looks for patterns across several diffs."""

    name: str = ""
    description: str = ""

    @abstractmethod
    def analyze(self, diffs: Sequence[DiffResult]) -> AnalysisResult:
        """Analyze a collection of diffs."""

    def dependencies(self) -> list[Any]:
        """Metric dependencies this analyzer needs; none by default."""
        return []


@dataclass
class AnalysisSummary:
    """Averages over all results in a report."""

    average_metrics: dict[str, float] = field(default_factory=dict)
    total_analyses: int = 0


@dataclass
class AnalysisReport:
    """Results from several analyzers, with a summary."""

    results: list[AnalysisResult] = field(default_factory=list)
    summary: AnalysisSummary = field(default_factory=AnalysisSummary)

    def add_result(self, result: AnalysisResult) -> None:
        self.results.append(result)

    def compute_summary(self) -> None:
        """Average each metric over the results that report it."""
        values: dict[str, list[float]] = defaultdict(list)
        for result in self.results:
            for metric, value in result.metrics.items():
                values[metric].append(value)
        self.summary.average_metrics = {
            metric: sum(seen) / len(seen) for metric, seen in values.items()
        }
        self.summary.total_analyses = len(self.results)

    def all_insights(self) -> list[str]:
        """Every insight of every result, in order."""
        return [insight for result in self.results for insight in result.insights]

    def get_by_analyzer(self, name: str) -> list[AnalysisResult]:
        """Results produced by the analyzer with the given name."""
        return [result for result in self.results if result.analyzer_name == name]