"""Configuration for the diff engine."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from redline.analysis import SingleDiffAnalyzer


class DiffAlgorithm(Enum):
    """Algorithm used to compute the diff."""

    MYERS = "myers"
    PATIENCE = "patience"
    HISTOGRAM = "histogram"
    LCS = "lcs"

    @classmethod
    def default(cls) -> "DiffAlgorithm":
        return cls.HISTOGRAM


@dataclass(frozen=True)
class DiffConfig:
    """Settings for a diff computation.

    Every ``with_*`` and ``add_*`` method returns a new configuration and
    leaves the receiver unchanged.
    """

    algorithm: DiffAlgorithm = DiffAlgorithm.HISTOGRAM
    pipeline: Optional[Any] = None
    tokenizer: Optional[Any] = None
    compute_semantic_similarity: bool = True
    classify_edits: bool = True
    analyze_style: bool = True
    context_lines: int = 3
    ignore_whitespace: bool = False
    ignore_case: bool = False
    analyzers: tuple[SingleDiffAnalyzer, ...] = field(default=(), repr=False)
    classifiers: tuple[Any, ...] = field(default=(), repr=False)

    def __post_init__(self) -> None:
        if self.context_lines < 0:
            raise ValueError(f"context_lines must not be negative, got {self.context_lines}")

    @classmethod
    def minimal(cls) -> "DiffConfig":
        """A fast configuration with all analysis switched off."""
        return cls(
            algorithm=DiffAlgorithm.MYERS,
            compute_semantic_similarity=False,
            classify_edits=False,
            analyze_style=False,
            context_lines=0,
        )

    @classmethod
    def comprehensive(cls) -> "DiffConfig":
        """A configuration with every analysis enabled."""
        return cls(
            algorithm=DiffAlgorithm.HISTOGRAM,
            compute_semantic_similarity=True,
            classify_edits=True,
            analyze_style=True,
            context_lines=5,
        )

    def add_analyzer(self, analyzer: SingleDiffAnalyzer) -> "DiffConfig":
        """Return a configuration that also runs ``analyzer``."""
        return dataclasses.replace(self, analyzers=(*self.analyzers, analyzer))

    def add_classifier(self, classifier: Any) -> "DiffConfig":
        """Return a configuration that also runs ``classifier``."""
        return dataclasses.replace(self, classifiers=(*self.classifiers, classifier))

    def with_algorithm(self, algorithm: DiffAlgorithm) -> "DiffConfig":
        return dataclasses.replace(self, algorithm=algorithm)

    def with_pipeline(self, pipeline: Any) -> "DiffConfig":
        return dataclasses.replace(self, pipeline=pipeline)

    def with_tokenizer(self, tokenizer: Any) -> "DiffConfig":
        return dataclasses.replace(self, tokenizer=tokenizer)

    def with_semantic_similarity(self, enable: bool) -> "DiffConfig":
        return dataclasses.replace(self, compute_semantic_similarity=enable)

    def with_edit_classification(self, enable: bool) -> "DiffConfig":
        return dataclasses.replace(self, classify_edits=enable)

    def with_style_analysis(self, enable: bool) -> "DiffConfig":
        return dataclasses.replace(self, analyze_style=enable)

    def with_context_lines(self, lines: int) -> "DiffConfig":
        return dataclasses.replace(self, context_lines=lines)

    def with_ignore_whitespace(self, ignore: bool) -> "DiffConfig":
        return dataclasses.replace(self, ignore_whitespace=ignore)

    def with_ignore_case(self, ignore: bool) -> "DiffConfig":
        return dataclasses.replace(self, ignore_case=ignore)