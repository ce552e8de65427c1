"""Diff result types: operations, statistics, analysis and unified output."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union


@dataclass(frozen=True)
class CharSpan:
    """A half-open character range ``[start, end)`` within a text."""

    start: int
    end: int

    def __len__(self) -> int:
        return max(0, self.end - self.start)

    def overlaps(self, other: "CharSpan") -> bool:
        """Return True if the two spans share at least one position."""
        return self.start < other.end and self.end > other.start


class EditType(Enum):
    """Kind of edit an operation performs."""

    INSERT = "insert"
    DELETE = "delete"
    MODIFY = "modify"
    EQUAL = "equal"


class ChangeCategory(Enum):
    """Category of a change, as decided by analysis."""

    SEMANTIC = "semantic"
    STYLISTIC = "stylistic"
    FORMATTING = "formatting"
    SYNTACTIC = "syntactic"
    ORGANIZATIONAL = "organizational"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class MixedCategory:
    """A change that falls into several categories at once."""

    categories: tuple[Union[ChangeCategory, "MixedCategory"], ...] = ()


Category = Union[ChangeCategory, MixedCategory]


@dataclass
class DiffOperation:
    """A single diff operation between the original and modified text."""

    edit_type: EditType
    original_text: Optional[str] = None
    modified_text: Optional[str] = None
    original_span: Optional[CharSpan] = None
    modified_span: Optional[CharSpan] = None
    original_tokens: list[Any] = field(default_factory=list)
    modified_tokens: list[Any] = field(default_factory=list)
    category: Category = ChangeCategory.UNKNOWN
    confidence: float = 0.0

    def with_original(self, text: str, span: CharSpan) -> "DiffOperation":
        """Return a copy carrying the original text and its span."""
        return dataclasses.replace(self, original_text=text, original_span=span)

    def with_modified(self, text: str, span: CharSpan) -> "DiffOperation":
        """Return a copy carrying the modified text and its span."""
        return dataclasses.replace(self, modified_text=text, modified_span=span)

    def with_category(self, category: Category, confidence: float) -> "DiffOperation":
        """Return a copy with the given classification and confidence."""
        return dataclasses.replace(self, category=category, confidence=confidence)

    def description(self) -> str:
        """Human-readable description of this operation."""
        original = self.original_text or ""
        modified = self.modified_text or ""
        if self.edit_type is EditType.INSERT:
            return f'Insert: "{modified}"'
        if self.edit_type is EditType.DELETE:
            return f'Delete: "{original}"'
        if self.edit_type is EditType.MODIFY:
            return f'Modify: "{original}" → "{modified}"'
        return "Equal"


@dataclass
class DiffStatistics:
    """Counts and ratios describing a diff."""

    original_length: int = 0
    modified_length: int = 0
    insertions: int = 0
    deletions: int = 0
    modifications: int = 0
    edit_distance: int = 0
    change_percentage: float = 0.0
    tokens_changed: int = 0
    total_tokens: int = 0

    @property
    def total_changes(self) -> int:
        return self.insertions + self.deletions + self.modifications

    def calculate_change_percentage(self) -> None:
        """Set change_percentage to the changes relative to the longer text."""
        max_length = max(self.original_length, self.modified_length)
        self.change_percentage = self.total_changes / max_length if max_length > 0 else 0.0


@dataclass
class DiffAnalysis:
    """Semantic and stylistic analysis attached to a diff."""

    semantic_similarity: float = 0.0
    stylistic_change: float = 0.0
    readability_change: float = 0.0
    tone_change: Optional[str] = None
    edit_intents: list[str] = field(default_factory=list)
    custom_metrics: list[tuple[str, float]] = field(default_factory=list)


@dataclass
class DiffResult:
    """The complete result of comparing two texts."""

    original_text: str
    modified_text: str
    operations: list[DiffOperation] = field(default_factory=list)
    analysis: DiffAnalysis = field(default_factory=DiffAnalysis)
    semantic_similarity: float = 1.0
    metrics: Optional[Any] = None
    statistics: DiffStatistics = field(init=False)

    def __post_init__(self) -> None:
        self.statistics = DiffStatistics(
            original_length=len(self.original_text),
            modified_length=len(self.modified_text),
        )
        pending = self.operations
        self.operations = []
        for op in pending:
            self.add_operation(op)

    def add_operation(self, op: DiffOperation) -> None:
        """Append an operation and update the edit counters."""
        if op.edit_type is EditType.INSERT:
            self.statistics.insertions += 1
        elif op.edit_type is EditType.DELETE:
            self.statistics.deletions += 1
        elif op.edit_type is EditType.MODIFY:
            self.statistics.modifications += 1
        self.operations.append(op)

    def finalize(self) -> None:
        """Compute derived statistics and copy the similarity shortcut."""
        self.statistics.calculate_change_percentage()
        self.statistics.edit_distance = self.statistics.total_changes
        self.semantic_similarity = self.analysis.semantic_similarity

    def summary(self) -> str:
        """One-line summary of the diff."""
        stats = self.statistics
        return (
            f"Diff Summary: {stats.insertions} insertions, {stats.deletions} deletions, "
            f"{stats.modifications} modifications. "
            f"Change: {stats.change_percentage * 100.0:.1f}%, "
            f"Semantic similarity: {self.semantic_similarity:.2f}"
        )

    def is_empty(self) -> bool:
        """True if no operation changes anything."""
        return all(op.edit_type is EditType.EQUAL for op in self.operations)

    def changed_operations(self) -> list[DiffOperation]:
        """Operations other than Equal."""
        return [op for op in self.operations if op.edit_type is not EditType.EQUAL]

    def operations_by_category(self) -> list[tuple[Category, list[DiffOperation]]]:
        """Group operations by category, in order of first appearance."""
        grouped: dict[Category, list[DiffOperation]] = {}
        for op in self.operations:
            grouped.setdefault(op.category, []).append(op)
        return list(grouped.items())

    def __str__(self) -> str:
        lines = ["=== Diff Result ===", self.summary(), "", "Operations:"]
        lines.extend(
            f"  {number}. {op.description()}"
            for number, op in enumerate(self.operations, start=1)
        )
        return "\n".join(lines) + "\n"


@dataclass
class DiffHunk:
    """A contiguous block of changed lines."""

    original_start: int
    original_count: int
    modified_start: int
    modified_count: int
    lines: list[str] = field(default_factory=list)


@dataclass
class UnifiedDiff:
    """A diff rendered in unified format."""

    original_name: str
    modified_name: str
    hunks: list[DiffHunk] = field(default_factory=list)

    def add_hunk(self, hunk: DiffHunk) -> None:
        self.hunks.append(hunk)

    def format(self) -> str:
        """Render as a unified diff string."""
        parts = [f"--- {self.original_name}\n", f"+++ {self.modified_name}\n"]
        for hunk in self.hunks:
            parts.append(
                f"@@ -{hunk.original_start},{hunk.original_count} "
                f"+{hunk.modified_start},{hunk.modified_count} @@\n"
            )
            parts.extend(f"{line}\n" for line in hunk.lines)
        return "".join(parts)