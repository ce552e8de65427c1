"""Selectors that pick out groups of operations from a diff."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from redline.diff import CharSpan, DiffOperation, DiffResult, EditType


def _operation_span(op: DiffOperation) -> Optional[CharSpan]:
    """The span an operation occupies, preferring the original side."""
    return op.original_span if op.original_span is not None else op.modified_span


def _lines_with_offsets(text: str) -> Iterator[tuple[int, str]]:
    """Yield ``(offset, line)`` for each line, ignoring a final newline.

    Line terminators are ``\\n`` or ``\\r\\n``; the ``\\r`` is dropped from
    the line, and offsets advance by the line length plus one.
    """
    if not text:
        return
    pieces = text.split("\n")
    if text.endswith("\n"):
        pieces.pop()
    offset = 0
    for piece in pieces:
        line = piece[:-1] if piece.endswith("\r") else piece
        yield offset, line
        offset += len(line) + 1


class DiffSelector(ABC):
    """Chooses a subset of the operations in a diff."""

    name: str = ""

    @abstractmethod
    def select(self, diff: DiffResult) -> list[DiffOperation]:
        """Return the selected operations, in diff order."""


@dataclass(frozen=True)
class WholeDocumentSelector(DiffSelector):
    """Selects every operation."""

    name = "whole_document"

    def select(self, diff: DiffResult) -> list[DiffOperation]:
        return list(diff.operations)


@dataclass(frozen=True)
class ParagraphSelector(DiffSelector):
    """Selects operations overlapping given paragraphs (0-indexed) of the original."""

    paragraphs: tuple[int, ...] = ()
    name = "paragraph"

    def __post_init__(self) -> None:
        object.__setattr__(self, "paragraphs", tuple(self.paragraphs))

    @classmethod
    def single(cls, paragraph: int) -> "ParagraphSelector":
        return cls((paragraph,))

    @classmethod
    def range(cls, start: int, end: int) -> "ParagraphSelector":
        """Paragraphs ``start`` up to but not including ``end``."""
        return cls(tuple(range(start, end)))

    @staticmethod
    def paragraph_spans(text: str) -> list[CharSpan]:
        """Spans of paragraphs, which are separated by blank lines."""
        spans: list[CharSpan] = []
        current_start = 0
        in_paragraph = False
        for line_start, line in _lines_with_offsets(text):
            if not line.strip():
                if in_paragraph:
                    spans.append(CharSpan(current_start, line_start))
                    in_paragraph = False
            elif not in_paragraph:
                current_start = line_start
                in_paragraph = True
        if in_paragraph:
            spans.append(CharSpan(current_start, len(text)))
        return spans

    def _matches(self, op: DiffOperation, para_spans: Sequence[CharSpan]) -> bool:
        span = _operation_span(op)
        if span is None:
            return False
        return any(
            0 <= index < len(para_spans) and span.overlaps(para_spans[index])
            for index in self.paragraphs
        )

    def select(self, diff: DiffResult) -> list[DiffOperation]:
        para_spans = self.paragraph_spans(diff.original_text)
        return [op for op in diff.operations if self._matches(op, para_spans)]


@dataclass(frozen=True)
class SectionSelector(DiffSelector):
    """Selects operations inside sections whose header contains one of the targets.

    A header is a line starting with ``#`` or a line of at least two words
    with no lowercase letters. Matching ignores case.
    """

    sections: tuple[str, ...] = ()
    name = "section"

    def __post_init__(self) -> None:
        object.__setattr__(self, "sections", tuple(self.sections))

    @classmethod
    def by_headers(cls, headers: Iterable[str]) -> "SectionSelector":
        return cls(tuple(str(header) for header in headers))

    @staticmethod
    def is_header_line(line: str) -> bool:
        trimmed = line.strip()
        if trimmed.startswith("#"):
            return True
        words = trimmed.split()
        return len(words) >= 2 and all(
            ch.isupper() or not ch.isalpha() for word in words for ch in word
        )

    @classmethod
    def section_spans(cls, text: str) -> list[tuple[str, CharSpan]]:
        """``(header, span)`` for each section of the text."""
        sections: list[tuple[str, CharSpan]] = []
        current_header = ""
        current_start = 0
        for line_start, line in _lines_with_offsets(text):
            if cls.is_header_line(line):
                if current_header:
                    sections.append((current_header, CharSpan(current_start, line_start)))
                current_header = line.strip()
                current_start = line_start
        if current_header:
            sections.append((current_header, CharSpan(current_start, len(text))))
        return sections

    def _header_matches(self, header: str) -> bool:
        lowered = header.lower()
        return any(target.lower() in lowered for target in self.sections)

    def _matches(self, op: DiffOperation, sections: Sequence[tuple[str, CharSpan]]) -> bool:
        span = _operation_span(op)
        if span is None:
            return False
        return any(
            self._header_matches(header) and span.overlaps(section_span)
            for header, section_span in sections
        )

    def select(self, diff: DiffResult) -> list[DiffOperation]:
        sections = self.section_spans(diff.original_text)
        return [op for op in diff.operations if self._matches(op, sections)]


@dataclass(frozen=True)
class EditTypeSelector(DiffSelector):
    """Selects operations of the given edit types."""

    edit_types: frozenset[EditType] = field(default_factory=frozenset)
    name = "edit_type"

    def __post_init__(self) -> None:
        object.__setattr__(self, "edit_types", frozenset(self.edit_types))

    @classmethod
    def insertions(cls) -> "EditTypeSelector":
        return cls(frozenset({EditType.INSERT}))

    @classmethod
    def deletions(cls) -> "EditTypeSelector":
        return cls(frozenset({EditType.DELETE}))

    @classmethod
    def modifications(cls) -> "EditTypeSelector":
        return cls(frozenset({EditType.MODIFY}))

    @classmethod
    def changes(cls) -> "EditTypeSelector":
        """Every kind of edit except Equal."""
        return cls(frozenset({EditType.INSERT, EditType.DELETE, EditType.MODIFY}))

    def select(self, diff: DiffResult) -> list[DiffOperation]:
        return [op for op in diff.operations if op.edit_type in self.edit_types]


@dataclass(frozen=True)
class PositionRangeSelector(DiffSelector):
    """Selects operations overlapping the character range ``[start, end)``."""

    start: int
    end: int
    name = "position_range"

    def select(self, diff: DiffResult) -> list[DiffOperation]:
        window = CharSpan(self.start, self.end)
        selected = []
        for op in diff.operations:
            span = _operation_span(op)
            if span is not None and span.overlaps(window):
                selected.append(op)
        return selected


class CompositeMode(Enum):
    ALL = "and"
    ANY = "or"


@dataclass(frozen=True)
class CompositeSelector(DiffSelector):
    """Combines selectors, keeping operations chosen by all or by any of them."""

    mode: CompositeMode
    selectors: tuple[DiffSelector, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "selectors", tuple(self.selectors))

    @classmethod
    def all_of(cls, selectors: Iterable[DiffSelector]) -> "CompositeSelector":
        return cls(CompositeMode.ALL, tuple(selectors))

    @classmethod
    def any_of(cls, selectors: Iterable[DiffSelector]) -> "CompositeSelector":
        return cls(CompositeMode.ANY, tuple(selectors))

    @property
    def name(self) -> str:  # type: ignore[override]
        return f"composite_{self.mode.value}"

    def select(self, diff: DiffResult) -> list[DiffOperation]:
        if not self.selectors:
            return []
        chosen = [{id(op) for op in selector.select(diff)} for selector in self.selectors]
        if self.mode is CompositeMode.ALL:
            keep = set.intersection(*chosen)
        else:
            keep = set.union(*chosen)
        return [op for op in diff.operations if id(op) in keep]