"""Markdown cleanup rule variants.

Each rule is an immutable value with a pure ``apply`` that takes the whole
document and returns the transformed document. Pattern-based rules compile
their expression on every call and let ``re.error`` escape; the engine decides
what to do with a broken rule.
"""
import re
from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class SectionBoundary:
    """Remove everything between a start and an end marker.

    With no ``end`` the span runs to the end of the document. When ``end`` is
    given but missing after some ``start`` occurrence, the rest of the document
    from that ``start`` is removed and scanning stops.

    Non-inclusive boundaries keep the closing marker: the end marker when one
    is found, otherwise the start marker that opened the span.
    """
    start: str
    end: Optional[str] = None
    inclusive: bool = True

    def apply(self, text: str) -> str:
        if not self.start:
            return text

        if self.end is None:
            pos = text.find(self.start)
            if pos == -1:
                return text
            cut = pos if self.inclusive else pos + len(self.start)
            return text[:cut]

        while True:
            start_pos = text.find(self.start)
            if start_pos == -1:
                return text
            after_start = start_pos + len(self.start)
            end_pos = text.find(self.end, after_start)
            if end_pos == -1:
                cut = start_pos if self.inclusive else after_start
                return text[:cut]
            if self.inclusive:
                end_pos += len(self.end)
            # The start marker is always consumed, so every pass shrinks the text.
            text = text[:start_pos] + text[end_pos:]


@dataclass(frozen=True)
class ExactMatch:
    """Remove a literal substring; ``max_occurrences=-1`` removes all."""
    literal: str
    max_occurrences: int = -1

    def apply(self, text: str) -> str:
        if not self.literal:
            return text
        if self.max_occurrences < 0:
            # Removing one occurrence can splice a new one together.
            while self.literal in text:
                text = text.replace(self.literal, "")
            return text
        return text.replace(self.literal, "", self.max_occurrences)


@dataclass(frozen=True)
class RegexRule:
    """Delete every match of a regular expression."""
    pattern: str
    case_insensitive: bool = False
    dot_all: bool = False

    @property
    def flags(self) -> int:
        flags = 0
        if self.case_insensitive:
            flags |= re.IGNORECASE
        if self.dot_all:
            flags |= re.DOTALL
        return flags

    def compile(self) -> re.Pattern:
        return re.compile(self.pattern, self.flags)

    def apply(self, text: str) -> str:
        return self.compile().sub("", text)


@dataclass(frozen=True)
class LineFilter:
    """Drop every line the pattern matches (search, not full match)."""
    pattern: str

    def compile(self) -> re.Pattern:
        return re.compile(self.pattern)

    def apply(self, text: str) -> str:
        regex = self.compile()
        lines = text.split("\n")
        return "\n".join(line for line in lines if not regex.search(line))


CleanupRule = Union[SectionBoundary, ExactMatch, RegexRule, LineFilter]
