from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Iterable, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Span:
    """Half-open [start, end) character range claimed by an extractor."""
    start: int
    end: int

    def overlaps(self, other: "Span") -> bool:
        return self.start < other.end and other.start < self.end


@dataclass(frozen=True)
class Match(Generic[T]):
    value: T
    spans: tuple[Span, ...]


def blank_spans(text: str, spans: Iterable[Span]) -> str:
    """
    Replace every claimed character with a space.
    Offsets into the returned text stay valid for later extractors.
    """
    chars = list(text)
    for span in spans:
        for i in range(max(span.start, 0), min(span.end, len(chars))):
            chars[i] = " "
    return "".join(chars)
