"""Byte-offset span tracking and the generic value/span annotation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Span:
    """A half-open ``[start, end)`` byte range within the input text."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(f"span start {self.start} is after end {self.end}")

    def merge(self, other: Span) -> Span:
        """Return the smallest span covering both ``self`` and ``other``."""
        return Span(min(self.start, other.start), max(self.end, other.end))

    @property
    def length(self) -> int:
        return self.end - self.start

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"


@dataclass(frozen=True)
class Annotation(Generic[T]):
    """A value paired with the span of source text it came from."""

    value: T
    span: Span
