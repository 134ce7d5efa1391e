"""Domain models for the sliding log window."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

# An inclusive (low, high) pair of counters.
CounterRange = tuple[int, int]


@dataclass(frozen=True)
class LineSpan:
    """Half-open range of presentation-buffer lines held by one record."""

    start_line: int
    end_line: int

    @property
    def length(self) -> int:
        return max(self.end_line - self.start_line, 0)


@dataclass(frozen=True)
class Record:
    """One log entry as delivered by the source.

    Attributes:
        counter: Position of the record in the log's total order (>= 1).
        start_line: First buffer line occupied once materialized.
        end_line: Line after the last one occupied (half-open).
        uuid: Opaque identity used to remove the record from the sink.
        stdout: Text rendered into the buffer, one entry per line.
    """

    counter: int
    start_line: int
    end_line: int
    uuid: str
    stdout: str = ""

    @property
    def line_span(self) -> LineSpan:
        return LineSpan(self.start_line, self.end_line)

    def render(self) -> list[str]:
        """Return exactly ``line_span.length`` lines of output."""
        length = self.line_span.length
        lines = self.stdout.splitlines()[:length]
        lines.extend([""] * (length - len(lines)))
        return lines


@dataclass(frozen=True)
class WindowSnapshot:
    """Point-in-time read-out of a window."""

    head: int
    tail: int
    count: int
    capacity: int
    max_counter: int
    lines: int

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "head": self.head,
            "tail": self.tail,
            "count": self.count,
            "capacity": self.capacity,
            "max_counter": self.max_counter,
            "lines": self.lines,
        }
