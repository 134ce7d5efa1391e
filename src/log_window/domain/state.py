"""In-memory index of the counters currently materialized in the window."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from log_window.domain.models import CounterRange, LineSpan, Record


class WindowState:
    """Tracks materialized counters with their line spans and identities.

    ``head`` and ``tail`` are maintained incrementally as records are added and
    discarded at the edges, so queries never scan the whole mapping. Both
    read as 0 while the window is empty.
    """

    def __init__(self) -> None:
        self._spans: dict[int, LineSpan] = {}
        self._identities: dict[int, str] = {}
        self._head = 0
        self._tail = 0

    def __repr__(self) -> str:
        return f"<WindowState range=({self._head}, {self._tail}), count={len(self._spans)}>"

    def __len__(self) -> int:
        return len(self._spans)

    def __contains__(self, counter: object) -> bool:
        return counter in self._spans

    @property
    def head(self) -> int:
        return self._head

    @property
    def tail(self) -> int:
        return self._tail

    @property
    def range(self) -> CounterRange:
        return (self._head, self._tail)

    @property
    def count(self) -> int:
        return len(self._spans)

    def span_of(self, counter: int) -> LineSpan | None:
        return self._spans.get(counter)

    def identity_of(self, counter: int) -> str | None:
        return self._identities.get(counter)

    def counters(self) -> Iterator[int]:
        """Iterate materialized counters in ascending order."""
        if not self._spans:
            return iter(())
        return (c for c in range(self._head, self._tail + 1) if c in self._spans)

    def highest(self, n: int) -> list[int]:
        """Return up to ``n`` of the highest counters, highest first."""
        if n <= 0 or not self._spans:
            return []
        low = max(self._tail - n + 1, self._head)
        return [c for c in range(self._tail, low - 1, -1) if c in self._spans]

    def lowest(self, n: int) -> list[int]:
        """Return up to ``n`` of the lowest counters, lowest first."""
        if n <= 0 or not self._spans:
            return []
        high = min(self._head + n - 1, self._tail)
        return [c for c in range(self._head, high + 1) if c in self._spans]

    def line_count(self, counters: Iterable[int]) -> int:
        """Total buffer lines occupied by ``counters``; unknown counters add 0."""
        total = 0
        for counter in counters:
            span = self._spans.get(counter)
            if span is not None:
                total += span.length
        return total

    def is_contiguous(self) -> bool:
        if not self._spans:
            return True
        return self._tail - self._head + 1 == len(self._spans)

    def add(self, record: Record) -> None:
        """Insert a record's span and identity together."""
        counter = record.counter
        self._spans[counter] = record.line_span
        self._identities[counter] = record.uuid

        if len(self._spans) == 1:
            self._head = self._tail = counter
        else:
            self._head = min(self._head, counter)
            self._tail = max(self._tail, counter)

    def discard(self, counter: int) -> str | None:
        """Remove a counter's span and identity; return the identity."""
        if counter not in self._spans:
            return None

        del self._spans[counter]
        identity = self._identities.pop(counter, None)

        if not self._spans:
            self._head = self._tail = 0
        elif counter == self._head:
            while self._head not in self._spans:
                self._head += 1
        elif counter == self._tail:
            while self._tail not in self._spans:
                self._tail -= 1

        return identity

    def clear(self) -> None:
        self._spans.clear()
        self._identities.clear()
        self._head = self._tail = 0
