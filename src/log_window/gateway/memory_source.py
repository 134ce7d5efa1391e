"""In-memory log source.

Holds an append-growing log in a list and serves it through ``LogSourcePort``.
Used by the replay CLI and as a realistic collaborator in tests.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from uuid import uuid4

import structlog

from log_window.domain.models import CounterRange, Record

logger = structlog.get_logger()


class InMemoryLogSource:
    """Log source backed by a list of records numbered from 1.

    Attributes:
        fetch_history: Every fetch made, as ``(operation, low, high)``.
    """

    def __init__(self, page_size: int = 50, latency: float = 0.0):
        if page_size < 1:
            raise ValueError("page_size must be >= 1")

        self._page_size = page_size
        self._latency = latency
        self._records: list[Record] = []
        self._cache: dict[int, Record] = {}
        self._next_line = 0
        self.fetch_history: list[tuple[str, int, int]] = []

    def __len__(self) -> int:
        return len(self._records)

    @property
    def cached_counters(self) -> set[int]:
        return set(self._cache)

    def append(self, stdout: str) -> Record:
        """Append a record whose span covers one line per line of ``stdout``."""
        line_count = max(len(stdout.splitlines()), 1)
        record = Record(
            counter=len(self._records) + 1,
            start_line=self._next_line,
            end_line=self._next_line + line_count,
            uuid=str(uuid4()),
            stdout=stdout,
        )
        self._records.append(record)
        self._next_line = record.end_line
        return record

    def extend(self, outputs: Sequence[str]) -> list[Record]:
        return [self.append(stdout) for stdout in outputs]

    def max_counter(self) -> int | None:
        return len(self._records)

    async def fetch_range(self, counters: CounterRange) -> list[Record]:
        low, high = counters
        self.fetch_history.append(("range", low, high))
        return await self._serve(max(low, 1), min(high, len(self._records)))

    async def fetch_first_page(self) -> list[Record]:
        high = min(self._page_size, len(self._records))
        self.fetch_history.append(("first", 1, high))
        return await self._serve(1, high)

    async def fetch_last_page(self) -> list[Record]:
        high = len(self._records)
        low = max(high - self._page_size + 1, 1)
        self.fetch_history.append(("last", low, high))
        return await self._serve(low, high)

    def reset_cache(self) -> None:
        logger.debug("Source cache reset", cached=len(self._cache))
        self._cache.clear()

    async def _serve(self, low: int, high: int) -> list[Record]:
        if self._latency:
            await asyncio.sleep(self._latency)
        if low > high:
            return []

        records = self._records[low - 1 : high]
        for record in records:
            self._cache[record.counter] = record
        return records
