"""Source port: Protocol for the record source backing a window."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from log_window.domain.models import CounterRange, Record


@runtime_checkable
class LogSourcePort(Protocol):
    """Port for fetching log records by counter.

    Ranges passed to ``fetch_range`` are inclusive at both ends; the window
    filters out counters it already holds.
    """

    def max_counter(self) -> int | None:
        """Return the highest counter the log currently holds, if known."""
        ...

    async def fetch_range(self, counters: CounterRange) -> Sequence[Record]:
        """Fetch records with ``low <= counter <= high``."""
        ...

    async def fetch_first_page(self) -> Sequence[Record]:
        """Fetch the earliest page of the log."""
        ...

    async def fetch_last_page(self) -> Sequence[Record]:
        """Fetch the latest page of the log."""
        ...

    def reset_cache(self) -> None:
        """Drop any records cached from earlier fetches."""
        ...
