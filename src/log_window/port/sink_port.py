"""Sink port: Protocol for the presentation buffer records are rendered into."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Protocol, runtime_checkable

from log_window.domain.models import Record

# Synchronous read of the buffer's current height, used to anchor scrolling.
HeightHook = Callable[[], float]


@runtime_checkable
class LineSinkPort(Protocol):
    """Port for materializing and evicting buffer lines at either edge."""

    async def append_lines(self, records: Sequence[Record]) -> None:
        """Render records after the last buffered line."""
        ...

    async def prepend_lines(self, records: Sequence[Record]) -> None:
        """Render records before the first buffered line."""
        ...

    async def evict_high_lines(self, count: int) -> None:
        """Remove ``count`` lines from the end of the buffer."""
        ...

    async def evict_low_lines(self, count: int) -> None:
        """Remove ``count`` lines from the start of the buffer."""
        ...

    async def remove_record(self, identity: str | None) -> None:
        """Forget the record addressed by ``identity``."""
        ...
