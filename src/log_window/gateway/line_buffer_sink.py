"""In-memory presentation buffer implementing ``LineSinkPort``."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import structlog

from log_window.domain.errors import SinkError
from log_window.domain.models import Record

logger = structlog.get_logger()


class LineBufferSink:
    """
    Renders records into a flat list of text lines.

    Attributes:
        lines: Buffered lines, lowest counter first.
        calls: Journal of ``(operation, argument)`` pairs, one per sink call.
    """

    def __init__(self, line_height: float = 1.0):
        self._line_height = line_height
        self._identities: set[str] = set()
        self.lines: list[str] = []
        self.calls: list[tuple[str, Any]] = []

    def __len__(self) -> int:
        return len(self.lines)

    @property
    def identities(self) -> set[str]:
        return set(self._identities)

    def height(self) -> float:
        """Rendered height; suitable as a window's height hook."""
        return len(self.lines) * self._line_height

    def operations(self) -> list[str]:
        return [operation for operation, _ in self.calls]

    async def append_lines(self, records: Sequence[Record]) -> None:
        self.calls.append(("append_lines", [r.counter for r in records]))
        for record in records:
            self.lines.extend(record.render())
            self._identities.add(record.uuid)

    async def prepend_lines(self, records: Sequence[Record]) -> None:
        self.calls.append(("prepend_lines", [r.counter for r in records]))
        rendered: list[str] = []
        for record in records:
            rendered.extend(record.render())
            self._identities.add(record.uuid)
        self.lines[:0] = rendered

    async def evict_high_lines(self, count: int) -> None:
        self.calls.append(("evict_high_lines", count))
        self._check_evictable(count)
        if count:
            del self.lines[-count:]

    async def evict_low_lines(self, count: int) -> None:
        self.calls.append(("evict_low_lines", count))
        self._check_evictable(count)
        del self.lines[:count]

    async def remove_record(self, identity: str | None) -> None:
        self.calls.append(("remove_record", identity))
        if identity is None:
            logger.warning("Removing record without identity")
            return
        self._identities.discard(identity)

    def _check_evictable(self, count: int) -> None:
        if count < 0:
            raise SinkError(f"cannot evict a negative line count ({count})")
        if count > len(self.lines):
            raise SinkError(f"cannot evict {count} lines from a buffer of {len(self.lines)}")
