"""Sliding window usecase: keeps a bounded, contiguous run of log records
materialized and moves it with minimal fetch/evict work."""

import asyncio
import math
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from functools import partial

import structlog

from log_window.config import settings
from log_window.domain.errors import SinkError, SourceError, WindowError
from log_window.domain.models import CounterRange, Record, WindowSnapshot
from log_window.domain.ranges import clamp, overlap_vector
from log_window.domain.state import WindowState
from log_window.infra.sequencer import Sequencer
from log_window.port.sink_port import HeightHook, LineSinkPort
from log_window.port.source_port import LogSourcePort

logger = structlog.get_logger()


@contextmanager
def _source_call(operation: str) -> Iterator[None]:
    try:
        yield
    except WindowError:
        raise
    except Exception as e:
        raise SourceError(f"{operation} failed: {e}") from e


@contextmanager
def _sink_call(operation: str) -> Iterator[None]:
    try:
        yield
    except WindowError:
        raise
    except Exception as e:
        raise SinkError(f"{operation} failed: {e}") from e


class SlidingWindow:
    """Window of log records backed by a source and a line sink.

    Every mutating call (edge operations, ``move`` and the paging intents) is
    queued on the window's ``Sequencer`` and returns the ``asyncio.Task`` for
    its outcome. Targets are computed when the step runs, against the state
    left by the step before it.
    """

    def __init__(
        self,
        source: LogSourcePort,
        sink: LineSinkPort,
        height_hook: HeightHook,
        *,
        event_limit: int | None = None,
        page_size: int | None = None,
    ) -> None:
        self._source = source
        self._sink = sink
        self._height_hook = height_hook
        self._event_limit = event_limit if event_limit is not None else settings.event_limit
        self._page_size = page_size if page_size is not None else settings.page_size

        self._state = WindowState()
        self._sequencer = Sequencer("window")

        with _source_call("reset_cache"):
            source.reset_cache()

    def __repr__(self) -> str:
        return f"<SlidingWindow range={self.range()} count={self.count()} limit={self._event_limit}>"

    @property
    def event_limit(self) -> int:
        return self._event_limit

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def state(self) -> WindowState:
        return self._state

    @property
    def sequencer(self) -> Sequencer:
        return self._sequencer

    # Queries

    def head(self) -> int:
        return self._state.head

    def tail(self) -> int:
        return self._state.tail

    def range(self) -> CounterRange:
        return self._state.range

    def count(self) -> int:
        return self._state.count

    def capacity(self) -> int:
        return self._event_limit - self._state.count

    def max_counter(self) -> int:
        """Highest counter of the log; never below the window's own tail."""
        tail = self._state.tail
        with _source_call("max_counter"):
            counter = self._source.max_counter()
        if counter is None or not math.isfinite(counter):
            return tail
        return max(int(counter), tail)

    def snapshot(self) -> WindowSnapshot:
        return WindowSnapshot(
            head=self.head(),
            tail=self.tail(),
            count=self.count(),
            capacity=self.capacity(),
            max_counter=self.max_counter(),
            lines=self._state.line_count(self._state.counters()),
        )

    async def drain(self) -> None:
        """Wait for every queued step to settle."""
        await self._sequencer.drain()

    # Edge operations

    def grow_high(self, records: Sequence[Record]) -> asyncio.Task[None]:
        return self._sequencer.submit(partial(self._grow_high, records), label="grow_high")

    def grow_low(self, records: Sequence[Record]) -> asyncio.Task[None]:
        return self._sequencer.submit(partial(self._grow_low, records), label="grow_low")

    def shrink_high(self, count: int) -> asyncio.Task[None]:
        return self._sequencer.submit(partial(self._shrink_high, count), label="shrink_high")

    def shrink_low(self, count: int) -> asyncio.Task[None]:
        return self._sequencer.submit(partial(self._shrink_low, count), label="shrink_low")

    # Reconciler and paging

    def move(self, target: tuple[float, float]) -> asyncio.Task[float]:
        """Queue a move to ``target``; the task resolves with the anchor height.

        ``move`` materializes whatever clamped target it is given, even one
        wider than ``event_limit`` (only a warning is logged). The paging
        operations are what keep ``tail - head`` within the limit.
        """
        return self._sequencer.submit(partial(self._move, target), label="move")

    def advance(self, step: int | None = None) -> asyncio.Task[float]:
        step = self._page_size if step is None else step
        return self._sequencer.submit(partial(self._advance, step), label="advance")

    def retreat(self, step: int | None = None) -> asyncio.Task[float]:
        step = self._page_size if step is None else step
        return self._sequencer.submit(partial(self._retreat, step), label="retreat")

    def shift_head(self, delta: int) -> asyncio.Task[float]:
        return self._sequencer.submit(partial(self._shift_head, delta), label="shift_head")

    def shift_tail(self, delta: int) -> asyncio.Task[float]:
        return self._sequencer.submit(partial(self._shift_tail, delta), label="shift_tail")

    def reset(self) -> asyncio.Task[None]:
        return self._sequencer.submit(self._reset, label="reset")

    def jump_to_start(self) -> asyncio.Task[float]:
        return self._sequencer.submit(self._jump_to_start, label="jump_to_start")

    def jump_to_end(self) -> asyncio.Task[float]:
        return self._sequencer.submit(self._jump_to_end, label="jump_to_end")

    # Step bodies. These run inside a sequenced step and must not go back
    # through the public methods above.

    def _height(self) -> float:
        return self._height_hook()

    async def _fetch_range(self, counters: CounterRange) -> Sequence[Record]:
        with _source_call("fetch_range"):
            return await self._source.fetch_range(counters)

    async def _grow_high(self, records: Sequence[Record]) -> None:
        tail = self._state.tail
        fresh = sorted((r for r in records if r.counter > tail), key=lambda r: r.counter)
        if not fresh:
            return

        with _sink_call("append_lines"):
            await self._sink.append_lines(fresh)

        for record in fresh:
            self._state.add(record)

        logger.debug("Grew window high", added=len(fresh), head=self._state.head, tail=self._state.tail)

    async def _grow_low(self, records: Sequence[Record]) -> None:
        head, tail = self._state.range
        fresh = sorted(
            (r for r in records if r.counter < head or r.counter > tail),
            key=lambda r: r.counter,
        )
        if not fresh:
            return

        with _sink_call("prepend_lines"):
            await self._sink.prepend_lines(fresh)

        for record in fresh:
            self._state.add(record)

        logger.debug("Grew window low", added=len(fresh), head=self._state.head, tail=self._state.tail)

    async def _shrink_high(self, count: int) -> None:
        if not count or count <= 0:
            return

        counters = self._state.highest(count)
        lines = self._state.line_count(counters)

        with _sink_call("evict_high_lines"):
            await self._sink.evict_high_lines(lines)

        await self._forget(counters)
        logger.debug("Shrank window high", removed=len(counters), lines=lines, tail=self._state.tail)

    async def _shrink_low(self, count: int) -> None:
        if not count or count <= 0:
            return

        counters = self._state.lowest(count)
        lines = self._state.line_count(counters)

        with _sink_call("evict_low_lines"):
            await self._sink.evict_low_lines(lines)

        await self._forget(counters)
        logger.debug("Shrank window low", removed=len(counters), lines=lines, head=self._state.head)

    async def _forget(self, counters: list[int]) -> None:
        # Lines are already evicted; state must follow before any sink call can fail.
        identities = [self._state.discard(counter) for counter in counters]

        failures = []
        for identity in identities:
            try:
                await self._sink.remove_record(identity)
            except Exception as e:
                failures.append(f"{identity}: {e}")

        if failures:
            raise SinkError(f"remove_record failed for {len(failures)} record(s): {'; '.join(failures)}")

    async def _move(self, target: tuple[float, float]) -> float:
        new_head, new_tail = clamp(target, (1, self.max_counter()))

        if not (math.isfinite(new_head) and math.isfinite(new_tail)) or new_head > new_tail:
            logger.debug("Move skipped", target=list(target), bounded=[new_head, new_tail])
            return self._height()

        new_head, new_tail = int(new_head), int(new_tail)
        head, tail = self._state.range
        overlap = overlap_vector((head, tail), (new_head, new_tail))

        if overlap is None:
            await self._reset()
            records = await self._fetch_range((new_head, new_tail))
            await self._grow_high(records)
            height = self._height()
        else:
            if overlap.low < 0:
                await self._shrink_low(abs(overlap.low))
            if overlap.high < 0:
                await self._shrink_high(abs(overlap.high))

            # Anchor before anything is inserted above or below.
            height = self._height()

            if overlap.low > 0:
                records = await self._fetch_range((head - overlap.low, head))
                await self._grow_low(records)
            if overlap.high > 0:
                records = await self._fetch_range((tail, tail + overlap.high))
                await self._grow_high(records)

        if self._state.tail - self._state.head > self._event_limit:
            logger.warning(
                "Window wider than event limit",
                head=self._state.head,
                tail=self._state.tail,
                event_limit=self._event_limit,
            )

        logger.debug(
            "Window moved",
            previous=[head, tail],
            target=[new_head, new_tail],
            disjoint=overlap is None,
            count=self._state.count,
        )
        return height

    async def _advance(self, step: int) -> float:
        head, tail = self._state.range

        tail_room = self.max_counter() - tail
        tail_delta = min(tail_room, step)
        new_tail = tail + tail_delta

        head_delta = 0
        if new_tail - head > self._event_limit:
            head_delta = (new_tail - self._event_limit) - head

        return await self._move((head + head_delta, tail + tail_delta))

    async def _retreat(self, step: int) -> float:
        head, tail = self._state.range

        head_room = head - 1
        head_delta = min(head_room, step)
        new_head = head - head_delta

        tail_delta = 0
        if tail - new_head > self._event_limit:
            tail_delta = tail - (new_head + self._event_limit)

        return await self._move((new_head, tail - tail_delta))

    async def _shift_head(self, delta: int) -> float:
        head, tail = self._state.range
        new_head = max(1, min(head + delta, tail))
        return await self._move((new_head, tail))

    async def _shift_tail(self, delta: int) -> float:
        head, tail = self._state.range
        tail_room = self.max_counter() - tail
        # Retreats are honored in full; extensions stop at the end of the log.
        tail_delta = delta if delta < 0 else min(tail_room, delta)
        return await self._move((head, tail + tail_delta))

    async def _reset(self) -> None:
        count = self._state.count
        if count > 0:
            await self._shrink_low(count)

    async def _jump_to_start(self) -> float:
        await self._reset()
        with _source_call("fetch_first_page"):
            records = await self._source.fetch_first_page()
        await self._grow_high(records)
        return await self._shift_tail(self._page_size)

    async def _jump_to_end(self) -> float:
        await self._reset()
        with _source_call("fetch_last_page"):
            records = await self._source.fetch_last_page()
        await self._grow_low(records)
        return await self._shift_head(-self._page_size)
