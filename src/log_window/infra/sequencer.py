"""Serial task chain for window mutations.

Every step submitted to a ``Sequencer`` runs only after the previously
submitted step has settled, so steps execute one at a time and in submission
order regardless of how long each one's awaits take.
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

import structlog

logger = structlog.get_logger()

T = TypeVar("T")


class Sequencer:
    """
    A strictly serial chain of asyncio tasks.

    ``submit`` links the new step behind the last one synchronously, before
    yielding to the event loop, which fixes execution order at call time.
    A step that raises fails only its own task: the error is logged and
    delivered to whoever awaits that task, and the next step still runs.

    Steps must not await a task submitted to the same sequencer after
    themselves; that task waits for them and would never start.

    Example:
        sequencer = Sequencer("window")
        first = sequencer.submit(load_page, label="load")
        second = sequencer.submit(trim_page, label="trim")
        await second  # load_page has settled before trim_page started
    """

    def __init__(self, name: str = "window"):
        self._name = name
        self._last: asyncio.Task | None = None
        self._pending = 0
        self._submitted = 0

    def __repr__(self):
        return f"<Sequencer name={self._name} pending={self._pending} submitted={self._submitted}>"

    @property
    def pending(self) -> int:
        """Number of steps queued or running."""
        return self._pending

    def idle(self) -> bool:
        return self._pending == 0

    def submit(self, step: Callable[[], Awaitable[T]], *, label: str = "step") -> "asyncio.Task[T]":
        """
        Queue ``step`` behind every previously submitted step.

        Args:
            step: Zero-argument callable returning the awaitable to run.
            label: Name used in log events.

        Returns:
            Task resolving with the step's result or raising its error.

        Raises:
            RuntimeError: If called without a running event loop.
        """
        loop = asyncio.get_running_loop()
        previous = self._last
        self._submitted += 1
        self._pending += 1
        task = loop.create_task(self._run(previous, step, label, self._submitted))
        self._last = task
        return task

    async def drain(self) -> None:
        """Wait until every step submitted so far has settled."""
        while self._last is not None and not self._last.done():
            await asyncio.wait([self._last])

    async def _run(
        self,
        previous: asyncio.Task | None,
        step: Callable[[], Awaitable[T]],
        label: str,
        sequence: int,
    ) -> T:
        try:
            if previous is not None and not previous.done():
                # asyncio.wait settles without re-raising the predecessor's error
                await asyncio.wait([previous])

            logger.debug("Sequenced step started", sequencer=self._name, step=label, sequence=sequence)
            try:
                result = await step()
            except Exception as e:
                logger.error(
                    "Sequenced step failed",
                    sequencer=self._name,
                    step=label,
                    sequence=sequence,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                raise

            logger.debug("Sequenced step finished", sequencer=self._name, step=label, sequence=sequence)
            return result
        finally:
            self._pending -= 1
