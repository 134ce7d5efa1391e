"""Shared test fixtures for log-window."""

import logging
from collections.abc import Callable

import pytest
import structlog

from log_window.gateway import InMemoryLogSource, LineBufferSink
from log_window.usecase.sliding_window import SlidingWindow
from tests.fixtures.logs import build_source


@pytest.fixture
def source() -> InMemoryLogSource:
    """A 200 record log, one line per record."""
    return build_source(200)


@pytest.fixture
def sink() -> LineBufferSink:
    return LineBufferSink()


@pytest.fixture
def window(source: InMemoryLogSource, sink: LineBufferSink) -> SlidingWindow:
    """Empty window with a generous limit over the default source and sink."""
    return SlidingWindow(source, sink, sink.height, event_limit=1000, page_size=50)


@pytest.fixture
def make_window() -> Callable[..., tuple[SlidingWindow, InMemoryLogSource, LineBufferSink]]:
    """Factory for windows over a custom log.

    Usage:
        window, source, sink = make_window(records=100, event_limit=50)
    """

    def _make(
        records: int = 200,
        lines_per_record: int = 1,
        event_limit: int = 1000,
        page_size: int = 50,
    ) -> tuple[SlidingWindow, InMemoryLogSource, LineBufferSink]:
        source = build_source(records, lines_per_record, page_size)
        sink = LineBufferSink()
        window = SlidingWindow(source, sink, sink.height, event_limit=event_limit, page_size=page_size)
        return window, source, sink

    return _make


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo any configure_logging() call made during a test."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level

    yield

    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()
