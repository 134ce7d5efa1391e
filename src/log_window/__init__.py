"""Sliding-window cache for counter-numbered streaming log records.

Keeps a bounded, contiguous window of log records materialized in a
presentation buffer and moves it with the minimal set of fetch and evict
operations against a record source and a line sink.

Usage:
    python -m log_window replay --records 500 --steps end,retreat,start
"""

from log_window.domain.models import LineSpan, Record, WindowSnapshot
from log_window.usecase.sliding_window import SlidingWindow

__all__ = ["LineSpan", "Record", "SlidingWindow", "WindowSnapshot"]
__version__ = "0.1.0"
