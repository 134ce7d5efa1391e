"""Tests for LineBufferSink."""

import pytest

from log_window.domain.errors import SinkError
from log_window.domain.models import Record
from log_window.gateway import LineBufferSink
from log_window.port.sink_port import LineSinkPort


def record(counter: int, text: str) -> Record:
    lines = len(text.splitlines())
    return Record(counter=counter, start_line=0, end_line=lines, uuid=f"uuid-{counter}", stdout=text)


class TestLineBufferSink:
    def test_implements_port(self):
        assert isinstance(LineBufferSink(), LineSinkPort)

    async def test_append_and_prepend(self):
        sink = LineBufferSink()

        await sink.append_lines([record(2, "b1\nb2")])
        await sink.append_lines([record(3, "c")])
        await sink.prepend_lines([record(1, "a")])

        assert sink.lines == ["a", "b1", "b2", "c"]
        assert sink.identities == {"uuid-1", "uuid-2", "uuid-3"}
        assert sink.operations() == ["append_lines", "append_lines", "prepend_lines"]

    async def test_evict_both_edges(self):
        sink = LineBufferSink()
        await sink.append_lines([record(1, "a\nb\nc\nd")])

        await sink.evict_high_lines(1)
        await sink.evict_low_lines(2)

        assert sink.lines == ["c"]

    async def test_evict_zero_lines(self):
        sink = LineBufferSink()
        await sink.append_lines([record(1, "a")])

        await sink.evict_high_lines(0)
        await sink.evict_low_lines(0)

        assert sink.lines == ["a"]

    async def test_evicting_too_many_lines_raises(self):
        sink = LineBufferSink()

        with pytest.raises(SinkError, match="cannot evict 3 lines from a buffer of 0"):
            await sink.evict_high_lines(3)

    async def test_remove_record(self):
        sink = LineBufferSink()
        await sink.append_lines([record(1, "a")])

        await sink.remove_record("uuid-1")
        await sink.remove_record(None)

        assert sink.identities == set()
        assert sink.calls[-2:] == [("remove_record", "uuid-1"), ("remove_record", None)]

    async def test_height_scales_with_line_height(self):
        sink = LineBufferSink(line_height=18.5)
        await sink.append_lines([record(1, "a\nb")])

        assert sink.height() == 37.0
        assert len(sink) == 2
