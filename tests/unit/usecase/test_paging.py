"""Tests for paging operations built on SlidingWindow.move."""

from tests.fixtures.logs import materialized, seed


class TestAdvance:
    async def test_caps_window_width_at_event_limit(self, make_window):
        window, source, sink = make_window(records=100, event_limit=50)
        await seed(window, source, sink, 1, 40)

        await window.advance(20)

        assert window.range() == (10, 60)
        assert window.tail() - window.head() == 50
        assert sink.calls[0] == ("evict_low_lines", 9)
        assert source.fetch_history == [("range", 40, 60)]

    async def test_defaults_to_page_size(self, window, source, sink):
        await seed(window, source, sink, 1, 50)

        await window.advance()

        assert window.range() == (1, 100)

    async def test_stops_at_end_of_log(self, window, source, sink):
        await seed(window, source, sink, 150, 200)

        await window.advance()

        assert window.range() == (150, 200)
        assert sink.calls == []

    async def test_from_empty_loads_first_page(self, window):
        await window.advance()

        assert window.range() == (1, 50)

    async def test_repeated_advances_stay_within_limit(self, make_window):
        window, _, _ = make_window(records=300, event_limit=100, page_size=50)

        for _ in range(8):
            await window.advance()
            assert window.tail() - window.head() <= window.event_limit
            assert window.state.is_contiguous()

        assert window.tail() == 300

    async def test_rapid_advances_build_on_each_other(self, window, source, sink):
        await seed(window, source, sink, 1, 50)

        first = window.advance()
        second = window.advance()
        await first
        await second

        assert window.range() == (1, 150)
        assert source.fetch_history == [("range", 50, 100), ("range", 100, 150)]


class TestRetreat:
    async def test_caps_window_width_at_event_limit(self, make_window):
        window, source, sink = make_window(records=100, event_limit=50)
        await seed(window, source, sink, 60, 100)

        await window.retreat(20)

        assert window.range() == (40, 90)
        assert sink.calls[0] == ("evict_high_lines", 10)
        assert source.fetch_history == [("range", 40, 60)]

    async def test_stops_at_start_of_log(self, window, source, sink):
        await seed(window, source, sink, 1, 50)

        await window.retreat()

        assert window.range() == (1, 50)
        assert sink.calls == []

    async def test_partial_room(self, window, source, sink):
        await seed(window, source, sink, 20, 60)

        await window.retreat()

        assert window.range() == (1, 60)

    async def test_on_empty_window_is_noop(self, window, source):
        height = await window.retreat()

        assert height == 0.0
        assert window.count() == 0
        assert source.fetch_history == []


class TestShiftHead:
    async def test_moves_only_low_edge(self, window, source, sink):
        await seed(window, source, sink, 10, 30)

        await window.shift_head(5)

        assert window.range() == (15, 30)

    async def test_never_below_first_counter(self, window, source, sink):
        await seed(window, source, sink, 10, 30)

        await window.shift_head(-100)

        assert window.range() == (1, 30)

    async def test_never_past_tail(self, window, source, sink):
        await seed(window, source, sink, 10, 30)

        await window.shift_head(100)

        assert window.range() == (30, 30)


class TestShiftTail:
    async def test_negative_delta_honored_in_full(self, window, source, sink):
        await seed(window, source, sink, 10, 30)

        await window.shift_tail(-5)

        assert window.range() == (10, 25)

    async def test_positive_delta_within_room(self, window, source, sink):
        await seed(window, source, sink, 10, 30)

        await window.shift_tail(20)

        assert window.range() == (10, 50)

    async def test_positive_delta_capped_by_room(self, window, source, sink):
        await seed(window, source, sink, 150, 190)

        await window.shift_tail(50)

        assert window.range() == (150, 200)


class TestReset:
    async def test_evicts_everything(self, window, source, sink):
        await seed(window, source, sink, 10, 30)

        await window.reset()

        assert window.count() == 0
        assert window.range() == (0, 0)
        assert sink.lines == []
        assert sink.identities == set()
        assert sink.calls[0] == ("evict_low_lines", 21)

    async def test_empty_window_makes_no_calls(self, window, sink):
        await window.reset()

        assert sink.calls == []


class TestJumps:
    async def test_jump_to_end_anchors_at_log_tail(self, window, source, sink):
        height = await window.jump_to_end()

        assert window.range() == (101, 200)
        assert source.fetch_history == [("last", 151, 200), ("range", 101, 151)]
        assert sink.calls == [
            ("prepend_lines", list(range(151, 201))),
            ("prepend_lines", list(range(101, 151))),
        ]
        assert sink.lines[0] == "event 101 line 1"
        assert sink.lines[-1] == "event 200 line 1"
        assert height == 50.0

    async def test_jump_to_start_after_jump_to_end(self, window, source, sink):
        await window.jump_to_end()
        source.fetch_history.clear()
        sink.calls.clear()

        height = await window.jump_to_start()

        assert window.range() == (1, 100)
        assert materialized(window) == list(range(1, 101))
        assert source.fetch_history == [("first", 1, 50), ("range", 50, 100)]
        assert sink.calls[0] == ("evict_low_lines", 100)
        assert sink.calls[-2:] == [
            ("append_lines", list(range(1, 51))),
            ("append_lines", list(range(51, 101))),
        ]
        assert sink.lines[0] == "event 1 line 1"
        assert height == 50.0

    async def test_jump_to_start_on_short_log(self, make_window):
        window, source, sink = make_window(records=30)

        await window.jump_to_start()

        assert window.range() == (1, 30)
        assert source.fetch_history == [("first", 1, 30)]

    async def test_queued_jumps_run_in_order(self, window):
        to_end = window.jump_to_end()
        to_start = window.jump_to_start()

        assert await to_end == 50.0
        await to_start

        assert window.range() == (1, 100)
