"""Tests for the station selection cursor."""

import itertools

import pytest

from nezumi_p.navigation import NavEvent, Navigator


class TestNavigator:
    def test_starts_at_zero(self):
        assert Navigator(4).cursor == 0

    def test_move_up_at_top_is_noop(self):
        nav = Navigator(4)
        nav.move_up()
        assert nav.cursor == 0

    @pytest.mark.parametrize("count", [1, 2, 4, 7])
    def test_n_moves_down_reach_last_index(self, count):
        nav = Navigator(count)
        for _ in range(count):
            nav.move_down()
        assert nav.cursor == count - 1

    def test_move_down_saturates(self):
        nav = Navigator(3)
        for _ in range(10):
            nav.move_down()
        assert nav.cursor == 2

    def test_up_after_down(self):
        nav = Navigator(3)
        nav.move_down()
        nav.move_down()
        nav.move_up()
        assert nav.cursor == 1

    def test_handle_returns_cursor(self):
        nav = Navigator(3)
        assert nav.handle(NavEvent.MOVE_DOWN) == 1
        assert nav.handle(NavEvent.MOVE_UP) == 0
        assert nav.handle(NavEvent.MOVE_UP) == 0

    def test_zero_stations(self):
        nav = Navigator(0)
        nav.move_down()
        nav.move_up()
        assert nav.cursor == 0

    def test_negative_count_rejected(self):
        with pytest.raises(ValueError):
            Navigator(-1)

    @pytest.mark.parametrize("count", [1, 2, 3])
    def test_every_event_sequence_stays_in_range(self, count):
        events = [NavEvent.MOVE_UP, NavEvent.MOVE_DOWN]
        for sequence in itertools.product(events, repeat=6):
            nav = Navigator(count)
            for event in sequence:
                cursor = nav.handle(event)
                assert 0 <= cursor <= count - 1
