"""Tests for widget reordering."""

from collections import Counter
from itertools import product

import pytest

from trading_dashboard.config import DEFAULT_LAYOUT, WidgetId
from trading_dashboard.layout import WidgetLayoutManager, move, parse_drag_index

CHARTS, ORDERS, PORTFOLIO, NEWS = DEFAULT_LAYOUT


class TestMove:
    def test_move_right_uses_post_removal_index(self):
        assert move(DEFAULT_LAYOUT, 0, 2) == (ORDERS, PORTFOLIO, CHARTS, NEWS)

    def test_move_left(self):
        assert move(DEFAULT_LAYOUT, 3, 0) == (NEWS, CHARTS, ORDERS, PORTFOLIO)

    def test_move_to_end(self):
        assert move(DEFAULT_LAYOUT, 1, 3) == (CHARTS, PORTFOLIO, NEWS, ORDERS)

    def test_same_index_is_noop(self):
        for i in range(len(DEFAULT_LAYOUT)):
            assert move(DEFAULT_LAYOUT, i, i) == DEFAULT_LAYOUT

    def test_preserves_ids_and_length(self):
        n = len(DEFAULT_LAYOUT)
        for src, dst in product(range(n), range(n)):
            result = move(DEFAULT_LAYOUT, src, dst)
            assert len(result) == n
            assert Counter(result) == Counter(DEFAULT_LAYOUT)
            assert result[dst] == DEFAULT_LAYOUT[src]

    @pytest.mark.parametrize("source", [-1, 4, 99, None, "x", "1", True, 1.0])
    def test_invalid_source_is_noop(self, source):
        assert move(DEFAULT_LAYOUT, source, 2) is DEFAULT_LAYOUT

    def test_target_clamped(self):
        assert move(DEFAULT_LAYOUT, 0, 10) == (ORDERS, PORTFOLIO, NEWS, CHARTS)
        assert move(DEFAULT_LAYOUT, 3, -5) == (NEWS, CHARTS, ORDERS, PORTFOLIO)

    def test_input_not_modified(self):
        layout = tuple(DEFAULT_LAYOUT)
        move(layout, 0, 3)
        assert layout == DEFAULT_LAYOUT


class TestParseDragIndex:
    @pytest.mark.parametrize(
        "payload,expected",
        [
            ("2", 2),
            (" 1 ", 1),
            (3, 3),
            ("", None),
            ("abc", None),
            ("1.5", None),
            (None, None),
            (True, None),
        ],
    )
    def test_parse(self, payload, expected):
        assert parse_drag_index(payload) == expected


class TestWidgetLayoutManager:
    def test_default_layout(self):
        manager = WidgetLayoutManager()
        assert [w.value for w in manager.layout] == ["charts", "orders", "portfolio", "news"]

    def test_accepts_values(self):
        manager = WidgetLayoutManager(["news", "charts", "orders", "portfolio"])
        assert manager.layout[0] is WidgetId.NEWS

    def test_duplicate_rejected(self):
        with pytest.raises(ValueError, match="exactly once"):
            WidgetLayoutManager([CHARTS, CHARTS, ORDERS, NEWS])

    def test_missing_rejected(self):
        with pytest.raises(ValueError, match="exactly once"):
            WidgetLayoutManager([CHARTS, ORDERS, NEWS])

    def test_unknown_widget_rejected(self):
        with pytest.raises(ValueError):
            WidgetLayoutManager(["charts", "orders", "portfolio", "calendar"])

    def test_move_widget(self):
        manager = WidgetLayoutManager()
        assert manager.move_widget(0, 2) is True
        assert manager.layout == (ORDERS, PORTFOLIO, CHARTS, NEWS)

    def test_move_widget_noop(self):
        manager = WidgetLayoutManager()
        assert manager.move_widget(1, 1) is False
        assert manager.move_widget(None, 1) is False
        assert manager.layout == DEFAULT_LAYOUT
