"""Tests for SliceGesture path bookkeeping."""
from __future__ import annotations

import pytest

from slice_arcade.gesture import SliceGesture


class TestBegin:
    def test_begin_starts_single_point_path(self) -> None:
        g = SliceGesture()
        g.begin((1.0, 1.0))
        assert g.points == ((1.0, 1.0),)
        assert g.active
        assert g.render_path() == ()

    def test_begin_clears_previous_path(self) -> None:
        g = SliceGesture()
        g.begin((0.0, 0.0))
        g.extend((1.0, 0.0))
        g.extend((2.0, 0.0))
        g.begin((9.0, 9.0))
        assert g.points == ((9.0, 9.0),)

    def test_cap_below_two_rejected(self) -> None:
        with pytest.raises(ValueError):
            SliceGesture(max_points=1)


class TestExtend:
    def test_returns_only_newest_segment(self) -> None:
        g = SliceGesture()
        g.begin((0.0, 0.0))
        g.extend((1.0, 0.0))
        sample = g.extend((2.0, 0.0))
        assert sample.segment == ((1.0, 0.0), (2.0, 0.0))
        assert sample.path == ((0.0, 0.0), (1.0, 0.0), (2.0, 0.0))

    def test_path_never_exceeds_twelve(self) -> None:
        g = SliceGesture()
        g.begin((0.0, 0.0))
        for i in range(1, 40):
            sample = g.extend((float(i), 0.0))
            assert len(sample.path) <= 12

    @pytest.mark.parametrize("k", [13, 20, 57])
    def test_keeps_last_twelve_in_order(self, k: int) -> None:
        inputs = [(float(i), float(i * 2)) for i in range(k)]
        g = SliceGesture()
        g.begin(inputs[0])
        for p in inputs[1:]:
            g.extend(p)
        assert len(g.points) == 12
        assert list(g.points) == inputs[-12:]

    def test_extend_while_idle_starts_new_path(self) -> None:
        g = SliceGesture()
        sample = g.extend((5.0, 5.0))
        assert sample.segment is None
        assert sample.path == ()
        assert g.points == ((5.0, 5.0),)
        assert g.active


class TestEnd:
    def test_end_keeps_points(self) -> None:
        g = SliceGesture()
        g.begin((0.0, 0.0))
        g.extend((1.0, 1.0))
        g.end()
        assert not g.active
        assert g.points == ((0.0, 0.0), (1.0, 1.0))

    def test_extend_after_end_restarts(self) -> None:
        g = SliceGesture()
        g.begin((0.0, 0.0))
        g.extend((1.0, 1.0))
        g.end()
        sample = g.extend((50.0, 50.0))
        assert sample.segment is None
        assert g.points == ((50.0, 50.0),)
