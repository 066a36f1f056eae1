"""Tests for the path model: controls, keyframes, segments and paths."""

from __future__ import annotations

import math
import string

import pytest

from path_export.paths import (
    Control,
    Path,
    PathConfig,
    Segment,
    SegmentKind,
    SpeedKeyframe,
    classify_segment,
    curve,
    line,
    make_id,
)
from path_export.units import UnitOfSpeed


class TestControl:
    def test_heading_defaults_to_none(self) -> None:
        assert Control(1.0, 2.0).heading is None

    @pytest.mark.parametrize(
        "x, y", [(math.nan, 0.0), (0.0, math.inf), (-math.inf, 1.0)],
    )
    def test_non_finite_coordinates_rejected(self, x: float, y: float) -> None:
        with pytest.raises(ValueError, match="finite"):
            Control(x, y)

    def test_non_finite_heading_rejected(self) -> None:
        with pytest.raises(ValueError, match="heading"):
            Control(0.0, 0.0, math.nan)


class TestSpeedKeyframe:
    def test_valid(self) -> None:
        kf = SpeedKeyframe(0.5, 1.0)
        assert kf.x_pos == 0.5

    @pytest.mark.parametrize("x_pos", [-0.1, 1.0, 1.5])
    def test_x_pos_out_of_range(self, x_pos: float) -> None:
        with pytest.raises(ValueError, match="x_pos"):
            SpeedKeyframe(x_pos, 0.5)

    def test_y_pos_out_of_range(self) -> None:
        with pytest.raises(ValueError, match="y_pos"):
            SpeedKeyframe(0.0, 1.2)


class TestSegment:
    def test_two_controls_is_line(self) -> None:
        seg = line(Control(0, 0), Control(1, 1))
        assert classify_segment(seg) is SegmentKind.LINE
        assert seg.kind is SegmentKind.LINE

    def test_four_controls_is_curve(self) -> None:
        seg = curve(Control(0, 0), Control(1, 0), Control(2, 0), Control(3, 0))
        assert classify_segment(seg) is SegmentKind.CURVE

    def test_three_controls_is_curve(self) -> None:
        seg = Segment((Control(0, 0), Control(1, 1), Control(2, 0)))
        assert seg.kind is SegmentKind.CURVE

    def test_start_and_end(self) -> None:
        seg = curve(Control(0, 0), Control(1, 0), Control(2, 0), Control(3, 4))
        assert seg.start == Control(0, 0)
        assert seg.end == Control(3, 4)

    def test_fewer_than_two_controls_rejected(self) -> None:
        with pytest.raises(ValueError, match=">= 2 controls"):
            Segment((Control(0, 0),))

    def test_unsorted_keyframes_rejected(self) -> None:
        with pytest.raises(ValueError, match="sorted"):
            line(
                Control(0, 0), Control(1, 0),
                SpeedKeyframe(0.5, 1.0), SpeedKeyframe(0.2, 0.0),
            )


class TestPath:
    def test_make_id(self) -> None:
        uid = make_id()
        assert len(uid) == 10
        assert set(uid) <= set(string.ascii_letters + string.digits)

    def test_paths_get_distinct_ids(self) -> None:
        assert Path("a").uid != Path("b").uid

    def test_default_config(self) -> None:
        cfg = Path("a").config
        assert (cfg.speed_min, cfg.speed_max) == (20.0, 100.0)
        assert cfg.speed_unit is UnitOfSpeed.RPM

    def test_speed_limits_validated(self) -> None:
        with pytest.raises(ValueError, match="Invalid speed limits"):
            PathConfig(speed_min=50.0, speed_max=20.0)
        with pytest.raises(ValueError):
            PathConfig(speed_min=-1.0, speed_max=20.0)

    def test_equal_limits_allowed(self) -> None:
        cfg = PathConfig(5.4, 5.4)
        assert cfg.speed_min == cfg.speed_max
