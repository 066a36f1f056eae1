"""Path model -- the geometry handed to the export formats.

Every object here is an immutable, slotted dataclass.  Coordinates are in
the editor's unit of length (``GeneralConfig.uol``); nothing in this module
knows about output units.

Segment shape
-------------
A segment with exactly two controls is a straight *line*; three or more
controls make a Bezier *curve* (cubic in the editor).  The shape is
exposed as a :class:`SegmentKind` tag so format encoders branch on an
enum instead of re-counting controls.

Speed keyframes
---------------
A keyframe pins the normalised speed (``y_pos`` in [0, 1], mapped onto the
path's speed limits) at a fractional position ``x_pos`` along its
segment.  The sampler interpolates between keyframes across segment
boundaries.
"""

from __future__ import annotations

import math
import random
import string
from dataclasses import dataclass, field
from enum import Enum

from path_export.units import UnitOfSpeed

_ID_ALPHABET = string.ascii_letters + string.digits


def make_id(length: int = 10) -> str:
    """Return a random alphanumeric identifier."""
    return "".join(random.choices(_ID_ALPHABET, k=length))


# ---------------------------------------------------------------------------
# Points
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Control:
    """Segment control point.

    Parameters
    ----------
    x, y : float
        Position in the editor's unit of length.
    heading : float | None
        Robot heading in degrees at this control.  Only meaningful on
        segment end points; ``None`` when unset.
    """

    x: float
    y: float
    heading: float | None = None

    def __post_init__(self) -> None:
        if not (math.isfinite(self.x) and math.isfinite(self.y)):
            raise ValueError(
                f"Control coordinates must be finite, got ({self.x}, {self.y})"
            )
        if self.heading is not None and not math.isfinite(self.heading):
            raise ValueError(f"heading must be finite, got {self.heading}")


@dataclass(frozen=True, slots=True)
class SpeedKeyframe:
    """Normalised speed pinned at a position along a segment.

    Parameters
    ----------
    x_pos : float
        Fraction of the segment length, in [0, 1).
    y_pos : float
        Normalised speed, 0 = ``speed_min`` and 1 = ``speed_max``.
    """

    x_pos: float
    y_pos: float

    def __post_init__(self) -> None:
        if not 0.0 <= self.x_pos < 1.0:
            raise ValueError(f"x_pos must be in [0, 1), got {self.x_pos}")
        if not 0.0 <= self.y_pos <= 1.0:
            raise ValueError(f"y_pos must be in [0, 1], got {self.y_pos}")


# ---------------------------------------------------------------------------
# Segments
# ---------------------------------------------------------------------------


class SegmentKind(Enum):
    """Shape of a segment, selecting the encoding branch."""

    LINE = "line"
    CURVE = "curve"


def classify_segment(segment: Segment) -> SegmentKind:
    """Return ``CURVE`` for more than two controls, ``LINE`` otherwise."""
    if len(segment.controls) > 2:
        return SegmentKind.CURVE
    return SegmentKind.LINE


@dataclass(frozen=True, slots=True)
class Segment:
    """One geometric piece of a path.

    Parameters
    ----------
    controls : tuple[Control, ...]
        Start point, optional Bezier handles, end point.  Must contain
        >= 2 controls.
    speed_keyframes : tuple[SpeedKeyframe, ...]
        Keyframes sorted by ``x_pos``.  Empty keeps the speed carried over
        from earlier segments.
    """

    controls: tuple[Control, ...]
    speed_keyframes: tuple[SpeedKeyframe, ...] = ()

    def __post_init__(self) -> None:
        if len(self.controls) < 2:
            raise ValueError(
                f"Segment requires >= 2 controls, got {len(self.controls)}"
            )
        positions = [kf.x_pos for kf in self.speed_keyframes]
        if positions != sorted(positions):
            raise ValueError(
                f"speed_keyframes must be sorted by x_pos, got {positions}"
            )

    @property
    def kind(self) -> SegmentKind:
        return classify_segment(self)

    @property
    def start(self) -> Control:
        return self.controls[0]

    @property
    def end(self) -> Control:
        return self.controls[-1]


def line(start: Control, end: Control, *keyframes: SpeedKeyframe) -> Segment:
    """Build a straight segment."""
    return Segment((start, end), tuple(keyframes))


def curve(
    start: Control,
    handle1: Control,
    handle2: Control,
    end: Control,
    *keyframes: SpeedKeyframe,
) -> Segment:
    """Build a cubic Bezier segment."""
    return Segment((start, handle1, handle2, end), tuple(keyframes))


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class PathConfig:
    """Per-path speed limits.

    Parameters
    ----------
    speed_min, speed_max : float
        Speeds that keyframe ``y_pos`` 0 and 1 map to.
    speed_unit : UnitOfSpeed
        Unit of both limits and of every sampled speed.
    """

    speed_min: float = 20.0
    speed_max: float = 100.0
    speed_unit: UnitOfSpeed = UnitOfSpeed.RPM

    def __post_init__(self) -> None:
        if self.speed_min < 0 or self.speed_min > self.speed_max:
            raise ValueError(
                f"Invalid speed limits: min={self.speed_min}, "
                f"max={self.speed_max}"
            )


@dataclass(frozen=True, slots=True)
class Path:
    """Ordered segments forming one planned trajectory.

    Parameters
    ----------
    name : str
        Display name, written after ``#PATH-START``.
    segments : tuple[Segment, ...]
        Segments in travel order.  Consecutive segments share end points
        in the editor but this is not enforced here.
    config : PathConfig
        Speed limits for sampling.
    uid : str
        Stable identifier used in the metadata trailer.
    """

    name: str
    segments: tuple[Segment, ...] = ()
    config: PathConfig = field(default_factory=PathConfig)
    uid: str = field(default_factory=make_id)
