"""Waypoint sampling along a path.

Each segment is evaluated as a Bezier curve of degree
``len(controls) - 1`` (a line is the degree-1 case) and sampled at
uniform arc-length spacing of roughly ``density``:

    n_i = ceil(L_i / density)        samples for segment i of length L_i
    s_k = k * L_i / n_i,  k = 0..n_i-1

The segment end point is *not* sampled (it is the next segment's start);
the path's final end point is appended once, tagged with the last
segment.  Zero-length segments produce no samples of their own.

Speeds come from the segment keyframes, linearly interpolated along the
path and mapped onto ``[speed_min, speed_max]``.  A path starts at full
speed when its first segment has no keyframe at ``x_pos=0``; the final end
point is always ``speed_min``.

Waypoints reference their segment by index (``sample_ref``), never by
object, so sampler output holds no references into the path.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np

from path_export.paths.model import Path, Segment
from path_export.units import Quantity

logger = logging.getLogger(__name__)

LENGTH_RESOLUTION = 256
"""Polyline resolution used to measure segment arc length."""

_EPS = 1e-9


@dataclass(frozen=True, slots=True)
class Waypoint:
    """Sampled point with its target speed.

    Parameters
    ----------
    x, y : float
        Position in the editor's unit of length.
    speed : Quantity
        Target speed in the path's speed unit.
    sample_ref : int
        Index of the originating segment within its path.
    """

    x: float
    y: float
    speed: Quantity
    sample_ref: int


@dataclass(frozen=True, slots=True)
class SampleResult:
    """Output of :func:`sample_path`."""

    points: tuple[Waypoint, ...]
    segment_lengths: tuple[float, ...]

    @property
    def length(self) -> float:
        return float(sum(self.segment_lengths))


# ---------------------------------------------------------------------------
# Geometry
# ---------------------------------------------------------------------------


def bezier_eval(controls: np.ndarray, t: np.ndarray) -> np.ndarray:
    """Evaluate a Bezier curve of any degree.

    Parameters
    ----------
    controls : np.ndarray
        Control points, shape (n+1, 2).
    t : np.ndarray
        Parameters in [0, 1], shape (N,).

    Returns
    -------
    np.ndarray
        Points on the curve, shape (N, 2).
    """
    degree = len(controls) - 1
    t = np.asarray(t, dtype=np.float64)[:, None]
    one_minus_t = 1.0 - t
    out = np.zeros((t.shape[0], 2), dtype=np.float64)
    for k in range(degree + 1):
        basis = math.comb(degree, k) * one_minus_t ** (degree - k) * t ** k
        out += basis * controls[k]
    return out


def _controls_array(segment: Segment) -> np.ndarray:
    return np.array([(c.x, c.y) for c in segment.controls], dtype=np.float64)


def _arc_length_table(ctrl: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Return ``(t, cumulative_length)`` over a dense polyline."""
    ts = np.linspace(0.0, 1.0, LENGTH_RESOLUTION + 1)
    pts = bezier_eval(ctrl, ts)
    steps = np.linalg.norm(np.diff(pts, axis=0), axis=1)
    return ts, np.concatenate(([0.0], np.cumsum(steps)))


def segment_length(segment: Segment) -> float:
    """Arc length of *segment* in its own unit of length."""
    ctrl = _controls_array(segment)
    if len(ctrl) == 2:
        return float(np.linalg.norm(ctrl[1] - ctrl[0]))
    _, cum = _arc_length_table(ctrl)
    return float(cum[-1])


# ---------------------------------------------------------------------------
# Speed profile
# ---------------------------------------------------------------------------


def _keyframe_table(path: Path) -> tuple[np.ndarray, np.ndarray]:
    """Flatten keyframes to ``(path_position, ratio)`` arrays.

    Path position is ``segment_index + x_pos``.
    """
    positions: list[float] = []
    ratios: list[float] = []
    for i, seg in enumerate(path.segments):
        for kf in seg.speed_keyframes:
            positions.append(i + kf.x_pos)
            ratios.append(kf.y_pos)
    if not positions or positions[0] > 0.0:
        positions.insert(0, 0.0)
        ratios.insert(0, 1.0)
    return np.array(positions), np.array(ratios)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def sample_path(path: Path, density: Quantity) -> SampleResult:
    """Sample waypoints along *path*.

    Parameters
    ----------
    path : Path
        Path to sample.  Coordinates are read in ``density.unit``.
    density : Quantity
        Target spacing between consecutive waypoints.

    Returns
    -------
    SampleResult
        Waypoints in travel order plus per-segment lengths.

    Raises
    ------
    ValueError
        If the density is not a positive finite number.
    """
    spacing = float(density.value)
    if not math.isfinite(spacing) or spacing <= 0:
        raise ValueError(f"Point density must be > 0, got {density.value!r}")

    cfg = path.config
    kf_pos, kf_ratio = _keyframe_table(path)

    def speed_at(position: np.ndarray) -> np.ndarray:
        ratio = np.interp(position, kf_pos, kf_ratio)
        return cfg.speed_min + ratio * (cfg.speed_max - cfg.speed_min)

    points: list[Waypoint] = []
    lengths: list[float] = []

    for i, seg in enumerate(path.segments):
        ctrl = _controls_array(seg)
        ts, cum = _arc_length_table(ctrl)
        total = float(cum[-1])
        lengths.append(total)
        if total <= _EPS:
            logger.debug("Path %r segment %d is zero-length", path.name, i)
            continue

        n = math.ceil(total / spacing)
        arc = np.arange(n) * (total / n)
        t = np.interp(arc, cum, ts)
        xy = bezier_eval(ctrl, t)
        speeds = speed_at(i + arc / total)

        for (x, y), v in zip(xy, speeds):
            points.append(
                Waypoint(
                    x=float(x),
                    y=float(y),
                    speed=Quantity(float(v), cfg.speed_unit),
                    sample_ref=i,
                )
            )

    if path.segments:
        last_index = len(path.segments) - 1
        end = path.segments[-1].end
        points.append(
            Waypoint(
                x=float(end.x),
                y=float(end.y),
                speed=Quantity(cfg.speed_min, cfg.speed_unit),
                sample_ref=last_index,
            )
        )

    logger.debug(
        "Sampled path %r: %d waypoints over %d segments",
        path.name, len(points), len(path.segments),
    )
    return SampleResult(points=tuple(points), segment_lengths=tuple(lengths))


def filter_segment_points(
    points: tuple[Waypoint, ...] | list[Waypoint],
    segment_index: int,
) -> list[Waypoint]:
    """Return the waypoints sampled from one segment, in order.

    The input sequence is not modified.
    """
    return [p for p in points if p.sample_ref == segment_index]
