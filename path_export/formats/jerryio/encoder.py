"""path.jerryio v0.1 encoder -- paths to firmware instruction text.

Output layout (one item per line)::

    #PATH-START <name>
    #POINTS-START                 curve segment:
    x, y                            control points, metres
    ...
    #VELOCITIES-START
    x, y, speed                     sampled waypoints, metres + speed
    ...                             (or the single line "0, 0, 0")
    moveToPoint(x, y, 2000);      line segment: end point, inches
    ...
    #PATH.JERRYIO-DATA {...}      metadata trailer, once, last

Unit convention:
    Paths are stored in the editor unit of length.  Curve data is
    written in metres, straight moves in inches.  Speeds are written in
    the configured speed unit, unconverted.

Velocity compression:
    A curve whose waypoints all run at the firmware's default cruise
    speed (5.4) except for the final one is written as ``0, 0, 0``; the
    firmware substitutes its own default profile.  One point or none is
    never compressed.
"""

from __future__ import annotations

import logging
from typing import Callable, Sequence

from path_export.app.state import ApplicationState
from path_export.formats.metadata import encode_trailer
from path_export.paths.model import Path, Segment, SegmentKind, classify_segment
from path_export.paths.sampler import (
    SampleResult,
    Waypoint,
    filter_segment_points,
    sample_path,
)
from path_export.units import Quantity, UnitConverter, UnitOfLength, format_number

logger = logging.getLogger(__name__)

# Marker lines are matched exactly by the firmware parser: no trailing space.
PATH_MARKER = "#PATH-START"
POINTS_MARKER = "#POINTS-START"
VELOCITIES_MARKER = "#VELOCITIES-START"

CRUISE_SPEED_REFERENCE = 5.4
"""Firmware default cruise speed; see :func:`is_compressible`."""

COMPRESSED_VELOCITIES = "0, 0, 0"

MOVE_DURATION = 2000
"""Fixed duration argument of ``moveToPoint``."""

CURVE_UNIT = UnitOfLength.METER
LINEAR_UNIT = UnitOfLength.INCH

Sampler = Callable[[Path, Quantity], SampleResult]


class EncodeError(Exception):
    """Raised when a segment cannot be encoded."""

    pass


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _num(q: Quantity) -> str:
    return format_number(q.to_user(), q.unit.precision)


def _clean_name(name: str) -> str:
    return name.replace("\r", " ").replace("\n", " ")


def is_compressible(points: Sequence[Waypoint]) -> bool:
    """True when every point but the last runs at the cruise reference.

    Sequences of fewer than two points are never compressible.
    """
    if len(points) <= 1:
        return False
    return all(
        p.speed.to_user() == CRUISE_SPEED_REFERENCE for p in points[:-1]
    )


def encode_velocities(
    points: Sequence[Waypoint], to_meter: UnitConverter,
) -> list[str]:
    """Velocity block lines for one curve segment.

    Parameters
    ----------
    points : Sequence[Waypoint]
        The segment's waypoints, in order.
    to_meter : UnitConverter
        Editor unit -> metres.

    Returns
    -------
    list[str]
        ``["0, 0, 0"]`` when compressible, else one ``x, y, speed`` line
        per waypoint (empty for no waypoints).
    """
    if is_compressible(points):
        return [COMPRESSED_VELOCITIES]
    return [
        f"{_num(to_meter.from_a_to_b(p.x))}, "
        f"{_num(to_meter.from_a_to_b(p.y))}, "
        f"{format_number(p.speed.to_user(), p.speed.unit.precision)}"
        for p in points
    ]


# ---------------------------------------------------------------------------
# Encoder
# ---------------------------------------------------------------------------


class PathJerryioEncoder:
    """Render an :class:`ApplicationState` as path.jerryio v0.1 text.

    Parameters
    ----------
    sampler : Sampler
        ``(path, density) -> SampleResult``.  Defaults to
        :func:`~path_export.paths.sampler.sample_path`.

    Notes
    -----
    The encoder holds no per-export state; converters are built at the
    start of every :meth:`export` call from the state's unit of length.
    """

    def __init__(self, sampler: Sampler = sample_path) -> None:
        self._sample = sampler

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def export(self, state: ApplicationState) -> bytes:
        """Encode all paths plus the metadata trailer.

        Parameters
        ----------
        state : ApplicationState
            Snapshot to export.  Not modified.

        Returns
        -------
        bytes
            UTF-8 encoded document.
        """
        uol = state.config.uol
        to_meter = UnitConverter(uol, CURVE_UNIT)
        to_linear = UnitConverter(uol, LINEAR_UNIT)
        density = state.config.density

        lines: list[str] = []
        for path in state.paths:
            lines.extend(self.encode_path(path, density, to_meter, to_linear))
        lines.append(encode_trailer(state.export_metadata()))

        logger.info(
            "Encoded %d paths (%d lines) from %s",
            len(state.paths), len(lines), uol.symbol,
        )
        return "\n".join(lines).encode("utf-8")

    def encode_path(
        self,
        path: Path,
        density: Quantity,
        to_meter: UnitConverter,
        to_linear: UnitConverter,
    ) -> list[str]:
        """Lines for one path, starting with its ``#PATH-START`` marker."""
        lines = [f"{PATH_MARKER} {_clean_name(path.name)}"]
        # Sampled once per path, shared by all of its curve segments
        points = self._sample(path, density).points

        for index, segment in enumerate(path.segments):
            kind = classify_segment(segment)
            if kind is SegmentKind.CURVE:
                lines.extend(
                    self._encode_curve(path, index, segment, points, to_meter)
                )
            elif kind is SegmentKind.LINE:
                lines.append(self._encode_line(segment, to_linear))
            else:
                raise EncodeError(f"Unsupported segment kind: {kind!r}")

        logger.debug(
            "Path %r: %d segments, %d waypoints",
            path.name, len(path.segments), len(points),
        )
        return lines

    # ------------------------------------------------------------------
    # Per-segment generators
    # ------------------------------------------------------------------

    def _encode_curve(
        self,
        path: Path,
        index: int,
        segment: Segment,
        points: Sequence[Waypoint],
        to_meter: UnitConverter,
    ) -> list[str]:
        lines = [POINTS_MARKER]
        lines.extend(
            f"{_num(to_meter.from_a_to_b(c.x))}, {_num(to_meter.from_a_to_b(c.y))}"
            for c in segment.controls
        )
        lines.append(VELOCITIES_MARKER)

        related = filter_segment_points(points, index)
        if not related:
            logger.debug(
                "Path %r segment %d has no waypoints; empty velocity block",
                path.name, index,
            )
        lines.extend(encode_velocities(related, to_meter))
        return lines

    def _encode_line(self, segment: Segment, to_linear: UnitConverter) -> str:
        # Start point is implied by the previous segment's end
        end = segment.end
        x = _num(to_linear.from_a_to_b(end.x))
        y = _num(to_linear.from_a_to_b(end.y))
        return f"moveToPoint({x}, {y}, {MOVE_DURATION});"


def export(state: ApplicationState, sampler: Sampler = sample_path) -> bytes:
    """Encode *state* with a fresh :class:`PathJerryioEncoder`."""
    return PathJerryioEncoder(sampler).export(state)
