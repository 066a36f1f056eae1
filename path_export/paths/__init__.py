"""
Path model and waypoint sampling.

Immutable path geometry (controls, segments, speed keyframes) and the
sampler that turns it into speed-annotated waypoints.
"""

from path_export.paths.model import (
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
from path_export.paths.sampler import (
    SampleResult,
    Waypoint,
    filter_segment_points,
    sample_path,
    segment_length,
)

__all__ = [
    "Control",
    "Path",
    "PathConfig",
    "SampleResult",
    "Segment",
    "SegmentKind",
    "SpeedKeyframe",
    "Waypoint",
    "classify_segment",
    "curve",
    "filter_segment_points",
    "line",
    "make_id",
    "sample_path",
    "segment_length",
]
