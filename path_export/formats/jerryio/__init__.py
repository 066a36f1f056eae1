"""
path.jerryio v0.1 text format.

Curves become control-point and velocity blocks in metres, straight
segments become ``moveToPoint`` instructions in inches.
"""

from path_export.formats.jerryio.encoder import (
    COMPRESSED_VELOCITIES,
    CRUISE_SPEED_REFERENCE,
    MOVE_DURATION,
    EncodeError,
    PathJerryioEncoder,
    encode_velocities,
    export,
    is_compressible,
)
from path_export.formats.jerryio.format import PathJerryioFormat

__all__ = [
    "COMPRESSED_VELOCITIES",
    "CRUISE_SPEED_REFERENCE",
    "MOVE_DURATION",
    "EncodeError",
    "PathJerryioEncoder",
    "PathJerryioFormat",
    "encode_velocities",
    "export",
    "is_compressible",
]
