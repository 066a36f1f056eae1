"""
Export formats.

Each format turns an ``ApplicationState`` into file bytes and appends the
shared PDJ metadata trailer handled by ``formats.metadata``.
"""

from path_export.formats.jerryio import PathJerryioEncoder, PathJerryioFormat, export
from path_export.formats.metadata import (
    PDJ_MARKER,
    UnsupportedFormatError,
    import_paths,
    read_metadata,
)

__all__ = [
    "PDJ_MARKER",
    "PathJerryioEncoder",
    "PathJerryioFormat",
    "UnsupportedFormatError",
    "export",
    "import_paths",
    "read_metadata",
]
