"""
Application state and metadata schema.

The immutable snapshot passed to export formats and the pydantic models
of the embedded PDJ metadata document.
"""

from path_export.app.schema import PDJDocument
from path_export.app.state import (
    DEFAULT_FORMAT_NAME,
    ApplicationState,
    MetadataError,
    load_pdj_document,
)

__all__ = [
    "DEFAULT_FORMAT_NAME",
    "ApplicationState",
    "MetadataError",
    "PDJDocument",
    "load_pdj_document",
]
