"""Application state snapshot handed to export formats.

The editor builds one :class:`ApplicationState` per export call.  It is a
frozen value: the encoder reads it, never mutates it, and nothing is
cached between calls.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

from pydantic import ValidationError

from path_export import __version__
from path_export.app.schema import PDJDocument
from path_export.configs.loader import ConfigError, GeneralConfig
from path_export.paths.model import Path

logger = logging.getLogger(__name__)

DEFAULT_FORMAT_NAME = "path.jerryio v0.1"


class MetadataError(Exception):
    """Raised when a metadata document cannot be turned into a state."""

    pass


@dataclass(frozen=True)
class ApplicationState:
    """Everything an export needs: config, paths and provenance.

    Parameters
    ----------
    config : GeneralConfig
        Unit of length, point density and default speed limits.
    paths : tuple[Path, ...]
        Paths in export order.
    app_version : str
        Version recorded in the metadata trailer.
    format_name : str
        Name of the format the paths were authored for.
    """

    config: GeneralConfig = field(default_factory=GeneralConfig)
    paths: tuple[Path, ...] = ()
    app_version: str = __version__
    format_name: str = DEFAULT_FORMAT_NAME

    def with_paths(self, *paths: Path) -> ApplicationState:
        return dataclasses.replace(self, paths=tuple(paths))

    def export_metadata(self) -> dict[str, Any]:
        """JSON-serialisable PDJ metadata for the trailer."""
        return PDJDocument.from_parts(
            self.app_version, self.format_name, self.config, self.paths,
        ).dump()

    @classmethod
    def from_metadata(
        cls,
        data: Mapping[str, Any],
        format_name: str = DEFAULT_FORMAT_NAME,
    ) -> ApplicationState:
        """Rebuild a state from a metadata mapping.

        Parameters
        ----------
        data : Mapping[str, Any]
            Mapping as returned by ``read_metadata``.
        format_name : str
            Format the caller expects the document to come from.

        Raises
        ------
        MetadataError
            If the document fails validation or was written by another
            format (cross-format conversion is not supported here).
        """
        try:
            doc = PDJDocument.model_validate(dict(data))
        except ValidationError as e:
            raise MetadataError(f"Invalid metadata document: {e}") from e

        if doc.format != format_name:
            raise MetadataError(
                f"Metadata was written by format {doc.format!r}, "
                f"expected {format_name!r}"
            )

        try:
            config = doc.gc.to_config()
        except (ConfigError, ValueError) as e:
            raise MetadataError(f"Invalid general config in metadata: {e}") from e

        paths = tuple(p.to_path(config.speed_unit) for p in doc.paths)
        logger.debug(
            "Loaded metadata: app %s, %d paths", doc.app_version, len(paths),
        )
        return cls(
            config=config,
            paths=paths,
            app_version=doc.app_version,
            format_name=doc.format,
        )


def load_pdj_document(
    data: Mapping[str, Any],
    format_name: str = DEFAULT_FORMAT_NAME,
) -> ApplicationState:
    """Functional alias of :meth:`ApplicationState.from_metadata`."""
    return ApplicationState.from_metadata(data, format_name)
