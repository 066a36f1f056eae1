"""path.jerryio v0.1 format facade.

Bundles what the editor needs from one output format: its name and
description, path creation with the format's defaults, waypoint
sampling, export, and the two import entry points (metadata only;
textual path import is rejected).
"""

from __future__ import annotations

from typing import Any, NoReturn, Optional

from path_export.app.state import DEFAULT_FORMAT_NAME, ApplicationState
from path_export.configs.loader import GeneralConfig
from path_export.formats.jerryio.encoder import PathJerryioEncoder
from path_export.formats.metadata import Buffer, import_paths, read_metadata
from path_export.paths.model import Path, PathConfig, Segment
from path_export.paths.sampler import SampleResult, sample_path


class PathJerryioFormat:
    """The default path.jerryio text format.

    Parameters
    ----------
    encoder : PathJerryioEncoder, optional
        Encoder to use; a default one is created when omitted.
    """

    def __init__(self, encoder: Optional[PathJerryioEncoder] = None) -> None:
        self._encoder = encoder or PathJerryioEncoder()

    def get_name(self) -> str:
        return DEFAULT_FORMAT_NAME

    def get_description(self) -> str:
        return (
            "The default and official format for path planning purposes "
            "and custom library. Output is in metres and inches, speeds "
            "in the configured speed unit."
        )

    def create_path(
        self,
        *segments: Segment,
        name: str = "Path",
        config: Optional[GeneralConfig] = None,
    ) -> Path:
        """New path with the default speed limits of *config*."""
        defaults = (config or GeneralConfig()).path_defaults
        return Path(
            name=name,
            segments=tuple(segments),
            config=PathConfig(
                defaults.speed_min, defaults.speed_max, defaults.speed_unit,
            ),
        )

    def get_path_points(self, path: Path, config: GeneralConfig) -> SampleResult:
        """Sample *path* at the configured point density."""
        return sample_path(path, config.density)

    def export_file(self, state: ApplicationState) -> bytes:
        return self._encoder.export(state)

    def import_paths_from_file(self, buffer: Buffer) -> NoReturn:
        import_paths(buffer)

    def import_pdj_data_from_file(self, buffer: Buffer) -> Optional[dict[str, Any]]:
        return read_metadata(buffer)
