"""Filesystem and logging helpers shared by the CLI and config loader."""

from path_export.utils import fs, logging_config

__all__ = ["fs", "logging_config"]
