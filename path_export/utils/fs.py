"""Filesystem helpers for the CLI and the config loader.

Export output is written atomically (temp file in the target directory,
fsync, rename) so a robot uploader watching the directory never reads a
half-written path file.  Input documents are JSON or YAML, chosen by file
suffix.

The encoder itself never touches the filesystem.

Usage:
    from path_export.utils import fs
    doc = fs.load_document("auton.json")
    fs.atomic_write_bytes("out/auton.txt", payload)
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Union

import yaml

PathLike = Union[str, Path]


def ensure_dir(p: PathLike) -> Path:
    """Create *p* (and parents) if needed and return it as a Path."""
    p = Path(p)
    p.mkdir(parents=True, exist_ok=True)
    return p


def atomic_write_bytes(path: PathLike, data: bytes) -> None:
    """Replace *path* with *data* in one rename.

    Parameters
    ----------
    path : str | Path
        Destination file.  Missing parent directories are created.
    data : bytes
        Full file content.

    Raises
    ------
    RuntimeError
        If writing or renaming fails.  No temp file is left behind.
    """
    path = Path(path)
    directory = ensure_dir(path.parent)

    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{path.name}.", suffix=".tmp", dir=directory,
    )
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except OSError as e:
        Path(tmp_name).unlink(missing_ok=True)
        raise RuntimeError(f"Failed to write {path} atomically: {e}") from e


def atomic_write_text(path: PathLike, text: str, encoding: str = "utf-8") -> None:
    atomic_write_bytes(path, text.encode(encoding))


def load_yaml(path: PathLike) -> Any:
    """Parse a YAML file with ``yaml.safe_load``.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    yaml.YAMLError
        If the content is not valid YAML; the message names the file.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"YAML file not found: {path}")
    with path.open("r", encoding="utf-8") as f:
        try:
            return yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Failed to parse YAML file {path}: {e}") from e


def load_document(path: PathLike) -> Dict[str, Any]:
    """Load a PDJ document from ``.json`` or any YAML file.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    json.JSONDecodeError | yaml.YAMLError
        If the content cannot be parsed.
    """
    path = Path(path)
    if path.suffix.lower() != ".json":
        return load_yaml(path)
    if not path.is_file():
        raise FileNotFoundError(f"JSON file not found: {path}")
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)
