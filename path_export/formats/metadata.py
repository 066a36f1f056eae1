"""Embedded PDJ metadata trailer: writing and reading.

Text formats append the editor's metadata as a single line::

    #PATH.JERRYIO-DATA {"appVersion":"0.1.0","format":"path.jerryio v0.1",...}

The JSON is compact and never contains a raw newline (``json`` escapes
them), so the trailer is always exactly one line.  Reading it back is
best-effort: a missing marker or broken JSON yields ``None`` because the
instruction lines are still meaningful without it.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping, NoReturn, Optional, Union

logger = logging.getLogger(__name__)

PDJ_MARKER = "#PATH.JERRYIO-DATA"

Buffer = Union[bytes, bytearray, memoryview]


class UnsupportedFormatError(Exception):
    """Raised when a format cannot perform the requested import."""

    pass


def encode_trailer(metadata: Mapping[str, Any]) -> str:
    """Return the trailer line for *metadata* (no newline)."""
    payload = json.dumps(
        metadata,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    )
    return f"{PDJ_MARKER} {payload}"


def read_metadata(buffer: Buffer) -> Optional[dict[str, Any]]:
    """Extract the metadata mapping from an exported file.

    Parameters
    ----------
    buffer : bytes | bytearray | memoryview
        Raw file content, expected to be UTF-8 text.

    Returns
    -------
    dict | None
        Parsed metadata, or ``None`` when the buffer is not UTF-8, has no
        marker line, or the payload is not a JSON object.
    """
    try:
        text = bytes(buffer).decode("utf-8")
    except UnicodeDecodeError as e:
        logger.warning("Metadata not read: buffer is not UTF-8 (%s)", e)
        return None

    for line in text.split("\n"):
        if not line.startswith(PDJ_MARKER):
            continue
        payload = line[len(PDJ_MARKER):].strip()
        try:
            data = json.loads(payload)
        except json.JSONDecodeError as e:
            logger.warning("Metadata not read: malformed JSON (%s)", e)
            return None
        if not isinstance(data, dict):
            logger.warning(
                "Metadata not read: expected a JSON object, got %s",
                type(data).__name__,
            )
            return None
        return data

    logger.debug("No %s marker found", PDJ_MARKER)
    return None


def import_paths(buffer: Buffer) -> NoReturn:
    """Reject textual reimport of paths.

    The instruction lines do not carry enough information to rebuild
    paths; use the metadata trailer (``read_metadata``) instead.

    Raises
    ------
    UnsupportedFormatError
        Always, whatever the buffer holds.
    """
    raise UnsupportedFormatError(
        "Unable to import paths from this format, try other formats?"
    )
