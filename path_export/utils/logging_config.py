"""Logging setup for the ``path-export`` command line.

Library modules only call ``logging.getLogger(__name__)``.  Handlers are
attached to the root logger here, by the process that embeds the
exporter (the CLI, a test, an editor backend).

Two line formats:

    human  2026-03-02T09:12:44.120Z | INFO     | app=path-export input=auton.json | Wrote auton.txt
    json   {"t": "2026-03-02T09:12:44.120000+00:00", "lvl": "INFO", "logger": "...", "msg": "...", "app": "path-export"}

Context fields (``app``, ``input`` ...) live in a ContextVar and are
appended to every record by :class:`ContextFormatter`.

Calling :func:`setup_logging` again replaces the handlers it installed
before; it never stacks them.
"""

import contextvars
import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

_context: contextvars.ContextVar[Dict[str, Any]] = contextvars.ContextVar(
    "path_export_log_context"
)

_installed: List[logging.Handler] = []

_LEVEL_COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
}
_RESET = "\033[0m"


class ContextFormatter(logging.Formatter):
    """Render records as human text or JSON lines, plus context fields.

    Parameters
    ----------
    mode : str
        ``"human"`` or ``"json"``.
    color : bool
        Colorize the level name; ignored unless stderr is a TTY.
    utc : bool
        Timestamps in UTC (default) or local time.
    """

    def __init__(self, mode: str = "human", color: bool = True, utc: bool = True):
        super().__init__()
        if mode not in ("human", "json"):
            raise ValueError(f"Unknown log format: {mode!r} (use 'human' or 'json')")
        self.mode = mode
        self.color = color and sys.stderr.isatty()
        self.utc = utc

    def _timestamp(self, record: logging.LogRecord) -> datetime:
        if self.utc:
            return datetime.fromtimestamp(record.created, tz=timezone.utc)
        return datetime.fromtimestamp(record.created).astimezone()

    def format(self, record: logging.LogRecord) -> str:
        ts = self._timestamp(record)
        fields = _context.get({})

        if self.mode == "json":
            entry: Dict[str, Any] = {
                "t": ts.isoformat(),
                "lvl": record.levelname,
                "logger": record.name,
                "msg": record.getMessage(),
            }
            entry.update(fields)
            if record.exc_info:
                entry["exc"] = self.formatException(record.exc_info)
            return json.dumps(entry, default=str, ensure_ascii=False)

        level = f"{record.levelname:8s}"
        if self.color:
            level = f"{_LEVEL_COLORS.get(record.levelname, '')}{level}{_RESET}"
        stamp = ts.strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + ("Z" if self.utc else "")
        parts = [stamp, level]
        if fields:
            parts.append(" ".join(f"{k}={v}" for k, v in fields.items()))
        parts.append(record.getMessage())

        text = " | ".join(parts)
        if record.exc_info:
            text += "\n" + self.formatException(record.exc_info)
        return text


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    *,
    json: bool = False,
    color: bool = True,
    to_stderr: bool = True,
    utc: bool = True,
    capture_warnings: bool = True,
    context: Optional[Dict[str, Any]] = None,
) -> List[logging.Handler]:
    """Install console and/or file handlers on the root logger.

    Parameters
    ----------
    log_level : str
        Level name, e.g. ``"DEBUG"`` or ``"INFO"``.
    log_file : str, optional
        Also append to this file (parents are created).  Always uncolored.
    json : bool
        JSON lines instead of human-readable text.
    color : bool
        Colorize console level names.
    to_stderr : bool
        Attach a console handler on stderr.
    utc : bool
        UTC timestamps (default) or local time.
    capture_warnings : bool
        Route ``warnings.warn`` through logging.
    context : dict, optional
        Context fields to push, e.g. ``{"app": "path-export"}``.

    Returns
    -------
    list[logging.Handler]
        The handlers now installed.

    Raises
    ------
    ValueError
        If ``log_level`` is not a known level name.
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level}")

    _detach()
    mode = "json" if json else "human"

    if to_stderr:
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(ContextFormatter(mode, color, utc))
        _installed.append(console)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(ContextFormatter(mode, color=False, utc=utc))
        _installed.append(file_handler)

    root = logging.getLogger()
    root.setLevel(level)
    for handler in _installed:
        root.addHandler(handler)

    if context:
        push_context(**context)
    logging.captureWarnings(capture_warnings)

    return list(_installed)


def _detach() -> None:
    root = logging.getLogger()
    for handler in _installed:
        handler.flush()
        root.removeHandler(handler)
        handler.close()
    _installed.clear()


def push_context(**fields: Any) -> None:
    """Add fields to every subsequent log line.

    >>> push_context(input="auton.json")
    """
    _context.set({**_context.get({}), **fields})


def pop_context(keys: Optional[List[str]] = None) -> None:
    """Remove the given context fields, or all of them when *keys* is None."""
    if keys is None:
        _context.set({})
        return
    _context.set({k: v for k, v in _context.get({}).items() if k not in keys})


def current_context() -> Dict[str, Any]:
    return dict(_context.get({}))


def shutdown() -> None:
    """Detach and close the handlers installed by :func:`setup_logging`."""
    _detach()
    logging.captureWarnings(False)
