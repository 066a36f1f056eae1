#!/usr/bin/env python3
"""
Export Path Script.

Encode a saved PDJ document as a path.jerryio v0.1 file, or print the
metadata trailer of an exported file.

Usage:
    path-export export auton.json -o auton.txt
    path-export export auton.yaml -o auton.txt --config editor.yaml
    path-export read-metadata auton.txt

Input documents use the metadata layout (``appVersion``, ``format``,
``gc``, ``paths``); an exported file's trailer is one.  ``--config``
overrides the document's general config (units, point density).
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

import yaml

from path_export import __version__
from path_export.app.state import ApplicationState, MetadataError
from path_export.configs.loader import ConfigError, load_config
from path_export.formats.jerryio import PathJerryioFormat
from path_export.utils import fs
from path_export.utils.logging_config import pop_context, push_context, setup_logging, shutdown

logger = logging.getLogger(__name__)


def _load_state(path: Path, config_path: Optional[str]) -> ApplicationState:
    """Read a PDJ document and optionally swap in another general config."""
    data = fs.load_document(path)
    if not isinstance(data, dict):
        raise MetadataError(f"{path} does not contain a mapping")
    state = ApplicationState.from_metadata(data)
    if config_path:
        state = dataclasses.replace(state, config=load_config(config_path))
    return state


def cmd_export(args: argparse.Namespace) -> int:
    fmt = PathJerryioFormat()
    src = Path(args.input)
    out = Path(args.output) if args.output else src.with_suffix(".txt")

    push_context(input=src.name)
    try:
        state = _load_state(src, args.config)
        payload = fmt.export_file(state)
        fs.atomic_write_bytes(out, payload)
    finally:
        pop_context(keys=["input"])

    logger.info("Wrote %s (%d bytes, %d paths)", out, len(payload), len(state.paths))
    return 0


def cmd_read_metadata(args: argparse.Namespace) -> int:
    fmt = PathJerryioFormat()
    data = fmt.import_pdj_data_from_file(Path(args.input).read_bytes())
    if data is None:
        logger.error("No metadata found in %s", args.input)
        return 1
    json.dump(data, sys.stdout, indent=2 if args.pretty else None, ensure_ascii=False)
    sys.stdout.write("\n")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="path-export",
        description="Encode robot paths as path.jerryio v0.1 text",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default INFO)",
    )
    parser.add_argument(
        "--log-json",
        action="store_true",
        help="Emit JSON log lines",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    p_export = sub.add_parser("export", help="Encode a PDJ document")
    p_export.add_argument("input", type=str, help="PDJ document (.json/.yaml)")
    p_export.add_argument(
        "--output",
        "-o",
        type=str,
        help="Output file (default: input with .txt suffix)",
    )
    p_export.add_argument(
        "--config",
        "-c",
        type=str,
        help="Editor config YAML overriding the document's settings",
    )
    p_export.set_defaults(func=cmd_export)

    p_meta = sub.add_parser("read-metadata", help="Print an exported file's metadata")
    p_meta.add_argument("input", type=str, help="Exported path file")
    p_meta.add_argument("--pretty", action="store_true", help="Indent JSON output")
    p_meta.set_defaults(func=cmd_read_metadata)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(
        log_level=args.log_level,
        json=args.log_json,
        context={"app": "path-export"},
    )
    try:
        return args.func(args)
    except (ConfigError, MetadataError, OSError, RuntimeError, ValueError, yaml.YAMLError) as e:
        logger.error("%s", e)
        return 2
    finally:
        shutdown()


if __name__ == "__main__":
    sys.exit(main())
