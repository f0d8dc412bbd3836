"""CLI entry point for Forman Schema conversion."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

from formanschema import __version__, logger
from formanschema.converter import to_forman_schema, to_json_schema
from formanschema.exceptions import PackageError
from formanschema.logging import configure_logging
from formanschema.settings import get_settings

if TYPE_CHECKING:
    from collections.abc import Callable

_CONVERTERS: dict[str, Callable[[Any], dict[str, Any]]] = {
    "to-json-schema": to_json_schema,
    "to-forman-schema": to_forman_schema,
}


def build_parser() -> argparse.ArgumentParser:
    """Create the command-line parser.

    Returns:
        argparse.ArgumentParser: The configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="formanschema")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command")

    json_parser = subparsers.add_parser("to-json-schema", help="Convert a Forman Schema document to JSON Schema")
    forman_parser = subparsers.add_parser("to-forman-schema", help="Convert a JSON Schema document to Forman Schema")
    for command_parser in (json_parser, forman_parser):
        command_parser.add_argument("--input", required=True, type=Path, dest="input_path")
        command_parser.add_argument("--output", type=Path, default=None, dest="output_path")
        command_parser.add_argument("--indent", type=int, default=2)

    return parser


def load_document(path: Path) -> Any:  # noqa: ANN401
    """Read a JSON document.

    Args:
        path (Path): Input file path.

    Returns:
        Any: Parsed JSON value.
    """
    return json.loads(path.read_text(encoding="utf-8"))


def persist_document(document: dict[str, Any], output_path: Path | None, *, indent: int = 2) -> None:
    """Write a converted document to a file, or to stdout when no path is given.

    Args:
        document (dict[str, Any]): Converted schema.
        output_path (Path | None): Target path.
        indent (int): JSON indentation.
    """
    payload = json.dumps(document, indent=indent, ensure_ascii=False) + "\n"
    if output_path is None:
        sys.stdout.write(payload)
        return
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(payload, encoding="utf-8")


def main(argv: list[str] | None = None) -> int:
    """Run the CLI.

    Args:
        argv (list[str] | None): Arguments, defaults to `sys.argv[1:]`.

    Returns:
        int: Exit code (0 for success, 1 for error).
    """
    settings = get_settings()
    configure_logging(settings=settings)

    parser = build_parser()
    args = parser.parse_args(argv)

    converter = _CONVERTERS.get(args.command)
    if converter is None:
        parser.print_help()
        return 0

    try:
        document = load_document(args.input_path)
        result = converter(document)
    except PackageError:
        logger.exception("Conversion failed", extra={"input_path": str(args.input_path)})
        return 1
    except (OSError, json.JSONDecodeError):
        logger.exception("Could not read input document", extra={"input_path": str(args.input_path)})
        return 1

    persist_document(result, args.output_path, indent=args.indent)
    logger.info("Conversion completed", extra={"command": args.command, "output_path": str(args.output_path)})
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
