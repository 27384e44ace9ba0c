"""usage: python -m plisttree"""  # noqa: D400, D415

from __future__ import annotations

import argparse
import json
import logging
import sys
from importlib.metadata import version
from pathlib import Path

from . import load
from .errors import DecodeError

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:  # noqa: D103
    parser = argparse.ArgumentParser(prog="plisttree", description="PlistTree CLI tool")
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=version("PlistTree"),
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="INFO",
        help="Set the logging level (default: INFO)",
    )
    subparsers = parser.add_subparsers(dest="command", title="commands")
    subparsers.required = True

    decode_parser = subparsers.add_parser(
        "decode",
        help="""
        Decode an XML property list and print it as JSON.

        Binary data is printed as base64 and dates as ISO-8601 strings.

        eg `python -m plisttree decode Info.plist | jq '.CFBundleIdentifier'`
        """,
    )
    decode_parser.add_argument("file", type=Path, help="Input XML property list")
    decode_parser.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Output JSON file. If not specified, the JSON is printed to stdout.",
    )

    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level.upper())
    if args.command == "decode":
        return decode_file(args.file, args.out)

    parser.print_help()
    return 1


def decode_file(src: Path, out: Path | None = None) -> int:
    """Decode the property list at ``src`` and write it as JSON to ``out`` or stdout."""
    try:
        value = load(src)
    except DecodeError as e:
        logger.error("Could not decode %s: %s", src, e)  # noqa: TRY400
        return 1
    except OSError as e:
        logger.error("Could not read %s: %s", src, e)  # noqa: TRY400
        return 1

    data = value.to_json(out)
    if out is None:
        print(json.dumps(data, indent=4, ensure_ascii=False))  # noqa: T201
    return 0


if __name__ == "__main__":
    sys.exit(main())
