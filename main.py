"""Entry point module for the PNGPANG application."""

from __future__ import annotations

import argparse
import sys
from typing import Iterable, Optional

from config import APP_DESCRIPTION, APP_NAME, APP_VERSION
from utils.logger import setup_logger

logger = setup_logger(__name__)

_TYPE_HELP = "Four-letter chunk type code, e.g. ruSt (see the PNG specification, section 3.3)"


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for all sub-commands."""

    parser = argparse.ArgumentParser(
        prog="pngpang",
        description=f"{APP_DESCRIPTION} v{APP_VERSION}",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"{APP_NAME} v{APP_VERSION}")

    subparsers = parser.add_subparsers(dest="command", metavar="command")

    # ------------------------------------------------------------------
    # Encode command
    # ------------------------------------------------------------------
    encode = subparsers.add_parser(
        "encode",
        help="Encode a message with the given chunk type",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    encode.add_argument("filename", help="Path to the source PNG file")
    encode.add_argument("chunk_type", help=_TYPE_HELP)
    encode.add_argument("message", help="Message to encode")
    encode.add_argument("out_filename", nargs="?", help="Output file if different from the source")
    encode.add_argument(
        "--verify", action="store_true", help="Re-open the written file with Pillow"
    )

    # ------------------------------------------------------------------
    # Decode command
    # ------------------------------------------------------------------
    decode = subparsers.add_parser(
        "decode",
        help="Decode the message stored under the given chunk type",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    decode.add_argument("filename", help="Path to the source PNG file")
    decode.add_argument("chunk_type", help=_TYPE_HELP)

    # ------------------------------------------------------------------
    # Remove command
    # ------------------------------------------------------------------
    remove = subparsers.add_parser(
        "remove",
        help="Remove the message stored under the given chunk type",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    remove.add_argument("filename", help="Path to the source PNG file")
    remove.add_argument("chunk_type", help=_TYPE_HELP)
    remove.add_argument("out_filename", nargs="?", help="Output file if different from the source")
    remove.add_argument(
        "--verify", action="store_true", help="Re-open the written file with Pillow"
    )

    # ------------------------------------------------------------------
    # Print command
    # ------------------------------------------------------------------
    print_cmd = subparsers.add_parser(
        "print",
        help="List chunk types and their counts",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    print_cmd.add_argument("filename", help="Path to the source PNG file")
    print_cmd.add_argument("-v", "--verbose", action="store_true", help="Show every chunk")

    return parser


def parse_arguments(argv: Optional[Iterable[str]] = None):
    """Return parsed command line arguments."""

    return build_parser().parse_args(args=list(argv) if argv is not None else None)


def run_cli(args) -> int:
    """Execute a CLI command and return the process exit code."""

    from cli import PngPangCLI

    cli = PngPangCLI(args)
    return 0 if cli.run() else 1


def main(argv: Optional[Iterable[str]] = None) -> int:
    """Main entry point used by ``python -m`` and the console script."""

    args = parse_arguments(argv)
    if getattr(args, "command", None) is None:
        build_parser().print_help()
        return 1

    logger.debug("Running command %s", args.command)
    return run_cli(args)


if __name__ == "__main__":  # pragma: no cover - script entry point
    sys.exit(main())
