"""
AEOLIS CLI

Runs an IL program and writes every printed value to stdout.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from aeolis.config import load_settings
from aeolis.errors import AeolisError
from aeolis.orchestration import run_file


def _print_value(value) -> None:
    sys.stdout.write(f"{value}\n")
    sys.stdout.flush()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="aeolis",
        description="AEOLIS: dataflow-triggered IL interpreter",
    )

    parser.add_argument(
        "il_file",
        type=Path,
        help="Path to IL source file",
    )

    parser.add_argument(
        "--trace",
        action="store_true",
        help="Log scheduling decisions to stderr",
    )

    parser.add_argument(
        "--max-dispatches",
        type=int,
        default=None,
        help="Abort after this many dispatched calls (0 = unlimited)",
    )

    parser.add_argument(
        "--skip-blank-lines",
        action="store_true",
        help="Ignore whitespace-only lines in the IL source",
    )

    parser.add_argument(
        "--dump-state",
        action="store_true",
        help="Write the final variable store as JSON to stderr",
    )

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    overrides = {}
    if args.trace:
        overrides["log_level"] = "DEBUG"
    if args.max_dispatches is not None:
        overrides["max_dispatches"] = args.max_dispatches
    if args.skip_blank_lines:
        overrides["skip_blank_lines"] = True

    il_path = args.il_file
    if not il_path.is_file():
        print(f"error: IL file not found: {il_path}", file=sys.stderr)
        return 2

    # ---------------------------------
    # Configure + run
    # ---------------------------------
    try:
        settings = load_settings(**overrides)

        logging.basicConfig(
            level=settings.log_level,
            stream=sys.stderr,
            format="%(levelname)s %(name)s: %(message)s",
        )

        result = run_file(il_path, settings=settings, emit=_print_value)
    except AeolisError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    if args.dump_state:
        print(json.dumps(result.variables, indent=2, sort_keys=True), file=sys.stderr)

    return 0


if __name__ == "__main__":
    sys.exit(main())
