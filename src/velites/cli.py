from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

import jsonschema

from . import __version__
from .config import DEFAULT_MAX_CALL_DEPTH, ExecutorConfig
from .dsl import load_script, plan_script
from .errors import VelitesError, error_output
from .log import configure_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="velites",
        description="Check UI-automation scripts without a device session.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    check = subparsers.add_parser("check", help="Load and plan a script file")
    check.add_argument("path", type=Path, help="Path to a YAML or JSON script")
    check.add_argument(
        "--strict",
        action="store_true",
        help="Reject top-level break/return and recursive function calls",
    )
    check.add_argument(
        "--max-call-depth",
        type=int,
        default=DEFAULT_MAX_CALL_DEPTH,
        help="Reject call chains nested deeper than this (default: %(default)s)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.WARNING)

    if args.command == "check":
        return _check(args)
    parser.error(f"unknown command {args.command!r}")  # pragma: no cover - argparse exits
    return 2


def _check(args: argparse.Namespace) -> int:
    try:
        config = ExecutorConfig(max_call_depth=args.max_call_depth, strict_control_flow=args.strict)
        plan = plan_script(load_script(args.path), config)
    except (VelitesError, jsonschema.ValidationError, OSError, ValueError) as exc:
        print(f"{args.path}: {error_output(exc)}", file=sys.stderr)
        return 1

    print(f"{args.path}: OK")
    print(f"  name: {plan.script_name}")
    if plan.description:
        print(f"  description: {plan.description}")
    print(f"  steps: {plan.command_count}")
    print(f"  commands: {len(plan.commands)}")
    print(f"  functions: {', '.join(plan.function_names) or '-'}")
    print(f"  call depth: {plan.call_depth}")
    if plan.recursive_functions:
        print(f"  recursive: {', '.join(plan.recursive_functions)}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
