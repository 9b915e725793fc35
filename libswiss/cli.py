"""Command line interface for libswiss."""

from __future__ import annotations

import argparse
import json
from collections.abc import Sequence

from . import diagnostics as diag
from .boot.logging import configure_logging
from .config import load_settings
from .swiss_ephm import default_session


def _run_diagnose(args: argparse.Namespace) -> int:
    settings = load_settings(args.config)
    configure_logging(level=settings.log_level)
    path = args.path if args.path is not None else settings.ephe_path
    payload = diag.collect_diagnostics(default_session(settings), path)
    if args.json:
        print(json.dumps(payload, indent=2))
    else:
        print(diag.format_text_report(payload))
    return 1 if payload["status"] == "FAIL" else 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="libswiss", description="Swiss Ephemeris binding tools")
    parser.add_argument("--config", default=None, help="Path to a config.yaml")
    sub = parser.add_subparsers(dest="command", required=True)

    diagnose = sub.add_parser(
        "diagnose",
        help="Engine & ephemeris diagnostics",
        description="Configure the engine and report its version, library and loaded files.",
    )
    diagnose.add_argument("--path", default=None, help="Ephemeris directory to configure")
    diagnose.add_argument("--json", action="store_true", help="Emit JSON output")
    diagnose.set_defaults(func=_run_diagnose)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    return args.func(args)
