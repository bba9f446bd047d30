"""CLI orchestration for UX Starter."""

from __future__ import annotations

import argparse
import traceback
from pathlib import Path
from typing import List, Optional

from .commands import (
    MENU_ITEMS,
    MENU_NAME,
    create_deck_from_recommendations,
    ensure_configuration,
    filter_recommendations,
    load_configuration,
)
from .deck import PptxDeck
from .errors import ConfigValidationError, UxStarterError
from .workbook import AuditWorkbook


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ux-starter",
        description="Generate UX audit recommendation decks from an audit workbook",
        epilog="Menu: " + "; ".join(f"{item['name']} ({item['command']})" for item in MENU_ITEMS),
    )
    parser.add_argument("--debug", action="store_true", help="Show full traceback for unexpected errors")
    sub = parser.add_subparsers(dest="command", required=True, metavar="command")

    load = sub.add_parser("load-config", help="Load configuration")
    load.add_argument("--workbook", required=True, help="Path to the audit .xlsx workbook")

    flt = sub.add_parser("filter", help="Filter criteria only")
    flt.add_argument("--workbook", required=True, help="Path to the audit .xlsx workbook")

    gen = sub.add_parser("generate", help="Filter criteria and generate deck")
    gen.add_argument("--workbook", required=True, help="Path to the audit .xlsx workbook")
    gen.add_argument("--output", required=True, help="Output PPTX file path")
    gen.add_argument(
        "--drive-root",
        default=None,
        help="Directory searched for the images folder (default: the workbook's directory)",
    )
    gen.add_argument(
        "--drop-template-slides",
        action="store_true",
        help="Remove the slides already present in the template deck (default: keep them)",
    )

    layouts = sub.add_parser("list-layouts", help="Print slide layout indices/names for a deck and exit")
    layouts.add_argument("--deck", required=True, help="Path to a .pptx deck or template")

    return parser


def _message(error: Exception, debug: bool) -> str:
    detail = getattr(error, "detail", "")
    return f"{error} ({detail})" if detail and debug else str(error)


def _run(args: argparse.Namespace) -> None:
    if args.command == "list-layouts":
        for i, name in PptxDeck.open(Path(args.deck).resolve()).list_layouts():
            print(f"{i}\t{name}")
        return

    workbook = AuditWorkbook.open(args.workbook)
    try:
        _run_workbook_command(args, workbook)
    except (UxStarterError, ConfigValidationError) as e:
        if args.debug:
            traceback.print_exc()
        workbook.alert(_message(e, args.debug))
        raise SystemExit(1) from e


def _run_workbook_command(args: argparse.Namespace, workbook: AuditWorkbook) -> None:
    if args.command == "load-config":
        load_configuration(workbook)
        return

    config = ensure_configuration(workbook)
    if args.command == "filter":
        filter_recommendations(workbook, config)
        return

    create_deck_from_recommendations(
        workbook,
        config,
        Path(args.output).resolve(),
        drive_root=Path(args.drive_root).resolve() if args.drive_root else None,
        keep_template_slides=not args.drop_template_slides,
    )


def run_cli(argv: Optional[List[str]] = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)
    print(f"{MENU_NAME}: {args.command}")

    try:
        _run(args)
    except UxStarterError as e:
        if args.debug:
            traceback.print_exc()
        raise SystemExit(_message(e, args.debug)) from e
    except ConfigValidationError as e:
        raise SystemExit(str(e)) from e
    except Exception as e:
        if args.debug:
            traceback.print_exc()
        raise SystemExit(f"Deck generation failed: {e}") from e


def main() -> None:
    run_cli()
