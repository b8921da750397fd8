#!/usr/bin/env python3

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from partnercatalog.app import collect_partners, collect_solutions, join_collections, run_pipeline
from partnercatalog.config import (
    ConfigurationError,
    configure_logging,
    get_partner_collector_settings,
    get_solution_collector_settings,
    get_storage_config,
)

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from partnercatalog.config import StorageConfig

log = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid integer: {value}") from exc
    if parsed < 1:
        raise argparse.ArgumentTypeError(f"Must be a positive integer: {value}")
    return parsed


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Collect and join the partner catalog")
    parser.add_argument(
        "--output-dir",
        type=Path,
        help="Directory for the JSON/CSV files (defaults to config)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log at DEBUG level",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    solutions = subparsers.add_parser("solutions", help="Collect the solutions catalog")
    solutions.add_argument(
        "--estimated-solutions",
        type=_positive_int,
        help="Initial estimate of catalog entries (defaults to config)",
    )

    partners = subparsers.add_parser("partners", help="Collect the partner directory")
    partners.add_argument(
        "--total-pages",
        type=_positive_int,
        help="Number of directory pages to request (defaults to config)",
    )
    partners.add_argument(
        "--batch-size",
        type=_positive_int,
        help="Pages fetched concurrently per batch (defaults to config)",
    )

    subparsers.add_parser("join", help="Join the stored partner and solution files")
    subparsers.add_parser("run", help="Collect both sources and join them")

    return parser.parse_args(list(argv))


def _storage(args: argparse.Namespace) -> StorageConfig:
    storage = get_storage_config()
    if args.output_dir is not None:
        storage = replace(storage, output_dir=args.output_dir)
    return storage


def _report_progress(collected: int, estimated_total: int) -> None:
    log.info("Partners so far: %s (~%s expected)", collected, estimated_total)


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)
        storage = _storage(parsed_args)
    except (ValueError, ConfigurationError):
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "solutions":
            settings = get_solution_collector_settings()
            if parsed_args.estimated_solutions is not None:
                settings = replace(settings, estimated_records=parsed_args.estimated_solutions)
            collect_solutions(settings=settings, storage=storage)
        elif parsed_args.command == "partners":
            partner_settings = get_partner_collector_settings()
            if parsed_args.total_pages is not None:
                partner_settings = replace(partner_settings, total_pages=parsed_args.total_pages)
            if parsed_args.batch_size is not None:
                partner_settings = replace(partner_settings, batch_size=parsed_args.batch_size)
            collect_partners(
                settings=partner_settings, storage=storage, progress=_report_progress
            )
        elif parsed_args.command == "join":
            result = join_collections(storage=storage)
            log.info(
                "Joined %s partners, %s with solutions",
                result.report.partners_total,
                result.report.partners_with_solutions,
            )
        elif parsed_args.command == "run":
            run_pipeline(storage=storage, progress=_report_progress)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except ConfigurationError:
        log.exception("Configuration error")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error during collection")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
