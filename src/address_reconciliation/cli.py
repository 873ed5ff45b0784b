"""CLI entrypoint for address dataset reconciliation."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence

from .address import Addresses
from .config import Settings, load_settings
from .csv_io import (
    read_match_records,
    read_source,
    write_addresses,
    write_match_records,
    write_orphan_streets,
)
from .engine import EngineConfig, MatchRecords
from .sources import SOURCE_TYPES
from .streets import orphan_streets

logger = logging.getLogger(__name__)

COMMANDS = ("compare", "filter", "duplicates", "orphan_streets")


class UsageError(Exception):
    """Required command-line options are missing."""


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="address-reconcile",
        description="Reconcile civic address records between GIS exports.",
    )
    parser.add_argument("command", choices=COMMANDS, help="Operation to run.")
    parser.add_argument("-s", "--source", required=True, type=Path, help="Source CSV path.")
    parser.add_argument(
        "--source-type", choices=sorted(SOURCE_TYPES), default=None, help="Source dataset type."
    )
    parser.add_argument("-t", "--target", type=Path, default=None, help="Target CSV path.")
    parser.add_argument(
        "--target-type", choices=sorted(SOURCE_TYPES), default=None, help="Target dataset type."
    )
    parser.add_argument("-o", "--output", required=True, type=Path, help="Output CSV path.")
    parser.add_argument("-f", "--filter", default=None, help="Filter name for the filter command.")
    parser.add_argument(
        "--include-inactive",
        action="store_true",
        help="Keep source addresses whose status is not Active when comparing.",
    )
    parser.add_argument(
        "--no-index",
        action="store_true",
        help="Scan every candidate instead of bucketing candidates by identity fields.",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default from settings).")
    return parser


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _require(value, message: str):
    if value is None:
        raise UsageError(message)
    return value


def _load_addresses(path: Path, source_type: Optional[str], role: str) -> Addresses:
    source_type = _require(source_type, f"No {role} data type provided (--{role}-type).")
    logger.info("Reading %s records.", role)
    addresses = Addresses.convert(read_source(path, source_type))
    logger.info("%s addresses available: %d entries.", role.capitalize(), len(addresses))
    return addresses


def run_compare(args: argparse.Namespace, settings: Settings) -> None:
    source = _load_addresses(args.source, args.source_type, "source")
    target_path = _require(args.target, "No target data specified (--target).")
    target = _load_addresses(target_path, args.target_type, "target")

    if not args.include_inactive:
        logger.info("Source records prior to status filter: %d", len(source))
        source = source.filter("active")
        logger.info("Source records after status filter: %d", len(source))

    config = EngineConfig(use_index=settings.use_index and not args.no_index)
    logger.info("Comparing records.")
    match_records = MatchRecords.compare(source, target, config)
    logger.info("%d records categorized.", len(match_records))
    for status, count in match_records.status_counts().items():
        logger.info("  %s: %d", status.value, count)
    logger.info("Output file: %s", args.output)
    write_match_records(match_records, args.output)


def run_filter(args: argparse.Namespace, settings: Settings) -> None:
    name = _require(args.filter, "Filter parameter (-f or --filter) must be set.")
    logger.info("Filtering records.")
    match_records = read_match_records(args.source)
    logger.info("Source records read: %d entries.", len(match_records))
    filtered = match_records.filter(name)
    logger.info("Records remaining: %d entries.", len(filtered))
    write_match_records(filtered, args.output)


def run_duplicates(args: argparse.Namespace, settings: Settings) -> None:
    source = _load_addresses(args.source, args.source_type, "source")
    logger.info("Screening addresses for duplicate records.")
    duplicates = source.filter("duplicate")
    logger.info("Duplicate records: %d", len(duplicates))
    logger.info("Output file: %s", args.output)
    write_addresses(duplicates, args.output)


def run_orphan_streets(args: argparse.Namespace, settings: Settings) -> None:
    source = _load_addresses(args.source, args.source_type, "source")
    target_path = _require(args.target, "No target data specified (--target).")
    target = _load_addresses(target_path, args.target_type, "target")
    orphans = orphan_streets(source, target, score_cutoff=settings.orphan_cutoff)
    logger.info("Orphan streets: %d", len(orphans))
    logger.info("Output file: %s", args.output)
    write_orphan_streets(orphans, args.output)


HANDLERS = {
    "compare": run_compare,
    "filter": run_filter,
    "duplicates": run_duplicates,
    "orphan_streets": run_orphan_streets,
}


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run one reconciliation command.

    Returns:
        Zero on success, 2 for usage errors, 1 when settings are invalid or
        reading or writing data fails.
    """

    args = build_arg_parser().parse_args(argv)
    try:
        settings = load_settings()
    except ValueError as exc:
        configure_logging(args.log_level or "INFO")
        logger.error("Invalid settings: %s", exc)
        return 1
    configure_logging(args.log_level or settings.log_level)

    try:
        HANDLERS[args.command](args, settings)
    except UsageError as exc:
        logger.error("%s", exc)
        return 2
    except (OSError, ValueError) as exc:
        logger.error("Aborting %s: %s", args.command, exc)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
