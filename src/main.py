# src/main.py — v1
"""CLI entry point: analyze, cache and history commands.

Usage:
    facetier analyze <image> [--no-medical] [--no-history] [--json]
    facetier cache {purge,clear,stats}
    facetier history [--limit N]
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from facetier.version import __version__

if TYPE_CHECKING:
    from facetier.api.models import AnalysisReport
    from facetier.config.settings import Settings

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    from facetier.config.settings import load_settings
    from facetier.logging.logger import setup_logging

    try:
        settings = load_settings()
    except Exception as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 1

    setup_logging(
        level="DEBUG" if args.verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=settings.log_file,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )

    try:
        return asyncio.run(args.func(args, settings))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="facetier",
        description=f"facetier v{__version__}: tiered face analysis",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- analyze ---
    p_analyze = subparsers.add_parser("analyze", help="Analyze a face image")
    p_analyze.add_argument("image", type=Path, help="Path to an encoded image")
    p_analyze.add_argument(
        "--no-medical", action="store_true",
        help="Skip the medical recommendation",
    )
    p_analyze.add_argument(
        "--no-history", action="store_true",
        help="Do not record the result in the history table",
    )
    p_analyze.add_argument(
        "--json", action="store_true",
        help="Print the report as JSON",
    )
    p_analyze.set_defaults(func=_cmd_analyze)

    # --- cache ---
    p_cache = subparsers.add_parser("cache", help="Inspect or maintain the result cache")
    p_cache.add_argument("action", choices=["purge", "clear", "stats"])
    p_cache.set_defaults(func=_cmd_cache)

    # --- history ---
    p_history = subparsers.add_parser("history", help="List past analyses")
    p_history.add_argument(
        "--limit", type=int, default=10,
        help="Number of records to show (default: 10)",
    )
    p_history.set_defaults(func=_cmd_history)

    return parser


async def _cmd_analyze(args: argparse.Namespace, settings: Settings) -> int:
    """Run one analysis through the resolver."""
    from facetier.api.facade import analyze, open_database
    from facetier.api.models import ImageInput
    from facetier.resolver.factory import create_resolver
    from facetier.storage.history_store import SqliteHistoryStore

    image_path: Path = args.image
    if not image_path.is_file():
        logger.error("File not found: %s", image_path)
        return 1

    with open_database(settings) as database:
        resolver = create_resolver(settings, database)
        history = None
        if settings.history_enabled and not args.no_history:
            history = SqliteHistoryStore(database)
        report = await analyze(
            ImageInput(content=image_path, filename=image_path.name),
            resolver=resolver,
            history=history,
            include_medical=not args.no_medical,
        )

    if args.json:
        print(report.model_dump_json(by_alias=True, indent=2))
    else:
        _print_report(report)
    return 0


async def _cmd_cache(args: argparse.Namespace, settings: Settings) -> int:
    """Purge expired entries, clear everything, or show counts."""
    from facetier.api.facade import open_database
    from facetier.cache.cache_factory import create_cache_store

    with open_database(settings) as database:
        store = create_cache_store(settings, database)
        if args.action == "purge":
            removed = await store.purge()
            print(f"Purged {removed} expired cache entries")
        elif args.action == "clear":
            removed = await store.clear()
            print(f"Cleared {removed} cache entries")
        else:
            total = await store.count()
            print(f"\nCache ({settings.cache_backend}):")
            print(f"  Entries:  {total}")
            print(f"  TTL:      {settings.cache_ttl_days} days")
    return 0


async def _cmd_history(args: argparse.Namespace, settings: Settings) -> int:
    """Print the most recent history records."""
    from facetier.api.facade import open_database
    from facetier.storage.history_store import SqliteHistoryStore

    if args.limit <= 0:
        logger.error("--limit must be positive")
        return 1

    with open_database(settings) as database:
        store = SqliteHistoryStore(database)
        records = await store.list_all(limit=args.limit)

    if not records:
        print("No analyses recorded yet")
        return 0
    for record in records:
        medical = record.medical.condition if record.medical else "-"
        print(
            f"{record.id:>5}  {record.created_at:%Y-%m-%d %H:%M}  "
            f"{record.face.attractiveness_score:5.1f}  "
            f"{record.face.best_angle.value:<20}  {record.face.provenance.value:<16}  {medical}"
        )
    return 0


def _print_report(report: AnalysisReport) -> None:
    """Print a human-readable summary of an AnalysisReport."""
    face = report.face
    print(f"\nFace analysis ({face.provenance.value}):")
    print(f"  Score:       {face.attractiveness_score:.1f}/100")
    print(f"  Best angle:  {face.best_angle.value}")
    for name, value in face.features.model_dump().items():
        print(f"    {name:<17} {value:.1f}")
    if face.overall_analysis:
        print(f"  Summary:     {face.overall_analysis}")

    medical = report.medical
    if medical is not None:
        print(f"\nRecommendation ({medical.provenance.value}):")
        print(f"  Condition:   {medical.condition} [{medical.severity.value}]")
        for item in medical.recommendations:
            print(f"    - {item}")
        if medical.treatments:
            print(f"  Treatments:  {', '.join(medical.treatments)}")

    if report.history_id is not None:
        print(f"\nSaved to history as #{report.history_id}")


if __name__ == "__main__":
    sys.exit(main())
