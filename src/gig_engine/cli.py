"""CLI entry point for the Gig Status Engine.

Registered as the ``gig-engine`` console script via pyproject.toml.

Subcommands
-----------
rank           Classify, filter, and print gigs from a JSON file in priority order.
counts         Print how many gigs fall into each computed status.
list-statuses  Print all statuses, highest priority first.

Usage examples
--------------
$ gig-engine list-statuses
$ gig-engine rank gigs.json
$ gig-engine rank gigs.json --now 2025-09-25T12:00 --status URGENT
$ gig-engine rank gigs.json --sort pay-high --strict
$ gig-engine counts gigs.json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path

from pydantic import ValidationError

from gig_engine import __version__

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Parser construction
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    """Build and return the top-level argument parser."""
    from gig_engine.models import GigStatus
    from gig_engine.sorting import SortOrder

    parser = argparse.ArgumentParser(
        prog="gig-engine",
        description="Classify and rank gig listings by status priority.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Enable debug logging.",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # --- rank -------------------------------------------------------------
    rank_parser = subparsers.add_parser(
        "rank",
        help="Print gigs from a JSON file in status-priority order.",
        description=(
            "Load a JSON array of gig records, compute each gig's status,\n"
            "apply the optional status filter, sort, and print a table."
        ),
    )
    _add_common_arguments(rank_parser)
    rank_parser.add_argument(
        "--sort",
        choices=[o.value for o in SortOrder],
        default=None,
        help="Ordering to apply after status priority (default: GE_DEFAULT_SORT).",
    )
    rank_parser.add_argument(
        "--status",
        choices=[s.value for s in GigStatus],
        default=None,
        help="Only show gigs with this computed status.",
    )
    rank_parser.add_argument(
        "--strict",
        action="store_true",
        default=False,
        help="Fail on unparseable dates instead of treating them as missing.",
    )

    # --- counts -----------------------------------------------------------
    counts_parser = subparsers.add_parser(
        "counts",
        help="Print the number of gigs per computed status.",
    )
    _add_common_arguments(counts_parser)

    # --- list-statuses ----------------------------------------------------
    subparsers.add_parser(
        "list-statuses",
        help="Print all statuses, highest priority first.",
    )

    return parser


def _add_common_arguments(sub: argparse.ArgumentParser) -> None:
    sub.add_argument(
        "path",
        type=Path,
        metavar="FILE",
        help="JSON file holding an array of gig records.",
    )
    sub.add_argument(
        "--now",
        type=datetime.fromisoformat,
        default=None,
        metavar="ISO",
        help="Classify as of this ISO timestamp (default: current time).",
    )


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------


def cmd_rank(args: argparse.Namespace) -> int:
    """Load -> classify -> filter -> sort -> print table."""
    # Lazy imports keep startup fast when other subcommands are used
    from gig_engine.config import get_settings
    from gig_engine.filtering import GigFilter, apply_gig_filter
    from gig_engine.models import GigStatus
    from gig_engine.sorting import SortOrder, sort_gigs
    from gig_engine.status import StatusRules

    settings = get_settings()
    rules = StatusRules.from_settings(settings)
    strict = args.strict or settings.strict_dates

    gigs = _load_gigs(args.path, strict=strict)
    if gigs is None:
        return 1

    now = args.now or datetime.now()

    if args.status:
        gig_filter = GigFilter(status=GigStatus(args.status), rules=rules)
        gigs = apply_gig_filter(gigs, gig_filter, now)

    try:
        order = SortOrder(args.sort or settings.default_sort)
    except ValueError:
        print(f"Error: unknown sort order {settings.default_sort!r}.")
        return 1

    _print_table(sort_gigs(gigs, now, order, rules=rules), now, rules)
    return 0


def cmd_counts(args: argparse.Namespace) -> int:
    """Print per-status counts, highest priority first."""
    from gig_engine.config import get_settings
    from gig_engine.filtering import status_counts
    from gig_engine.models import GigStatus
    from gig_engine.status import StatusRules

    settings = get_settings()
    gigs = _load_gigs(args.path, strict=settings.strict_dates)
    if gigs is None:
        return 1

    counts = status_counts(
        gigs,
        args.now or datetime.now(),
        rules=StatusRules.from_settings(settings),
    )
    for status in GigStatus.by_priority():
        print(f"{status.value:<14} {counts[status]}")
    return 0


def cmd_list_statuses(_args: argparse.Namespace) -> int:
    """Print all :class:`~gig_engine.models.GigStatus` values."""
    from gig_engine.models import GigStatus

    for status in GigStatus.by_priority():
        print(f"{int(status.priority)}  {status.value}")
    return 0


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _load_gigs(path: Path, *, strict: bool):
    """Return a list of gigs parsed from *path*, or ``None`` on error."""
    from gig_engine.models import Gig

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        print(f"Error: cannot read {path}: {exc}")
        return None
    except json.JSONDecodeError as exc:
        print(f"Error: {path} is not valid JSON: {exc}")
        return None

    if not isinstance(raw, list):
        print(f"Error: {path} must contain a JSON array of gigs.")
        return None

    try:
        gigs = [
            Gig.model_validate(item, context={"strict_dates": strict})
            for item in raw
        ]
    except ValidationError as exc:
        print(f"Error: invalid gig record in {path}:\n{exc}")
        return None

    logger.debug("Loaded %d gig(s) from %s", len(gigs), path)
    return gigs


def _print_table(gigs: list, now: datetime, rules) -> None:
    """Print a human-readable table of ranked gigs."""
    from gig_engine.status import classify_gig

    if not gigs:
        print("No gigs matched.")
        return

    print(f"\n{len(gigs)} gig(s) as of {now:%Y-%m-%d %H:%M}:\n")
    header = f"  {'#':<3}  {'Status':<13}  {'Title':<35}  {'Pay':<10}  {'Location':<20}  Deadline"
    print(header)
    print("  " + "-" * (len(header) - 2))

    for i, gig in enumerate(gigs, start=1):
        info = classify_gig(gig, now, rules=rules)
        title = gig.title or str(gig.id)
        title = (title[:33] + "..") if len(title) > 35 else title
        loc = (gig.location[:18] + "..") if len(gig.location) > 20 else gig.location
        if info.days_until_deadline is None:
            deadline = "none"
        else:
            deadline = f"{gig.deadline} ({info.days_until_deadline:+d}d)"
        print(
            f"  {i:<3}  {info.status.value:<13}  {title:<35}  {gig.pay:<10}  {loc:<20}  {deadline}"
        )


# ---------------------------------------------------------------------------
# Dispatcher
# ---------------------------------------------------------------------------

_HANDLERS = {
    "rank": cmd_rank,
    "counts": cmd_counts,
    "list-statuses": cmd_list_statuses,
}


def main(argv: list[str] | None = None) -> None:
    """Parse *argv* and dispatch to the appropriate command handler."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    handler = _HANDLERS.get(args.command)
    if handler is None:
        parser.print_help()
        sys.exit(0)

    sys.exit(handler(args))


if __name__ == "__main__":
    main()
