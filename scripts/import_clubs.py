"""
Bulk-submit clubs from a CSV file under one submitter.

Runs the same advisory checks the submission form does, then hands the rows
to the batch submission logic against the configured store.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from clubboard.config import get_settings
from clubboard.db import InMemoryClubStore
from clubboard.dependencies import get_club_store
from clubboard.intake import (
    check_submitter,
    find_known_duplicates,
    prepare_entries,
    read_clubs_csv,
    school_email_for,
)
from clubboard.service import Submitter, list_clubs, submit_clubs

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Import club submissions from CSV")
    parser.add_argument("csv_path", type=Path, help="CSV file with a club_name column")
    parser.add_argument("--name", required=True, help="Submitter name")
    parser.add_argument("--email", required=True, help="Submitter personal email")
    parser.add_argument(
        "--school-email",
        required=True,
        help="Submitter school email, or just the part before the @",
    )
    parser.add_argument(
        "--require-description",
        action="store_true",
        help="Skip rows without a description, as the form does",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Run against a throwaway in-memory store instead of DATABASE_URL",
    )
    parser.add_argument(
        "--skip-checks",
        action="store_true",
        help="Submit without the advisory submitter and duplicate checks",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(name)s %(levelname)s %(asctime)s %(message)s",
        datefmt="%m/%d/%Y %I:%M:%S %p",
    )

    settings = get_settings()
    submitter = Submitter(
        name=args.name,
        email=args.email,
        school_email=school_email_for(args.school_email, settings.school_email_domain),
    )

    try:
        rows = read_clubs_csv(args.csv_path)
    except (OSError, ValueError) as exc:
        logger.error("Could not read %s: %s", args.csv_path, exc)
        return 2
    entries = prepare_entries(rows, require_description=args.require_description)
    if not entries:
        logger.error("No clubs with a name found in %s", args.csv_path)
        return 2

    if args.dry_run:
        store = InMemoryClubStore()
    elif settings.use_in_memory_backends or not settings.database_url:
        logger.error(
            "DATABASE_URL is not set; nothing would be saved. "
            "Set DATABASE_URL or pass --dry-run."
        )
        return 2
    else:
        store = get_club_store()
    if not args.skip_checks:
        problems = check_submitter(submitter, settings.school_email_domain)
        for problem in problems:
            logger.error(problem)
        if problems:
            return 2
        existing = [record.club_name for record in list_clubs(store)]
        for name in find_known_duplicates(entries, existing):
            logger.warning("%r is already on the list or repeated in this file", name)

    result = submit_clubs(store, entries, submitter)
    for name in result.submitted:
        logger.info("Submitted %s", name)
    for error in result.errors:
        logger.error(error)
    logger.info("Successfully submitted %d of %d clubs", result.total_submitted, len(entries))
    return 0 if result.success else 1


if __name__ == "__main__":
    raise SystemExit(main())
