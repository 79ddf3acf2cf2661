"""
Club submission logic: single and batch intake with duplicate checking,
plus the read accessors used by the list view.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable, Optional

from clubboard.db import ClubStore, ClubSubmissionRecord
from clubboard.errors import DuplicateSubmissionError, StoreUnavailableError

logger = logging.getLogger(__name__)

_EDGE_SPACE = re.compile(r"^[\s\ufeff]+|[\s\ufeff]+$")


@dataclass
class Submitter:
    name: str
    email: str
    school_email: str


@dataclass
class ClubEntry:
    club_name: str
    description: Optional[str] = None


@dataclass
class BatchResult:
    submitted: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return len(self.submitted) > 0

    @property
    def total_submitted(self) -> int:
        return len(self.submitted)

    def as_dict(self) -> dict:
        return {
            "success": self.success,
            "submitted": list(self.submitted),
            "errors": list(self.errors),
            "totalSubmitted": self.total_submitted,
        }


def trim_text(value: str) -> str:
    """Strip surrounding whitespace, including byte-order marks."""
    return _EDGE_SPACE.sub("", value)


def _build_record(entry: ClubEntry, submitter: Submitter) -> ClubSubmissionRecord:
    return ClubSubmissionRecord(
        club_name=trim_text(entry.club_name),
        description=trim_text(entry.description or ""),
        submitter_name=trim_text(submitter.name),
        submitter_email=trim_text(submitter.email),
        submitter_school_email=trim_text(submitter.school_email),
        approved=True,  # Auto-approve until moderation exists.
        featured=False,
    )


def _insert_unique(
    store: ClubStore, entry: ClubEntry, submitter: Submitter
) -> ClubSubmissionRecord:
    """
    Check for an existing club with the same trimmed name, then insert.

    The comparison is an exact string match on the trimmed name; no case
    folding is applied. The check and the insert are separate store calls,
    so a store that detects the conflict itself on insert reports it as the
    same duplicate error.
    """
    record = _build_record(entry, submitter)
    if store.find_by_name(record.club_name) is not None:
        raise DuplicateSubmissionError(entry.club_name)
    try:
        return store.insert(record)
    except DuplicateSubmissionError as exc:
        raise DuplicateSubmissionError(entry.club_name) from exc


def submit_club(store: ClubStore, entry: ClubEntry, submitter: Submitter) -> None:
    """
    Submit a single club.

    Raises DuplicateSubmissionError when the trimmed name already exists.
    Store failures propagate unchanged.
    """
    stored = _insert_unique(store, entry, submitter)
    logger.info("Accepted club submission %r (id=%s)", stored.club_name, stored.submission_id)


def submit_clubs(
    store: ClubStore, entries: Iterable[ClubEntry], submitter: Submitter
) -> BatchResult:
    """
    Submit several clubs under one submitter.

    Items are processed in order, one at a time, so a club accepted earlier
    in the batch is visible to the duplicate check of later items. A rejected
    item never aborts the batch; only StoreUnavailableError escapes.
    """
    result = BatchResult()
    for entry in entries:
        try:
            _insert_unique(store, entry, submitter)
        except DuplicateSubmissionError as exc:
            logger.warning("Rejected duplicate club %r", entry.club_name)
            result.errors.append(str(exc))
            continue
        except StoreUnavailableError:
            raise
        except Exception as exc:
            logger.warning("Failed to submit club %r: %s", entry.club_name, exc)
            result.errors.append(f'Failed to submit "{entry.club_name}": {exc}')
            continue
        result.submitted.append(entry.club_name)

    logger.info(
        "Batch submission by %r: %d accepted, %d rejected",
        submitter.name,
        result.total_submitted,
        len(result.errors),
    )
    return result


def list_clubs(store: ClubStore) -> list[ClubSubmissionRecord]:
    """Return every submission, most recent first, regardless of approval."""
    return store.list_all()


def count_clubs(store: ClubStore) -> int:
    return store.count()
