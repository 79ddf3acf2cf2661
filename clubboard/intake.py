"""
Advisory input preparation for clients of the submission service.

These mirror the checks the browser form runs before it calls the batch
endpoint. The service itself never calls them, so they are a convenience for
callers rather than an enforcement point.
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Iterable, Optional

from clubboard.service import ClubEntry, Submitter, trim_text

PERSONAL_FIELDS_MESSAGE = "Please fill in all personal information fields"

HEADER_ALIASES = {
    "club_name": {"club_name", "club name", "clubname", "club"},
    "description": {"description", "desc", "about"},
}


def prepare_entries(
    rows: Iterable[ClubEntry], require_description: bool = False
) -> list[ClubEntry]:
    """Trim each row and drop the ones the form would not send."""
    entries: list[ClubEntry] = []
    for row in rows:
        club_name = trim_text(row.club_name or "")
        description = trim_text(row.description or "")
        if not club_name:
            continue
        if require_description and not description:
            continue
        entries.append(ClubEntry(club_name=club_name, description=description))
    return entries


def school_email_for(value: str, domain: str) -> str:
    """Append the school domain to a bare local part."""
    value = trim_text(value or "")
    if not value or "@" in value:
        return value
    return f"{value}@{domain}"


def check_submitter(submitter: Submitter, domain: str) -> list[str]:
    problems: list[str] = []
    if not (
        trim_text(submitter.name)
        and trim_text(submitter.email)
        and trim_text(submitter.school_email)
    ):
        problems.append(PERSONAL_FIELDS_MESSAGE)
        return problems
    if not trim_text(submitter.school_email).endswith(f"@{domain}"):
        problems.append(f"School email must end with @{domain}")
    return problems


def find_known_duplicates(
    entries: Iterable[ClubEntry], existing_names: Iterable[str]
) -> list[str]:
    """
    Names that repeat a club already on the list or earlier in the batch.

    Exact match on the trimmed name, the same comparison the service uses.
    """
    seen = {trim_text(name) for name in existing_names}
    duplicates: list[str] = []
    for entry in entries:
        name = trim_text(entry.club_name)
        if name in seen:
            duplicates.append(name)
            continue
        seen.add(name)
    return duplicates


def _normalize_header(header: Optional[str]) -> str:
    if not header:
        return ""
    return header.strip().lstrip("\ufeff").lower()


def _map_headers(headers: list[str]) -> dict[str, str]:
    mapped = {}
    for header in headers:
        normalized = _normalize_header(header)
        for key, aliases in HEADER_ALIASES.items():
            # The canonical column name wins over any alias seen earlier.
            if normalized == key or (normalized in aliases and key not in mapped):
                mapped[key] = header
    return mapped


def read_clubs_csv(path: str | Path) -> list[ClubEntry]:
    """
    Read club rows from a CSV file with a club name column and an optional
    description column. Rows are returned as-is; use prepare_entries to trim
    and filter them.
    """
    with open(path, newline="", encoding="utf-8-sig") as handle:
        reader = csv.DictReader(handle)
        if not reader.fieldnames:
            raise ValueError(f"{path}: CSV file is empty or has no headers")
        header_map = _map_headers(list(reader.fieldnames))
        if "club_name" not in header_map:
            raise ValueError(f"{path}: missing required column: club_name")

        entries: list[ClubEntry] = []
        for row in reader:
            description_header = header_map.get("description")
            entries.append(
                ClubEntry(
                    club_name=row.get(header_map["club_name"]) or "",
                    description=(row.get(description_header) or "")
                    if description_header
                    else None,
                )
            )
        return entries
