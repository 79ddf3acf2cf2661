"""
Errors raised by the submission service and its stores.
"""

from __future__ import annotations


class ClubSubmissionError(Exception):
    """Base class for club submission failures."""


class DuplicateSubmissionError(ClubSubmissionError):
    """A club with the same (trimmed) name has already been submitted."""

    def __init__(self, club_name: str):
        self.club_name = club_name
        super().__init__(f'The club "{club_name}" has already been submitted.')


class StoreUnavailableError(ClubSubmissionError):
    """The backing store could not be reached or refused the operation."""
