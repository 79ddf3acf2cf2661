"""
Storage abstraction for club submissions: a SQLAlchemy-backed store and an
in-memory implementation for development and tests.
"""

from __future__ import annotations

import itertools
import threading
import time
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Protocol

from sqlalchemy import (
    Boolean,
    Column,
    Float,
    Integer,
    String,
    create_engine,
    func,
    select,
)
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from clubboard.errors import DuplicateSubmissionError, StoreUnavailableError


class ClubStore(Protocol):
    """Interface for club submission persistence."""

    def find_by_name(self, club_name: str) -> Optional["ClubSubmissionRecord"]:
        ...

    def insert(self, record: "ClubSubmissionRecord") -> "ClubSubmissionRecord":
        ...

    def list_all(self) -> list["ClubSubmissionRecord"]:
        ...

    def count(self) -> int:
        ...


@dataclass
class ClubSubmissionRecord:
    club_name: str
    description: str
    submitter_name: str
    submitter_email: str
    submitter_school_email: str
    approved: bool = True
    featured: bool = False
    submission_id: Optional[int] = None
    created_at: float = field(default_factory=lambda: time.time())

    def as_dict(self) -> dict:
        return {
            "id": self.submission_id,
            "creationTime": self.created_at,
            "clubName": self.club_name,
            "description": self.description,
            "submitterName": self.submitter_name,
            "submitterEmail": self.submitter_email,
            "submitterSchoolEmail": self.submitter_school_email,
            "approved": self.approved,
            "featured": self.featured,
        }


class InMemoryClubStore:
    """Simple in-memory store for development and tests."""

    def __init__(self):
        self.records: List[ClubSubmissionRecord] = []
        self.by_name: Dict[str, ClubSubmissionRecord] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def find_by_name(self, club_name: str) -> Optional[ClubSubmissionRecord]:
        return self.by_name.get(club_name)

    def insert(self, record: ClubSubmissionRecord) -> ClubSubmissionRecord:
        with self._lock:
            if record.club_name in self.by_name:
                raise DuplicateSubmissionError(record.club_name)
            stored = replace(
                record, submission_id=next(self._ids), created_at=time.time()
            )
            self.records.append(stored)
            self.by_name[stored.club_name] = stored
            return stored

    def list_all(self) -> list[ClubSubmissionRecord]:
        with self._lock:
            return list(reversed(self.records))

    def count(self) -> int:
        return len(self.records)

    def reset(self) -> None:
        """Clear all stored data (useful in tests)."""
        with self._lock:
            self.records.clear()
            self.by_name.clear()
            self._ids = itertools.count(1)


class SqlClubStore:
    """
    SQLAlchemy-backed implementation. Accepts any SQLAlchemy URL (e.g., Postgres or SQLite for tests).
    """

    def __init__(self, database_url: str):
        if not database_url:
            raise ValueError("DATABASE_URL is required for SqlClubStore")
        self.engine = create_engine(
            database_url,
            future=True,
            pool_pre_ping=True,
            pool_recycle=1800,
        )
        self.Session = sessionmaker(
            bind=self.engine, class_=Session, expire_on_commit=False, future=True
        )
        Base.metadata.create_all(self.engine)

    def _to_record(self, row: "ClubSubmissionRow") -> ClubSubmissionRecord:
        return ClubSubmissionRecord(
            submission_id=row.id,
            club_name=row.club_name,
            description=row.description,
            submitter_name=row.submitter_name,
            submitter_email=row.submitter_email,
            submitter_school_email=row.submitter_school_email,
            approved=row.approved,
            featured=row.featured,
            created_at=row.created_at,
        )

    def find_by_name(self, club_name: str) -> Optional[ClubSubmissionRecord]:
        try:
            with self.Session() as session:
                stmt = (
                    select(ClubSubmissionRow)
                    .where(ClubSubmissionRow.club_name == club_name)
                    .limit(1)
                )
                row = session.execute(stmt).scalar_one_or_none()
                if not row:
                    return None
                return self._to_record(row)
        except OperationalError as exc:
            raise StoreUnavailableError(str(exc)) from exc

    def insert(self, record: ClubSubmissionRecord) -> ClubSubmissionRecord:
        try:
            with self.Session() as session:
                row = ClubSubmissionRow(
                    club_name=record.club_name,
                    description=record.description,
                    submitter_name=record.submitter_name,
                    submitter_email=record.submitter_email,
                    submitter_school_email=record.submitter_school_email,
                    approved=record.approved,
                    featured=record.featured,
                    created_at=time.time(),
                )
                session.add(row)
                try:
                    session.commit()
                except IntegrityError as exc:
                    session.rollback()
                    raise DuplicateSubmissionError(record.club_name) from exc
                session.refresh(row)
                return self._to_record(row)
        except OperationalError as exc:
            raise StoreUnavailableError(str(exc)) from exc

    def list_all(self) -> list[ClubSubmissionRecord]:
        try:
            with self.Session() as session:
                # Insertion order comes from the id sequence; created_at is display only.
                stmt = select(ClubSubmissionRow).order_by(ClubSubmissionRow.id.desc())
                return [self._to_record(row) for row in session.execute(stmt).scalars()]
        except OperationalError as exc:
            raise StoreUnavailableError(str(exc)) from exc

    def count(self) -> int:
        try:
            with self.Session() as session:
                stmt = select(func.count()).select_from(ClubSubmissionRow)
                return session.execute(stmt).scalar_one()
        except OperationalError as exc:
            raise StoreUnavailableError(str(exc)) from exc


Base = declarative_base()


class ClubSubmissionRow(Base):
    __tablename__ = "club_submissions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    club_name = Column(String, nullable=False, unique=True, index=True)
    description = Column(String, nullable=False, default="")
    submitter_name = Column(String, nullable=False)
    submitter_email = Column(String, nullable=False)
    submitter_school_email = Column(String, nullable=False)
    # Reserved for moderation; nothing filters on it yet.
    approved = Column(Boolean, nullable=False, default=True, index=True)
    featured = Column(Boolean, nullable=False, default=False)
    created_at = Column(Float, nullable=False)
