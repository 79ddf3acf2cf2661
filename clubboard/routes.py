"""
HTTP routes for the club submission API.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from clubboard import __version__
from clubboard.config import get_settings
from clubboard.db import ClubStore
from clubboard.dependencies import get_club_store
from clubboard.errors import DuplicateSubmissionError
from clubboard.schemas import (
    ClubSubmission,
    HealthResponse,
    SubmitClubRequest,
    SubmitClubResponse,
    SubmitClubsRequest,
    SubmitClubsResponse,
)
from clubboard.service import (
    ClubEntry,
    Submitter,
    count_clubs,
    list_clubs,
    submit_club,
    submit_clubs,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/submit_club", response_model=SubmitClubResponse)
def submit_single_club(
    payload: SubmitClubRequest, store: ClubStore = Depends(get_club_store)
):
    submitter = Submitter(
        name=payload.submitterName,
        email=payload.submitterEmail,
        school_email=payload.submitterSchoolEmail,
    )
    entry = ClubEntry(club_name=payload.clubName, description=payload.description)
    try:
        submit_club(store, entry, submitter)
    except DuplicateSubmissionError as exc:
        logger.info("Rejected duplicate club %r", payload.clubName)
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return SubmitClubResponse(success=True)


@router.post("/submit_multiple_clubs", response_model=SubmitClubsResponse)
def submit_multiple_clubs(
    payload: SubmitClubsRequest, store: ClubStore = Depends(get_club_store)
):
    """
    Submit every club in the payload; per-item rejections come back in
    `errors` rather than failing the request.
    """
    submitter = Submitter(
        name=payload.submitterName,
        email=payload.submitterEmail,
        school_email=payload.submitterSchoolEmail,
    )
    entries = [
        ClubEntry(club_name=club.clubName, description=club.description)
        for club in payload.clubs
    ]
    result = submit_clubs(store, entries, submitter)
    return SubmitClubsResponse(**result.as_dict())


@router.get("/get_all_clubs", response_model=list[ClubSubmission])
def get_all_clubs(store: ClubStore = Depends(get_club_store)):
    return [ClubSubmission(**record.as_dict()) for record in list_clubs(store)]


@router.get("/get_clubs_count", response_model=int)
def get_clubs_count(store: ClubStore = Depends(get_club_store)):
    return count_clubs(store)


@router.get("/health", response_model=HealthResponse)
def health_check():
    settings = get_settings()
    return HealthResponse(status="healthy", app=settings.app_name, version=__version__)
