"""
Pydantic schemas for the club submission API.

Field names follow the camelCase contract the browser client already uses.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class ClubInput(BaseModel):
    clubName: str
    description: Optional[str] = None


class SubmitClubRequest(BaseModel):
    clubName: str
    description: Optional[str] = None
    submitterName: str
    submitterEmail: str
    submitterSchoolEmail: str


class SubmitClubResponse(BaseModel):
    success: bool


class SubmitClubsRequest(BaseModel):
    clubs: list[ClubInput]
    submitterName: str
    submitterEmail: str
    submitterSchoolEmail: str


class SubmitClubsResponse(BaseModel):
    success: bool
    submitted: list[str]
    errors: list[str]
    totalSubmitted: int


class ClubSubmission(BaseModel):
    id: int
    creationTime: float
    clubName: str
    description: str
    submitterName: str
    submitterEmail: str
    submitterSchoolEmail: str
    approved: bool
    featured: bool


class HealthResponse(BaseModel):
    status: str
    app: str
    version: str
