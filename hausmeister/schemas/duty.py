# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Request / Response schemas — API contract definitions.
These are Pydantic models used ONLY at the controller (HTTP) boundary.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


# ── Duty Schemas ──

class DutyStatusResponse(BaseModel):
    current_holder: Optional[str] = None
    self_name: Optional[str] = None
    is_self_current: bool
    weeks_until_self: int
    sentence: str
    refreshed_at: datetime
    refresh_failed: bool = False


class CurrentHolderResponse(BaseModel):
    current_holder: Optional[str] = None
    refreshed_at: datetime


class OccurrenceResponse(BaseModel):
    attendee: str
    start_date: datetime
    end_date: datetime


class RefreshResponse(BaseModel):
    status: str
    raw_count: int
    occurrences: int
    skipped: int
    refreshed_at: datetime


# ── Profile Schemas ──

class ProfileUpdateRequest(BaseModel):
    """Partial update model for PUT /api/v1/profile."""
    name: Optional[str] = Field(default=None, max_length=255)
    username: Optional[str] = Field(default=None, max_length=255)
    password: Optional[str] = Field(default=None, max_length=1024)


class ProfileResponse(BaseModel):
    name: Optional[str] = None
    username: Optional[str] = None
    has_password: bool
    greeting: str


# ── Task Schemas ──

class TaskUpdateRequest(BaseModel):
    done: bool


class TaskResponse(BaseModel):
    name: str
    kind: str
    done: bool


class TaskListResponse(BaseModel):
    daily: list[TaskResponse]
    weekly: list[TaskResponse]
