"""Request models for the hearing API."""

import datetime as dt
from typing import Optional

from pydantic import BaseModel, Field


class ScheduleHearingRequest(BaseModel):
    """Request model for booking a hearing"""
    case_id: str = Field(..., min_length=1)
    court_id: str = Field(..., min_length=1)
    date: dt.date
    time: dt.time
    notes: Optional[str] = None
    judge_id: Optional[str] = None


class UpdateHearingRequest(BaseModel):
    """Request model for editing a hearing; omitted fields keep their value"""
    court_id: Optional[str] = Field(None, min_length=1)
    date: Optional[dt.date] = None
    time: Optional[dt.time] = None
    notes: Optional[str] = None


class AssignJudgeRequest(BaseModel):
    judge_id: str = Field(..., min_length=1)


class ChangeStatusRequest(BaseModel):
    status: str
