"""
Library I/O models.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .common import Pagination


class LibraryCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    course_id: Optional[int] = Field(default=None, ge=1)
    type: str = Field(default="curated", max_length=32)


class LibraryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    creator_id: int
    course_id: Optional[int] = None
    name: str
    description: Optional[str] = None
    type: str
    is_approved: bool
    approval_status: str
    approval_date: Optional[datetime] = None
    approved_by: Optional[int] = None
    rejection_reason: Optional[str] = None
    created_at: datetime


class ContentCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    url: str = Field(min_length=1, max_length=2048)
    summary: Optional[str] = None
    relevance_score: float = Field(default=0.0, ge=0.0, le=1.0)


class ContentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    library_id: int
    title: str
    url: str
    summary: Optional[str] = None
    relevance_score: float
    created_at: datetime


class Approver(BaseModel):
    id: int
    username: str


class ApprovalInfo(BaseModel):
    can_approve: bool
    can_reject: bool
    approver: Optional[Approver] = None


class LibraryView(BaseModel):
    library: LibraryRead
    contents: List[ContentRead]
    approval_info: ApprovalInfo


class LibraryPage(BaseModel):
    libraries: List[LibraryRead]
    pagination: Pagination


class LibraryReject(BaseModel):
    reason: Optional[str] = Field(default=None, max_length=500)
