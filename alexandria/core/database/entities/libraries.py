"""
Library entity models.

Libraries are curated collections of learning resources that admins review
before they become publicly listed.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field

from ..base import Base, utc_now


class Library(Base, table=True):
    """A curated collection of content items awaiting or past review.

    Table: open_libraries
    """

    __tablename__ = "open_libraries"

    # Primary identifiers
    id: Optional[int] = Field(default=None, primary_key=True)
    creator_id: int = Field(foreign_key="users.id", index=True)
    course_id: Optional[int] = Field(default=None, foreign_key="courses.id")

    # Descriptive data
    name: str = Field(max_length=255)
    description: Optional[str] = Field(default=None)
    type: str = Field(default="curated", max_length=32)

    # Curation
    is_approved: bool = Field(default=False)
    approval_status: str = Field(default="pending", max_length=16, index=True)
    approval_date: Optional[datetime] = Field(default=None)
    approved_by: Optional[int] = Field(default=None, foreign_key="users.id")
    rejection_reason: Optional[str] = Field(default=None, max_length=500)

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def __repr__(self) -> str:
        return f"Library(id={self.id}, name={self.name}, status={self.approval_status})"


class LibraryContent(Base, table=True):
    """A resource listed in a library.

    Table: library_contents
    """

    __tablename__ = "library_contents"

    id: Optional[int] = Field(default=None, primary_key=True)
    library_id: int = Field(foreign_key="open_libraries.id", index=True)
    title: str = Field(max_length=255)
    url: str = Field(max_length=2048)
    summary: Optional[str] = Field(default=None)
    relevance_score: float = Field(default=0.0, ge=0.0, le=1.0)
    created_at: datetime = Field(default_factory=utc_now)

    def __repr__(self) -> str:
        return f"LibraryContent(library={self.library_id}, title={self.title})"
