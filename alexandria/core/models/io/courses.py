"""
Course and enrollment I/O models.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CourseCreate(BaseModel):
    """Schema for creating a course."""

    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    price: float = Field(default=0, ge=0, description="Price in major currency units; 0 makes the course free")


class CourseRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int = Field(description="Educator who owns the course")
    title: str
    description: Optional[str] = None
    price: float
    created_at: datetime


class EnrollmentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    course_id: int
    status: str
    transaction_reference: Optional[str] = None
    enrolled_at: Optional[datetime] = None
    created_at: datetime
