"""
Course, enrollment and tutoring entity models.

Enrollments and hire requests are the records a split payment settles:
they are created ``pending`` together with the payment and follow the
payment outcome.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlmodel import Field

from ..base import Base, utc_now


class Course(Base, table=True):
    """A course published by an educator.

    Table: courses
    """

    __tablename__ = "courses"

    # Primary identifiers
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)

    # Catalogue data
    title: str = Field(max_length=255)
    description: Optional[str] = Field(default=None)
    price: Decimal = Field(default=Decimal("0"), max_digits=12, decimal_places=2)

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    @property
    def is_free(self) -> bool:
        return self.price <= 0

    def __repr__(self) -> str:
        return f"Course(id={self.id}, title={self.title}, price={self.price})"


class Enrollment(Base, table=True):
    """A learner's enrollment in a course.

    Table: enrollments
    """

    __tablename__ = "enrollments"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    course_id: int = Field(foreign_key="courses.id", index=True)
    status: str = Field(default="pending", max_length=16, index=True)
    transaction_reference: Optional[str] = Field(default=None, max_length=64, index=True)

    # Timestamps
    enrolled_at: Optional[datetime] = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def __repr__(self) -> str:
        return f"Enrollment(id={self.id}, user={self.user_id}, course={self.course_id}, status={self.status})"


class HireRequest(Base, table=True):
    """A learner hiring an educator for paid tutoring hours.

    Table: hire_requests
    """

    __tablename__ = "hire_requests"

    id: Optional[int] = Field(default=None, primary_key=True)
    client_id: int = Field(foreign_key="users.id", index=True)
    tutor_id: int = Field(foreign_key="users.id", index=True)
    hours: int = Field(default=1)
    amount: Decimal = Field(max_digits=12, decimal_places=2)
    message: Optional[str] = Field(default=None)
    status: str = Field(default="pending", max_length=16, index=True)
    transaction_reference: Optional[str] = Field(default=None, max_length=64, index=True)

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def __repr__(self) -> str:
        return f"HireRequest(id={self.id}, client={self.client_id}, tutor={self.tutor_id}, status={self.status})"
