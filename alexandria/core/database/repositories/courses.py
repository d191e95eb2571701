"""
Course, enrollment and hire request repository implementations.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.courses import Course, Enrollment, HireRequest
from .base import SqlRepository


class CourseRepository(SqlRepository[Course]):
    """Repository for courses."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Course)


class EnrollmentRepository(SqlRepository[Enrollment]):
    """Repository for course enrollments."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Enrollment)

    async def find(self, user_id: int, course_id: int, statuses: Sequence[str]) -> Optional[Enrollment]:
        """Find an enrollment of a user in a course with one of the given statuses.

        Args:
            user_id: Learner id
            course_id: Course id
            statuses: Accepted enrollment statuses

        Returns:
            Matching enrollment or None
        """
        stmt = select(Enrollment).where(
            Enrollment.user_id == user_id,
            Enrollment.course_id == course_id,
            Enrollment.status.in_(list(statuses)),  # type: ignore[attr-defined]
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def list_for_user(self, user_id: int, statuses: Sequence[str]) -> List[Enrollment]:
        stmt = (
            select(Enrollment)
            .where(Enrollment.user_id == user_id, Enrollment.status.in_(list(statuses)))  # type: ignore[attr-defined]
            .order_by(Enrollment.created_at.desc())  # type: ignore[attr-defined]
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())


class HireRequestRepository(SqlRepository[HireRequest]):
    """Repository for tutoring hire requests."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, HireRequest)
