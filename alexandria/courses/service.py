"""Course catalogue service."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional

from alexandria.core.database.entities.courses import Course, Enrollment
from alexandria.core.database.entities.users import User
from alexandria.core.database.repositories.bundle import SqlRepoBundle
from alexandria.core.errors import BusinessRuleError, NotFoundError, PermissionDeniedError
from alexandria.core.logging_config import get_logger
from alexandria.core.models.domain import EnrollmentStatus
from alexandria.ledger.splits import quantize
from alexandria.points.service import AlexPointsService

logger = get_logger(__name__)


class CourseService:
    """Create and read courses, list a learner's enrollments."""

    def __init__(self, repos: SqlRepoBundle, points: Optional[AlexPointsService] = None) -> None:
        self.repos = repos
        self.points = points or AlexPointsService(repos)

    async def create_course(
        self, educator: User, title: str, description: Optional[str] = None, price: Any = 0
    ) -> Course:
        if not educator.is_educator:
            raise PermissionDeniedError("Only educators can create courses")
        amount = quantize(price)
        if amount < Decimal("0"):
            raise BusinessRuleError("Price cannot be negative")
        try:
            course = await self.repos.courses.create(
                Course(user_id=educator.id, title=title, description=description, price=amount)
            )
            await self.points.award(educator, "create_course", "course", course.id)
            await self.repos.session.commit()
        except Exception:
            await self.repos.session.rollback()
            raise
        logger.info(f"Educator {educator.id} created course {course.id}")
        return course

    async def get_course(self, course_id: int) -> Course:
        course = await self.repos.courses.get_by_id(course_id)
        if course is None:
            raise NotFoundError("Course not found")
        return course

    async def my_enrollments(self, learner: User) -> list[Enrollment]:
        return await self.repos.enrollments.list_for_user(
            learner.id, [EnrollmentStatus.active.value, EnrollmentStatus.completed.value]
        )
