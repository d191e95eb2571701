"""Course catalogue."""

from .service import CourseService

__all__ = ["CourseService"]
