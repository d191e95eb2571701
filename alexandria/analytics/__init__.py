"""Admin analytics."""

from .service import AnalyticsService

__all__ = ["AnalyticsService"]
