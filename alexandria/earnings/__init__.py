"""Educator earnings and payout details."""

from .service import EducatorEarningsService

__all__ = ["EducatorEarningsService"]
