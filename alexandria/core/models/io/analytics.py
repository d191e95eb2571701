"""
Admin analytics I/O models.
"""

from __future__ import annotations

from typing import Dict

from pydantic import BaseModel, Field


class AnalyticsOverview(BaseModel):
    total_users: int
    new_users_today: int
    new_users_week: int
    active_users_week: int
    total_libraries: int
    libraries_by_status: Dict[str, int]
    total_courses: int
    total_enrollments: int


class RevenueReport(BaseModel):
    gross_volume: float = Field(description="Payments kept after refunds")
    platform_fees: float
    educator_payouts: float
    refunded_volume: float = Field(description="Total of processed refunds")
    payments_by_status: Dict[str, int]
