"""
Shared I/O models.

Money is returned as JSON numbers; services work with ``Decimal`` and the
``float`` fields below convert on serialization.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str = Field(description="Human-readable outcome")


class ErrorResponse(BaseModel):
    """Body of every error response."""

    message: str = Field(description="What went wrong")
    error: Optional[Any] = Field(default=None, description="Structured details, when available")


class Pagination(BaseModel):
    total: int
    per_page: int
    current_page: int
    last_page: int
