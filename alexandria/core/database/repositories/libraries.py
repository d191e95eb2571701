"""
Library repository implementations.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from sqlalchemy import func, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.libraries import Library, LibraryContent
from .base import QueryBuilder, SqlRepository


class LibraryRepository(SqlRepository[Library]):
    """Repository for libraries."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Library)

    def _search_stmt(self, stmt, status: Optional[str], search: Optional[str]):
        stmt = QueryBuilder.apply_filters(stmt, Library, {"approval_status": status})
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(or_(Library.name.ilike(pattern), Library.description.ilike(pattern)))  # type: ignore[union-attr]
        return stmt

    async def search(
        self,
        status: Optional[str] = None,
        search: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[Library]:
        """List libraries filtered by approval status and a name/description search.

        Args:
            status: Approval status to match
            search: Case-insensitive substring of name or description
            limit: Maximum records to return
            offset: Records to skip

        Returns:
            Libraries, newest first
        """
        stmt = select(Library).order_by(Library.created_at.desc(), Library.id.desc())  # type: ignore[attr-defined]
        stmt = self._search_stmt(stmt, status, search)
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_search(self, status: Optional[str] = None, search: Optional[str] = None) -> int:
        stmt = self._search_stmt(select(func.count()).select_from(Library), status, search)
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def count_by_status(self) -> Dict[str, int]:
        stmt = select(Library.approval_status, func.count()).group_by(Library.approval_status)
        result = await self.session.execute(stmt)
        return {status: int(count) for status, count in result.all()}


class LibraryContentRepository(SqlRepository[LibraryContent]):
    """Repository for library content items."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, LibraryContent)

    async def list_for_library(self, library_id: int) -> List[LibraryContent]:
        stmt = (
            select(LibraryContent)
            .where(LibraryContent.library_id == library_id)
            .order_by(LibraryContent.relevance_score.desc(), LibraryContent.id.asc())  # type: ignore[attr-defined]
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_for_library(self, library_id: int) -> int:
        return await self.count({"library_id": library_id})
