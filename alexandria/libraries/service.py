"""
Library curation service.

Libraries start ``pending`` and need at least ``MIN_CONTENT_FOR_APPROVAL``
content items before an admin may approve them.
"""

from __future__ import annotations

import math
from typing import Any, Optional

from alexandria.core.database.base import utc_now
from alexandria.core.database.entities.libraries import Library, LibraryContent
from alexandria.core.database.entities.users import User
from alexandria.core.database.repositories.bundle import SqlRepoBundle
from alexandria.core.errors import BusinessRuleError, NotFoundError, PermissionDeniedError
from alexandria.core.logging_config import get_logger
from alexandria.core.models.domain import ApprovalStatus
from alexandria.points.service import AlexPointsService

logger = get_logger(__name__)

MIN_CONTENT_FOR_APPROVAL = 5


class LibraryService:
    """Library creation, content curation and admin review."""

    def __init__(self, repos: SqlRepoBundle, points: Optional[AlexPointsService] = None) -> None:
        self.repos = repos
        self.points = points or AlexPointsService(repos)

    async def _get(self, library_id: int) -> Library:
        library = await self.repos.libraries.get_by_id(library_id)
        if library is None:
            raise NotFoundError("Library not found")
        return library

    async def _commit(self) -> None:
        try:
            await self.repos.session.commit()
        except Exception:
            await self.repos.session.rollback()
            raise

    async def create_library(
        self,
        creator: User,
        name: str,
        description: Optional[str] = None,
        course_id: Optional[int] = None,
        library_type: str = "curated",
    ) -> Library:
        if course_id is not None and await self.repos.courses.get_by_id(course_id) is None:
            raise NotFoundError("Course not found")
        library = await self.repos.libraries.create(
            Library(
                creator_id=creator.id,
                course_id=course_id,
                name=name,
                description=description,
                type=library_type,
                approval_status=ApprovalStatus.pending.value,
            )
        )
        await self.points.award(creator, "create_library", "library", library.id)
        await self._commit()
        logger.info(f"User {creator.id} created library {library.id}")
        return library

    async def add_content(
        self,
        actor: User,
        library_id: int,
        title: str,
        url: str,
        summary: Optional[str] = None,
        relevance_score: float = 0.0,
    ) -> LibraryContent:
        """Add a content item; only the creator or an admin may do so."""
        library = await self._get(library_id)
        if library.creator_id != actor.id and not actor.is_admin:
            raise PermissionDeniedError("You can only add content to your own libraries")
        content = await self.repos.library_contents.create(
            LibraryContent(
                library_id=library.id,
                title=title,
                url=url,
                summary=summary,
                relevance_score=relevance_score,
            )
        )
        await self.points.award(actor, "add_url", "library_content", content.id)
        await self._commit()
        return content

    async def view(self, library_id: int, viewer: Optional[User] = None) -> dict[str, Any]:
        """A library with its contents and what an admin could do with it.

        Unapproved libraries are only visible to their creator and admins.
        """
        library = await self._get(library_id)
        if library.approval_status != ApprovalStatus.approved.value:
            if viewer is None or (viewer.id != library.creator_id and not viewer.is_admin):
                raise NotFoundError("Library not found")

        contents = await self.repos.library_contents.list_for_library(library.id)
        approver = None
        if library.approved_by is not None:
            admin = await self.repos.users.get_by_id(library.approved_by)
            if admin is not None:
                approver = {"id": admin.id, "username": admin.username}
        return {
            "library": library,
            "contents": contents,
            "approval_info": {
                "can_approve": library.approval_status != ApprovalStatus.approved.value
                and len(contents) >= MIN_CONTENT_FOR_APPROVAL,
                "can_reject": library.approval_status != ApprovalStatus.rejected.value,
                "approver": approver,
            },
        }

    async def list_contents(self, library_id: int, viewer: Optional[User] = None) -> list[LibraryContent]:
        view = await self.view(library_id, viewer)
        return view["contents"]

    async def admin_list(
        self,
        status: Optional[str] = None,
        search: Optional[str] = None,
        page: int = 1,
        per_page: int = 10,
    ) -> dict[str, Any]:
        page = max(page, 1)
        total = await self.repos.libraries.count_search(status=status, search=search)
        items = await self.repos.libraries.search(
            status=status, search=search, limit=per_page, offset=(page - 1) * per_page
        )
        return {
            "libraries": items,
            "pagination": {
                "total": total,
                "per_page": per_page,
                "current_page": page,
                "last_page": max(1, math.ceil(total / per_page)),
            },
        }

    async def approve(self, admin: User, library_id: int) -> Library:
        """Approve a library.

        Raises:
            NotFoundError: Unknown library
            BusinessRuleError: Already approved, or too few content items
        """
        library = await self._get(library_id)
        if library.approval_status == ApprovalStatus.approved.value:
            raise BusinessRuleError("Library is already approved")
        count = await self.repos.library_contents.count_for_library(library.id)
        if count < MIN_CONTENT_FOR_APPROVAL:
            raise BusinessRuleError(
                f"Library must have at least {MIN_CONTENT_FOR_APPROVAL} content items to be approved",
                error={"content_count": count},
            )

        library.is_approved = True
        library.approval_status = ApprovalStatus.approved.value
        library.approval_date = utc_now()
        library.approved_by = admin.id
        library.rejection_reason = None
        library = await self.repos.libraries.update(library)
        await self._commit()
        logger.info(f"Admin {admin.id} approved library {library.id}")
        return library

    async def reject(self, admin: User, library_id: int, reason: Optional[str] = None) -> Library:
        library = await self._get(library_id)
        if library.approval_status == ApprovalStatus.rejected.value:
            raise BusinessRuleError("Library is already rejected")

        library.is_approved = False
        library.approval_status = ApprovalStatus.rejected.value
        library.rejection_reason = reason
        library = await self.repos.libraries.update(library)
        await self._commit()
        logger.info(f"Admin {admin.id} rejected library {library.id}")
        return library
