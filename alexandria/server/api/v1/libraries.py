"""
Library Endpoints.

Users create libraries and add content to them; libraries stay private to
their creator and admins until approved.
"""

from typing import List

from fastapi import APIRouter, status

from alexandria.core.models.io import ContentCreate, ContentRead, LibraryCreate, LibraryRead, LibraryView
from alexandria.server.services.deps import CurrentUserDep, LibraryDep, OptionalUserDep

router = APIRouter(tags=["libraries"])


@router.post(
    "",
    response_model=LibraryRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Library",
    description="Create a library; it starts pending review.",
    responses={404: {"description": "Linked course not found"}},
)
async def create_library(payload: LibraryCreate, user: CurrentUserDep, libraries: LibraryDep) -> LibraryRead:
    library = await libraries.create_library(
        user, payload.name, payload.description, payload.course_id, payload.type
    )
    return LibraryRead.model_validate(library, from_attributes=True)


@router.get(
    "/{library_id}",
    response_model=LibraryView,
    summary="View Library",
    description="A library with its contents and approval information.",
    responses={404: {"description": "Library not found or not visible"}},
)
async def view_library(library_id: int, viewer: OptionalUserDep, libraries: LibraryDep) -> LibraryView:
    return LibraryView.model_validate(await libraries.view(library_id, viewer), from_attributes=True)


@router.post(
    "/{library_id}/contents",
    response_model=ContentRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add Content",
    responses={403: {"description": "Not the creator"}, 404: {"description": "Library not found"}},
)
async def add_content(
    library_id: int, payload: ContentCreate, user: CurrentUserDep, libraries: LibraryDep
) -> ContentRead:
    """
    Add a content item.

    - **title**: Title of the resource.
    - **url**: Where the resource lives.
    - **summary**: Optional summary.
    - **relevance_score**: 0.0 to 1.0; contents are listed by relevance.
    """
    content = await libraries.add_content(
        user, library_id, payload.title, payload.url, payload.summary, payload.relevance_score
    )
    return ContentRead.model_validate(content, from_attributes=True)


@router.get(
    "/{library_id}/contents",
    response_model=List[ContentRead],
    summary="List Contents",
    responses={404: {"description": "Library not found or not visible"}},
)
async def list_contents(library_id: int, viewer: OptionalUserDep, libraries: LibraryDep) -> List[ContentRead]:
    contents = await libraries.list_contents(library_id, viewer)
    return [ContentRead.model_validate(c, from_attributes=True) for c in contents]
