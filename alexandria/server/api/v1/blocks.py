"""
Block and Mute Endpoints.

Blocking or muting twice is a conflict; unblocking or unmuting a user who is
not blocked or muted succeeds.
"""

from fastapi import APIRouter, status

from alexandria.core.models.io import RelationCreate, RelationResult, UserList, UserPublic
from alexandria.server.services.deps import CurrentUserDep, SocialDep

router = APIRouter(tags=["social"])

_ADD_RESPONSES = {
    400: {"description": "Cannot target yourself"},
    404: {"description": "User not found"},
    409: {"description": "Relation already exists"},
}


def _user_list(users) -> UserList:
    return UserList(users=[UserPublic.model_validate(u, from_attributes=True) for u in users], count=len(users))


@router.post(
    "/blocks",
    response_model=RelationResult,
    status_code=status.HTTP_201_CREATED,
    summary="Block User",
    responses=_ADD_RESPONSES,
)
async def block(payload: RelationCreate, actor: CurrentUserDep, social: SocialDep) -> RelationResult:
    return RelationResult(**await social.block(actor, payload.user_id))


@router.delete("/blocks/{user_id}", response_model=RelationResult, summary="Unblock User")
async def unblock(user_id: int, actor: CurrentUserDep, social: SocialDep) -> RelationResult:
    return RelationResult(**await social.unblock(actor, user_id))


@router.get("/blocks", response_model=UserList, summary="Blocked Users")
async def blocked_users(actor: CurrentUserDep, social: SocialDep) -> UserList:
    return _user_list(await social.blocked_users(actor))


@router.post(
    "/mutes",
    response_model=RelationResult,
    status_code=status.HTTP_201_CREATED,
    summary="Mute User",
    responses=_ADD_RESPONSES,
)
async def mute(payload: RelationCreate, actor: CurrentUserDep, social: SocialDep) -> RelationResult:
    return RelationResult(**await social.mute(actor, payload.user_id))


@router.delete("/mutes/{user_id}", response_model=RelationResult, summary="Unmute User")
async def unmute(user_id: int, actor: CurrentUserDep, social: SocialDep) -> RelationResult:
    return RelationResult(**await social.unmute(actor, user_id))


@router.get("/mutes", response_model=UserList, summary="Muted Users")
async def muted_users(actor: CurrentUserDep, social: SocialDep) -> UserList:
    return _user_list(await social.muted_users(actor))
