"""
Follow Endpoints.

Following awards AlexPoints to both the follower and the followed user.
"""

from fastapi import APIRouter

from alexandria.core.models.io import FollowResult, FollowStatus
from alexandria.server.services.deps import CurrentUserDep, SocialDep

router = APIRouter(tags=["social"])


@router.post(
    "/{username}",
    response_model=FollowResult,
    summary="Follow User",
    description="Follow a user by username.",
    responses={
        400: {"description": "Cannot follow yourself"},
        404: {"description": "User not found"},
        409: {"description": "Already following"},
    },
)
async def follow(username: str, actor: CurrentUserDep, social: SocialDep) -> FollowResult:
    return FollowResult(**await social.follow(actor, username))


@router.delete(
    "/{username}",
    response_model=FollowResult,
    summary="Unfollow User",
    description="Stop following a user.",
    responses={404: {"description": "User not found or not followed"}},
)
async def unfollow(username: str, actor: CurrentUserDep, social: SocialDep) -> FollowResult:
    return FollowResult(**await social.unfollow(actor, username))


@router.get(
    "/{username}",
    response_model=FollowStatus,
    summary="Follow Status",
    description="Whether the caller follows the user and whether the user follows back.",
    responses={404: {"description": "User not found"}},
)
async def follow_status(username: str, actor: CurrentUserDep, social: SocialDep) -> FollowStatus:
    return FollowStatus(**await social.follow_status(actor, username))


@router.get(
    "/{username}/status",
    response_model=FollowStatus,
    summary="Follow Status",
    description="Alias of `GET /follow/{username}`.",
    responses={404: {"description": "User not found"}},
)
async def follow_status_alias(username: str, actor: CurrentUserDep, social: SocialDep) -> FollowStatus:
    return FollowStatus(**await social.follow_status(actor, username))
