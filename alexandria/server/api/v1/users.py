"""
User Endpoints.

Registration, the authenticated user's account, public profiles and the
follower/following lists of a user.
"""

from fastapi import APIRouter, status

from alexandria.core.logging_config import get_logger
from alexandria.core.models.io import UserCreate, UserList, UserProfile, UserPublic, UserRead, UserRegistered
from alexandria.server.services.deps import CurrentUserDep, SocialDep, UserServiceDep

logger = get_logger(__name__)

router = APIRouter(tags=["users"])


@router.post(
    "",
    response_model=UserRegistered,
    status_code=status.HTTP_201_CREATED,
    summary="Register",
    description="Create an account and receive its bearer token. The token is only shown in this response.",
    responses={
        201: {"description": "Account created"},
        409: {"description": "Username or email already taken"},
        422: {"description": "Invalid registration data"},
    },
)
async def register(payload: UserCreate, users: UserServiceDep) -> UserRegistered:
    """
    Register a new account.

    New accounts receive the `user_registered` AlexPoints award.

    - **username**: Unique handle (letters, digits, `_`, `.`, `-`).
    - **email**: Unique email address.
    - **role**: `learner` (default) or `educator`.
    """
    user, token = await users.register(
        username=payload.username,
        email=payload.email,
        role=payload.role,
        first_name=payload.first_name,
        last_name=payload.last_name,
        bio=payload.bio,
    )
    return UserRegistered(
        message="Registration successful",
        user=UserRead.model_validate(user, from_attributes=True),
        token=token,
    )


@router.get(
    "/me",
    response_model=UserRead,
    summary="Current User",
    description="The authenticated user's account.",
    responses={401: {"description": "Missing or invalid bearer token"}},
)
async def me(user: CurrentUserDep) -> UserRead:
    return UserRead.model_validate(user, from_attributes=True)


@router.get(
    "/{username}",
    response_model=UserProfile,
    summary="Public Profile",
    description="Public profile of a user with follower and following counts.",
    responses={404: {"description": "User not found"}},
)
async def profile(username: str, users: UserServiceDep) -> UserProfile:
    return UserProfile.model_validate(await users.profile(username), from_attributes=True)


@router.get(
    "/{username}/followers",
    response_model=UserList,
    summary="Followers",
    description="Users following the given user, most recent first.",
    responses={404: {"description": "User not found"}},
)
async def followers(username: str, social: SocialDep) -> UserList:
    users = await social.followers(username)
    return UserList(users=[UserPublic.model_validate(u, from_attributes=True) for u in users], count=len(users))


@router.get(
    "/{username}/following",
    response_model=UserList,
    summary="Following",
    description="Users the given user follows, most recent first.",
    responses={404: {"description": "User not found"}},
)
async def following(username: str, social: SocialDep) -> UserList:
    users = await social.following(username)
    return UserList(users=[UserPublic.model_validate(u, from_attributes=True) for u in users], count=len(users))
