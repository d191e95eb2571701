"""User accounts: registration, token lookup and profiles."""

from __future__ import annotations

from typing import Any, Optional

from sqlalchemy.exc import IntegrityError

from alexandria.core.database.base import utc_now
from alexandria.core.database.entities.users import User
from alexandria.core.database.repositories.bundle import SqlRepoBundle
from alexandria.core.errors import BusinessRuleError, ConflictError, NotFoundError
from alexandria.core.logging_config import get_logger
from alexandria.core.models.domain import UserRole
from alexandria.points.service import AlexPointsService

from .tokens import generate_token, hash_token

logger = get_logger(__name__)

SELF_SERVICE_ROLES = (UserRole.learner.value, UserRole.educator.value)


class UserService:
    """Account lifecycle and public profiles."""

    def __init__(self, repos: SqlRepoBundle, points: Optional[AlexPointsService] = None) -> None:
        self.repos = repos
        self.points = points or AlexPointsService(repos)

    async def register(
        self,
        username: str,
        email: str,
        role: str = UserRole.learner.value,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        bio: Optional[str] = None,
    ) -> tuple[User, str]:
        """Create an account and issue its bearer token.

        The plain token is returned once and never stored.

        Raises:
            BusinessRuleError: Role cannot be chosen at sign-up
            ConflictError: Username or email already taken
        """
        if role not in SELF_SERVICE_ROLES:
            raise BusinessRuleError(f"Role '{role}' cannot be chosen at registration")
        if await self.repos.users.exists_with(username, email):
            raise ConflictError("Username or email is already taken")

        token = generate_token()
        try:
            user = await self.repos.users.create(
                User(
                    username=username,
                    email=email,
                    role=role,
                    first_name=first_name,
                    last_name=last_name,
                    bio=bio,
                    api_token_hash=hash_token(token),
                    last_login_at=utc_now(),
                )
            )
            await self.points.award(user, "user_registered", "user", user.id)
            await self.repos.session.commit()
        except IntegrityError as e:
            await self.repos.session.rollback()
            raise ConflictError("Username or email is already taken") from e
        except Exception:
            await self.repos.session.rollback()
            raise

        logger.info(f"Registered user {user.id} ({user.username}) as {role}")
        return user, token

    async def authenticate(self, token: str) -> Optional[User]:
        if not token:
            return None
        return await self.repos.users.get_by_token_hash(hash_token(token))

    async def profile(self, identifier: str) -> dict[str, Any]:
        """Public profile by username (or numeric id)."""
        user = await self.repos.users.get_by_identifier(identifier)
        if user is None:
            raise NotFoundError("User not found")
        return {
            "user": user,
            "followers_count": await self.repos.follows.count_owners(user.id),
            "following_count": await self.repos.follows.count_targets(user.id),
        }

    async def set_verified(self, user_id: int, verified: bool = True) -> User:
        user = await self.repos.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        user.is_verified = verified
        try:
            user = await self.repos.users.update(user)
            await self.repos.session.commit()
        except Exception:
            await self.repos.session.rollback()
            raise
        logger.info(f"User {user.id} verification set to {verified}")
        return user
