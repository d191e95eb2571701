"""
Social graph service: follows, blocks and mutes.

Each relation is an existence check against its join table. Creating a
relation that exists is a conflict; removing a follow that does not exist is
an error while removing a block or mute that does not exist is not.
"""

from __future__ import annotations

from typing import Any, Optional

from sqlalchemy.exc import IntegrityError

from alexandria.core.database.entities.users import User
from alexandria.core.database.repositories.bundle import SqlRepoBundle
from alexandria.core.database.repositories.social import UserRelationRepository
from alexandria.core.errors import BusinessRuleError, ConflictError, NotFoundError
from alexandria.core.logging_config import get_logger
from alexandria.points.service import AlexPointsService

logger = get_logger(__name__)


class SocialService:
    """Follow, block and mute relations between users."""

    def __init__(self, repos: SqlRepoBundle, points: Optional[AlexPointsService] = None) -> None:
        self.repos = repos
        self.points = points or AlexPointsService(repos)

    async def _user_by_username(self, username: str) -> User:
        user = await self.repos.users.get_by_username(username)
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def _user_by_id(self, user_id: int) -> User:
        user = await self.repos.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def _commit(self, conflict_message: str) -> None:
        try:
            await self.repos.session.commit()
        except IntegrityError as e:
            await self.repos.session.rollback()
            raise ConflictError(conflict_message) from e
        except Exception:
            await self.repos.session.rollback()
            raise

    # =====================================================================
    # Follows
    # =====================================================================

    async def follow(self, actor: User, username: str) -> dict[str, Any]:
        """Follow ``username`` and award points to both sides.

        Raises:
            NotFoundError: Unknown user
            BusinessRuleError: Following yourself
            ConflictError: Already following
        """
        target = await self._user_by_username(username)
        if target.id == actor.id:
            raise BusinessRuleError("You cannot follow yourself")
        if await self.repos.follows.get_pair(actor.id, target.id) is not None:
            raise ConflictError("You are already following this user", error={"is_following": True})

        await self.repos.follows.add_pair(actor.id, target.id)
        await self.points.award(
            actor, "follow_user", "user", target.id, f"Followed user: {target.username}"
        )
        await self.points.award(
            target, "gained_follower", "user", actor.id, f"Gained a new follower: {actor.username}"
        )
        await self._commit("You are already following this user")

        logger.info(f"User {actor.id} followed user {target.id}")
        return {"message": "Successfully followed user", "is_following": True}

    async def unfollow(self, actor: User, username: str) -> dict[str, Any]:
        target = await self._user_by_username(username)
        if not await self.repos.follows.remove_pair(actor.id, target.id):
            raise NotFoundError("You are not following this user", error={"is_following": False})
        await self._commit("Could not unfollow user")
        logger.info(f"User {actor.id} unfollowed user {target.id}")
        return {"message": "Successfully unfollowed user", "is_following": False}

    async def follow_status(self, actor: User, username: str) -> dict[str, Any]:
        target = await self._user_by_username(username)
        return {
            "username": target.username,
            "is_following": await self.repos.follows.get_pair(actor.id, target.id) is not None,
            "is_followed_by": await self.repos.follows.get_pair(target.id, actor.id) is not None,
        }

    async def followers(self, username: str) -> list[User]:
        target = await self._user_by_username(username)
        return await self.repos.follows.owners_of(target.id)

    async def following(self, username: str) -> list[User]:
        target = await self._user_by_username(username)
        return await self.repos.follows.targets_of(target.id)

    async def counts(self, user: User) -> dict[str, int]:
        return {
            "followers_count": await self.repos.follows.count_owners(user.id),
            "following_count": await self.repos.follows.count_targets(user.id),
        }

    # =====================================================================
    # Blocks and mutes
    # =====================================================================

    async def _add_relation(
        self, repo: UserRelationRepository, actor: User, user_id: int, verb: str, past: str
    ) -> dict[str, Any]:
        target = await self._user_by_id(user_id)
        if target.id == actor.id:
            raise BusinessRuleError(f"You cannot {verb} yourself")
        if await repo.get_pair(actor.id, target.id) is not None:
            raise ConflictError(f"User is already {past}")
        await repo.add_pair(actor.id, target.id)
        await self._commit(f"User is already {past}")
        logger.info(f"User {actor.id} {past} user {target.id}")
        return {"message": f"User {past} successfully", "user_id": target.id}

    async def _remove_relation(
        self, repo: UserRelationRepository, actor: User, user_id: int, past: str
    ) -> dict[str, Any]:
        removed = await repo.remove_pair(actor.id, user_id)
        await self._commit(f"Could not update {past} users")
        if removed:
            logger.info(f"User {actor.id} {past} user {user_id}")
        return {"message": f"User {past} successfully", "user_id": user_id}

    async def block(self, actor: User, user_id: int) -> dict[str, Any]:
        return await self._add_relation(self.repos.blocks, actor, user_id, "block", "blocked")

    async def unblock(self, actor: User, user_id: int) -> dict[str, Any]:
        return await self._remove_relation(self.repos.blocks, actor, user_id, "unblocked")

    async def blocked_users(self, actor: User) -> list[User]:
        return await self.repos.blocks.targets_of(actor.id)

    async def mute(self, actor: User, user_id: int) -> dict[str, Any]:
        return await self._add_relation(self.repos.mutes, actor, user_id, "mute", "muted")

    async def unmute(self, actor: User, user_id: int) -> dict[str, Any]:
        return await self._remove_relation(self.repos.mutes, actor, user_id, "unmuted")

    async def muted_users(self, actor: User) -> list[User]:
        return await self.repos.mutes.targets_of(actor.id)
