"""
AlexPoints service.

Awards points for platform actions according to the active rules, keeps the
running counters on the user row in step with the transaction history and
manages the rule and level catalogue.

``award`` and ``adjust_points`` only flush: they join the unit of work of
whichever operation triggered them. Catalogue operations commit.
"""

from __future__ import annotations

import math
from typing import Any, Optional

from sqlalchemy.exc import IntegrityError

from alexandria.core.database.base import utc_now
from alexandria.core.database.entities.alex_points import (
    AlexPointsLevel,
    AlexPointsRule,
    AlexPointsTransaction,
)
from alexandria.core.database.entities.users import User
from alexandria.core.database.repositories.bundle import SqlRepoBundle
from alexandria.core.errors import ConflictError, NotFoundError
from alexandria.core.logging_config import get_logger

from .defaults import DEFAULT_LEVELS, DEFAULT_RULES

logger = get_logger(__name__)

LEVEL_UP_ACTION = "level_up"
ADMIN_ADJUSTMENT_ACTION = "admin_adjustment"
MAX_LEADERBOARD_SIZE = 100


class AlexPointsService:
    """Points awarding, level tracking and catalogue management."""

    def __init__(self, repos: SqlRepoBundle) -> None:
        self.repos = repos

    # =====================================================================
    # Awarding
    # =====================================================================

    async def award(
        self,
        user: User,
        action_type: str,
        reference_type: Optional[str] = None,
        reference_id: Optional[Any] = None,
        description: Optional[str] = None,
        meta: Optional[dict[str, Any]] = None,
    ) -> Optional[AlexPointsTransaction]:
        """Award the points of the rule for ``action_type``.

        Args:
            user: User earning the points
            action_type: Rule action type
            reference_type: Kind of record that triggered the award
            reference_id: Id of that record
            description: Overrides the rule description
            meta: Extra data stored with the transaction

        Returns:
            The new transaction, or None when no active rule exists, a
            one-time rule was already used or today's limit is reached
        """
        rule = await self.repos.point_rules.get_by_action(action_type)
        if rule is None or not rule.is_active:
            logger.debug(f"No active points rule for action '{action_type}'")
            return None

        if rule.is_one_time:
            if await self.repos.point_transactions.count_for_action(user.id, action_type) > 0:
                logger.debug(f"User {user.id} already received one-time points for '{action_type}'")
                return None

        if rule.daily_limit > 0:
            start_of_day = utc_now().replace(hour=0, minute=0, second=0, microsecond=0)
            today = await self.repos.point_transactions.count_for_action(user.id, action_type, since=start_of_day)
            if today >= rule.daily_limit:
                logger.debug(f"Daily limit reached for user {user.id} and action '{action_type}'")
                return None

        return await self._record(
            user,
            rule.points,
            action_type,
            description=description or rule.description,
            reference_type=reference_type,
            reference_id=reference_id,
            meta=meta,
        )

    async def adjust_points(
        self, user: User, points: int, description: Optional[str] = None, admin: Optional[User] = None
    ) -> AlexPointsTransaction:
        """Manually add or remove points.

        The balance never drops below zero; the transaction records the
        requested amount.
        """
        meta = {"adjusted_by": admin.id} if admin is not None else {}
        return await self._record(
            user,
            points,
            ADMIN_ADJUSTMENT_ACTION,
            description=description or "Manual points adjustment",
            meta=meta,
        )

    async def adjust(
        self, admin: User, user_id: int, points: int, description: Optional[str] = None
    ) -> AlexPointsTransaction:
        """Apply an admin adjustment to ``user_id`` and commit it."""
        user = await self.repos.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        try:
            transaction = await self.adjust_points(user, points, description, admin=admin)
            await self.repos.session.commit()
        except Exception:
            await self.repos.session.rollback()
            raise
        return transaction

    async def _record(
        self,
        user: User,
        points: int,
        action_type: str,
        *,
        description: Optional[str] = None,
        reference_type: Optional[str] = None,
        reference_id: Optional[Any] = None,
        meta: Optional[dict[str, Any]] = None,
    ) -> AlexPointsTransaction:
        transaction = await self.repos.point_transactions.create(
            AlexPointsTransaction(
                user_id=user.id,
                points=points,
                action_type=action_type,
                description=description,
                reference_type=reference_type,
                reference_id=str(reference_id) if reference_id is not None else None,
                meta=meta or {},
            )
        )
        user.alex_points = max(0, user.alex_points + points)
        await self._refresh_level(user)
        await self.repos.users.update(user)
        logger.info(f"User {user.id} {'earned' if points >= 0 else 'lost'} {abs(points)} points for '{action_type}'")
        return transaction

    async def _refresh_level(self, user: User) -> None:
        levels = await self.repos.point_levels.list_ordered()
        current, upcoming = self._locate(levels, user.alex_points)
        previous_level = user.point_level or 1
        new_level = current.level if current is not None else 1

        user.point_level = new_level
        user.points_to_next_level = upcoming.points_required - user.alex_points if upcoming is not None else 0

        if current is not None and new_level > previous_level:
            await self.repos.point_transactions.create(
                AlexPointsTransaction(
                    user_id=user.id,
                    points=0,
                    action_type=LEVEL_UP_ACTION,
                    description=f"Leveled up to {current.name}",
                    reference_type="level",
                    reference_id=str(current.id),
                    meta={"previous_level": previous_level},
                )
            )
            logger.info(f"User {user.id} leveled up from {previous_level} to {new_level}")

    @staticmethod
    def _locate(
        levels: list[AlexPointsLevel], points: int
    ) -> tuple[Optional[AlexPointsLevel], Optional[AlexPointsLevel]]:
        """Split levels ordered by threshold into (reached, next)."""
        current: Optional[AlexPointsLevel] = None
        for level in levels:
            if level.points_required <= points:
                current = level
            else:
                return current, level
        return current, None

    # =====================================================================
    # Read models
    # =====================================================================

    async def summary(self, user: User) -> dict[str, Any]:
        levels = await self.repos.point_levels.list_ordered()
        current, upcoming = self._locate(levels, user.alex_points)
        progress = 100
        if upcoming is not None:
            floor = current.points_required if current is not None else 0
            span = upcoming.points_required - floor
            progress = min(round((user.alex_points - floor) / span * 100), 99) if span > 0 else 0
        recent = await self.repos.point_transactions.list_for_user(user.id, limit=5, offset=0)
        return {
            "user_id": user.id,
            "username": user.username,
            "alex_points": user.alex_points,
            "current_level": current,
            "next_level": upcoming,
            "points_to_next_level": upcoming.points_required - user.alex_points if upcoming is not None else 0,
            "progress_percentage": progress,
            "recent_transactions": recent,
        }

    async def transactions(self, user: User, page: int = 1, per_page: int = 15) -> dict[str, Any]:
        page = max(page, 1)
        total = await self.repos.point_transactions.count({"user_id": user.id})
        items = await self.repos.point_transactions.list_for_user(user.id, limit=per_page, offset=(page - 1) * per_page)
        return {
            "items": items,
            "total": total,
            "page": page,
            "per_page": per_page,
            "last_page": max(1, math.ceil(total / per_page)),
        }

    async def levels_with_progress(self, user: User) -> list[dict[str, Any]]:
        """Every level annotated with the user's progress towards it.

        Reached levels report 100%; an unreached level reports the share of
        the span from the previous threshold, capped at 99%.
        """
        levels = await self.repos.point_levels.list_ordered()
        current, _ = self._locate(levels, user.alex_points)
        result = []
        previous_required = 0
        for level in levels:
            achieved = level.points_required <= user.alex_points
            if achieved:
                progress = 100
            else:
                progress = 0
                needed = level.points_required - previous_required
                made = user.alex_points - previous_required
                if needed > 0 and made > 0:
                    progress = min(round(made / needed * 100), 99)
            result.append(
                {
                    "level": level,
                    "is_current": current is not None and level.id == current.id,
                    "is_achieved": achieved,
                    "progress_percentage": progress,
                }
            )
            previous_required = level.points_required
        return result

    async def leaderboard(self, limit: int = 10) -> list[User]:
        return await self.repos.users.leaderboard(min(max(limit, 1), MAX_LEADERBOARD_SIZE))

    # =====================================================================
    # Catalogue
    # =====================================================================

    async def list_rules(self, active_only: bool = True) -> list[AlexPointsRule]:
        return await self.repos.point_rules.list_rules(active_only=active_only)

    async def list_levels(self) -> list[AlexPointsLevel]:
        return await self.repos.point_levels.list_ordered()

    async def create_rule(self, data: dict[str, Any]) -> AlexPointsRule:
        if await self.repos.point_rules.get_by_action(data["action_type"]) is not None:
            raise ConflictError(f"A rule for action '{data['action_type']}' already exists")
        rule = await self.repos.point_rules.create(AlexPointsRule(**data))
        await self._commit()
        return rule

    async def update_rule(self, rule_id: int, changes: dict[str, Any]) -> AlexPointsRule:
        rule = await self.repos.point_rules.get_by_id(rule_id)
        if rule is None:
            raise NotFoundError("Rule not found")
        action_type = changes.get("action_type")
        if action_type and action_type != rule.action_type:
            if await self.repos.point_rules.get_by_action(action_type) is not None:
                raise ConflictError(f"A rule for action '{action_type}' already exists")
        for key, value in changes.items():
            setattr(rule, key, value)
        rule = await self.repos.point_rules.update(rule)
        await self._commit()
        return rule

    async def create_level(self, data: dict[str, Any]) -> AlexPointsLevel:
        await self._ensure_level_unique(data["level"], data["points_required"])
        level = await self.repos.point_levels.create(AlexPointsLevel(**data))
        await self._commit()
        return level

    async def update_level(self, level_id: int, changes: dict[str, Any]) -> AlexPointsLevel:
        level = await self.repos.point_levels.get_by_id(level_id)
        if level is None:
            raise NotFoundError("Level not found")
        await self._ensure_level_unique(changes.get("level"), changes.get("points_required"), exclude_id=level.id)
        for key, value in changes.items():
            setattr(level, key, value)
        level = await self.repos.point_levels.update(level)
        await self._commit()
        return level

    async def _ensure_level_unique(
        self, level_number: Optional[int], points_required: Optional[int], exclude_id: Optional[int] = None
    ) -> None:
        if level_number is not None:
            existing = await self.repos.point_levels.get_by_level(level_number)
            if existing is not None and existing.id != exclude_id:
                raise ConflictError(f"Level {level_number} already exists")
        if points_required is not None:
            existing = await self.repos.point_levels.get_by_points_required(points_required)
            if existing is not None and existing.id != exclude_id:
                raise ConflictError(f"A level requiring {points_required} points already exists")

    async def seed_defaults(self) -> dict[str, int]:
        """Insert or refresh the default rules and levels.

        Returns:
            Number of rules and levels created and updated
        """
        counts = {"rules_created": 0, "rules_updated": 0, "levels_created": 0, "levels_updated": 0}
        for data in DEFAULT_RULES:
            rule = await self.repos.point_rules.get_by_action(data["action_type"])
            if rule is None:
                await self.repos.point_rules.create(AlexPointsRule(**data))
                counts["rules_created"] += 1
            else:
                for key, value in data.items():
                    setattr(rule, key, value)
                await self.repos.point_rules.update(rule)
                counts["rules_updated"] += 1
        for data in DEFAULT_LEVELS:
            level = await self.repos.point_levels.get_by_level(data["level"])
            if level is None:
                await self.repos.point_levels.create(AlexPointsLevel(**data))
                counts["levels_created"] += 1
            else:
                for key, value in data.items():
                    setattr(level, key, value)
                await self.repos.point_levels.update(level)
                counts["levels_updated"] += 1
        await self._commit()
        logger.info(f"Seeded AlexPoints defaults: {counts}")
        return counts

    async def _commit(self) -> None:
        try:
            await self.repos.session.commit()
        except IntegrityError as e:
            await self.repos.session.rollback()
            raise ConflictError("Rule or level conflicts with an existing one") from e
