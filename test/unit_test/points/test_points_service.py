"""Unit tests for AlexPointsService."""

import pytest

from alexandria.core.database.entities import AlexPointsRule
from alexandria.core.errors import ConflictError, NotFoundError
from alexandria.points import DEFAULT_LEVELS, DEFAULT_RULES, AlexPointsService
from alexandria.points.service import ADMIN_ADJUSTMENT_ACTION, LEVEL_UP_ACTION

pytestmark = pytest.mark.asyncio


@pytest.fixture
def points(repos) -> AlexPointsService:
    return AlexPointsService(repos)


class TestSeedDefaults:
    async def test_seed_creates_rules_and_levels(self, points, seeded_points):
        """Test that seeding inserts the full default catalogue."""
        assert seeded_points == {
            "rules_created": len(DEFAULT_RULES),
            "rules_updated": 0,
            "levels_created": len(DEFAULT_LEVELS),
            "levels_updated": 0,
        }
        assert len(await points.list_levels()) == len(DEFAULT_LEVELS)

    async def test_reseeding_updates_in_place(self, points, seeded_points):
        """Test that seeding twice refreshes instead of duplicating."""
        counts = await points.seed_defaults()
        assert counts["rules_created"] == 0
        assert counts["rules_updated"] == len(DEFAULT_RULES)
        assert counts["levels_updated"] == len(DEFAULT_LEVELS)


class TestAward:
    async def test_award_applies_rule_points(self, points, repos, make_user, seeded_points):
        """Test that an award records a transaction and updates the counters."""
        user = await make_user("ada")
        transaction = await points.award(user, "create_library", "library", 7)

        assert transaction is not None
        assert transaction.points == 50
        assert transaction.reference_id == "7"
        assert user.alex_points == 50
        assert user.point_level == 1
        assert user.points_to_next_level == 150

    async def test_unknown_action_awards_nothing(self, points, make_user, seeded_points):
        """Test that actions without a rule are ignored."""
        user = await make_user("ada")
        assert await points.award(user, "no_such_action") is None
        assert user.alex_points == 0

    async def test_inactive_rule_awards_nothing(self, points, repos, make_user, seeded_points):
        """Test that disabled rules are ignored."""
        rule = await repos.point_rules.get_by_action("follow_user")
        rule.is_active = False
        await repos.point_rules.update(rule)
        user = await make_user("ada")

        assert await points.award(user, "follow_user") is None

    async def test_one_time_rule_awards_once(self, points, make_user, seeded_points):
        """Test that one-time rules pay out a single time."""
        user = await make_user("ada")
        assert await points.award(user, "user_registered") is not None
        assert await points.award(user, "user_registered") is None
        assert user.alex_points == 100

    async def test_daily_limit(self, points, make_user, seeded_points):
        """Test that the daily limit caps awards per day."""
        user = await make_user("ada")
        awarded = [await points.award(user, "create_course") for _ in range(4)]

        assert [t is not None for t in awarded] == [True, True, True, False]
        assert user.alex_points == 300

    async def test_level_up_records_transaction(self, points, repos, make_user, seeded_points):
        """Test that crossing a threshold moves the level and logs it."""
        user = await make_user("ada")
        await points.adjust_points(user, 250)

        assert user.point_level == 2
        assert user.points_to_next_level == 250
        history = await repos.point_transactions.list_for_user(user.id, limit=10, offset=0)
        assert {t.action_type for t in history} == {ADMIN_ADJUSTMENT_ACTION, LEVEL_UP_ACTION}

    async def test_balance_never_negative(self, points, make_user, seeded_points):
        """Test that removing more points than held clamps at zero."""
        user = await make_user("ada")
        await points.adjust_points(user, 30)
        transaction = await points.adjust_points(user, -100)

        assert user.alex_points == 0
        assert transaction.points == -100


class TestAdjust:
    async def test_admin_adjust_commits(self, points, make_user, seeded_points):
        """Test the admin adjustment entry point."""
        admin = await make_user("root", "admin")
        user = await make_user("ada")
        transaction = await points.adjust(admin, user.id, 40, "Contest prize")

        assert transaction.meta == {"adjusted_by": admin.id}
        assert transaction.description == "Contest prize"
        assert user.alex_points == 40

    async def test_admin_adjust_unknown_user(self, points, make_user):
        """Test that adjusting a missing user raises NotFoundError."""
        admin = await make_user("root", "admin")
        with pytest.raises(NotFoundError):
            await points.adjust(admin, 999, 10)


class TestReadModels:
    async def test_summary_progress(self, points, make_user, seeded_points):
        """Test the progress between the current and the next level."""
        user = await make_user("ada")
        await points.adjust_points(user, 350)
        summary = await points.summary(user)

        assert summary["current_level"].name == "Enthusiast"
        assert summary["next_level"].name == "Explorer"
        assert summary["points_to_next_level"] == 150
        assert summary["progress_percentage"] == 50
        assert len(summary["recent_transactions"]) == 2

    async def test_summary_at_top_level(self, points, make_user, seeded_points):
        """Test that the last level reports full progress."""
        user = await make_user("ada")
        await points.adjust_points(user, 30000)
        summary = await points.summary(user)

        assert summary["next_level"] is None
        assert summary["progress_percentage"] == 100

    async def test_levels_with_progress(self, points, make_user, seeded_points):
        """Test per-level progress annotations."""
        user = await make_user("ada")
        await points.adjust_points(user, 350)
        levels = await points.levels_with_progress(user)

        assert [item["is_achieved"] for item in levels[:3]] == [True, True, False]
        assert levels[1]["is_current"] is True
        assert levels[2]["progress_percentage"] == 50
        assert levels[3]["progress_percentage"] == 0

    async def test_transactions_pagination(self, points, make_user, seeded_points):
        """Test paging through the points history."""
        user = await make_user("ada")
        for _ in range(3):
            await points.adjust_points(user, 1)
        page = await points.transactions(user, page=2, per_page=2)

        assert page["total"] == 3
        assert page["last_page"] == 2
        assert len(page["items"]) == 1

    async def test_leaderboard_orders_by_points(self, points, make_user, seeded_points):
        """Test that the leaderboard lists users with points, highest first."""
        ada = await make_user("ada")
        bob = await make_user("bob")
        await make_user("cy")
        await points.adjust_points(ada, 10)
        await points.adjust_points(bob, 20)

        assert [u.username for u in await points.leaderboard(10)] == ["bob", "ada"]


class TestCatalogue:
    async def test_create_rule_conflict(self, points, seeded_points):
        """Test that a second rule for an action is rejected."""
        with pytest.raises(ConflictError):
            await points.create_rule({"action_type": "daily_login", "points": 1})

    async def test_create_and_update_rule(self, points):
        """Test creating and patching a rule."""
        rule = await points.create_rule({"action_type": "share_post", "points": 4, "daily_limit": 2})
        assert isinstance(rule, AlexPointsRule)
        updated = await points.update_rule(rule.id, {"points": 6, "is_active": False})
        assert updated.points == 6
        assert updated.is_active is False

    async def test_update_missing_rule(self, points):
        """Test that updating a missing rule raises NotFoundError."""
        with pytest.raises(NotFoundError):
            await points.update_rule(404, {"points": 1})

    async def test_level_uniqueness(self, points, seeded_points):
        """Test that level numbers and thresholds stay unique."""
        with pytest.raises(ConflictError):
            await points.create_level({"level": 2, "name": "Dup", "points_required": 999})
        with pytest.raises(ConflictError):
            await points.create_level({"level": 9, "name": "Dup", "points_required": 200})

        level = await points.create_level({"level": 9, "name": "Legend", "points_required": 50000})
        assert level.id is not None
