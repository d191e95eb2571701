"""Default AlexPoints rules and levels.

Shared by ``AlexPointsService.seed_defaults`` and the initial Alembic
migration.
"""

from __future__ import annotations

from typing import Any


def _rule(
    action_type: str,
    points: int,
    description: str,
    category: str,
    daily_limit: int,
    is_one_time: bool = False,
) -> dict[str, Any]:
    return {
        "action_type": action_type,
        "points": points,
        "description": description,
        "is_active": True,
        "is_one_time": is_one_time,
        "daily_limit": daily_limit,
        "meta": {"category": category},
    }


DEFAULT_RULES: list[dict[str, Any]] = [
    _rule("user_registered", 100, "Signed up for an account", "onboarding", 1, is_one_time=True),
    _rule("daily_login", 5, "Daily login bonus", "engagement", 1),
    _rule("profile_completed", 50, "Completed your profile", "onboarding", 1, is_one_time=True),
    _rule("create_post", 10, "Created a post", "content", 5),
    _rule("receive_like", 2, "Received a like on your content", "social", 50),
    _rule("comment_post", 5, "Commented on a post", "social", 10),
    _rule("follow_user", 3, "Followed another user", "social", 10),
    _rule("gained_follower", 5, "Gained a new follower", "social", 50),
    _rule("create_course", 100, "Created a course", "educator", 3),
    _rule("enroll_course", 20, "Enrolled in a course", "learning", 5),
    _rule("complete_lesson", 15, "Completed a lesson", "learning", 10),
    _rule("complete_course", 100, "Completed a course", "learning", 3),
    _rule("host_live_class", 50, "Hosted a live class", "educator", 3),
    _rule("join_live_class", 15, "Joined a live class", "learning", 5),
    _rule("send_message", 2, "Sent a message", "social", 20),
    _rule("send_channel_message", 3, "Sent a message in a channel", "social", 30),
    _rule("send_class_message", 3, "Sent a message in a live class", "learning", 30),
    _rule("create_readlist", 20, "Created a readlist", "content", 5),
    _rule("add_to_readlist", 5, "Added an item to a readlist", "content", 10),
    _rule("subscribe", 200, "Subscribed to a paid plan", "premium", 1),
    _rule("add_url", 10, "Added content to a library", "content", 20),
    _rule("create_library", 50, "Created a new library", "content", 3),
]

_FEATURES = [
    "basic_access",
    "profile_customization",
    "extended_readlists",
    "priority_support",
    "beta_access",
    "exclusive_content",
    "premium_perks",
]


def _level(level: int, name: str, points_required: int, description: str, features: list[str]) -> dict[str, Any]:
    return {
        "level": level,
        "name": name,
        "points_required": points_required,
        "description": description,
        "rewards": {"badge": f"{name.lower()}_badge", "features": features},
    }


DEFAULT_LEVELS: list[dict[str, Any]] = [
    _level(1, "Newcomer", 0, "Welcome to the platform! Start interacting to earn points and level up.", _FEATURES[:1]),
    _level(
        2,
        "Enthusiast",
        200,
        "You're becoming a regular! Continue participating to unlock more benefits.",
        _FEATURES[:2],
    ),
    _level(3, "Explorer", 500, "You're exploring the platform and building connections.", _FEATURES[:3]),
    _level(4, "Scholar", 1000, "Your dedication to learning is impressive!", _FEATURES[:4]),
    _level(5, "Influencer", 2500, "You're making a significant impact on the community.", _FEATURES[:5]),
    _level(6, "Expert", 5000, "Your expertise and contributions are highly valued.", _FEATURES[:6]),
    _level(7, "Master", 10000, "You've mastered the platform and are a pillar of the community.", _FEATURES[:7]),
    _level(
        8,
        "Virtuoso",
        25000,
        "Your exceptional contributions set you apart as a platform virtuoso.",
        ["all_features", "special_recognition"],
    ),
]
