"""
AlexPoints Endpoints.

Points summaries, history, the rule and level catalogue and the leaderboard,
plus admin management of rules, levels and manual adjustments.
"""

from typing import List

from fastapi import APIRouter, Query, status

from alexandria.core.models.io import (
    LeaderboardEntry,
    LevelCreate,
    LevelProgress,
    LevelRead,
    LevelUpdate,
    PointsAdjustment,
    PointsSummary,
    RuleCreate,
    RuleRead,
    RuleUpdate,
    SeedResult,
    TransactionPage,
    TransactionRead,
)
from alexandria.server.services.deps import AdminDep, CurrentUserDep, PointsDep

router = APIRouter(tags=["alex-points"])


@router.get(
    "/summary",
    response_model=PointsSummary,
    summary="Points Summary",
    description="The caller's balance, current and next level, progress and latest transactions.",
)
async def summary(user: CurrentUserDep, points: PointsDep) -> PointsSummary:
    return PointsSummary.model_validate(await points.summary(user), from_attributes=True)


@router.get(
    "/transactions",
    response_model=TransactionPage,
    summary="Points History",
    description="The caller's points transactions, newest first.",
)
async def transactions(
    user: CurrentUserDep,
    points: PointsDep,
    page: int = Query(1, ge=1),
    per_page: int = Query(15, ge=1, le=100),
) -> TransactionPage:
    return TransactionPage.model_validate(await points.transactions(user, page, per_page), from_attributes=True)


@router.get("/rules", response_model=List[RuleRead], summary="Active Rules")
async def list_rules(user: CurrentUserDep, points: PointsDep) -> List[RuleRead]:
    return [RuleRead.model_validate(r, from_attributes=True) for r in await points.list_rules()]


@router.get("/levels", response_model=List[LevelRead], summary="Levels")
async def list_levels(user: CurrentUserDep, points: PointsDep) -> List[LevelRead]:
    return [LevelRead.model_validate(level, from_attributes=True) for level in await points.list_levels()]


@router.get(
    "/levels/progress",
    response_model=List[LevelProgress],
    summary="Level Progress",
    description="Every level with the caller's progress towards it.",
)
async def levels_progress(user: CurrentUserDep, points: PointsDep) -> List[LevelProgress]:
    return [LevelProgress.model_validate(item, from_attributes=True) for item in await points.levels_with_progress(user)]


@router.get("/leaderboard", response_model=List[LeaderboardEntry], summary="Leaderboard")
async def leaderboard(
    user: CurrentUserDep, points: PointsDep, limit: int = Query(10, ge=1, le=100)
) -> List[LeaderboardEntry]:
    return [LeaderboardEntry.model_validate(u, from_attributes=True) for u in await points.leaderboard(limit)]


# ---------------------------------------------------------------------------
# Admin
# ---------------------------------------------------------------------------


@router.post(
    "/rules",
    response_model=RuleRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Rule",
    responses={403: {"description": "Admin only"}, 409: {"description": "Rule for the action exists"}},
)
async def create_rule(payload: RuleCreate, admin: AdminDep, points: PointsDep) -> RuleRead:
    return RuleRead.model_validate(await points.create_rule(payload.model_dump()), from_attributes=True)


@router.patch(
    "/rules/{rule_id}",
    response_model=RuleRead,
    summary="Update Rule",
    responses={403: {"description": "Admin only"}, 404: {"description": "Rule not found"}, 409: {"description": "Conflict"}},
)
async def update_rule(rule_id: int, payload: RuleUpdate, admin: AdminDep, points: PointsDep) -> RuleRead:
    rule = await points.update_rule(rule_id, payload.model_dump(exclude_unset=True))
    return RuleRead.model_validate(rule, from_attributes=True)


@router.post(
    "/levels",
    response_model=LevelRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Level",
    responses={403: {"description": "Admin only"}, 409: {"description": "Level or threshold exists"}},
)
async def create_level(payload: LevelCreate, admin: AdminDep, points: PointsDep) -> LevelRead:
    return LevelRead.model_validate(await points.create_level(payload.model_dump()), from_attributes=True)


@router.patch(
    "/levels/{level_id}",
    response_model=LevelRead,
    summary="Update Level",
    responses={403: {"description": "Admin only"}, 404: {"description": "Level not found"}, 409: {"description": "Conflict"}},
)
async def update_level(level_id: int, payload: LevelUpdate, admin: AdminDep, points: PointsDep) -> LevelRead:
    level = await points.update_level(level_id, payload.model_dump(exclude_unset=True))
    return LevelRead.model_validate(level, from_attributes=True)


@router.post(
    "/adjust",
    response_model=TransactionRead,
    summary="Adjust Points",
    description="Manually add or remove points; the balance never drops below zero.",
    responses={403: {"description": "Admin only"}, 404: {"description": "User not found"}},
)
async def adjust(payload: PointsAdjustment, admin: AdminDep, points: PointsDep) -> TransactionRead:
    transaction = await points.adjust(admin, payload.user_id, payload.points, payload.description)
    return TransactionRead.model_validate(transaction, from_attributes=True)


@router.post(
    "/seed",
    response_model=SeedResult,
    summary="Seed Defaults",
    description="Insert or refresh the default rules and levels.",
    responses={403: {"description": "Admin only"}},
)
async def seed(admin: AdminDep, points: PointsDep) -> SeedResult:
    return SeedResult(**await points.seed_defaults())
