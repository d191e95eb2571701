"""
API Dependencies.

Annotated dependency aliases for endpoints: the repository bundle, the
payment gateway, the authenticated user by role, and one factory per domain
service.
"""

from typing import Annotated, Optional

from fastapi import Depends

from alexandria.analytics import AnalyticsService
from alexandria.core.database.entities.users import User
from alexandria.core.database.repositories.bundle import SqlRepoBundle
from alexandria.courses import CourseService
from alexandria.earnings import EducatorEarningsService
from alexandria.gateway import PaymentGateway
from alexandria.ledger import PaymentLedgerService
from alexandria.libraries import LibraryService
from alexandria.points import AlexPointsService
from alexandria.social import SocialService
from alexandria.users import UserService

from .auth import get_current_user, get_optional_user, require_admin, require_educator
from .repos import get_gateway, get_repos

ReposDep = Annotated[SqlRepoBundle, Depends(get_repos)]
GatewayDep = Annotated[PaymentGateway, Depends(get_gateway)]

CurrentUserDep = Annotated[User, Depends(get_current_user)]
OptionalUserDep = Annotated[Optional[User], Depends(get_optional_user)]
EducatorDep = Annotated[User, Depends(require_educator)]
AdminDep = Annotated[User, Depends(require_admin)]


def get_ledger_service(repos: ReposDep, gateway: GatewayDep) -> PaymentLedgerService:
    return PaymentLedgerService(repos, gateway)


def get_earnings_service(repos: ReposDep, gateway: GatewayDep) -> EducatorEarningsService:
    return EducatorEarningsService(repos, gateway)


def get_points_service(repos: ReposDep) -> AlexPointsService:
    return AlexPointsService(repos)


def get_social_service(repos: ReposDep) -> SocialService:
    return SocialService(repos)


def get_library_service(repos: ReposDep) -> LibraryService:
    return LibraryService(repos)


def get_course_service(repos: ReposDep) -> CourseService:
    return CourseService(repos)


def get_user_service(repos: ReposDep) -> UserService:
    return UserService(repos)


def get_analytics_service(repos: ReposDep) -> AnalyticsService:
    return AnalyticsService(repos)


LedgerDep = Annotated[PaymentLedgerService, Depends(get_ledger_service)]
EarningsDep = Annotated[EducatorEarningsService, Depends(get_earnings_service)]
PointsDep = Annotated[AlexPointsService, Depends(get_points_service)]
SocialDep = Annotated[SocialService, Depends(get_social_service)]
LibraryDep = Annotated[LibraryService, Depends(get_library_service)]
CourseDep = Annotated[CourseService, Depends(get_course_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
AnalyticsDep = Annotated[AnalyticsService, Depends(get_analytics_service)]
