"""
Repository bundle for dependency injection.

Services receive one bundle bound to the request's session so that every
repository they touch takes part in the same unit of work.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from .alex_points import (
    AlexPointsLevelRepository,
    AlexPointsRuleRepository,
    AlexPointsTransactionRepository,
)
from .courses import CourseRepository, EnrollmentRepository, HireRequestRepository
from .libraries import LibraryContentRepository, LibraryRepository
from .payments import (
    GatewayEventRepository,
    PaymentLogRepository,
    PaymentSplitRepository,
    RefundRepository,
)
from .social import BlockedUserRepository, FollowRepository, MutedUserRepository
from .users import EducatorPaymentInfoRepository, UserRepository


@dataclass(frozen=True)
class SqlRepoBundle:
    """Convenience bundle of all SQL repositories sharing one session."""

    session: AsyncSession
    users: UserRepository
    payment_info: EducatorPaymentInfoRepository
    follows: FollowRepository
    blocks: BlockedUserRepository
    mutes: MutedUserRepository
    courses: CourseRepository
    enrollments: EnrollmentRepository
    hire_requests: HireRequestRepository
    payment_logs: PaymentLogRepository
    payment_splits: PaymentSplitRepository
    gateway_events: GatewayEventRepository
    refunds: RefundRepository
    point_rules: AlexPointsRuleRepository
    point_levels: AlexPointsLevelRepository
    point_transactions: AlexPointsTransactionRepository
    libraries: LibraryRepository
    library_contents: LibraryContentRepository


def build_sql_repos(session: AsyncSession) -> SqlRepoBundle:
    """Build a SqlRepoBundle bound to a session.

    Args:
        session: Async session shared by every repository

    Returns:
        Bundle containing all repository instances
    """
    return SqlRepoBundle(
        session=session,
        users=UserRepository(session),
        payment_info=EducatorPaymentInfoRepository(session),
        follows=FollowRepository(session),
        blocks=BlockedUserRepository(session),
        mutes=MutedUserRepository(session),
        courses=CourseRepository(session),
        enrollments=EnrollmentRepository(session),
        hire_requests=HireRequestRepository(session),
        payment_logs=PaymentLogRepository(session),
        payment_splits=PaymentSplitRepository(session),
        gateway_events=GatewayEventRepository(session),
        refunds=RefundRepository(session),
        point_rules=AlexPointsRuleRepository(session),
        point_levels=AlexPointsLevelRepository(session),
        point_transactions=AlexPointsTransactionRepository(session),
        libraries=LibraryRepository(session),
        library_contents=LibraryContentRepository(session),
    )
