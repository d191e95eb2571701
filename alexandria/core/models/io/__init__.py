"""
I/O models for API requests and responses.

These Pydantic schemas are the contract between the API endpoints and
clients, kept separate from the database entities so that either can evolve
on its own.

Modules:
- common: acknowledgements, error bodies, pagination
- users, social, courses: accounts and the social graph
- payments, earnings: split payments, refunds and educator payouts
- points, libraries, analytics
"""

from .analytics import AnalyticsOverview, RevenueReport
from .common import ErrorResponse, MessageResponse, Pagination
from .courses import CourseCreate, CourseRead, EnrollmentRead
from .earnings import (
    BankInfoRead,
    BankInfoResponse,
    BankInfoUpdate,
    BankInfoUpdated,
    EarningDetail,
    EarningItem,
    EarningsSummary,
    MonthlyEarning,
)
from .libraries import (
    ApprovalInfo,
    ContentCreate,
    ContentRead,
    LibraryCreate,
    LibraryPage,
    LibraryRead,
    LibraryReject,
    LibraryView,
)
from .payments import (
    CourseSplitRequest,
    HireSplitRequest,
    PaymentSplitDetails,
    PaymentSplitRead,
    ReconcileResponse,
    RefundCreate,
    RefundRead,
    SplitBreakdownRead,
    SplitInitResponse,
    WebhookAck,
)
from .points import (
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
from .social import FollowResult, FollowStatus, RelationCreate, RelationResult, UserList
from .users import UserCreate, UserProfile, UserPublic, UserRead, UserRegistered, VerificationUpdate

__all__ = [
    "AnalyticsOverview",
    "ApprovalInfo",
    "BankInfoRead",
    "BankInfoResponse",
    "BankInfoUpdate",
    "BankInfoUpdated",
    "ContentCreate",
    "ContentRead",
    "CourseCreate",
    "CourseRead",
    "CourseSplitRequest",
    "EarningDetail",
    "EarningItem",
    "EarningsSummary",
    "EnrollmentRead",
    "ErrorResponse",
    "FollowResult",
    "FollowStatus",
    "HireSplitRequest",
    "LeaderboardEntry",
    "LevelCreate",
    "LevelProgress",
    "LevelRead",
    "LevelUpdate",
    "LibraryCreate",
    "LibraryPage",
    "LibraryRead",
    "LibraryReject",
    "LibraryView",
    "MessageResponse",
    "MonthlyEarning",
    "Pagination",
    "PaymentSplitDetails",
    "PaymentSplitRead",
    "PointsAdjustment",
    "PointsSummary",
    "ReconcileResponse",
    "RefundCreate",
    "RefundRead",
    "RelationCreate",
    "RelationResult",
    "RevenueReport",
    "RuleCreate",
    "RuleRead",
    "RuleUpdate",
    "SeedResult",
    "SplitBreakdownRead",
    "SplitInitResponse",
    "TransactionPage",
    "TransactionRead",
    "UserCreate",
    "UserList",
    "UserProfile",
    "UserPublic",
    "UserRead",
    "UserRegistered",
    "VerificationUpdate",
    "WebhookAck",
]
