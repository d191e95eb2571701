"""
Database entities organized by business domain.

Importing this package registers every table on ``Base.metadata``.
"""

from .alex_points import AlexPointsLevel, AlexPointsRule, AlexPointsTransaction
from .courses import Course, Enrollment, HireRequest
from .libraries import Library, LibraryContent
from .payments import GatewayEvent, PaymentLog, PaymentSplit, Refund
from .social import BlockedUser, Follow, MutedUser
from .users import EducatorPaymentInfo, User

__all__ = [
    "AlexPointsLevel",
    "AlexPointsRule",
    "AlexPointsTransaction",
    "BlockedUser",
    "Course",
    "EducatorPaymentInfo",
    "Enrollment",
    "Follow",
    "GatewayEvent",
    "HireRequest",
    "Library",
    "LibraryContent",
    "MutedUser",
    "PaymentLog",
    "PaymentSplit",
    "Refund",
    "User",
]
