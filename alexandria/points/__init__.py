"""AlexPoints: rule-based rewards, levels and the points ledger."""

from .defaults import DEFAULT_LEVELS, DEFAULT_RULES
from .service import AlexPointsService

__all__ = ["AlexPointsService", "DEFAULT_LEVELS", "DEFAULT_RULES"]
