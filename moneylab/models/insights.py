from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class InsightLevel(Enum):
    WARNING = "warning"
    SUCCESS = "success"
    INFO = "info"


@dataclass(frozen=True)
class Insight:
    """A short observation shown next to a savings projection."""
    level: InsightLevel
    title: str
    message: str


class TransferAction(Enum):
    PROCEED = "proceed"
    CONSIDER = "consider"
    AVOID = "avoid"
    INCREASE_PAYMENT = "increase_payment"


@dataclass(frozen=True)
class Recommendation:
    action: TransferAction
    title: str
    description: str
    impact: Decimal  # Dollars saved (negative when the action costs money)
