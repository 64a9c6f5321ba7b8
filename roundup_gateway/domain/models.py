"""Domain models - pure Python dataclasses consumed and produced by the engine"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import List, Optional

INCREASING = "increasing"
DECREASING = "decreasing"
STABLE = "stable"

# Observations needed before a projection is made
MIN_HISTORY = 4


@dataclass
class Transaction:
    """Financial transaction owned by the record store"""

    amount: Decimal
    type: str  # "income", "expense", "savings" or "investment"
    date: date
    round_up_amount: Decimal = Decimal("0")
    round_up_applied: bool = False


@dataclass
class SavingsGoal:
    """Savings goal balance; only active goals count towards scores"""

    current_amount: Decimal
    target_amount: Decimal
    status: str = "active"  # "active", "completed" or "cancelled"


@dataclass
class IncomePoint:
    """Single income observation in a chronological series"""

    date: date
    amount: Decimal


@dataclass
class ScoreBreakdown:
    """Bucketed sub-scores, each one of 0/20/40/60/80/100"""

    savings: int
    roundup: int
    stability: int
    community: int


@dataclass
class CreditScoreResult:
    """Composite score with its breakdown"""

    score: int
    breakdown: ScoreBreakdown
    advice: Optional[str] = None


@dataclass
class PredictionResult:
    """Historical series, projected series and trend classification"""

    historical: List[IncomePoint]
    forecast: List[IncomePoint] = field(default_factory=list)
    trend: str = STABLE
    explanation: Optional[str] = None

    @property
    def insufficient_history(self) -> bool:
        return len(self.historical) < MIN_HISTORY
