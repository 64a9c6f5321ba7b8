"""Pydantic schemas for API request/response validation"""

from datetime import date
from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class CamelModel(BaseModel):
    """Accepts snake_case or camelCase keys; serializes with the alias"""

    model_config = ConfigDict(populate_by_name=True)


class RoundUpRequest(BaseModel):
    """Request body for POST /v1/roundup"""

    amount: Decimal = Field(..., decimal_places=2, description="Transaction amount; must be positive")


class RoundUpResponse(CamelModel):
    """Response for POST /v1/roundup"""

    round_up_amount: float = Field(..., alias="roundUpAmount")


class TransactionCreate(BaseModel):
    """Request body for POST /v1/transactions"""

    user_id: str = Field(..., min_length=1, description="User identifier")
    amount: Decimal = Field(..., gt=0, decimal_places=2, description="Transaction amount")
    type: Literal["income", "expense", "savings", "investment"]
    category: str = Field(..., min_length=1)
    date: date
    description: str = ""


class TransactionSchema(BaseModel):
    """Single stored transaction"""

    id: str
    amount: float
    type: str
    category: str
    description: str
    date: date
    round_up_amount: float
    round_up_applied: bool


class TransactionCreateResponse(BaseModel):
    """Response for POST /v1/transactions"""

    transaction: TransactionSchema


class TransactionListResponse(BaseModel):
    """Response for GET /v1/transactions"""

    user_id: str
    transactions: List[TransactionSchema]


class SavingsSummaryResponse(CamelModel):
    """Response for GET /v1/savings/summary"""

    user_id: str = Field(..., alias="userId")
    total_savings: float = Field(..., alias="totalSavings")
    total_round_ups: float = Field(..., alias="totalRoundUps")
    round_up_count: int = Field(..., alias="roundUpCount")
    active_goals: int = Field(..., alias="activeGoals")


class ScoreBreakdownSchema(BaseModel):
    """Sub-scores, each in {0, 20, 40, 60, 80, 100}"""

    savings: int
    roundup: int
    stability: int
    community: int


class CreditScoreResponse(BaseModel):
    """Response for GET /v1/credit-score"""

    score: int
    breakdown: ScoreBreakdownSchema
    advice: str


class IncomePointSchema(BaseModel):
    date: date
    amount: float


class IncomePredictionResponse(BaseModel):
    """Response for GET /v1/income-prediction"""

    historical: List[IncomePointSchema]
    forecast: List[IncomePointSchema]
    trend: Literal["increasing", "decreasing", "stable"]
    explanation: Optional[str] = None
