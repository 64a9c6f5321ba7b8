"""GET /v1/credit-score - Composite credit score endpoint"""

import time
import logging
from typing import Callable, Optional, TypeVar
from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from roundup_gateway.api.dependencies import get_advisor_client, get_request_id
from roundup_gateway.api.v1.schemas import CreditScoreResponse, ScoreBreakdownSchema
from roundup_gateway.domain.scoring import round_up_usage_percent, score_records, total_active_savings
from roundup_gateway.infrastructure.clients.advisor import AdvisorClient
from roundup_gateway.infrastructure.database.repositories import (
    ContributionRepository,
    SavingsRepository,
    TransactionRepository,
    to_domain_transaction,
)
from roundup_gateway.infrastructure.database.session import get_db
from roundup_gateway.infrastructure.observability.logging import log_credit_score
from roundup_gateway.infrastructure.observability.metrics import record_credit_score, store_read_failures_counter

router = APIRouter()

T = TypeVar("T")


def read_or_none(db: Session, dimension: str, request_id: str, read: Callable[[], T]) -> Optional[T]:
    """Run one store read; a failure degrades only that dimension"""
    try:
        return read()
    except SQLAlchemyError as e:
        db.rollback()
        store_read_failures_counter.labels(dimension=dimension).inc()
        logging.error(f"Error fetching {dimension}: {e}", extra={"request_id": request_id})
        return None


@router.get("/credit-score", response_model=CreditScoreResponse)
async def get_credit_score(
    request: Request,
    user_id: str = Query(..., description="User identifier"),
    db: Session = Depends(get_db),
    advisor: AdvisorClient = Depends(get_advisor_client),
):
    """
    Score a user's savings behaviour from their records.

    Flow:
    1. Fetch active savings goals, transactions and published contributions
    2. Compute sub-scores and weighted composite
    3. Ask the language model for advice (default text when unavailable)
    """
    start_time = time.time()
    request_id = get_request_id(request)

    goal_rows = read_or_none(db, "savings", request_id, lambda: SavingsRepository(db).get_active_goals(user_id))
    txn_rows = read_or_none(
        db, "transactions", request_id, lambda: TransactionRepository(db).get_transactions_by_user(user_id)
    )
    contributions = read_or_none(
        db, "contributions", request_id, lambda: ContributionRepository(db).count_published(user_id)
    )

    goals = SavingsRepository.to_domain(goal_rows) if goal_rows is not None else None
    transactions = [to_domain_transaction(t) for t in txn_rows] if txn_rows is not None else None

    result = score_records(transactions, goals, contributions)

    advice = await advisor.credit_advice(
        result,
        total_savings=total_active_savings(goals or []),
        round_up_percent=round_up_usage_percent(transactions or []),
    )

    breakdown = ScoreBreakdownSchema(
        savings=result.breakdown.savings,
        roundup=result.breakdown.roundup,
        stability=result.breakdown.stability,
        community=result.breakdown.community,
    )

    duration_ms = (time.time() - start_time) * 1000
    record_credit_score(result.score)
    log_credit_score(request_id, user_id, result.score, breakdown.model_dump(), duration_ms)

    return CreditScoreResponse(score=result.score, breakdown=breakdown, advice=advice)
