"""Transactions and savings endpoints - record spending and credit round-ups"""

import logging
from decimal import Decimal
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from roundup_gateway.api.dependencies import get_ledger_client, get_request_id
from roundup_gateway.api.v1.schemas import (
    SavingsSummaryResponse,
    TransactionCreate,
    TransactionCreateResponse,
    TransactionListResponse,
    TransactionSchema,
)
from roundup_gateway.config import settings
from roundup_gateway.domain.roundup import apply_round_up
from roundup_gateway.domain.scoring import total_active_savings
from roundup_gateway.infrastructure.clients.ledger import LedgerClient, roundup_saved_event
from roundup_gateway.infrastructure.database.models import TransactionRecord
from roundup_gateway.infrastructure.database.repositories import SavingsRepository, TransactionRepository
from roundup_gateway.infrastructure.database.session import get_db
from roundup_gateway.infrastructure.observability.metrics import roundup_amount_histogram

router = APIRouter()


def to_schema(txn: TransactionRecord) -> TransactionSchema:
    return TransactionSchema(
        id=str(txn.id),
        amount=float(txn.amount),
        type=txn.type,
        category=txn.category,
        description=txn.description,
        date=txn.date,
        round_up_amount=float(txn.round_up_amount),
        round_up_applied=txn.round_up_applied,
    )


@router.post("/transactions", response_model=TransactionCreateResponse)
async def create_transaction(
    request_body: TransactionCreate,
    background_tasks: BackgroundTasks,
    request: Request,
    db: Session = Depends(get_db),
    ledger_client: LedgerClient = Depends(get_ledger_client),
):
    """
    Record a transaction and move its round-up into savings.

    Flow:
    1. Compute round-up (expenses only)
    2. Persist transaction
    3. Credit the active savings goal, creating the default goal if needed
    4. Send async ROUNDUP_SAVED webhook to the ledger
    """
    request_id = get_request_id(request)

    round_up_amount, round_up_applied = apply_round_up(
        request_body.amount, request_body.type, settings.roundup_denomination
    )

    try:
        txn = TransactionRepository(db).create_transaction(
            user_id=request_body.user_id,
            amount=request_body.amount,
            type=request_body.type,
            category=request_body.category,
            txn_date=request_body.date,
            description=request_body.description,
            round_up_amount=round_up_amount,
            round_up_applied=round_up_applied,
        )

        if round_up_applied:
            SavingsRepository(db).credit_round_up(
                user_id=request_body.user_id,
                amount=round_up_amount,
                default_goal_name=settings.default_goal_name,
                default_goal_target=settings.default_goal_target,
            )

        db.commit()

    except SQLAlchemyError as e:
        db.rollback()
        logging.error(f"Failed to create transaction: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Failed to create transaction")

    if round_up_applied:
        roundup_amount_histogram.observe(float(round_up_amount))
        background_tasks.add_task(
            ledger_client.send_roundup_event,
            roundup_saved_event(
                transaction_id=str(txn.id),
                user_id=request_body.user_id,
                amount=request_body.amount,
                round_up_amount=round_up_amount,
                txn_date=request_body.date,
            ),
        )

    logging.info(
        "Transaction recorded",
        extra={
            "request_id": request_id,
            "user_id": request_body.user_id,
            "type": request_body.type,
            "round_up_applied": round_up_applied,
        },
    )

    return TransactionCreateResponse(transaction=to_schema(txn))


@router.get("/transactions", response_model=TransactionListResponse)
def list_transactions(
    user_id: str = Query(..., description="User identifier"),
    db: Session = Depends(get_db),
):
    """All transactions for a user, newest first"""
    try:
        rows = TransactionRepository(db).get_transactions_by_user(user_id)
    except SQLAlchemyError as e:
        logging.error(f"Failed to fetch transactions: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch transactions")

    return TransactionListResponse(user_id=user_id, transactions=[to_schema(t) for t in rows])


@router.get("/savings/summary", response_model=SavingsSummaryResponse)
def get_savings_summary(
    user_id: str = Query(..., description="User identifier"),
    db: Session = Depends(get_db),
):
    """Active savings balance and round-up totals for the dashboard"""
    try:
        goals = SavingsRepository(db).get_active_goals(user_id)
        rows = TransactionRepository(db).get_transactions_by_user(user_id)
    except SQLAlchemyError as e:
        logging.error(f"Failed to fetch savings summary: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch savings")

    rounded = [t for t in rows if t.round_up_applied]

    return SavingsSummaryResponse(
        user_id=user_id,
        total_savings=float(total_active_savings(SavingsRepository.to_domain(goals))),
        total_round_ups=float(sum((Decimal(t.round_up_amount) for t in rounded), Decimal("0"))),
        round_up_count=len(rounded),
        active_goals=len(goals),
    )
