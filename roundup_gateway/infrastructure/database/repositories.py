"""Data access layer for transactions, savings and community records"""

from datetime import date
from decimal import Decimal
from typing import List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session
from roundup_gateway.infrastructure.database.models import (
    CommunityContributionRecord,
    SavingsRecord,
    TransactionRecord,
)
from roundup_gateway.domain.models import IncomePoint, SavingsGoal, Transaction


def to_domain_transaction(row: TransactionRecord) -> Transaction:
    return Transaction(
        amount=Decimal(row.amount),
        type=row.type,
        date=row.date,
        round_up_amount=Decimal(row.round_up_amount),
        round_up_applied=row.round_up_applied,
    )


class TransactionRepository:
    """Repository for user transactions"""

    def __init__(self, db: Session):
        self.db = db

    def create_transaction(
        self,
        user_id: str,
        amount: Decimal,
        type: str,
        category: str,
        txn_date: date,
        description: str,
        round_up_amount: Decimal,
        round_up_applied: bool,
    ) -> TransactionRecord:
        """Persist a transaction with its round-up fields"""
        db_txn = TransactionRecord(
            user_id=user_id,
            amount=amount,
            type=type,
            category=category,
            date=txn_date,
            description=description,
            round_up_amount=round_up_amount,
            round_up_applied=round_up_applied,
        )
        self.db.add(db_txn)
        self.db.flush()  # Get ID without committing
        return db_txn

    def get_transactions_by_user(self, user_id: str, newest_first: bool = True) -> List[TransactionRecord]:
        """Fetch all transactions for a user ordered by date"""
        order = TransactionRecord.date.desc() if newest_first else TransactionRecord.date.asc()
        return (
            self.db.query(TransactionRecord)
            .filter(TransactionRecord.user_id == user_id)
            .order_by(order, TransactionRecord.created_at)
            .all()
        )

    def get_income_series(self, user_id: str, since: date) -> List[IncomePoint]:
        """Income observations on or after `since`, oldest first"""
        rows = (
            self.db.query(TransactionRecord)
            .filter(
                TransactionRecord.user_id == user_id,
                TransactionRecord.type == "income",
                TransactionRecord.date >= since,
            )
            .order_by(TransactionRecord.date.asc(), TransactionRecord.created_at)
            .all()
        )
        return [IncomePoint(date=r.date, amount=Decimal(r.amount)) for r in rows]


class SavingsRepository:
    """Repository for savings goals"""

    def __init__(self, db: Session):
        self.db = db

    def get_active_goals(self, user_id: str) -> List[SavingsRecord]:
        return (
            self.db.query(SavingsRecord)
            .filter(SavingsRecord.user_id == user_id, SavingsRecord.status == "active")
            .order_by(SavingsRecord.created_at)
            .all()
        )

    def get_active_goal(self, user_id: str) -> Optional[SavingsRecord]:
        goals = self.get_active_goals(user_id)
        return goals[0] if goals else None

    def credit_round_up(
        self,
        user_id: str,
        amount: Decimal,
        default_goal_name: str,
        default_goal_target: Decimal,
    ) -> SavingsRecord:
        """
        Add a round-up to the user's active goal.

        Creates the default goal, seeded with this round-up, when none exists.
        """
        goal = self.get_active_goal(user_id)
        if goal is None:
            goal = SavingsRecord(
                user_id=user_id,
                goal_name=default_goal_name,
                target_amount=default_goal_target,
                current_amount=amount,
                status="active",
            )
            self.db.add(goal)
        else:
            goal.current_amount = Decimal(goal.current_amount) + amount

        self.db.flush()
        return goal

    @staticmethod
    def to_domain(rows: List[SavingsRecord]) -> List[SavingsGoal]:
        return [
            SavingsGoal(
                current_amount=Decimal(r.current_amount),
                target_amount=Decimal(r.target_amount),
                status=r.status,
            )
            for r in rows
        ]


class ContributionRepository:
    """Repository for community contributions"""

    def __init__(self, db: Session):
        self.db = db

    def count_published(self, user_id: str) -> int:
        return (
            self.db.query(func.count(CommunityContributionRecord.id))
            .filter(
                CommunityContributionRecord.user_id == user_id,
                CommunityContributionRecord.status == "published",
            )
            .scalar()
        )
