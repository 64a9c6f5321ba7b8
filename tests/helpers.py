"""Test doubles and record builders shared across test modules"""

from datetime import date, timedelta
from decimal import Decimal
from sqlalchemy.orm import Session
from roundup_gateway.infrastructure.database.models import (
    CommunityContributionRecord,
    SavingsRecord,
    TransactionRecord,
)


class FixedJitter:
    """Jitter source that always returns the same factor"""

    def __init__(self, factor: float = 1.0):
        self.factor = factor

    def uniform(self, a: float, b: float) -> float:
        return self.factor


def add_transaction(
    db: Session,
    user_id: str,
    amount: str,
    type: str = "expense",
    days_ago: int = 0,
    round_up_amount: str = "0",
    round_up_applied: bool = False,
) -> TransactionRecord:
    txn = TransactionRecord(
        user_id=user_id,
        amount=Decimal(amount),
        type=type,
        category="test",
        description="",
        date=date.today() - timedelta(days=days_ago),
        round_up_amount=Decimal(round_up_amount),
        round_up_applied=round_up_applied,
    )
    db.add(txn)
    db.commit()
    return txn


def add_savings_goal(db: Session, user_id: str, current: str, status: str = "active") -> SavingsRecord:
    goal = SavingsRecord(
        user_id=user_id,
        goal_name="Emergency Fund",
        target_amount=Decimal("100000"),
        current_amount=Decimal(current),
        status=status,
    )
    db.add(goal)
    db.commit()
    return goal


def add_contributions(db: Session, user_id: str, count: int, status: str = "published") -> None:
    for i in range(count):
        db.add(CommunityContributionRecord(user_id=user_id, title=f"Tip {i}", status=status))
    db.commit()
