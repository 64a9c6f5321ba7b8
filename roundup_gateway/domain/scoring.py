"""Credit score engine - bucketed sub-scores and weighted composite"""

import statistics
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Optional, Sequence, Tuple

from roundup_gateway.domain.models import CreditScoreResult, SavingsGoal, ScoreBreakdown, Transaction
from roundup_gateway.domain.roundup import Number, to_decimal

# Descending (threshold, score) pairs; first threshold met wins
SAVINGS_THRESHOLDS: List[Tuple[Decimal, int]] = [
    (Decimal("50000"), 100),
    (Decimal("25000"), 80),
    (Decimal("10000"), 60),
    (Decimal("5000"), 40),
    (Decimal("1000"), 20),
]

ROUNDUP_THRESHOLDS: List[Tuple[Decimal, int]] = [
    (Decimal("80"), 100),
    (Decimal("60"), 80),
    (Decimal("40"), 60),
    (Decimal("20"), 40),
    (Decimal("10"), 20),
]

# Ceilings: lower coefficient of variation is better
STABILITY_THRESHOLDS: List[Tuple[Decimal, int]] = [
    (Decimal("0.1"), 100),
    (Decimal("0.2"), 80),
    (Decimal("0.3"), 60),
    (Decimal("0.4"), 40),
    (Decimal("0.5"), 20),
]

COMMUNITY_THRESHOLDS: List[Tuple[int, int]] = [
    (10, 100),
    (7, 80),
    (5, 60),
    (3, 40),
    (1, 20),
]

WEIGHTS = {
    "savings": Decimal("0.40"),
    "roundup": Decimal("0.25"),
    "stability": Decimal("0.20"),
    "community": Decimal("0.15"),
}


def _bucket_at_least(value, thresholds) -> int:
    for threshold, score in thresholds:
        if value >= threshold:
            return score
    return 0


def savings_score(total_savings: Optional[Number]) -> int:
    """Score savings balance: 1000 -> 20 ... 50000 -> 100"""
    if total_savings is None:
        return 0
    return _bucket_at_least(to_decimal(total_savings), SAVINGS_THRESHOLDS)


def roundup_score(round_up_usage_percent: Optional[Number]) -> int:
    """Score share of transactions with round-up applied: 10% -> 20 ... 80% -> 100"""
    if round_up_usage_percent is None:
        return 0
    return _bucket_at_least(to_decimal(round_up_usage_percent), ROUNDUP_THRESHOLDS)


def stability_score(income_variance: Optional[Number]) -> int:
    """Score income coefficient of variation: <=0.1 -> 100 ... <=0.5 -> 20"""
    if income_variance is None:
        return 0
    variance = to_decimal(income_variance)
    for ceiling, score in STABILITY_THRESHOLDS:
        if variance <= ceiling:
            return score
    return 0


def community_score(contributions: Optional[int]) -> int:
    """Score published community contributions: 1 -> 20 ... 10 -> 100"""
    if contributions is None:
        return 0
    return _bucket_at_least(contributions, COMMUNITY_THRESHOLDS)


def income_variance(amounts: Sequence[Number]) -> Decimal:
    """
    Coefficient of variation (population stddev / mean) of income amounts.

    Defined as 0 with fewer than 2 observations or a non-positive mean.
    """
    if len(amounts) < 2:
        return Decimal("0")

    values = [to_decimal(a) for a in amounts]
    mean = statistics.mean(values)
    if mean <= 0:
        return Decimal("0")

    return statistics.pstdev(values) / mean


def round_up_usage_percent(transactions: Sequence[Transaction]) -> Decimal:
    """Percentage of transactions that had a round-up applied"""
    if not transactions:
        return Decimal("0")
    applied = sum(1 for t in transactions if t.round_up_applied)
    return Decimal(applied) * 100 / Decimal(len(transactions))


def total_active_savings(goals: Iterable[SavingsGoal]) -> Decimal:
    """Sum of current balances across active savings goals"""
    return sum((to_decimal(g.current_amount) for g in goals if g.status == "active"), Decimal("0"))


def compute_credit_score(
    total_savings: Optional[Number],
    round_up_usage_percent: Optional[Number],
    income_variance: Optional[Number],
    community_contributions: Optional[int],
    advice: Optional[str] = None,
) -> CreditScoreResult:
    """
    Calculate composite credit score from 0 (weakest) to 100 (strongest).

    Scoring weights:
    - 40%: Savings balance
    - 25%: Round-up consistency
    - 20%: Income stability
    - 15%: Community engagement

    A dimension passed as None (aggregate unavailable) scores 0 on its own
    without failing the others.
    """
    breakdown = ScoreBreakdown(
        savings=savings_score(total_savings),
        roundup=roundup_score(round_up_usage_percent),
        stability=stability_score(income_variance),
        community=community_score(community_contributions),
    )

    weighted = (
        breakdown.savings * WEIGHTS["savings"]
        + breakdown.roundup * WEIGHTS["roundup"]
        + breakdown.stability * WEIGHTS["stability"]
        + breakdown.community * WEIGHTS["community"]
    )
    score = int(weighted.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    score = max(0, min(score, 100))

    return CreditScoreResult(score=score, breakdown=breakdown, advice=advice)


def score_records(
    transactions: Optional[Sequence[Transaction]],
    goals: Optional[Sequence[SavingsGoal]],
    contribution_count: Optional[int],
    advice: Optional[str] = None,
) -> CreditScoreResult:
    """
    Main entry point: derive score inputs from raw records and score them.

    Any record input may be None when the store could not supply it.
    """
    total_savings = total_active_savings(goals) if goals is not None else None

    if transactions is not None:
        usage = round_up_usage_percent(transactions)
        variance = income_variance([t.amount for t in transactions if t.type == "income"])
    else:
        usage = None
        variance = None

    return compute_credit_score(total_savings, usage, variance, contribution_count, advice=advice)
