"""Unit tests for credit score logic"""

import pytest
from datetime import date
from decimal import Decimal
from roundup_gateway.domain.models import SavingsGoal, Transaction
from roundup_gateway.domain.scoring import (
    community_score,
    compute_credit_score,
    income_variance,
    round_up_usage_percent,
    roundup_score,
    savings_score,
    score_records,
    stability_score,
    total_active_savings,
)

LEVELS = {0, 20, 40, 60, 80, 100}


def test_savings_score_thresholds():
    """Test savings buckets (highest threshold met wins)"""
    assert savings_score(50000) == 100
    assert savings_score(49999.99) == 80
    assert savings_score(25000) == 80
    assert savings_score(10000) == 60
    assert savings_score(5000) == 40
    assert savings_score(1000) == 20
    assert savings_score(999) == 0
    assert savings_score(0) == 0


def test_roundup_score_thresholds():
    assert roundup_score(100) == 100
    assert roundup_score(80) == 100
    assert roundup_score(79.9) == 80
    assert roundup_score(40) == 60
    assert roundup_score(20) == 40
    assert roundup_score(10) == 20
    assert roundup_score(9.9) == 0


def test_stability_score_lower_variance_is_better():
    """Test stability uses ceilings rather than floors"""
    assert stability_score(0) == 100
    assert stability_score(0.1) == 100
    assert stability_score(0.15) == 80
    assert stability_score(0.3) == 60
    assert stability_score(0.4) == 40
    assert stability_score(0.5) == 20
    assert stability_score(0.51) == 0
    assert stability_score(1.0) == 0


def test_community_score_thresholds():
    assert community_score(12) == 100
    assert community_score(7) == 80
    assert community_score(5) == 60
    assert community_score(4) == 40
    assert community_score(1) == 20
    assert community_score(0) == 0


def test_compute_credit_score_all_max():
    """Test top of every bucket gives composite 100"""
    result = compute_credit_score(
        total_savings=50000,
        round_up_usage_percent=80,
        income_variance=0.1,
        community_contributions=10,
    )

    assert result.score == 100
    assert (result.breakdown.savings, result.breakdown.roundup) == (100, 100)
    assert (result.breakdown.stability, result.breakdown.community) == (100, 100)


def test_compute_credit_score_all_zero():
    """Test bottom of every bucket gives composite 0"""
    result = compute_credit_score(
        total_savings=0,
        round_up_usage_percent=0,
        income_variance=1.0,
        community_contributions=0,
    )

    assert result.score == 0
    assert result.breakdown.savings == 0
    assert result.breakdown.roundup == 0
    assert result.breakdown.stability == 0
    assert result.breakdown.community == 0


def test_compute_credit_score_weights():
    """Test 40/25/20/15 weighting"""
    # 80*0.40 + 60*0.25 + 60*0.20 + 40*0.15 = 32 + 15 + 12 + 6
    result = compute_credit_score(25000, 45, 0.25, 3)
    assert result.score == 65

    assert compute_credit_score(50000, 0, 1.0, 0).score == 40
    assert compute_credit_score(0, 80, 1.0, 0).score == 25
    assert compute_credit_score(0, 0, 0.1, 0).score == 20
    assert compute_credit_score(0, 0, 1.0, 10).score == 15


@pytest.mark.parametrize("savings", [0, 1000, 7000, 30000, 60000])
@pytest.mark.parametrize("usage", [0, 15, 55, 90])
@pytest.mark.parametrize("variance", [0.05, 0.35, 0.9])
@pytest.mark.parametrize("contributions", [0, 3, 8])
def test_compute_credit_score_ranges(savings, usage, variance, contributions):
    """Test sub-scores stay on the six levels and composite stays in [0, 100]"""
    result = compute_credit_score(savings, usage, variance, contributions)

    b = result.breakdown
    assert {b.savings, b.roundup, b.stability, b.community} <= LEVELS
    assert 0 <= result.score <= 100
    assert isinstance(result.score, int)


def test_compute_credit_score_missing_dimension_scores_zero():
    """Test a missing aggregate zeroes its own dimension only"""
    result = compute_credit_score(50000, 80, None, 10)

    assert result.breakdown.stability == 0
    assert result.breakdown.savings == 100
    assert result.score == 80


def test_compute_credit_score_passes_advice_through():
    result = compute_credit_score(0, 0, 1.0, 0, advice="Keep going")
    assert result.advice == "Keep going"
    assert compute_credit_score(0, 0, 1.0, 0).advice is None


def test_income_variance():
    """Test coefficient of variation (population stddev / mean)"""
    assert income_variance([Decimal("100"), Decimal("100")]) == 0
    assert income_variance([50, 150]) == Decimal("0.5")
    assert income_variance([Decimal("500")]) == 0
    assert income_variance([]) == 0
    assert income_variance([0, 0]) == 0


def test_round_up_usage_percent():
    today = date.today()
    transactions = [
        Transaction(Decimal("10"), "expense", today, Decimal("5"), True),
        Transaction(Decimal("12"), "expense", today, Decimal("3"), True),
        Transaction(Decimal("900"), "income", today),
        Transaction(Decimal("50"), "savings", today),
    ]

    assert round_up_usage_percent(transactions) == 50
    assert round_up_usage_percent([]) == 0


def test_total_active_savings_ignores_inactive_goals():
    goals = [
        SavingsGoal(Decimal("1200.50"), Decimal("5000"), "active"),
        SavingsGoal(Decimal("800"), Decimal("1000"), "active"),
        SavingsGoal(Decimal("9999"), Decimal("9999"), "completed"),
        SavingsGoal(Decimal("300"), Decimal("1000"), "cancelled"),
    ]
    assert total_active_savings(goals) == Decimal("2000.50")


def test_score_records_integration():
    """Test complete scoring flow from raw records"""
    today = date.today()
    transactions = [Transaction(Decimal("47"), "expense", today, Decimal("3"), True) for _ in range(8)]
    transactions += [
        Transaction(Decimal("2000"), "income", today),
        Transaction(Decimal("2000"), "income", today),
    ]
    goals = [SavingsGoal(Decimal("12000"), Decimal("20000"))]

    result = score_records(transactions, goals, contribution_count=5)

    assert result.breakdown.savings == 60
    assert result.breakdown.roundup == 100  # 8 of 10
    assert result.breakdown.stability == 100  # identical income
    assert result.breakdown.community == 60
    assert result.score == 78  # 24 + 25 + 20 + 9


def test_score_records_degrades_each_dimension_independently():
    """Test unavailable record sources zero only their own dimensions"""
    goals = [SavingsGoal(Decimal("50000"), Decimal("50000"))]

    result = score_records(transactions=None, goals=goals, contribution_count=None)

    assert result.breakdown.savings == 100
    assert result.breakdown.roundup == 0
    assert result.breakdown.stability == 0
    assert result.breakdown.community == 0
    assert result.score == 40


def test_score_records_no_history():
    """Test a new user: no income history counts as zero variance"""
    result = score_records(transactions=[], goals=[], contribution_count=0)

    assert result.breakdown.stability == 100
    assert result.score == 20
