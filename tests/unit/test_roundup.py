"""Unit tests for round-up calculation"""

import pytest
from decimal import Decimal
from roundup_gateway.domain.exceptions import InvalidAmountError
from roundup_gateway.domain.roundup import apply_round_up, round_up


@pytest.mark.parametrize(
    "amount, expected",
    [
        (199.5, Decimal("0.5")),
        (203, Decimal("2")),
        (205, Decimal("5")),
        (198.75, Decimal("1.25")),
    ],
)
def test_round_up_examples(amount, expected):
    """Test simulator examples"""
    assert round_up(amount) == expected


def test_round_up_exact_multiple_returns_full_denomination():
    """Test exact multiples never produce zero spare change"""
    for amount in (5, 10, 100, 5000):
        assert round_up(amount) == Decimal("5")


def test_round_up_reaches_next_multiple():
    """Test amount + round-up is the smallest multiple of 5 above amount"""
    for cents in range(1, 2000, 37):
        amount = Decimal(cents) / 100
        result = round_up(amount)

        assert 0 < result <= 5
        total = amount + result
        assert total % 5 == 0
        if cents % 500 != 0:
            assert total - 5 < amount


def test_round_up_no_float_drift():
    """Test subunit amounts keep exact cents"""
    assert round_up(0.1) == Decimal("4.9")
    assert round_up("12.34") == Decimal("2.66")


@pytest.mark.parametrize("amount", [0, -3, Decimal("-0.01")])
def test_round_up_rejects_non_positive(amount):
    """Test zero and negative amounts are rejected"""
    with pytest.raises(InvalidAmountError):
        round_up(amount)


def test_round_up_custom_denomination():
    """Test a denomination other than 5"""
    assert round_up(Decimal("7.25"), denomination=10) == Decimal("2.75")
    assert round_up(20, denomination=10) == Decimal("10")


def test_apply_round_up_expense_only():
    """Test only expenses get a round-up"""
    assert apply_round_up(203, "expense") == (Decimal("2"), True)
    assert apply_round_up(100, "income") == (Decimal("0"), False)
    assert apply_round_up(42, "savings") == (Decimal("0"), False)
    assert apply_round_up(42, "investment") == (Decimal("0"), False)


def test_apply_round_up_rejects_non_positive_expense():
    with pytest.raises(InvalidAmountError):
        apply_round_up(0, "expense")


@pytest.mark.parametrize("amount", [4.999, Decimal("0.001"), "12.345"])
def test_round_up_rejects_sub_cent_amounts(amount):
    """Test amounts finer than a cent are rejected instead of yielding a sub-cent round-up"""
    with pytest.raises(InvalidAmountError):
        round_up(amount)


def test_round_up_accepts_trailing_zero_cents():
    assert round_up(Decimal("199.500")) == Decimal("0.5")
