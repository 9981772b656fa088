"""Canonical test fixtures used across engine and API tests.

Debts: a high-APR credit card, a store card and a small personal loan.
Transfer card: 0% for 15 months, then 21.99%, 3% fee ($5 minimum).
"""

import numpy as np
import pytest
from decimal import Decimal

from moneylab.models.balances import Balance
from moneylab.models.products import TransferCard


@pytest.fixture
def card_balances() -> list[Balance]:
    return [
        Balance(id="visa", principal=Decimal("3000"), apr=Decimal("24"), minimum_payment=Decimal("90")),
        Balance(id="store", principal=Decimal("2000"), apr=Decimal("19.99"), minimum_payment=Decimal("60")),
    ]


@pytest.fixture
def mixed_balances() -> list[Balance]:
    """Highest APR is also the largest balance, so avalanche and snowball disagree."""
    return [
        Balance(id="card", principal=Decimal("5000"), apr=Decimal("24"), minimum_payment=Decimal("100")),
        Balance(id="loan", principal=Decimal("1000"), apr=Decimal("6"), minimum_payment=Decimal("50")),
    ]


@pytest.fixture
def intro_card() -> TransferCard:
    return TransferCard(
        name="Intro 0% Card",
        intro_apr=Decimal("0"),
        intro_periods=15,
        regular_apr=Decimal("21.99"),
        transfer_fee_percent=Decimal("3"),
        transfer_fee_min=Decimal("5"),
    )


class ZeroShockRng:
    """Stands in for numpy's Generator: every rate draw lands on the base rate."""

    def uniform(self, low, high, size):
        return np.zeros(size)


class LowShockRng:
    """Every draw lands on the bottom of the volatility band."""

    def uniform(self, low, high, size):
        return np.full(size, low)


@pytest.fixture
def zero_shock_rng() -> ZeroShockRng:
    return ZeroShockRng()


@pytest.fixture
def low_shock_rng() -> LowShockRng:
    return LowShockRng()
