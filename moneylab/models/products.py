"""Bank products the calculators compare: transfer cards and certificates of deposit."""

from dataclasses import dataclass
from decimal import Decimal

from moneylab.models.schedules import Schedule


@dataclass(frozen=True)
class TransferCard:
    name: str
    intro_apr: Decimal
    intro_periods: int
    regular_apr: Decimal
    transfer_fee_percent: Decimal = Decimal("3")
    transfer_fee_min: Decimal = Decimal("5")


@dataclass
class TransferAnalysis:
    card_name: str
    transferred_ids: list[str]
    total_transferred: Decimal
    transfer_fee: Decimal
    monthly_payment: Decimal
    schedule: Schedule
    original_interest: Decimal  # Interest if the balances stay where they are
    original_periods: int

    @property
    def payoff_periods(self) -> int:
        return self.schedule.periods

    @property
    def total_interest(self) -> Decimal:
        return self.schedule.total_interest

    @property
    def total_cost(self) -> Decimal:
        return self.total_transferred + self.transfer_fee + self.total_interest

    @property
    def savings(self) -> Decimal:
        return self.original_interest - self.total_interest - self.transfer_fee


@dataclass(frozen=True)
class CDReturn:
    principal: Decimal
    final_amount: Decimal
    interest_earned: Decimal
    effective_apy: Decimal  # Annualized percent


@dataclass(frozen=True)
class EarlyWithdrawal:
    balance_at_withdrawal: Decimal
    interest_earned: Decimal
    penalty: Decimal
    final_amount: Decimal
    effective_return: Decimal  # final_amount - principal


@dataclass(frozen=True)
class LadderRung:
    term_months: int
    amount: Decimal
    interest_earned: Decimal
