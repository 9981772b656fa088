from dataclasses import dataclass
from decimal import Decimal

MONTHS_PER_YEAR = 12


@dataclass(frozen=True)
class Balance:
    """A debt (or savings goal) competing for a share of the monthly budget."""
    id: str
    principal: Decimal
    apr: Decimal  # Annual percentage, e.g. Decimal("22") for 22%
    minimum_payment: Decimal = Decimal("0")
    payment_override: Decimal | None = None  # Payment the user elects to make today

    @property
    def reserved_payment(self) -> Decimal:
        """What the holder pays each month without any payoff plan."""
        if self.payment_override is not None:
            return self.payment_override
        return self.minimum_payment


@dataclass(frozen=True)
class RatePeriod:
    """Two-phase rate: intro APR for the first intro_periods months, regular after."""
    intro_apr: Decimal
    regular_apr: Decimal
    intro_periods: int = 0

    @classmethod
    def fixed(cls, apr: Decimal) -> "RatePeriod":
        return cls(intro_apr=apr, regular_apr=apr, intro_periods=0)

    def is_intro(self, period: int) -> bool:
        return period <= self.intro_periods

    def apr_for(self, period: int) -> Decimal:
        return self.intro_apr if self.is_intro(period) else self.regular_apr

    def periodic_rate(self, period: int) -> Decimal:
        """Monthly fractional rate for a 1-based period index."""
        return self.apr_for(period) / 100 / MONTHS_PER_YEAR
