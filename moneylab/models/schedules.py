from dataclasses import dataclass, field
from decimal import Decimal


@dataclass(frozen=True)
class ScheduleEntry:
    period: int
    payment: Decimal
    principal: Decimal  # Negative when the payment does not cover interest
    interest: Decimal
    remaining_balance: Decimal
    apr: Decimal  # Annual percentage that applied this period
    is_intro: bool = False


@dataclass
class Schedule:
    entries: list[ScheduleEntry]
    starting_balance: Decimal
    payment: Decimal  # Scheduled payment; the balance's minimum for allocator schedules
    period_cap: int
    converged: bool

    @property
    def periods(self) -> int:
        return len(self.entries)

    @property
    def total_interest(self) -> Decimal:
        return sum((e.interest for e in self.entries), Decimal("0"))

    @property
    def total_principal(self) -> Decimal:
        return sum((e.principal for e in self.entries), Decimal("0"))

    @property
    def total_paid(self) -> Decimal:
        return sum((e.payment for e in self.entries), Decimal("0"))

    @property
    def ending_balance(self) -> Decimal:
        if not self.entries:
            return self.starting_balance
        return self.entries[-1].remaining_balance

    @property
    def non_convergent(self) -> bool:
        return not self.converged


@dataclass(frozen=True)
class TimelinePoint:
    """Portfolio totals after one month of a multi-balance payoff plan."""
    period: int
    total_balance: Decimal
    total_paid: Decimal  # Cumulative
    total_interest: Decimal  # Cumulative
    balances_paid_off: int


@dataclass
class AllocationResult:
    policy: str
    order: list[str]
    monthly_budget: Decimal
    schedules: dict[str, Schedule] = field(default_factory=dict)
    timeline: list[TimelinePoint] = field(default_factory=list)
    baseline_interest: Decimal = Decimal("0")  # Reserved payments only, no rollover
    converged: bool = True

    @property
    def total_interest(self) -> Decimal:
        return sum((s.total_interest for s in self.schedules.values()), Decimal("0"))

    @property
    def total_paid(self) -> Decimal:
        return sum((s.total_paid for s in self.schedules.values()), Decimal("0"))

    @property
    def months_to_payoff(self) -> int:
        return max((s.periods for s in self.schedules.values()), default=0)

    @property
    def total_interest_saved(self) -> Decimal:
        return self.baseline_interest - self.total_interest

    def payoff_month(self, balance_id: str) -> int | None:
        """Month the balance reached zero, or None if it never did."""
        schedule = self.schedules[balance_id]
        return schedule.periods if schedule.converged else None
