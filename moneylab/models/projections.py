from dataclasses import dataclass, field
from decimal import Decimal


@dataclass(frozen=True)
class ChartPoint:
    year: int
    deposited: Decimal
    total: Decimal
    interest: Decimal  # total - deposited


@dataclass(frozen=True)
class ProjectionSummary:
    future_value: Decimal
    total_deposited: Decimal
    interest_earned: Decimal
    effective_rate: Decimal  # Average simple annual % over the horizon
    real_value: Decimal  # Future value deflated to today's money
    compounding_power: Decimal  # Excess over simple interest; may be negative


@dataclass
class Projection:
    yearly: list[ChartPoint] = field(default_factory=list)
    summary: ProjectionSummary | None = None
    annual_rate_percent: Decimal = Decimal("0")
    years: int = 0


@dataclass(frozen=True)
class SimulationResult:
    """One percentile of the Monte Carlo terminal-value distribution."""
    percentile: int
    value: Decimal
