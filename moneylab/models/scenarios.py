from dataclasses import dataclass
from decimal import Decimal

from moneylab.models.projections import Projection
from moneylab.models.schedules import Schedule


@dataclass(frozen=True)
class ScenarioInput:
    """A named, precomputed run plus its cost model.

    total_cost is what the scenario costs the user over its horizon; savings
    scenarios use a negative cost (growth exceeds deposits).
    """
    name: str
    total_cost: Decimal
    payoff_periods: int
    one_time_fees: Decimal = Decimal("0")
    schedule: Schedule | None = None
    projection: Projection | None = None


@dataclass(frozen=True)
class RankedScenario:
    rank: int
    name: str
    total_cost: Decimal
    one_time_fees: Decimal
    net_benefit: Decimal  # Versus the baseline; positive is better
    payoff_periods: int
    is_baseline: bool = False
