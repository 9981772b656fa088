"""Rank competing scenarios (bank rates, cards, payoff plans) against a baseline.

Pure reduction over precomputed schedules and projections.
"""

from decimal import Decimal

from moneylab.engine.numeric import MONTHS_PER_YEAR, ZERO
from moneylab.models.errors import EngineError, ValidationError
from moneylab.models.projections import Projection
from moneylab.models.scenarios import RankedScenario, ScenarioInput
from moneylab.models.schedules import Schedule


def scenario_from_schedule(name: str, schedule: Schedule, one_time_fees: Decimal = ZERO) -> ScenarioInput:
    """Debt scenario: the cost is every payment made."""
    return ScenarioInput(
        name=name,
        total_cost=schedule.total_paid,
        payoff_periods=schedule.periods,
        one_time_fees=one_time_fees,
        schedule=schedule,
    )


def scenario_from_projection(name: str, projection: Projection, one_time_fees: Decimal = ZERO) -> ScenarioInput:
    """Savings scenario: the cost is deposits minus what they grow to (negative = gain)."""
    summary = projection.summary
    return ScenarioInput(
        name=name,
        total_cost=summary.total_deposited - summary.future_value,
        payoff_periods=projection.years * MONTHS_PER_YEAR,
        one_time_fees=one_time_fees,
        projection=projection,
    )


def compare(scenarios: list[ScenarioInput], baseline_index: int = 0) -> list[RankedScenario] | EngineError:
    """Rank scenarios by net benefit over the baseline.

    net benefit = baseline.total_cost - scenario.total_cost - scenario.one_time_fees

    Highest net benefit first; ties go to the shorter payoff.
    """
    if not scenarios:
        return EngineError.invalid([ValidationError("scenarios", "Add at least one scenario to compare")])
    if not 0 <= baseline_index < len(scenarios):
        return EngineError.invalid([
            ValidationError("baseline_index", f"Baseline index {baseline_index} is out of range")
        ])

    baseline_cost = scenarios[baseline_index].total_cost
    scored = [
        (baseline_cost - s.total_cost - s.one_time_fees, i, s)
        for i, s in enumerate(scenarios)
    ]
    scored.sort(key=lambda item: (-item[0], item[2].payoff_periods))

    return [
        RankedScenario(
            rank=rank,
            name=s.name,
            total_cost=s.total_cost,
            one_time_fees=s.one_time_fees,
            net_benefit=net_benefit,
            payoff_periods=s.payoff_periods,
            is_baseline=i == baseline_index,
        )
        for rank, (net_benefit, i, s) in enumerate(scored, start=1)
    ]
