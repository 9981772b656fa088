"""Monte Carlo rate-risk simulation for savings projections.

Each trial draws one annual rate per year, uniformly within +/- half the
profile's volatility around the base rate (floored at zero), then compounds
monthly with the contribution added before each month's growth. Trials are
vectorised with numpy; the year and month loops are plain Python.

Pass a seeded numpy Generator for reproducible percentiles.
"""

import logging
from decimal import Decimal
from enum import Enum

import numpy as np

from moneylab.config import settings
from moneylab.engine.numeric import MONTHS_PER_YEAR, round_currency, to_decimal
from moneylab.engine.validation import non_negative, positive_int
from moneylab.models.errors import EngineError, ValidationError
from moneylab.models.projections import SimulationResult

logger = logging.getLogger(__name__)


class RiskProfile(Enum):
    CONSERVATIVE = "conservative"
    MODERATE = "moderate"
    AGGRESSIVE = "aggressive"


def volatility_for(profile: RiskProfile) -> Decimal:
    """Annual rate swing in percentage points."""
    return settings.risk_volatility[profile.value]


def run_trials(
    initial: Decimal,
    periodic_contribution: Decimal,
    base_rate_percent: Decimal,
    years: int,
    volatility: Decimal,
    runs: int,
    rng: np.random.Generator,
) -> np.ndarray:
    """Terminal values of `runs` independent trials, sorted ascending."""
    half = float(volatility) / 2
    shocks = rng.uniform(-half, half, size=(runs, years))
    monthly_rates = np.maximum(0.0, float(base_rate_percent) + shocks) / 100 / MONTHS_PER_YEAR

    contribution = float(periodic_contribution)
    values = np.full(runs, float(initial))
    for year in range(years):
        growth = 1 + monthly_rates[:, year]
        for _ in range(MONTHS_PER_YEAR):
            values = (values + contribution) * growth

    return np.sort(values)


def reduce_percentiles(sorted_values: np.ndarray, percentiles: list[int]) -> list[SimulationResult]:
    """Nearest-rank percentiles: sorted_values[floor(n * p / 100)], no interpolation."""
    n = len(sorted_values)
    results = []
    for p in percentiles:
        index = min(n * p // 100, n - 1)
        results.append(SimulationResult(
            percentile=p,
            value=round_currency(to_decimal(float(sorted_values[index]))),
        ))
    return results


def simulate(
    initial: Decimal,
    periodic_contribution: Decimal,
    base_rate_percent: Decimal,
    years: int,
    risk_profile: RiskProfile | str,
    runs: int | None = None,
    rng: np.random.Generator | None = None,
    percentiles: list[int] | None = None,
) -> list[SimulationResult] | EngineError:
    """Percentile outcomes of a savings plan under rate uncertainty.

    Returns one SimulationResult per percentile, non-decreasing in value.
    """
    runs = runs if runs is not None else settings.monte_carlo_runs
    percentiles = percentiles if percentiles is not None else settings.percentiles

    errors: list[ValidationError] = []
    try:
        risk_profile = RiskProfile(risk_profile)
    except ValueError:
        errors.append(ValidationError("risk_profile", f"Unknown risk profile {risk_profile!r}"))
    errors += non_negative("initial", initial, "Initial deposit")
    errors += non_negative("periodic_contribution", periodic_contribution, "Monthly contribution")
    errors += non_negative("base_rate", base_rate_percent, "Interest rate")
    errors += positive_int("years", years, "Years")
    errors += positive_int("runs", runs, "Number of runs")
    if any(not 0 <= p < 100 for p in percentiles):
        errors.append(ValidationError("percentiles", "Percentiles must be between 0 and 99"))
    if errors:
        return EngineError.invalid(errors)

    if rng is None:
        rng = np.random.default_rng(settings.monte_carlo_seed)

    volatility = volatility_for(risk_profile)
    logger.debug(
        "Simulating %d runs over %d years at %s%% +/- %s (%s)",
        runs, years, base_rate_percent, volatility / 2, risk_profile.value,
    )
    terminal = run_trials(
        initial, periodic_contribution, base_rate_percent, years, volatility, runs, rng
    )
    return reduce_percentiles(terminal, sorted(percentiles))
