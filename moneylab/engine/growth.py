"""Compound growth projections for savings calculators.

Closed form, monthly compounding, contributions at the end of each month.
Pure functions. No I/O.
"""

from decimal import Decimal

from moneylab.config import settings
from moneylab.engine.comparison import compare, scenario_from_projection
from moneylab.engine.formatting import format_currency, format_months, format_percent
from moneylab.engine.numeric import (
    MONTHS_PER_YEAR,
    ZERO,
    apr_to_monthly_rate,
    clamp_min,
    percent_to_fraction,
    round_currency,
    round_rate,
)
from moneylab.engine.validation import non_negative, validate_growth_inputs
from moneylab.models.errors import EngineError
from moneylab.models.insights import Insight, InsightLevel
from moneylab.models.projections import ChartPoint, Projection, ProjectionSummary
from moneylab.models.scenarios import RankedScenario

# Typical savings APYs; the first entry is the comparison baseline
DEFAULT_BANK_RATES: dict[str, Decimal] = {
    "Big Bank (0.01%)": Decimal("0.01"),
    "Credit Union (2.5%)": Decimal("2.5"),
    "Online Bank (4.5%)": Decimal("4.5"),
    "Best Rate (5.2%)": Decimal("5.2"),
}


def _balance_after(initial: Decimal, contribution: Decimal, monthly_rate: Decimal, months: int) -> Decimal:
    """Lump sum FV plus ordinary annuity FV after `months` months."""
    growth = (1 + monthly_rate) ** months
    lump_sum = initial * growth
    if monthly_rate == 0:
        annuity = contribution * months
    else:
        annuity = contribution * (growth - 1) / monthly_rate
    return lump_sum + annuity


def project(
    initial: Decimal,
    periodic_contribution: Decimal,
    annual_rate_percent: Decimal,
    years: int,
    inflation_percent: Decimal | None = None,
) -> Projection | EngineError:
    """Year-by-year growth of a deposit plus monthly contributions.

    Returns Projection with one ChartPoint per year (year 0 = initial deposit)
    and a summary including the inflation-deflated real value.
    """
    if inflation_percent is None:
        inflation_percent = settings.default_inflation_percent

    errors = validate_growth_inputs(initial, periodic_contribution, annual_rate_percent, years)
    errors += non_negative("inflation", inflation_percent, "Inflation rate")
    if errors:
        return EngineError.invalid(errors)

    r = apr_to_monthly_rate(annual_rate_percent)
    yearly: list[ChartPoint] = []
    for year in range(years + 1):
        months = year * MONTHS_PER_YEAR
        total = round_currency(_balance_after(initial, periodic_contribution, r, months))
        deposited = round_currency(initial + periodic_contribution * months)
        yearly.append(ChartPoint(
            year=year,
            deposited=deposited,
            total=total,
            interest=total - deposited,
        ))

    future_value = yearly[-1].total
    total_deposited = yearly[-1].deposited
    interest_earned = future_value - total_deposited

    if total_deposited > 0:
        effective_rate = round_rate((future_value / total_deposited - 1) / years * 100)
    else:
        effective_rate = ZERO

    inflation = percent_to_fraction(inflation_percent)
    real_value = round_currency(future_value / (1 + inflation) ** years)

    # Simple interest on every dollar deposited, for the full horizon
    simple_value = total_deposited * (1 + percent_to_fraction(annual_rate_percent) * years)
    compounding_power = round_currency(future_value - simple_value)

    return Projection(
        yearly=yearly,
        summary=ProjectionSummary(
            future_value=future_value,
            total_deposited=total_deposited,
            interest_earned=interest_earned,
            effective_rate=effective_rate,
            real_value=real_value,
            compounding_power=compounding_power,
        ),
        annual_rate_percent=annual_rate_percent,
        years=years,
    )


def future_value(
    principal: Decimal,
    annual_rate_percent: Decimal,
    years: int,
    monthly_contribution: Decimal = ZERO,
    compounding_frequency: int = MONTHS_PER_YEAR,
) -> Decimal:
    """Future value with a configurable compounding frequency."""
    periods = compounding_frequency * years
    r = percent_to_fraction(annual_rate_percent) / compounding_frequency
    return round_currency(_balance_after(principal, monthly_contribution, r, periods))


def present_value(
    target: Decimal,
    annual_rate_percent: Decimal,
    years: int,
    compounding_frequency: int = MONTHS_PER_YEAR,
) -> Decimal:
    r = percent_to_fraction(annual_rate_percent) / compounding_frequency
    return round_currency(target / (1 + r) ** (compounding_frequency * years))


def required_monthly_savings(
    goal: Decimal,
    annual_rate_percent: Decimal,
    years: int,
    current_savings: Decimal = ZERO,
) -> Decimal | EngineError:
    """Monthly deposit needed to reach goal in `years`, given what is saved already."""
    errors = validate_growth_inputs(current_savings, ZERO, annual_rate_percent, years)
    errors += non_negative("goal", goal, "Savings goal")
    if errors:
        return EngineError.invalid(errors)

    r = apr_to_monthly_rate(annual_rate_percent)
    months = years * MONTHS_PER_YEAR
    remaining = clamp_min(goal - current_savings * (1 + r) ** months)
    if remaining == 0:
        return ZERO
    if r == 0:
        return round_currency(remaining / months)
    return round_currency(remaining * r / ((1 + r) ** months - 1))


def bank_rate_scenarios(
    initial: Decimal,
    periodic_contribution: Decimal,
    years: int,
    rates: dict[str, Decimal] | None = None,
) -> list[RankedScenario] | EngineError:
    """Rank savings accounts by extra interest earned versus the first rate listed."""
    rates = rates if rates is not None else DEFAULT_BANK_RATES

    scenarios = []
    for name, rate in rates.items():
        projection = project(initial, periodic_contribution, rate, years)
        if isinstance(projection, EngineError):
            return projection
        scenarios.append(scenario_from_projection(name, projection))

    return compare(scenarios, baseline_index=0)


def savings_insights(projection: Projection, periodic_contribution: Decimal) -> list[Insight]:
    """Rate and habit observations for a finished projection. Thresholds live in settings."""
    rate = projection.annual_rate_percent
    years = projection.years
    summary = projection.summary
    insights = []

    if rate < settings.low_rate_percent:
        insights.append(Insight(
            level=InsightLevel.WARNING,
            title="Very Low Interest Rate",
            message=(
                f"At {format_percent(rate)} interest, you're barely beating inflation."
                " Consider high-yield savings accounts offering 4-5% APY."
            ),
        ))

    if rate >= settings.strong_rate_percent:
        insights.append(Insight(
            level=InsightLevel.SUCCESS,
            title="Excellent Savings Rate",
            message=(
                f"Your {format_percent(rate)} rate is competitive! You'll earn"
                f" {format_currency(summary.interest_earned, cents=True)} in interest over {years} years."
            ),
        ))

    if periodic_contribution >= settings.emergency_fund_deposit and years <= settings.emergency_fund_max_years:
        months = settings.emergency_fund_months
        insights.append(Insight(
            level=InsightLevel.INFO,
            title="Emergency Fund Progress",
            message=(
                f"At {format_currency(periodic_contribution)}/month, you could build a"
                f" {format_currency(periodic_contribution * months)} emergency fund in {format_months(months)}."
            ),
        ))

    if rate > settings.big_bank_min_rate_percent:
        # Simple-interest estimate of what a big bank would have paid
        big_bank_interest = summary.total_deposited * percent_to_fraction(settings.big_bank_rate_percent) * years
        advantage = summary.interest_earned - big_bank_interest
        if advantage > settings.big_bank_min_advantage:
            insights.append(Insight(
                level=InsightLevel.SUCCESS,
                title="Smart Banking Choice",
                message=(
                    f"Compared to big banks ({format_percent(settings.big_bank_rate_percent)} APY),"
                    f" you'll earn {format_currency(advantage, cents=True)} more with your current rate!"
                ),
            ))

    return insights
