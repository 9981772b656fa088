"""Amortization schedule computation.

Pure functions: Decimal in, dataclass out. No I/O.

Every calculator that pays down a balance (balance transfer, debt payoff)
goes through apply_payment, so interest rounding and final-payment handling
live in one place. The iterative schedule is the source of truth; the
closed-form payment is only a starting point.
"""

import logging
from decimal import Decimal

from scipy.optimize import brentq

from moneylab.config import settings
from moneylab.engine.formatting import format_months
from moneylab.engine.numeric import (
    ZERO,
    apr_to_monthly_rate,
    ceil_currency,
    round_currency,
)
from moneylab.engine.validation import validate_schedule_inputs
from moneylab.models.balances import RatePeriod
from moneylab.models.errors import EngineError, ErrorKind
from moneylab.models.schedules import Schedule, ScheduleEntry

logger = logging.getLogger(__name__)

MAX_CENT_ADJUSTMENTS = 100


def monthly_payment(principal: Decimal, apr: Decimal, periods: int) -> Decimal:
    """Closed-form annuity payment, rounded up to the cent.

    Zero-rate balances amortize linearly (principal / periods).
    """
    if principal <= 0 or periods <= 0:
        return ZERO

    r = apr_to_monthly_rate(apr)
    if r == 0:
        return ceil_currency(principal / periods)

    # M = P * [r(1+r)^n] / [(1+r)^n - 1]
    factor = (1 + r) ** periods
    return ceil_currency(principal * (r * factor) / (factor - 1))


def apply_payment(
    balance: Decimal, payment: Decimal, monthly_rate: Decimal
) -> tuple[Decimal, Decimal, Decimal]:
    """One period of amortization.

    Returns (amount_paid, principal_portion, interest). The final payment
    shrinks to balance + interest. When payment < interest the principal
    portion is negative and the balance grows.
    """
    interest = round_currency(balance * monthly_rate)
    principal_paid = min(payment, balance + interest) - interest
    principal_paid = min(principal_paid, balance)
    return principal_paid + interest, principal_paid, interest


def generate_schedule(
    principal: Decimal,
    payment: Decimal | None,
    rate_policy: RatePeriod,
    period_cap: int | None = None,
    term_periods: int | None = None,
) -> Schedule | EngineError:
    """Generate a period-by-period schedule until payoff or period_cap.

    Args:
        principal: Starting balance
        payment: Fixed payment per period. None derives the closed-form
            payment for term_periods at the regular APR.
        rate_policy: Intro/regular rate resolved per period
        period_cap: Hard iteration bound (default settings.default_period_cap,
            raised to term_periods when a payment is derived)
        term_periods: Term used to derive the payment

    A schedule that hits the cap without reaching zero is returned with
    converged=False rather than as an error.
    """
    if period_cap is None:
        period_cap = settings.default_period_cap
        if payment is None and term_periods is not None:
            period_cap = max(period_cap, term_periods)

    errors = validate_schedule_inputs(principal, payment, rate_policy, period_cap, term_periods)
    if errors:
        logger.warning("Rejected schedule inputs: %s", [e.field for e in errors])
        return EngineError.invalid(errors)

    if payment is None:
        payment = monthly_payment(principal, rate_policy.regular_apr, term_periods)

    balance = round_currency(principal)
    entries: list[ScheduleEntry] = []

    for period in range(1, period_cap + 1):
        if balance <= 0:
            break

        paid, principal_paid, interest = apply_payment(
            balance, payment, rate_policy.periodic_rate(period)
        )
        balance -= principal_paid

        entries.append(ScheduleEntry(
            period=period,
            payment=paid,
            principal=principal_paid,
            interest=interest,
            remaining_balance=balance,
            apr=rate_policy.apr_for(period),
            is_intro=rate_policy.is_intro(period),
        ))

    converged = balance <= 0
    if not converged:
        logger.warning(
            "Payment %s does not pay off %s within %d periods (%s left)",
            payment, principal, period_cap, balance,
        )
    else:
        logger.debug("Paid off %s in %d periods at %s/period", principal, len(entries), payment)

    return Schedule(
        entries=entries,
        starting_balance=round_currency(principal),
        payment=payment,
        period_cap=period_cap,
        converged=converged,
    )


def payoff_warning(schedule: Schedule) -> EngineError | None:
    """Turn a non-convergent schedule into a displayable warning."""
    if schedule.converged:
        return None
    return EngineError(
        kind=ErrorKind.NON_CONVERGENT,
        message=(
            f"payment too low to pay off within {schedule.period_cap} periods"
            f" ({format_months(schedule.period_cap)})"
        ),
    )


def _signed_residual(principal: float, rates: list[float], payment: float) -> float:
    """Balance left after len(rates) payments, allowed to go negative."""
    balance = principal
    for r in rates:
        balance = balance * (1 + r) - payment
    return balance


def solve_payment_for_term(
    principal: Decimal,
    rate_policy: RatePeriod,
    term_periods: int,
) -> Decimal | EngineError:
    """Smallest whole-cent payment that pays off principal within term_periods.

    Brent's method on the unclamped residual finds the exact payment; the
    iterative schedule then confirms it, adding cents where interest rounding
    leaves a remainder.
    """
    errors = validate_schedule_inputs(principal, Decimal("1"), rate_policy, term_periods, term_periods)
    if errors:
        return EngineError.invalid(errors)
    if principal <= 0:
        return ZERO

    rates = [float(rate_policy.periodic_rate(k)) for k in range(1, term_periods + 1)]
    p = float(principal)
    growth = 1.0
    for r in rates:
        growth *= 1 + r
    upper = p * growth + 1.0

    exact = brentq(lambda pmt: _signed_residual(p, rates, pmt), 0.0, upper, xtol=1e-9, maxiter=1000)
    # Drop solver noise below a millionth of a cent before rounding up
    candidate = ceil_currency(Decimal(str(exact)).quantize(Decimal("0.000001")))

    for _ in range(MAX_CENT_ADJUSTMENTS):
        schedule = generate_schedule(principal, candidate, rate_policy, period_cap=term_periods)
        if schedule.converged:
            return candidate
        candidate += Decimal("0.01")

    logger.warning("Could not reconcile payment for %s over %d periods", principal, term_periods)
    return EngineError(
        kind=ErrorKind.NON_CONVERGENT,
        message=f"no payment found that pays off within {term_periods} periods",
    )


def yearly_summary(schedule: Schedule) -> list[dict[str, Decimal]]:
    """Aggregate a schedule by year.

    Returns list of dicts with keys: year, principal, interest, payments, ending_balance
    """
    yearly: list[dict[str, Decimal]] = []
    year_principal = ZERO
    year_interest = ZERO
    year_payments = ZERO

    for e in schedule.entries:
        year_principal += e.principal
        year_interest += e.interest
        year_payments += e.payment

        if e.period % 12 == 0 or e.period == schedule.periods:
            yearly.append({
                "year": Decimal((e.period - 1) // 12 + 1),
                "principal": year_principal,
                "interest": year_interest,
                "payments": year_payments,
                "ending_balance": e.remaining_balance,
            })
            year_principal = ZERO
            year_interest = ZERO
            year_payments = ZERO

    return yearly
