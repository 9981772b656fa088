"""Certificate of deposit returns, early withdrawal penalties and ladders.

Monthly compounding. Pure functions. No I/O.
"""

from decimal import Decimal

from moneylab.engine.numeric import (
    MONTHS_PER_YEAR,
    ZERO,
    apr_to_monthly_rate,
    percent_to_fraction,
    round_currency,
    round_rate,
    to_decimal,
)
from moneylab.engine.validation import non_negative, validate_deposit, validate_withdrawal
from moneylab.models.errors import EngineError, ValidationError
from moneylab.models.products import CDReturn, EarlyWithdrawal, LadderRung


def effective_apy(principal: Decimal, final_amount: Decimal, term_months: int) -> Decimal:
    """Annualized percent growth implied by principal -> final_amount over the term."""
    if principal <= 0 or term_months <= 0:
        return ZERO
    ratio = float(final_amount / principal)
    return round_rate(to_decimal((ratio ** (MONTHS_PER_YEAR / term_months) - 1) * 100))


def cd_return(principal: Decimal, apy: Decimal, term_months: int) -> CDReturn | EngineError:
    errors = validate_deposit(principal, apy, term_months)
    if errors:
        return EngineError.invalid(errors)

    final_amount = round_currency(principal * (1 + apr_to_monthly_rate(apy)) ** term_months)
    return CDReturn(
        principal=principal,
        final_amount=final_amount,
        interest_earned=final_amount - principal,
        effective_apy=effective_apy(principal, final_amount, term_months),
    )


def early_withdrawal(
    principal: Decimal,
    apy: Decimal,
    withdrawal_month: int,
    penalty_months: int,
    term_months: int | None = None,
) -> EarlyWithdrawal | EngineError:
    """Cash out before maturity.

    The penalty is penalty_months of simple interest on the principal, capped
    at the interest actually earned so the deposit itself is never touched.
    """
    errors = validate_deposit(principal, apy, term_months)
    errors += validate_withdrawal(withdrawal_month, penalty_months, term_months)
    if errors:
        return EngineError.invalid(errors)

    monthly_rate = apr_to_monthly_rate(apy)
    balance = principal
    earned = ZERO
    for _ in range(withdrawal_month):
        interest = balance * monthly_rate
        balance += interest
        earned += interest

    penalty = min(earned, principal * percent_to_fraction(apy) * penalty_months / MONTHS_PER_YEAR)
    final_amount = balance - penalty
    return EarlyWithdrawal(
        balance_at_withdrawal=round_currency(balance),
        interest_earned=round_currency(earned),
        penalty=round_currency(penalty),
        final_amount=round_currency(final_amount),
        effective_return=round_currency(final_amount - principal),
    )


def cd_ladder(total: Decimal, rungs: int, apy: Decimal) -> list[LadderRung] | EngineError:
    """Split `total` evenly into CDs maturing every 12 months."""
    errors = non_negative("total", total, "Ladder total")
    errors += non_negative("apy", apy, "APY")
    if rungs < 0:
        errors.append(ValidationError("ladder_rungs", "Number of rungs cannot be negative"))
    if errors:
        return EngineError.invalid(errors)
    if rungs == 0 or total == 0:
        return []

    amount = round_currency(total / rungs)
    monthly_rate = apr_to_monthly_rate(apy)
    ladder = []
    for i in range(rungs):
        term = MONTHS_PER_YEAR * (i + 1)
        ladder.append(LadderRung(
            term_months=term,
            amount=amount,
            interest_earned=round_currency(amount * (1 + monthly_rate) ** term) - amount,
        ))
    return ladder
