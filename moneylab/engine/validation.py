"""Input checks for every engine entry point.

Pure functions: inputs in, list of ValidationError out. An empty list means
the engine may compute.
"""

from decimal import Decimal

from moneylab.models.balances import Balance, RatePeriod
from moneylab.models.errors import ValidationError

MAX_APR = Decimal("100")  # Anything above this is almost certainly a typo


def non_negative(field: str, value: Decimal, label: str) -> list[ValidationError]:
    if value < 0:
        return [ValidationError(field, f"{label} cannot be negative")]
    return []


def positive_int(field: str, value: int, label: str) -> list[ValidationError]:
    if value <= 0:
        return [ValidationError(field, f"{label} must be greater than zero")]
    return []


def validate_rate_policy(policy: RatePeriod, field: str = "rate") -> list[ValidationError]:
    errors = []
    errors += non_negative(f"{field}_intro_apr", policy.intro_apr, "Intro APR")
    errors += non_negative(f"{field}_regular_apr", policy.regular_apr, "Regular APR")
    if policy.intro_periods < 0:
        errors.append(ValidationError(f"{field}_intro_periods", "Intro period cannot be negative"))
    return errors


def validate_schedule_inputs(
    principal: Decimal,
    payment: Decimal | None,
    rate_policy: RatePeriod,
    period_cap: int,
    term_periods: int | None,
) -> list[ValidationError]:
    errors = non_negative("principal", principal, "Principal")
    errors += validate_rate_policy(rate_policy)
    errors += positive_int("period_cap", period_cap, "Period cap")

    if payment is None:
        if term_periods is None:
            errors.append(ValidationError("payment", "Provide a payment or a term to derive one from"))
        else:
            errors += positive_int("term_periods", term_periods, "Term")
    elif payment <= 0 and principal > 0:
        errors.append(ValidationError("payment", "payment insufficient to amortize"))
    return errors


def validate_balances(balances: list[Balance]) -> list[ValidationError]:
    if not balances:
        return [ValidationError("balances", "Add at least one balance to analyze")]

    errors: list[ValidationError] = []
    seen: set[str] = set()
    for b in balances:
        if b.id in seen:
            errors.append(ValidationError(f"{b.id}_id", f"Duplicate balance id {b.id!r}"))
        seen.add(b.id)

        errors += non_negative(f"{b.id}_balance", b.principal, "Balance")
        errors += non_negative(f"{b.id}_rate", b.apr, "Interest rate")
        errors += non_negative(f"{b.id}_minimum", b.minimum_payment, "Minimum payment")
        if b.principal > 0 and b.minimum_payment <= 0:
            errors.append(ValidationError(
                f"{b.id}_minimum", "Minimum payment must be greater than zero"
            ))
        if b.apr > MAX_APR:
            errors.append(ValidationError(f"{b.id}_rate", "Interest rate seems unusually high"))
        if b.payment_override is not None and b.payment_override < b.minimum_payment:
            errors.append(ValidationError(
                f"{b.id}_payment", "Monthly payment cannot be less than minimum payment"
            ))
    return errors


def validate_growth_inputs(
    initial: Decimal,
    periodic_contribution: Decimal,
    annual_rate_percent: Decimal,
    years: int,
) -> list[ValidationError]:
    errors = non_negative("initial", initial, "Initial deposit")
    errors += non_negative("periodic_contribution", periodic_contribution, "Monthly contribution")
    errors += non_negative("annual_rate", annual_rate_percent, "Interest rate")
    errors += positive_int("years", years, "Years")
    return errors


def validate_deposit(principal: Decimal, apy: Decimal, term_months: int | None) -> list[ValidationError]:
    errors = []
    if principal <= 0:
        errors.append(ValidationError("principal", "Deposit must be greater than zero"))
    errors += non_negative("apy", apy, "APY")
    if term_months is not None:
        errors += positive_int("term_months", term_months, "Term")
    return errors


def validate_withdrawal(withdrawal_month: int, penalty_months: int, term_months: int | None) -> list[ValidationError]:
    errors = positive_int("withdrawal_month", withdrawal_month, "Withdrawal month")
    if term_months is not None and withdrawal_month > term_months:
        errors.append(ValidationError("withdrawal_month", "Withdrawal must happen before the CD matures"))
    errors += non_negative("penalty_months", penalty_months, "Penalty")
    return errors
