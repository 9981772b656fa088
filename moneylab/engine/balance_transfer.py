"""Balance transfer analysis: move card balances onto an intro-APR card.

The transferred amount plus the fee is amortized on the new card's
intro/regular rate. The alternative is every balance staying put at its
current payment.
"""

import logging
from decimal import Decimal

from moneylab.config import settings
from moneylab.engine.amortization import generate_schedule, monthly_payment
from moneylab.engine.comparison import compare
from moneylab.engine.formatting import format_currency
from moneylab.engine.numeric import ZERO, round_currency
from moneylab.engine.validation import (
    non_negative,
    positive_int,
    validate_balances,
    validate_rate_policy,
)
from moneylab.models.balances import Balance, RatePeriod
from moneylab.models.errors import EngineError, ValidationError
from moneylab.models.insights import Recommendation, TransferAction
from moneylab.models.products import TransferAnalysis, TransferCard
from moneylab.models.scenarios import RankedScenario, ScenarioInput

logger = logging.getLogger(__name__)

PAYMENT_MULTIPLIERS = [Decimal("1"), Decimal("0.75"), Decimal("1.25"), Decimal("1.5")]


def card_rate_policy(card: TransferCard) -> RatePeriod:
    return RatePeriod(
        intro_apr=card.intro_apr,
        regular_apr=card.regular_apr,
        intro_periods=card.intro_periods,
    )


def transfer_fee(amount: Decimal, card: TransferCard) -> Decimal:
    """Percentage fee with a floor."""
    return round_currency(max(amount * card.transfer_fee_percent / 100, card.transfer_fee_min))


def suggested_payment(amount: Decimal, card: TransferCard) -> Decimal:
    """Payment that clears the balance by the end of the intro period, priced at the regular APR."""
    term = card.intro_periods or settings.default_period_cap
    return monthly_payment(amount, card.regular_apr, term)


def _validate(
    balances: list[Balance],
    card: TransferCard,
    transfer_ids: list[str] | None,
    period_cap: int,
) -> list[ValidationError]:
    errors = validate_balances(balances)
    errors += validate_rate_policy(card_rate_policy(card), field="card")
    errors += non_negative("card_fee_percent", card.transfer_fee_percent, "Transfer fee")
    errors += non_negative("card_fee_min", card.transfer_fee_min, "Minimum transfer fee")
    errors += positive_int("period_cap", period_cap, "Period cap")
    if transfer_ids is not None:
        known = {b.id for b in balances}
        if not transfer_ids:
            errors.append(ValidationError("transfer_ids", "Select at least one debt to transfer"))
        for missing in sorted(set(transfer_ids) - known):
            errors.append(ValidationError("transfer_ids", f"Unknown balance {missing!r}"))
    return errors


def _keep_as_is(balances: list[Balance], period_cap: int) -> tuple[Decimal, Decimal, int]:
    """(total paid, total interest, longest payoff) with every balance left where it is."""
    paid = ZERO
    interest = ZERO
    periods = 0
    for b in balances:
        schedule = generate_schedule(b.principal, b.reserved_payment, RatePeriod.fixed(b.apr), period_cap)
        paid += schedule.total_paid
        interest += schedule.total_interest
        periods = max(periods, schedule.periods)
    return paid, interest, periods


def analyze_transfer(
    balances: list[Balance],
    card: TransferCard,
    payment: Decimal | None = None,
    transfer_ids: list[str] | None = None,
    period_cap: int | None = None,
) -> TransferAnalysis | EngineError:
    """Cost of moving the selected balances (default: all) onto `card`."""
    period_cap = period_cap if period_cap is not None else settings.default_period_cap

    errors = _validate(balances, card, transfer_ids, period_cap)
    if errors:
        return EngineError.invalid(errors)

    selected = [b for b in balances if transfer_ids is None or b.id in transfer_ids]
    total = sum((b.principal for b in selected), ZERO)
    fee = transfer_fee(total, card)
    if payment is None:
        payment = suggested_payment(total + fee, card)

    schedule = generate_schedule(total + fee, payment, card_rate_policy(card), period_cap)
    if isinstance(schedule, EngineError):
        return schedule

    _, original_interest, original_periods = _keep_as_is(selected, period_cap)

    analysis = TransferAnalysis(
        card_name=card.name,
        transferred_ids=[b.id for b in selected],
        total_transferred=total,
        transfer_fee=fee,
        monthly_payment=payment,
        schedule=schedule,
        original_interest=original_interest,
        original_periods=original_periods,
    )
    logger.debug(
        "Transfer of %s to %s: fee %s, savings %s",
        total, card.name, fee, analysis.savings,
    )
    return analysis


def _payment_alternatives(
    balances: list[Balance],
    card: TransferCard,
    base: TransferAnalysis,
    transfer_ids: list[str] | None,
    period_cap: int | None,
) -> list[TransferAnalysis] | EngineError:
    """The transfer re-run at each PAYMENT_MULTIPLIERS multiple of the base payment."""
    alternatives = []
    for multiplier in PAYMENT_MULTIPLIERS:
        amount = round_currency(base.monthly_payment * multiplier)
        if amount <= 0:
            continue
        analysis = analyze_transfer(balances, card, amount, transfer_ids, period_cap)
        if isinstance(analysis, EngineError):
            return analysis
        alternatives.append(analysis)
    return alternatives


def transfer_scenarios(
    balances: list[Balance],
    card: TransferCard,
    payment: Decimal | None = None,
    transfer_ids: list[str] | None = None,
    period_cap: int | None = None,
) -> list[RankedScenario] | EngineError:
    """Rank staying put (baseline) against the transfer at several payment levels."""
    base = analyze_transfer(balances, card, payment, transfer_ids, period_cap)
    if isinstance(base, EngineError):
        return base
    alternatives = _payment_alternatives(balances, card, base, transfer_ids, period_cap)
    if isinstance(alternatives, EngineError):
        return alternatives

    selected = [b for b in balances if b.id in base.transferred_ids]
    kept_paid, _, kept_periods = _keep_as_is(selected, base.schedule.period_cap)
    scenarios = [ScenarioInput(name="Keep current cards", total_cost=kept_paid, payoff_periods=kept_periods)]

    for analysis in alternatives:
        # The fee is rolled into the card balance; report it separately
        scenarios.append(ScenarioInput(
            name=f"{card.name} at {format_currency(analysis.monthly_payment)}/mo",
            total_cost=analysis.schedule.total_paid - analysis.transfer_fee,
            payoff_periods=analysis.payoff_periods,
            one_time_fees=analysis.transfer_fee,
            schedule=analysis.schedule,
        ))

    return compare(scenarios, baseline_index=0)


def transfer_recommendations(
    balances: list[Balance],
    card: TransferCard,
    payment: Decimal | None = None,
    transfer_ids: list[str] | None = None,
    period_cap: int | None = None,
) -> list[Recommendation] | EngineError:
    """Proceed / consider / avoid verdict, plus a nudge to pay more when it clearly pays off."""
    base = analyze_transfer(balances, card, payment, transfer_ids, period_cap)
    if isinstance(base, EngineError):
        return base
    alternatives = _payment_alternatives(balances, card, base, transfer_ids, period_cap)
    if isinstance(alternatives, EngineError):
        return alternatives

    if base.savings > settings.transfer_significant_savings:
        verdict = Recommendation(
            action=TransferAction.PROCEED,
            title="Proceed with Balance Transfer",
            description=f"Transfer could save you {format_currency(base.savings)}",
            impact=base.savings,
        )
    elif base.savings > 0:
        verdict = Recommendation(
            action=TransferAction.CONSIDER,
            title="Consider Balance Transfer",
            description="Savings are modest but positive",
            impact=base.savings,
        )
    else:
        verdict = Recommendation(
            action=TransferAction.AVOID,
            title="Avoid Balance Transfer",
            description="Transfer would not save money",
            impact=base.savings,
        )
    recommendations = [verdict]

    best = max(alternatives, key=lambda a: a.savings, default=base)
    extra = best.savings - base.savings
    if extra > settings.transfer_payment_increase_savings:
        recommendations.append(Recommendation(
            action=TransferAction.INCREASE_PAYMENT,
            title="Increase Monthly Payment",
            description=(
                f"Paying {format_currency(best.monthly_payment)} monthly could save"
                f" an additional {format_currency(extra)}"
            ),
            impact=extra,
        ))

    logger.debug("Transfer recommendations for %s: %s", card.name, [r.action.value for r in recommendations])
    return recommendations
