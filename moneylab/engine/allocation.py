"""Multi-balance payoff planning: avalanche, snowball and blended orderings.

Every open balance gets its minimum each month. Whatever is left of the
budget goes to the first open balance in policy order. A minimum freed by a
payoff joins that surplus from the following month on.
"""

import logging
from decimal import Decimal
from enum import Enum

from moneylab.config import settings
from moneylab.engine.amortization import apply_payment, generate_schedule
from moneylab.engine.comparison import compare
from moneylab.engine.formatting import format_currency
from moneylab.engine.numeric import ZERO, apr_to_monthly_rate, round_currency
from moneylab.engine.validation import non_negative, positive_int, validate_balances
from moneylab.models.balances import Balance, RatePeriod
from moneylab.models.errors import EngineError, ErrorKind, ValidationError
from moneylab.models.scenarios import RankedScenario, ScenarioInput
from moneylab.models.schedules import AllocationResult, Schedule, ScheduleEntry, TimelinePoint

logger = logging.getLogger(__name__)


class PayoffPolicy(Enum):
    AVALANCHE = "avalanche"  # Highest APR first
    SNOWBALL = "snowball"  # Smallest balance first
    BLENDED = "blended"  # Weighted APR and balance-share score


def blended_score(balance: Balance, max_apr: Decimal, total_principal: Decimal, rate_weight: Decimal) -> Decimal:
    """Higher scores are paid first. Both components are normalized to [0, 1]."""
    rate_component = balance.apr / max_apr if max_apr > 0 else ZERO
    share = balance.principal / total_principal if total_principal > 0 else ZERO
    return rate_weight * rate_component + (1 - rate_weight) * (1 - share)


def order_balances(
    balances: list[Balance],
    policy: PayoffPolicy,
    blended_rate_weight: Decimal | None = None,
) -> list[Balance]:
    """Sort balances into payoff order. Ties keep input order."""
    if policy is PayoffPolicy.AVALANCHE:
        return sorted(balances, key=lambda b: b.apr, reverse=True)
    if policy is PayoffPolicy.SNOWBALL:
        return sorted(balances, key=lambda b: b.principal)

    weight = blended_rate_weight if blended_rate_weight is not None else settings.blended_rate_weight
    max_apr = max(b.apr for b in balances)
    total = sum((b.principal for b in balances), ZERO)
    return sorted(
        balances,
        key=lambda b: blended_score(b, max_apr, total, weight),
        reverse=True,
    )


def baseline_schedules(balances: list[Balance], period_cap: int) -> list[Schedule]:
    """Each balance alone at its reserved payment, no rollover."""
    return [
        generate_schedule(b.principal, b.reserved_payment, RatePeriod.fixed(b.apr), period_cap)
        for b in balances
    ]


def baseline_interest(balances: list[Balance], period_cap: int) -> Decimal:
    return sum((s.total_interest for s in baseline_schedules(balances, period_cap)), ZERO)


def allocate(
    balances: list[Balance],
    monthly_budget: Decimal,
    policy: PayoffPolicy | str,
    period_cap: int | None = None,
    blended_rate_weight: Decimal | None = None,
) -> AllocationResult | EngineError:
    """Plan payoff of several balances from one fixed monthly budget.

    Returns InsufficientBudget when the budget does not cover the minimums.
    A plan that is still open at period_cap comes back with converged=False.
    """
    if period_cap is None:
        period_cap = settings.allocation_period_cap

    try:
        policy = PayoffPolicy(policy)
    except ValueError:
        return EngineError.invalid([ValidationError("policy", f"Unknown payoff policy {policy!r}")])

    errors = validate_balances(balances)
    errors += non_negative("monthly_budget", monthly_budget, "Monthly budget")
    errors += positive_int("period_cap", period_cap, "Period cap")
    if errors:
        logger.warning("Rejected allocation inputs: %s", [e.field for e in errors])
        return EngineError.invalid(errors)

    required = sum((b.minimum_payment for b in balances), ZERO)
    if monthly_budget < required:
        message = (
            f"Monthly budget {format_currency(monthly_budget, cents=True)} is below the"
            f" {format_currency(required, cents=True)} needed for minimum payments"
        )
        return EngineError(
            kind=ErrorKind.INSUFFICIENT_BUDGET,
            message=message,
            errors=[ValidationError("monthly_budget", message)],
        )

    ordered = order_balances(balances, policy, blended_rate_weight)
    logger.debug("%s order: %s", policy.value, [b.id for b in ordered])

    remaining = {b.id: round_currency(b.principal) for b in ordered}
    entries: dict[str, list[ScheduleEntry]] = {b.id: [] for b in ordered}
    timeline: list[TimelinePoint] = []
    cumulative_paid = ZERO
    cumulative_interest = ZERO

    for period in range(1, period_cap + 1):
        active = [b for b in ordered if remaining[b.id] > 0]
        if not active:
            break

        # Minimums of balances closed in earlier months are part of the surplus
        surplus = monthly_budget - sum((b.minimum_payment for b in active), ZERO)
        focus = active[0]

        for b in active:
            due = b.minimum_payment + (surplus if b is focus else ZERO)
            paid, principal_paid, interest = apply_payment(
                remaining[b.id], due, apr_to_monthly_rate(b.apr)
            )
            remaining[b.id] -= principal_paid
            cumulative_paid += paid
            cumulative_interest += interest

            entries[b.id].append(ScheduleEntry(
                period=period,
                payment=paid,
                principal=principal_paid,
                interest=interest,
                remaining_balance=remaining[b.id],
                apr=b.apr,
            ))

        timeline.append(TimelinePoint(
            period=period,
            total_balance=sum(remaining.values(), ZERO),
            total_paid=cumulative_paid,
            total_interest=cumulative_interest,
            balances_paid_off=sum(1 for v in remaining.values() if v <= 0),
        ))

    schedules = {
        b.id: Schedule(
            entries=entries[b.id],
            starting_balance=round_currency(b.principal),
            payment=b.minimum_payment,
            period_cap=period_cap,
            converged=remaining[b.id] <= 0,
        )
        for b in ordered
    }
    converged = all(s.converged for s in schedules.values())
    if not converged:
        logger.warning(
            "%s plan leaves %s unpaid after %d periods",
            policy.value, sum(remaining.values(), ZERO), period_cap,
        )

    return AllocationResult(
        policy=policy.value,
        order=[b.id for b in ordered],
        monthly_budget=monthly_budget,
        schedules=schedules,
        timeline=timeline,
        baseline_interest=baseline_interest(balances, period_cap),
        converged=converged,
    )


def compare_policies(
    balances: list[Balance],
    monthly_budget: Decimal,
    period_cap: int | None = None,
) -> dict[PayoffPolicy, AllocationResult] | EngineError:
    """Run every payoff policy against the same inputs."""
    results: dict[PayoffPolicy, AllocationResult] = {}
    for policy in PayoffPolicy:
        result = allocate(balances, monthly_budget, policy, period_cap)
        if isinstance(result, EngineError):
            return result
        results[policy] = result
    return results


def rank_policies(
    balances: list[Balance],
    monthly_budget: Decimal,
    period_cap: int | None = None,
) -> list[RankedScenario] | EngineError:
    """Rank every policy against paying only the reserved payments."""
    results = compare_policies(balances, monthly_budget, period_cap)
    if isinstance(results, EngineError):
        return results

    if period_cap is None:
        period_cap = settings.allocation_period_cap

    # Cost = everything paid plus whatever is still owed at the cap
    baseline = baseline_schedules(balances, period_cap)
    scenarios = [ScenarioInput(
        name="Reserved payments only",
        total_cost=sum((s.total_paid + s.ending_balance for s in baseline), ZERO),
        payoff_periods=max(s.periods for s in baseline),
    )]
    for policy, result in results.items():
        outstanding = sum((s.ending_balance for s in result.schedules.values()), ZERO)
        scenarios.append(ScenarioInput(
            name=policy.value,
            total_cost=result.total_paid + outstanding,
            payoff_periods=result.months_to_payoff,
        ))
    return compare(scenarios, baseline_index=0)
