"""Debt routes: amortization, multi-balance payoff and balance transfers."""

from fastapi import APIRouter, Depends

from moneylab.api.deps import engine_error, get_usage_tracker, schedule_response
from moneylab.api.schemas import (
    AllocateRequest,
    AllocationResponse,
    BalanceRequest,
    RankedScenarioResponse,
    RecommendationResponse,
    ScheduleRequest,
    ScheduleResponse,
    TimelinePointResponse,
    TransferRequest,
    TransferResponse,
)
from moneylab.engine.allocation import allocate
from moneylab.engine.amortization import generate_schedule
from moneylab.engine.balance_transfer import (
    analyze_transfer,
    transfer_recommendations,
    transfer_scenarios,
)
from moneylab.models.balances import Balance, RatePeriod
from moneylab.models.errors import EngineError
from moneylab.models.products import TransferCard
from moneylab.tracking import UsageTracker

router = APIRouter(prefix="/api/v1/debt", tags=["debt"])


def _to_balances(items: list[BalanceRequest]) -> list[Balance]:
    return [
        Balance(
            id=b.id,
            principal=b.principal,
            apr=b.apr,
            minimum_payment=b.minimum_payment,
            payment_override=b.payment_override,
        )
        for b in items
    ]


@router.post("/schedule", response_model=ScheduleResponse)
async def schedule(req: ScheduleRequest, tracker: UsageTracker = Depends(get_usage_tracker)):
    """Amortize one balance at a fixed payment under an intro/regular rate."""
    policy = RatePeriod(
        intro_apr=req.intro_apr if req.intro_apr is not None else req.apr,
        regular_apr=req.apr,
        intro_periods=req.intro_periods,
    )
    result = generate_schedule(req.principal, req.payment, policy, req.period_cap, req.term_periods)
    if isinstance(result, EngineError):
        raise engine_error(result)

    tracker.record("amortization-schedule")
    return schedule_response(result)


@router.post("/allocate", response_model=AllocationResponse)
async def allocate_budget(req: AllocateRequest, tracker: UsageTracker = Depends(get_usage_tracker)):
    """Split a monthly budget across balances by payoff policy."""
    result = allocate(_to_balances(req.balances), req.monthly_budget, req.policy, req.period_cap)
    if isinstance(result, EngineError):
        raise engine_error(result)

    tracker.record(f"debt-payoff-{result.policy}")
    return AllocationResponse(
        policy=result.policy,
        order=result.order,
        schedules={k: schedule_response(s) for k, s in result.schedules.items()},
        timeline=[TimelinePointResponse.model_validate(p) for p in result.timeline],
        total_interest=result.total_interest,
        baseline_interest=result.baseline_interest,
        total_interest_saved=result.total_interest_saved,
        months_to_payoff=result.months_to_payoff,
        converged=result.converged,
    )


@router.post("/balance-transfer", response_model=TransferResponse)
async def balance_transfer(req: TransferRequest, tracker: UsageTracker = Depends(get_usage_tracker)):
    """Cost of moving balances onto an intro-APR card, plus payment alternatives."""
    balances = _to_balances(req.balances)
    card = TransferCard(**req.card.model_dump())

    analysis = analyze_transfer(balances, card, req.payment, req.transfer_ids)
    if isinstance(analysis, EngineError):
        raise engine_error(analysis)
    ranked = transfer_scenarios(balances, card, req.payment, req.transfer_ids)
    if isinstance(ranked, EngineError):
        raise engine_error(ranked)
    recommendations = transfer_recommendations(balances, card, req.payment, req.transfer_ids)
    if isinstance(recommendations, EngineError):
        raise engine_error(recommendations)

    tracker.record("balance-transfer")
    return TransferResponse(
        card_name=analysis.card_name,
        total_transferred=analysis.total_transferred,
        transfer_fee=analysis.transfer_fee,
        monthly_payment=analysis.monthly_payment,
        payoff_periods=analysis.payoff_periods,
        total_interest=analysis.total_interest,
        total_cost=analysis.total_cost,
        original_interest=analysis.original_interest,
        savings=analysis.savings,
        schedule=schedule_response(analysis.schedule),
        scenarios=[RankedScenarioResponse.model_validate(s) for s in ranked],
        recommendations=[RecommendationResponse.model_validate(r) for r in recommendations],
    )
