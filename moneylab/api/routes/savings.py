"""Savings routes: growth projections, Monte Carlo risk, bank and CD comparisons."""

import numpy as np
from fastapi import APIRouter, Depends

from moneylab.api.deps import engine_error, get_usage_tracker
from moneylab.api.schemas import (
    BankScenariosRequest,
    CDRequest,
    CDResponse,
    EarlyWithdrawalResponse,
    InsightResponse,
    LadderRungResponse,
    PercentileResponse,
    ProjectionResponse,
    ProjectRequest,
    RankedScenarioResponse,
    SimulateRequest,
    SimulationResponse,
)
from moneylab.config import settings
from moneylab.engine.certificates import cd_ladder, cd_return, early_withdrawal
from moneylab.engine.growth import bank_rate_scenarios, project, savings_insights
from moneylab.engine.monte_carlo import simulate
from moneylab.models.errors import EngineError
from moneylab.tracking import UsageTracker

router = APIRouter(prefix="/api/v1/savings", tags=["savings"])


@router.post("/project", response_model=ProjectionResponse)
async def project_growth(req: ProjectRequest, tracker: UsageTracker = Depends(get_usage_tracker)):
    result = project(req.initial, req.monthly_contribution, req.annual_rate, req.years, req.inflation)
    if isinstance(result, EngineError):
        raise engine_error(result)

    tracker.record("savings-projection")
    response = ProjectionResponse.model_validate(result)
    response.insights = [
        InsightResponse.model_validate(i) for i in savings_insights(result, req.monthly_contribution)
    ]
    return response


@router.post("/simulate", response_model=SimulationResponse)
async def simulate_risk(req: SimulateRequest, tracker: UsageTracker = Depends(get_usage_tracker)):
    """Percentile outcomes under rate volatility. Pass a seed for repeatable results."""
    seed = req.seed if req.seed is not None else settings.monte_carlo_seed
    runs = req.runs if req.runs is not None else settings.monte_carlo_runs
    results = simulate(
        req.initial,
        req.monthly_contribution,
        req.annual_rate,
        req.years,
        req.risk_profile,
        runs=runs,
        rng=np.random.default_rng(seed),
    )
    if isinstance(results, EngineError):
        raise engine_error(results)

    tracker.record("savings-monte-carlo")
    return SimulationResponse(
        risk_profile=req.risk_profile,
        runs=runs,
        results=[PercentileResponse.model_validate(r) for r in results],
    )


@router.post("/scenarios", response_model=list[RankedScenarioResponse])
async def bank_scenarios(req: BankScenariosRequest, tracker: UsageTracker = Depends(get_usage_tracker)):
    """Rank savings accounts by extra interest versus the first (baseline) rate."""
    ranked = bank_rate_scenarios(req.initial, req.monthly_contribution, req.years, req.rates)
    if isinstance(ranked, EngineError):
        raise engine_error(ranked)

    tracker.record("savings-bank-comparison")
    return [RankedScenarioResponse.model_validate(s) for s in ranked]


@router.post("/cd", response_model=CDResponse)
async def certificate_of_deposit(req: CDRequest, tracker: UsageTracker = Depends(get_usage_tracker)):
    result = cd_return(req.principal, req.apy, req.term_months)
    if isinstance(result, EngineError):
        raise engine_error(result)

    withdrawal = None
    if req.withdrawal_month is not None:
        withdrawal = early_withdrawal(
            req.principal, req.apy, req.withdrawal_month, req.penalty_months, req.term_months
        )
        if isinstance(withdrawal, EngineError):
            raise engine_error(withdrawal)

    ladder = []
    if req.ladder_rungs is not None:
        ladder = cd_ladder(req.principal, req.ladder_rungs, req.apy)
        if isinstance(ladder, EngineError):
            raise engine_error(ladder)

    tracker.record("certificate-of-deposit")
    return CDResponse(
        final_amount=result.final_amount,
        interest_earned=result.interest_earned,
        effective_apy=result.effective_apy,
        early_withdrawal=EarlyWithdrawalResponse.model_validate(withdrawal) if withdrawal else None,
        ladder=[LadderRungResponse.model_validate(r) for r in ladder],
    )
