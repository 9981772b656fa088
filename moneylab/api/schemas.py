"""Pydantic schemas for API request/response models.

Rates are annual percentages (4.5 means 4.5%). Money is plain Decimal.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from moneylab.models.insights import InsightLevel, TransferAction


# ---- Request schemas ----

class ScheduleRequest(BaseModel):
    principal: Decimal
    payment: Decimal | None = Field(None, description="Omit to derive from term_periods")
    apr: Decimal = Field(..., description="Regular APR, annual percent")
    intro_apr: Decimal | None = Field(None, description="Intro APR; defaults to apr")
    intro_periods: int = 0
    period_cap: int | None = None
    term_periods: int | None = None


class BalanceRequest(BaseModel):
    id: str
    principal: Decimal
    apr: Decimal
    minimum_payment: Decimal
    payment_override: Decimal | None = None


class AllocateRequest(BaseModel):
    balances: list[BalanceRequest]
    monthly_budget: Decimal
    policy: str = "avalanche"
    period_cap: int | None = None


class TransferCardRequest(BaseModel):
    name: str
    intro_apr: Decimal = Decimal("0")
    intro_periods: int
    regular_apr: Decimal
    transfer_fee_percent: Decimal = Decimal("3")
    transfer_fee_min: Decimal = Decimal("5")


class TransferRequest(BaseModel):
    balances: list[BalanceRequest]
    card: TransferCardRequest
    payment: Decimal | None = None
    transfer_ids: list[str] | None = None


class ProjectRequest(BaseModel):
    initial: Decimal
    monthly_contribution: Decimal = Decimal("0")
    annual_rate: Decimal
    years: int
    inflation: Decimal | None = None


class SimulateRequest(BaseModel):
    initial: Decimal
    monthly_contribution: Decimal = Decimal("0")
    annual_rate: Decimal
    years: int
    risk_profile: str = "moderate"
    runs: int | None = None
    seed: int | None = Field(None, description="Fix for reproducible percentiles")


class BankScenariosRequest(BaseModel):
    initial: Decimal
    monthly_contribution: Decimal = Decimal("0")
    years: int
    rates: dict[str, Decimal] | None = Field(None, description="Name -> APY; first entry is the baseline")


class CDRequest(BaseModel):
    principal: Decimal
    apy: Decimal
    term_months: int
    withdrawal_month: int | None = None
    penalty_months: int = 6
    ladder_rungs: int | None = None


# ---- Response schemas ----

class ErrorDetail(BaseModel):
    field: str
    message: str


class EngineErrorResponse(BaseModel):
    kind: str
    message: str
    errors: list[ErrorDetail] = []


class ScheduleEntryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    period: int
    payment: Decimal
    principal: Decimal
    interest: Decimal
    remaining_balance: Decimal
    apr: Decimal
    is_intro: bool


class ScheduleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    entries: list[ScheduleEntryResponse]
    payment: Decimal
    periods: int
    total_interest: Decimal
    total_principal: Decimal
    total_paid: Decimal
    converged: bool
    warning: str | None = None


class TimelinePointResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    period: int
    total_balance: Decimal
    total_paid: Decimal
    total_interest: Decimal
    balances_paid_off: int


class AllocationResponse(BaseModel):
    policy: str
    order: list[str]
    schedules: dict[str, ScheduleResponse]
    timeline: list[TimelinePointResponse]
    total_interest: Decimal
    baseline_interest: Decimal
    total_interest_saved: Decimal
    months_to_payoff: int
    converged: bool


class RankedScenarioResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    rank: int
    name: str
    total_cost: Decimal
    one_time_fees: Decimal
    net_benefit: Decimal
    payoff_periods: int
    is_baseline: bool


class RecommendationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    action: TransferAction
    title: str
    description: str
    impact: Decimal


class TransferResponse(BaseModel):
    card_name: str
    total_transferred: Decimal
    transfer_fee: Decimal
    monthly_payment: Decimal
    payoff_periods: int
    total_interest: Decimal
    total_cost: Decimal
    original_interest: Decimal
    savings: Decimal
    schedule: ScheduleResponse
    scenarios: list[RankedScenarioResponse]
    recommendations: list[RecommendationResponse] = []


class ChartPointResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    year: int
    deposited: Decimal
    total: Decimal
    interest: Decimal


class ProjectionSummaryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    future_value: Decimal
    total_deposited: Decimal
    interest_earned: Decimal
    effective_rate: Decimal
    real_value: Decimal
    compounding_power: Decimal


class InsightResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    level: InsightLevel
    title: str
    message: str


class ProjectionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    yearly: list[ChartPointResponse]
    summary: ProjectionSummaryResponse
    insights: list[InsightResponse] = []


class PercentileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    percentile: int
    value: Decimal


class SimulationResponse(BaseModel):
    risk_profile: str
    runs: int
    results: list[PercentileResponse]


class EarlyWithdrawalResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    balance_at_withdrawal: Decimal
    interest_earned: Decimal
    penalty: Decimal
    final_amount: Decimal
    effective_return: Decimal


class LadderRungResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    term_months: int
    amount: Decimal
    interest_earned: Decimal


class CDResponse(BaseModel):
    final_amount: Decimal
    interest_earned: Decimal
    effective_apy: Decimal
    early_withdrawal: EarlyWithdrawalResponse | None = None
    ladder: list[LadderRungResponse] = []
