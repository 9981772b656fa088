from decimal import Decimal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # Amortization
    default_period_cap: int = 120  # 10 years of monthly payments
    allocation_period_cap: int = 360  # Multi-balance payoff runs up to 30 years

    # Payoff ordering
    blended_rate_weight: Decimal = Decimal("0.5")  # Share of the score driven by APR

    # Monte Carlo
    monte_carlo_runs: int = 1000
    monte_carlo_seed: int | None = None  # None = fresh entropy every run
    percentiles: list[int] = [10, 25, 50, 75, 90]

    # Annual rate swing in percentage points, centered on the base rate
    risk_volatility: dict[str, Decimal] = {
        "conservative": Decimal("0.5"),
        "moderate": Decimal("1.0"),
        "aggressive": Decimal("1.5"),
    }

    # Growth
    default_inflation_percent: Decimal = Decimal("3.0")

    # Savings insights
    low_rate_percent: Decimal = Decimal("1")  # Below this the rate barely beats inflation
    strong_rate_percent: Decimal = Decimal("4")
    emergency_fund_deposit: Decimal = Decimal("300")  # Monthly deposit that qualifies
    emergency_fund_max_years: int = 3
    emergency_fund_months: int = 6
    big_bank_rate_percent: Decimal = Decimal("0.01")
    big_bank_min_rate_percent: Decimal = Decimal("0.5")
    big_bank_min_advantage: Decimal = Decimal("100")

    # Balance transfer recommendations
    transfer_significant_savings: Decimal = Decimal("500")
    transfer_payment_increase_savings: Decimal = Decimal("100")

    # App
    debug: bool = False
    log_level: str = "INFO"


settings = Settings()
