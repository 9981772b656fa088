from decimal import Decimal

import numpy as np

from moneylab.engine.monte_carlo import (
    RiskProfile,
    reduce_percentiles,
    simulate,
    volatility_for,
)
from moneylab.engine.numeric import round_currency, to_decimal
from moneylab.models.errors import EngineError, ErrorKind


class TestReducePercentiles:
    def test_nearest_rank(self):
        values = np.arange(1.0, 11.0)
        results = reduce_percentiles(values, [10, 50, 90])
        assert [r.value for r in results] == [Decimal("2"), Decimal("6"), Decimal("10")]

    def test_single_value(self):
        results = reduce_percentiles(np.array([42.5]), [10, 50, 90])
        assert all(r.value == Decimal("42.50") for r in results)


class TestSimulate:
    def test_one_run_collapses_percentiles(self):
        results = simulate(
            Decimal("5000"), Decimal("200"), Decimal("4.5"), 5, "moderate",
            runs=1, rng=np.random.default_rng(7),
        )
        assert len(results) == 5
        assert len({r.value for r in results}) == 1

    def test_default_percentiles(self):
        results = simulate(
            Decimal("5000"), Decimal("200"), Decimal("4.5"), 5, RiskProfile.MODERATE,
            runs=200, rng=np.random.default_rng(1),
        )
        assert [r.percentile for r in results] == [10, 25, 50, 75, 90]

    def test_percentiles_non_decreasing(self):
        results = simulate(
            Decimal("5000"), Decimal("200"), Decimal("4.5"), 10, "aggressive",
            runs=500, rng=np.random.default_rng(3),
        )
        values = [r.value for r in results]
        assert values == sorted(values)

    def test_seeded_is_reproducible(self):
        def run():
            return simulate(
                Decimal("5000"), Decimal("200"), Decimal("4.5"), 5, "moderate",
                runs=300, rng=np.random.default_rng(42),
            )

        assert run() == run()

    def test_zero_shock_is_deterministic(self, zero_shock_rng):
        """Base rate 0 with no shocks: initial plus every contribution."""
        results = simulate(
            Decimal("1000"), Decimal("100"), Decimal("0"), 2, "moderate",
            runs=10, rng=zero_shock_rng,
        )
        assert all(r.value == Decimal("3400") for r in results)

    def test_zero_shock_matches_monthly_compounding(self, zero_shock_rng):
        results = simulate(
            Decimal("1000"), Decimal("100"), Decimal("6"), 3, "conservative",
            runs=5, rng=zero_shock_rng,
        )

        value = 1000.0
        growth = 1 + 6.0 / 100 / 12
        for _ in range(36):
            value = (value + 100.0) * growth
        expected = round_currency(to_decimal(value))

        assert all(r.value == expected for r in results)

    def test_rates_floor_at_zero(self, low_shock_rng):
        """A 0% base shocked downward still never loses money."""
        results = simulate(
            Decimal("1000"), Decimal("100"), Decimal("0"), 2, "aggressive",
            runs=4, rng=low_shock_rng,
        )
        assert all(r.value == Decimal("3400") for r in results)

    def test_wider_profile_wider_spread(self):
        def spread(profile):
            results = simulate(
                Decimal("5000"), Decimal("200"), Decimal("5"), 10, profile,
                runs=500, rng=np.random.default_rng(11),
            )
            return results[-1].value - results[0].value

        assert spread("conservative") < spread("aggressive")

    def test_unknown_profile(self):
        result = simulate(Decimal("1000"), Decimal("0"), Decimal("5"), 5, "reckless", runs=10)
        assert isinstance(result, EngineError)
        assert result.kind == ErrorKind.INVALID_INPUT
        assert result.errors[0].field == "risk_profile"

    def test_zero_runs(self):
        result = simulate(Decimal("1000"), Decimal("0"), Decimal("5"), 5, "moderate", runs=0)
        assert isinstance(result, EngineError)
        assert result.errors[0].field == "runs"

    def test_percentile_out_of_range(self):
        result = simulate(
            Decimal("1000"), Decimal("0"), Decimal("5"), 5, "moderate",
            runs=10, percentiles=[50, 100],
        )
        assert isinstance(result, EngineError)
        assert result.errors[0].field == "percentiles"


class TestVolatility:
    def test_profiles_ordered(self):
        assert (
            volatility_for(RiskProfile.CONSERVATIVE)
            < volatility_for(RiskProfile.MODERATE)
            < volatility_for(RiskProfile.AGGRESSIVE)
        )
