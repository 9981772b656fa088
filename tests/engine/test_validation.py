from decimal import Decimal

from moneylab.engine.validation import (
    validate_balances,
    validate_deposit,
    validate_growth_inputs,
    validate_rate_policy,
    validate_schedule_inputs,
    validate_withdrawal,
)
from moneylab.models.balances import Balance, RatePeriod


class TestValidateBalances:
    def test_valid(self, card_balances):
        assert validate_balances(card_balances) == []

    def test_empty(self):
        errors = validate_balances([])
        assert errors[0].field == "balances"

    def test_zero_minimum_on_open_balance(self):
        b = Balance(id="card", principal=Decimal("100"), apr=Decimal("10"))
        errors = validate_balances([b])
        assert [e.field for e in errors] == ["card_minimum"]

    def test_paid_off_balance_needs_no_minimum(self):
        b = Balance(id="card", principal=Decimal("0"), apr=Decimal("10"))
        assert validate_balances([b]) == []

    def test_unusual_rate(self):
        b = Balance(id="card", principal=Decimal("100"), apr=Decimal("150"), minimum_payment=Decimal("10"))
        errors = validate_balances([b])
        assert errors[0].message == "Interest rate seems unusually high"

    def test_negative_values(self):
        b = Balance(id="card", principal=Decimal("-1"), apr=Decimal("-1"), minimum_payment=Decimal("10"))
        fields = [e.field for e in validate_balances([b])]
        assert "card_balance" in fields
        assert "card_rate" in fields


class TestValidateRatePolicy:
    def test_negative_intro_periods(self):
        errors = validate_rate_policy(RatePeriod(Decimal("0"), Decimal("20"), -1), field="card")
        assert [e.field for e in errors] == ["card_intro_periods"]


class TestValidateScheduleInputs:
    def test_payment_or_term_required(self):
        errors = validate_schedule_inputs(Decimal("100"), None, RatePeriod.fixed(Decimal("5")), 120, None)
        assert [e.field for e in errors] == ["payment"]

    def test_zero_payment_on_zero_balance_is_fine(self):
        errors = validate_schedule_inputs(Decimal("0"), Decimal("0"), RatePeriod.fixed(Decimal("5")), 120, None)
        assert errors == []

    def test_non_positive_term(self):
        errors = validate_schedule_inputs(Decimal("100"), None, RatePeriod.fixed(Decimal("5")), 120, 0)
        assert [e.field for e in errors] == ["term_periods"]


class TestValidateGrowthInputs:
    def test_valid(self):
        assert validate_growth_inputs(Decimal("0"), Decimal("0"), Decimal("0"), 1) == []

    def test_all_bad(self):
        errors = validate_growth_inputs(Decimal("-1"), Decimal("-1"), Decimal("-1"), 0)
        assert len(errors) == 4


class TestValidateDeposit:
    def test_valid(self):
        assert validate_deposit(Decimal("10000"), Decimal("5"), 12) == []

    def test_open_ended_term(self):
        assert validate_deposit(Decimal("10000"), Decimal("5"), None) == []

    def test_all_bad(self):
        errors = validate_deposit(Decimal("0"), Decimal("-1"), 0)
        assert [e.field for e in errors] == ["principal", "apy", "term_months"]


class TestValidateWithdrawal:
    def test_valid(self):
        assert validate_withdrawal(6, 3, 12) == []

    def test_negative_penalty(self):
        assert [e.field for e in validate_withdrawal(6, -1, 12)] == ["penalty_months"]

    def test_zero_penalty_is_fine(self):
        assert validate_withdrawal(6, 0, 12) == []

    def test_past_term(self):
        errors = validate_withdrawal(13, 3, 12)
        assert [e.field for e in errors] == ["withdrawal_month"]
        assert "matures" in errors[0].message

    def test_no_term_skips_maturity_check(self):
        assert validate_withdrawal(240, 3, None) == []
