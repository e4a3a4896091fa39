"""
Unit Tests for the Classbank Banking Rules Module.

These tests verify:
1. Credit score clamping and adjustments
2. Loan eligibility tiers and their boundaries
3. Extra-payment detection and the auto-pay amount
4. Rules settings validation

Test Categories:
- test_score_*: Credit score rules
- test_eligibility_*: Loan ceiling mapping
- test_extra_*, test_autopay_*: Repayment rules
- test_settings_*: Settings validation
"""

import pytest
from pydantic import ValidationError

from src.service.rules import (
    BankingRulesSettings,
    adjust_credit_score,
    autopay_amount_cents,
    autopay_note,
    clamp_credit_score,
    is_extra_payment,
    max_loan_cents,
    repayment_note,
    score_after_autopay,
    score_after_fine,
    score_after_repayment,
)


@pytest.fixture
def rules() -> BankingRulesSettings:
    return BankingRulesSettings(_env_file=None)


# =============================================================================
# Credit Score Tests
# =============================================================================

class TestCreditScore:
    """Tests for credit score adjustments."""

    @pytest.mark.parametrize("raw,expected", [
        (299, 300),
        (300, 300),
        (650, 650),
        (850, 850),
        (900, 850),
        (-50, 300),
    ])
    def test_score_clamped_to_bounds(self, rules, raw, expected):
        assert clamp_credit_score(raw, rules) == expected

    def test_score_adjustment_clamps_result(self, rules):
        assert adjust_credit_score(845, 10, rules) == 850
        assert adjust_credit_score(305, -10, rules) == 300
        assert adjust_credit_score(650, -10, rules) == 640

    def test_score_after_fine_subtracts_penalty(self, rules):
        assert score_after_fine(650, rules) == 635

    def test_score_after_fine_floors_at_minimum(self, rules):
        """A fine at 305 lands on 300, not 290."""
        assert score_after_fine(305, rules) == 300

    def test_score_after_standard_repayment(self, rules):
        assert score_after_repayment(650, extra=False, settings=rules) == 660

    def test_score_after_extra_repayment(self, rules):
        assert score_after_repayment(650, extra=True, settings=rules) == 665

    def test_score_after_repayment_caps_at_maximum(self, rules):
        assert score_after_repayment(845, extra=True, settings=rules) == 850

    def test_score_after_autopay_paid_and_missed(self, rules):
        assert score_after_autopay(650, paid=True, settings=rules) == 655
        assert score_after_autopay(650, paid=False, settings=rules) == 640
        assert score_after_autopay(305, paid=False, settings=rules) == 300

    def test_score_penalty_follows_settings(self):
        custom = BankingRulesSettings(_env_file=None, fine_score_penalty=40)
        assert score_after_fine(650, custom) == 610


# =============================================================================
# Eligibility Tests
# =============================================================================

class TestEligibility:
    """Tests for the score-to-ceiling mapping."""

    @pytest.mark.parametrize("score,ceiling", [
        (300, 0),
        (499, 0),
        (500, 5_000),
        (599, 5_000),
        (600, 20_000),
        (699, 20_000),
        (700, 50_000),
        (850, 50_000),
    ])
    def test_eligibility_tiers(self, rules, score, ceiling):
        assert max_loan_cents(score, rules) == ceiling

    def test_eligibility_score_outside_tiers_is_zero(self, rules):
        assert max_loan_cents(900, rules) == 0

    def test_eligibility_custom_tiers(self):
        custom = BankingRulesSettings(
            _env_file=None,
            loan_tiers_json="[[300,849,1000],[850,850,99999]]",
        )
        assert max_loan_cents(849, custom) == 1000
        assert max_loan_cents(850, custom) == 99_999


# =============================================================================
# Repayment Tests
# =============================================================================

class TestRepaymentRules:
    """Tests for extra-payment detection and auto-pay amounts."""

    @pytest.mark.parametrize("amount,principal,expected", [
        (2_000, 10_000, True),
        (1_999, 10_000, False),
        (3_000, 10_000, True),
        (1_000, 10_000, False),
        (1, 5, True),
    ])
    def test_extra_payment_threshold(self, rules, amount, principal, expected):
        assert is_extra_payment(amount, principal, rules) is expected

    def test_autopay_uses_minimum_for_small_loans(self, rules):
        """5% of $100.00 is $5.00, below the $10.00 floor."""
        assert autopay_amount_cents(10_000, 10_000, rules) == 1_000

    def test_autopay_uses_percentage_for_large_loans(self, rules):
        assert autopay_amount_cents(50_000, 50_000, rules) == 2_500

    def test_autopay_never_exceeds_remaining(self, rules):
        assert autopay_amount_cents(50_000, 700, rules) == 700

    def test_autopay_percentage_rounds_down(self, rules):
        assert autopay_amount_cents(20_999, 20_999, rules) == 1_049

    def test_notes(self):
        assert repayment_note(3, extra=True) == "Repayment for Loan #3 (Extra payment)"
        assert repayment_note(3, extra=False) == "Repayment for Loan #3 (Standard payment)"
        assert autopay_note(7) == "Auto-pay for Loan #7"


# =============================================================================
# Settings Tests
# =============================================================================

class TestRulesSettings:
    """Tests for settings validation."""

    def test_settings_defaults(self, rules):
        assert rules.min_credit_score == 300
        assert rules.max_credit_score == 850
        assert rules.standard_opening_balance_cents == 100_000
        assert rules.admin_opening_balance_cents == 1_000_000
        assert rules.loan_tiers[0] == (300, 499, 0)

    def test_settings_reject_malformed_tiers(self):
        with pytest.raises(ValidationError):
            BankingRulesSettings(_env_file=None, loan_tiers_json="[[300,499]]")

    def test_settings_reject_invalid_json(self):
        with pytest.raises(ValidationError):
            BankingRulesSettings(_env_file=None, loan_tiers_json="not json")

    def test_settings_reject_inverted_bounds(self):
        with pytest.raises(ValidationError):
            BankingRulesSettings(_env_file=None, min_credit_score=900)

    def test_settings_read_environment(self, monkeypatch):
        monkeypatch.setenv("RULES_AUTOPAY_MIN_PAYMENT_CENTS", "2500")
        assert BankingRulesSettings(_env_file=None).autopay_min_payment_cents == 2_500
