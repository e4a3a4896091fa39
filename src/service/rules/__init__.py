"""
Banking Rules Module for Classbank
"""

from .settings import BankingRulesSettings, get_rules_settings, rules_settings
from .credit_score import (
    clamp_credit_score,
    adjust_credit_score,
    score_after_fine,
    score_after_repayment,
    score_after_autopay,
)
from .eligibility import max_loan_cents
from .repayment import (
    is_extra_payment,
    autopay_amount_cents,
    repayment_note,
    autopay_note,
)

__all__ = [
    # Settings
    "BankingRulesSettings",
    "get_rules_settings",
    "rules_settings",
    # Credit Score
    "clamp_credit_score",
    "adjust_credit_score",
    "score_after_fine",
    "score_after_repayment",
    "score_after_autopay",
    # Eligibility
    "max_loan_cents",
    # Repayment
    "is_extra_payment",
    "autopay_amount_cents",
    "repayment_note",
    "autopay_note",
]
