"""
Repayment Rules for Classbank.

Integer arithmetic only: percentages are applied to cents with floor
division so that no fractional cents appear.
"""

from .settings import BankingRulesSettings, rules_settings


def is_extra_payment(
    amount_cents: int,
    principal_cents: int,
    settings: BankingRulesSettings = rules_settings,
) -> bool:
    """
    Check whether a manual payment counts as an extra payment.

    A payment of at least extra_repayment_threshold_pct percent of the
    original principal is extra (20% by default).
    """
    return amount_cents * 100 >= principal_cents * settings.extra_repayment_threshold_pct


def autopay_amount_cents(
    principal_cents: int,
    remaining_cents: int,
    settings: BankingRulesSettings = rules_settings,
) -> int:
    """
    Calculate the scheduled payment for one sweep.

    The payment is a share of the principal with a floor, never more
    than what is still owed:
        min(remaining, max(minimum, floor(principal * pct / 100)))

    Args:
        principal_cents: Original loan amount
        remaining_cents: Outstanding balance
        settings: Rules settings (uses defaults if not provided)

    Returns:
        Payment in cents
    """
    share = principal_cents * settings.autopay_payment_pct // 100
    return min(remaining_cents, max(settings.autopay_min_payment_cents, share))


def repayment_note(loan_id: int, extra: bool) -> str:
    kind = "Extra payment" if extra else "Standard payment"
    return f"Repayment for Loan #{loan_id} ({kind})"


def autopay_note(loan_id: int) -> str:
    return f"Auto-pay for Loan #{loan_id}"
