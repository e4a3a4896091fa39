"""
Loan Eligibility for Classbank.

Maps a credit score to the largest loan the account may take out,
using the graduated tiers from the rules settings.
"""

from .settings import BankingRulesSettings, rules_settings


def max_loan_cents(
    credit_score: int,
    settings: BankingRulesSettings = rules_settings,
) -> int:
    """
    Map a credit score to a loan ceiling in cents.

    Args:
        credit_score: Current credit score
        settings: Rules settings (uses defaults if not provided)

    Returns:
        Loan ceiling in cents (0 = not eligible)
    """
    for min_score, max_score, ceiling_cents in settings.loan_tiers:
        if min_score <= credit_score <= max_score:
            return ceiling_cents

    return 0
