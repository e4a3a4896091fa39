"""
Credit Score Rules for Classbank.

Every score change goes through clamp_credit_score so that no operation
can push a score outside the configured bounds.
"""

from .settings import BankingRulesSettings, rules_settings


def clamp_credit_score(
    score: int,
    settings: BankingRulesSettings = rules_settings,
) -> int:
    """
    Clamp a score to [min_credit_score, max_credit_score].

    Args:
        score: Raw score after an adjustment
        settings: Rules settings (uses defaults if not provided)

    Returns:
        The clamped score
    """
    return max(settings.min_credit_score, min(settings.max_credit_score, score))


def adjust_credit_score(
    score: int,
    delta: int,
    settings: BankingRulesSettings = rules_settings,
) -> int:
    """Apply a signed adjustment and clamp the result."""
    return clamp_credit_score(score + delta, settings)


def score_after_fine(
    score: int,
    settings: BankingRulesSettings = rules_settings,
) -> int:
    return adjust_credit_score(score, -settings.fine_score_penalty, settings)


def score_after_repayment(
    score: int,
    extra: bool,
    settings: BankingRulesSettings = rules_settings,
) -> int:
    """
    Reward a manual repayment.

    Extra payments (see is_extra_payment) earn more than standard ones.
    """
    reward = (
        settings.extra_repayment_score_reward
        if extra
        else settings.repayment_score_reward
    )
    return adjust_credit_score(score, reward, settings)


def score_after_autopay(
    score: int,
    paid: bool,
    settings: BankingRulesSettings = rules_settings,
) -> int:
    """Reward a successful scheduled payment or penalise a missed one."""
    if paid:
        return adjust_credit_score(score, settings.autopay_success_score_reward, settings)
    return adjust_credit_score(score, -settings.autopay_missed_score_penalty, settings)
