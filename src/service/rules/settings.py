"""
Banking Rules Settings for Classbank.

This module contains every tunable constant of the money-movement and
credit-score rules. A teacher can adjust them through environment
variables for a different classroom economy without touching code.

Environment variables use the RULES_ prefix:
    RULES_FINE_SCORE_PENALTY=15
    RULES_AUTOPAY_MIN_PAYMENT_CENTS=1000
    RULES_LOAN_TIERS_JSON='[[300,499,0],[500,599,5000],...]'

Usage:
    from src.service.rules.settings import rules_settings

    # Use default settings (loaded from env)
    floor = rules_settings.min_credit_score

    # Or create custom settings for testing
    custom = BankingRulesSettings(fine_score_penalty=20)
"""

import json
from functools import lru_cache
from typing import List, Tuple

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class BankingRulesSettings(BaseSettings):
    """
    Configurable parameters for the classroom banking rules.

    All settings can be overridden via environment variables with RULES_ prefix.
    All monetary values are in cents.
    """

    model_config = SettingsConfigDict(
        env_prefix="RULES_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Credit Score Bounds ===
    min_credit_score: int = Field(
        default=300,
        ge=0,
        description="Lowest possible credit score",
    )
    max_credit_score: int = Field(
        default=850,
        ge=0,
        description="Highest possible credit score",
    )

    # === Account Opening ===
    standard_opening_balance_cents: int = Field(
        default=100_000,
        ge=0,
        description="Starting balance for student accounts ($1,000)",
    )
    standard_opening_credit_score: int = Field(
        default=650,
        description="Starting credit score for student accounts",
    )
    admin_opening_balance_cents: int = Field(
        default=1_000_000,
        ge=0,
        description="Starting balance for administrator accounts ($10,000)",
    )
    admin_opening_credit_score: int = Field(
        default=850,
        description="Starting credit score for administrator accounts",
    )

    # === Fines ===
    fine_score_penalty: int = Field(
        default=15,
        ge=0,
        description="Points removed from the credit score per fine",
    )

    # === Manual Repayment ===
    repayment_score_reward: int = Field(
        default=10,
        ge=0,
        description="Points added for a standard repayment",
    )
    extra_repayment_score_reward: int = Field(
        default=15,
        ge=0,
        description="Points added for an extra repayment",
    )
    extra_repayment_threshold_pct: int = Field(
        default=20,
        ge=0,
        le=100,
        description="A payment of at least this share of the principal counts as extra",
    )

    # === Auto-pay Sweep ===
    autopay_min_payment_cents: int = Field(
        default=1_000,
        gt=0,
        description="Smallest scheduled payment ($10)",
    )
    autopay_payment_pct: int = Field(
        default=5,
        gt=0,
        le=100,
        description="Scheduled payment as a share of the principal",
    )
    autopay_success_score_reward: int = Field(
        default=5,
        ge=0,
        description="Points added when a scheduled payment goes through",
    )
    autopay_missed_score_penalty: int = Field(
        default=10,
        ge=0,
        description="Points removed when a scheduled payment cannot be covered",
    )

    # === Loans ===
    loan_rate_pct: int = Field(
        default=5,
        ge=0,
        description="Fixed loan rate (informational, never compounded)",
    )
    loan_tiers_json: str = Field(
        default="[[300,499,0],[500,599,5000],[600,699,20000],[700,850,50000]]",
        description="Loan ceilings as JSON array: [[min_score, max_score, max_loan_cents], ...]",
    )

    @field_validator("loan_tiers_json")
    @classmethod
    def validate_tiers_json(cls, v: str) -> str:
        """Validate that tiers JSON is parseable and well-formed."""
        try:
            tiers = json.loads(v)
            if not isinstance(tiers, list):
                raise ValueError("Tiers must be a list")
            for tier in tiers:
                if not isinstance(tier, list) or len(tier) != 3:
                    raise ValueError(
                        "Each tier must be [min_score, max_score, max_loan_cents]"
                    )
                min_score, max_score, max_loan_cents = tier
                if not all(isinstance(x, int) for x in tier):
                    raise ValueError("All tier values must be integers")
                if min_score > max_score:
                    raise ValueError(
                        f"min_score ({min_score}) > max_score ({max_score})"
                    )
                if max_loan_cents < 0:
                    raise ValueError(f"max_loan_cents cannot be negative: {max_loan_cents}")
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON: {e}")
        return v

    @model_validator(mode="after")
    def validate_score_bounds(self) -> "BankingRulesSettings":
        if self.min_credit_score > self.max_credit_score:
            raise ValueError("min_credit_score must not exceed max_credit_score")
        return self

    @property
    def loan_tiers(self) -> List[Tuple[int, int, int]]:
        """Loan tiers mapping score ranges to ceilings in cents."""
        tiers = json.loads(self.loan_tiers_json)
        return [tuple(tier) for tier in tiers]


@lru_cache
def get_rules_settings() -> BankingRulesSettings:
    """Get cached rules settings instance."""
    return BankingRulesSettings()


rules_settings = get_rules_settings()
