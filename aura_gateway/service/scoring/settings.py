"""
Scoring Settings for the Aura reputation engine.

This module contains the tunable parameters of the Aura score. The defaults
reproduce the published model exactly; overriding them changes every score,
so treat any change as a new model version.

Environment variables use the AURA_ prefix:
    AURA_BASE_SCORE=500
    AURA_INSTALLMENTS_PER_LOAN=4
    AURA_AGE_BONUS_CAP=20

Usage:
    from aura_gateway.service.scoring.settings import scoring_settings

    # Use default settings (loaded from env)
    base = scoring_settings.base_score

    # Or create custom settings for testing
    custom = ScoringSettings(base_score=400)
"""

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ScoringSettings(BaseSettings):
    """
    Configurable parameters for the Aura scoring algorithm.

    All settings can be overridden via environment variables with AURA_ prefix.
    All scores are on the 0-1000 scale.
    """

    model_config = SettingsConfigDict(
        env_prefix="AURA_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Score Bounds ===
    base_score: int = Field(
        default=500,
        ge=0,
        le=1000,
        description="Neutral score every wallet starts from before factors apply",
    )
    score_floor: int = Field(
        default=0,
        ge=0,
        description="Lowest final score",
    )
    score_ceiling: int = Field(
        default=1000,
        le=1000,
        description="Highest final score",
    )

    # === Protocol ===
    installments_per_loan: int = Field(
        default=4,
        ge=1,
        description="Number of installments every BNPL loan is split into",
    )

    # === Account Age Bonus (Borrowing Experience) ===
    age_bonus_period_days: int = Field(
        default=30,
        gt=0,
        description="Days of history that earn one age bonus step",
    )
    age_bonus_per_period: int = Field(
        default=5,
        ge=0,
        description="Points added per completed age period",
    )
    age_bonus_cap: int = Field(
        default=20,
        ge=0,
        description="Maximum points the account age bonus can add",
    )

    @model_validator(mode="after")
    def validate_bounds(self) -> "ScoringSettings":
        """Ensure the base score sits inside the final score range."""
        if self.score_floor >= self.score_ceiling:
            raise ValueError(
                f"score_floor ({self.score_floor}) must be below "
                f"score_ceiling ({self.score_ceiling})"
            )
        if not self.score_floor <= self.base_score <= self.score_ceiling:
            raise ValueError(
                f"base_score ({self.base_score}) must be within "
                f"[{self.score_floor}, {self.score_ceiling}]"
            )
        return self


@lru_cache
def get_scoring_settings() -> ScoringSettings:
    """Get cached scoring settings instance."""
    return ScoringSettings()


scoring_settings = get_scoring_settings()
