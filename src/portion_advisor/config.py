"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from portion_advisor.domain.policy import LearningPolicy

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    admin_token: str
    environment: str = _ENVIRONMENT
    half_life_days: float = 14.0
    min_weight: float = 0.1
    max_age_days: float = 90.0
    feedback_window: int = 200

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    def learning_policy(self) -> LearningPolicy:
        """Build the analysis policy with any decay overrides applied."""
        return LearningPolicy(
            half_life_days=self.half_life_days,
            min_weight=self.min_weight,
            max_age_days=self.max_age_days,
            feedback_window=self.feedback_window,
        )
