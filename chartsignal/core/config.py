"""
Application Configuration

All settings loaded from environment variables.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings

from chartsignal.schemas.signal import CompositionConfig, RiskProfile


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Application
    app_name: str = "ChartSignal Engine"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # CORS (Frontend URL)
    allowed_origins: list[str] = ["http://localhost:3000"]

    # Signal composition
    default_risk_profile: RiskProfile = RiskProfile.MODERATE
    pattern_weight: float = 0.6
    indicator_weight: float = 0.4
    action_threshold: float = 55.0

    # Notifications (evaluated by the caller, never by the engine)
    notifications_enabled: bool = True
    notification_threshold: int = 75

    # Synthetic data
    demo_periods: int = 50

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False

    def composition_config(self) -> CompositionConfig:
        """Composition constants overridable from the environment."""
        return CompositionConfig(
            pattern_weight=self.pattern_weight,
            indicator_weight=self.indicator_weight,
            action_threshold=self.action_threshold,
        )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
