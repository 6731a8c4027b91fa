"""
Library configuration.
Runtime knobs loaded from environment variables (LIFTSTATS_ prefix).
"""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Library settings loaded from environment."""

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "console"  # json or console

    # Strength metrics
    # Size of the LRU cache the calculator injects for 1RM lookups (0 = disabled)
    ONE_RM_CACHE_SIZE: int = 0

    # Streak scanning windows
    STREAK_LOOKBACK_DAYS: int = 365
    STREAK_LOOKBACK_WEEKS: int = 52

    # Schedule adherence history
    ADHERENCE_WEEKS: int = 12

    def cache_enabled(self) -> bool:
        """Whether the calculator should build a 1RM cache."""
        return self.ONE_RM_CACHE_SIZE > 0

    class Config:
        env_prefix = "LIFTSTATS_"
        env_file = ".env"
        case_sensitive = True


settings = Settings()
