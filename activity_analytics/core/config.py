"""
Engine configuration.
Numeric defaults may be overridden from environment variables.
"""
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True)

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: Literal["json", "console"] = "json"

    # Best splits: gaps longer than this split the series into segments
    SPLIT_MAX_GAP_SECONDS: float = Field(default=60 * 60 * 12, gt=0)

    # Altitude smoothing
    ALTITUDE_LOW_PASS_SMOOTHING: float = Field(default=0.2, gt=0, lt=1)
    ALTITUDE_KALMAN_PROCESS_NOISE: float = Field(default=1.0, ge=0)
    ALTITUDE_KALMAN_MEASUREMENT_NOISE: float = Field(default=1.0, gt=0)

    # Weighted power rolling window
    AVG_POWER_WINDOW_SECONDS: float = Field(default=30, gt=0)


settings = Settings()
