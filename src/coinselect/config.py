"""
Configuration management using pydantic-settings.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from coinselect.constants import BNB_TRIES, KNAPSACK_ITERATIONS


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="COINSELECT_", env_file=".env", env_file_encoding="utf-8", case_sensitive=False
    )

    log_level: str = "INFO"

    bnb_tries: int = Field(default=BNB_TRIES, ge=1)
    knapsack_iterations: int = Field(default=KNAPSACK_ITERATIONS, ge=1)

    # Seed for the random source, for reproducible runs
    seed: int | None = None


def get_settings() -> Settings:
    return Settings()
