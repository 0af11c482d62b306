"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from nutritrack.services.energy import BmrFormula

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    bmr_formula: BmrFormula = BmrFormula.MIFFLIN_ST_JEOR
    targets_cache_ttl_seconds: int = 86400
    default_timezone: str = "UTC"
    debug: bool = False
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
