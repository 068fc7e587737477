# record_portal/config/settings.py

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Application ---
    app_name: str = "nimc-record-portal"
    environment: Literal["dev", "test", "prod"] = "dev"
    debug: bool = False
    version: str = "0.1.0"

    # --- Record store ---
    seed_record_count: int = Field(500, ge=1)
    random_seed: Optional[int] = None

    # --- Simulated login (placeholder credentials, not a security boundary) ---
    login_username: str = "J28012026"
    login_password: str = "Jadan@2026"
    agent_id: str = "AGT-7742"
    agent_name: str = "Jabir"
    login_delay_seconds: float = Field(1.2, ge=0.0)

    # --- Simulated sync ---
    sync_delay_seconds: float = Field(1.5, ge=0.0)
    sync_success_rate: float = Field(0.95, ge=0.0, le=1.0)

    # --- Guidance assistant ---
    guidance_failure_threshold: int = Field(3, ge=1)
    guidance_recovery_seconds: float = Field(30.0, ge=0.0)

    # --- Observability ---
    enable_metrics: bool = True
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"


@lru_cache
def get_settings() -> AppSettings:
    return AppSettings()
