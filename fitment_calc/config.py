"""Application configuration with environment variable validation."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from fitment_calc.models.fitment import ClearanceThresholds

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Clearance thresholds (mm) used when a request does not send its own
    clearance_inner_min_mm: float = Field(
        default=3.0, validation_alias="CLEARANCE_INNER_MIN_MM"
    )
    clearance_outer_min_mm: float = Field(
        default=3.0, validation_alias="CLEARANCE_OUTER_MIN_MM"
    )

    # Alert limits
    speedo_warn_pct: float = Field(default=2.0, validation_alias="SPEEDO_WARN_PCT")
    scrub_warn_mm: float = Field(default=10.0, validation_alias="SCRUB_WARN_MM")

    # Logging
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    # CORS
    allowed_origins: list[str] | str = Field(
        default=["http://localhost:3000"],
        validation_alias="ALLOWED_ORIGINS",
    )

    @property
    def cors_origins(self) -> list[str]:
        if isinstance(self.allowed_origins, str):
            return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]
        return self.allowed_origins

    @property
    def default_thresholds(self) -> ClearanceThresholds:
        return ClearanceThresholds(
            inner_min_mm=self.clearance_inner_min_mm,
            outer_min_mm=self.clearance_outer_min_mm,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
