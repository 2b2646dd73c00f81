"""FastAPI dependency injection."""

from fitment_calc.config import Settings, get_settings
from fitment_calc.models.fitment import ClearanceThresholds


def get_app_settings() -> Settings:
    """Dependency for application settings."""
    return get_settings()


def get_default_thresholds() -> ClearanceThresholds:
    """Dependency for the configured clearance thresholds."""
    return get_settings().default_thresholds
