"""
Engine configuration using Pydantic Settings.
Environment variables (prefix MATRIX_) are loaded from .env file.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="MATRIX_",
        case_sensitive=False,
        extra="ignore"
    )

    # Classification
    urgent_threshold_hours: float = 24.0
    live_importance_threshold: float = 5.0
    analytics_importance_threshold: float = 5.5

    # Canvas
    canvas_width: float = 480.0
    canvas_height: float = 450.0
    canvas_margin: float = 30.0

    # Creating a task from a canvas point
    position_change_tolerance_ms: int = 60 * 60 * 1000

    # API Configuration
    api_prefix: str = "/api"
    project_name: str = "Priority Matrix Engine"
    log_level: str = "INFO"


# Global settings instance
settings = Settings()
