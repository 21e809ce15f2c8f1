"""Application configuration via environment variables."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Central configuration for SupplyGuard."""

    # Application
    app_name: str = "SupplyGuard"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = Field(default="development", pattern=r"^(development|staging|production)$")
    log_level: str = Field(default="INFO", pattern=r"^(?i)(debug|info|warning|error|critical)$")
    log_format: str = "json"

    # API
    allowed_origins: str = "http://localhost:3000"
    rate_limit_default: str = "100/minute"

    # Session seeding
    seed_mock_data: bool = True

    # Gemini
    gemini_api_key: str = ""
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    gemini_fast_model: str = "gemini-3-flash-preview"
    gemini_pro_model: str = "gemini-3-pro-preview"
    gemini_tts_model: str = "gemini-2.5-flash-preview-tts"
    gemini_tts_voice: str = "Kore"
    deep_assessment_thinking_budget: int = 32768
    ai_timeout_seconds: float = 60.0

    # Questionnaires
    default_questionnaire_language: str = Field(default="EN", pattern=r"^(EN|DE|CN|ES|FR)$")

    @property
    def allowed_origins_list(self) -> list[str]:
        return [o.strip() for o in self.allowed_origins.split(",")]

    model_config = {"env_prefix": "SUPPLYGUARD_", "env_file": ".env", "extra": "ignore"}


def get_settings() -> Settings:
    """Return settings instance."""
    return Settings()
