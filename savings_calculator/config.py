"""Runtime settings and calculation limits."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class FieldLimit(BaseModel):
    model_config = ConfigDict(frozen=True)

    min: float
    max: float


class CalculationLimits(BaseModel):
    """Inclusive bounds for each calculator input."""

    model_config = ConfigDict(frozen=True)

    initialSavings: FieldLimit = FieldLimit(min=0, max=1_000_000)
    monthlyDeposit: FieldLimit = FieldLimit(min=0, max=10_000)
    interestRate: FieldLimit = FieldLimit(min=0, max=20)
    years: FieldLimit = FieldLimit(min=1, max=100)

    def for_field(self, name: str) -> FieldLimit:
        return getattr(self, name)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    PORT: int = 3001
    ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    # comma-separated, e.g. "http://localhost:5173,https://example.com"
    CORS_ALLOWED_ORIGINS: str = "http://localhost:5173"
    CORS_CREDENTIALS: bool = True

    RATE_LIMIT_WINDOW_SECONDS: int = Field(default=15 * 60, ge=1)
    RATE_LIMIT_MAX: int = Field(default=50, ge=1)

    limits: CalculationLimits = CalculationLimits()

    @property
    def is_production(self) -> bool:
        return self.ENV == "production"

    @property
    def allowed_origins(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ALLOWED_ORIGINS.split(",") if origin.strip()]


settings = Settings()
