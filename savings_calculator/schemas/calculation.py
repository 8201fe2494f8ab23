"""Data contracts for savings calculations."""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CalculationParams(BaseModel):
    """Validated calculator inputs. Build through ``validate_params``."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    initialSavings: float
    monthlyDeposit: float
    interestRate: float = Field(..., description="Annual rate as a percentage, e.g. 5 for 5%.")
    years: int


class MonthlyResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    year: int = Field(..., ge=1)
    month: int = Field(..., ge=1, le=12)
    balance: float
    interest: float


class YearlyResult(BaseModel):
    """Single row of the yearly breakdown."""

    model_config = ConfigDict(frozen=True)

    year: int = Field(..., ge=1)
    startBalance: float
    endBalance: float
    growth: float
    # None when the year started from a zero balance
    growthPercentage: Optional[float]


class CalculationSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    initialInvestment: float
    totalDeposited: float
    totalInterestEarned: float
    finalBalance: float
    years: int


class CalculationResponse(BaseModel):
    """Projected savings: headline numbers plus yearly and monthly schedules."""

    model_config = ConfigDict(frozen=True)

    success: bool = True
    summary: CalculationSummary
    yearlyResults: List[YearlyResult]
    monthlyResults: List[MonthlyResult]


class ErrorResponse(BaseModel):
    error: str
    message: str
    details: Optional[Any] = None
    retryAfter: Optional[str] = None
