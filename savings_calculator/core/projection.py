"""Month-by-month compound interest projection."""

from __future__ import annotations

from typing import Any, List, Mapping, Optional

from savings_calculator.config import CalculationLimits
from savings_calculator.core.validation import validate_params
from savings_calculator.schemas.calculation import (
    CalculationParams,
    CalculationResponse,
    CalculationSummary,
    MonthlyResult,
    YearlyResult,
)

MONTHS_PER_YEAR = 12


def round2(value: float) -> float:
    return round(value, 2)


def growth_percentage(start_balance: float, end_balance: float) -> Optional[float]:
    """Percentage growth over a year, or None when the year started empty."""
    if start_balance == 0:
        return None
    return round2((end_balance / start_balance - 1) * 100)


def project(
    params: Mapping[str, Any] | CalculationParams,
    limits: Optional[CalculationLimits] = None,
) -> CalculationResponse:
    """Simulate monthly deposits and compounding for ``params.years`` years.

    Deposits land at the start of each month and earn that month's interest.
    The running balance keeps full precision; only the values written into the
    result rows are rounded to cents.
    """
    params = validate_params(params, limits)

    monthly_rate = (params.interestRate / 100) / MONTHS_PER_YEAR
    balance = params.initialSavings
    yearly_results: List[YearlyResult] = []
    monthly_results: List[MonthlyResult] = []

    for year in range(1, params.years + 1):
        year_start = balance

        for month in range(1, MONTHS_PER_YEAR + 1):
            balance += params.monthlyDeposit
            interest = balance * monthly_rate
            balance += interest
            monthly_results.append(
                MonthlyResult(
                    year=year,
                    month=month,
                    balance=round2(balance),
                    interest=round2(interest),
                )
            )

        yearly_results.append(
            YearlyResult(
                year=year,
                startBalance=round2(year_start),
                endBalance=round2(balance),
                growth=round2(balance - year_start),
                growthPercentage=growth_percentage(year_start, balance),
            )
        )

    total_deposited = params.monthlyDeposit * MONTHS_PER_YEAR * params.years
    total_interest = balance - params.initialSavings - total_deposited

    summary = CalculationSummary(
        initialInvestment=params.initialSavings,
        totalDeposited=round2(total_deposited),
        totalInterestEarned=round2(total_interest),
        finalBalance=round2(balance),
        years=params.years,
    )
    return CalculationResponse(
        success=True,
        summary=summary,
        yearlyResults=yearly_results,
        monthlyResults=monthly_results,
    )
