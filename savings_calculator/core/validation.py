"""Input validation for savings calculations.

Checks run in a fixed order and stop at the first failure so the client and
the server always agree on which error is reported:

1. presence of all four parameters
2. every value parses to a finite number
3. minimum bounds, field by field
4. maximum bounds, field by field
5. ``years`` is a whole number
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from savings_calculator.config import CalculationLimits, FieldLimit, settings
from savings_calculator.core.errors import CalculationError, ErrorCode
from savings_calculator.schemas.calculation import CalculationParams

REQUIRED_PARAMS = ("initialSavings", "monthlyDeposit", "interestRate", "years")


@dataclass(frozen=True)
class FieldRule:
    label: str
    below_min: ErrorCode
    above_max: ErrorCode
    min_message: str
    unit: str = "$"


FIELD_RULES: Dict[str, FieldRule] = {
    "initialSavings": FieldRule(
        label="Initial savings",
        below_min=ErrorCode.NEGATIVE_INITIAL_SAVINGS,
        above_max=ErrorCode.EXCESSIVE_INITIAL_SAVINGS,
        min_message="Initial savings must be a positive number",
    ),
    "monthlyDeposit": FieldRule(
        label="Monthly deposit",
        below_min=ErrorCode.NEGATIVE_MONTHLY_DEPOSIT,
        above_max=ErrorCode.EXCESSIVE_MONTHLY_DEPOSIT,
        min_message="Monthly deposit must be a positive number",
    ),
    "interestRate": FieldRule(
        label="Interest rate",
        below_min=ErrorCode.NEGATIVE_INTEREST_RATE,
        above_max=ErrorCode.EXCESSIVE_INTEREST_RATE,
        min_message="Interest rate must be a positive number",
        unit="%",
    ),
    "years": FieldRule(
        label="Years",
        below_min=ErrorCode.INVALID_YEARS,
        above_max=ErrorCode.EXCESSIVE_YEARS,
        min_message="Years must be greater than 0",
        unit="",
    ),
}


def parse_number(value: Any) -> Optional[float]:
    """Return ``value`` as a finite float, or None when it is not numeric."""
    if isinstance(value, bool):
        return None
    if not isinstance(value, (int, float, str)):
        return None
    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except (ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def format_bound(value: float, unit: str = "") -> str:
    text = f"{int(value):,}" if float(value).is_integer() else f"{value:,}"
    if unit == "$":
        return f"${text}"
    return f"{text}{unit}"


def _type_error(name: str, value: Any) -> CalculationError:
    return CalculationError(
        ErrorCode.INVALID_PARAMETER_TYPE,
        f"{FIELD_RULES[name].label} must be a numeric value",
        details={"field": name, "value": value},
    )


def _min_error(name: str, number: float, limit: FieldLimit) -> Optional[CalculationError]:
    if number >= limit.min:
        return None
    rule = FIELD_RULES[name]
    return CalculationError(
        rule.below_min,
        rule.min_message,
        details={"field": name, "value": number, "minAllowed": limit.min},
    )


def _max_error(name: str, number: float, limit: FieldLimit) -> Optional[CalculationError]:
    if number <= limit.max:
        return None
    rule = FIELD_RULES[name]
    return CalculationError(
        rule.above_max,
        f"{rule.label} exceeds maximum allowed value of {format_bound(limit.max, rule.unit)}",
        details={"field": name, "value": number, "maxAllowed": limit.max},
    )


def _whole_years_error(number: float) -> Optional[CalculationError]:
    if number.is_integer():
        return None
    return CalculationError(
        ErrorCode.INVALID_YEARS,
        "Years must be a whole number",
        details={"field": "years", "value": number},
    )


def check_field(
    name: str,
    value: Any,
    limits: Optional[CalculationLimits] = None,
    require_whole_years: bool = True,
) -> Optional[CalculationError]:
    """Run the numeric, bound and whole-number checks for a single field."""
    limits = limits or settings.limits
    number = parse_number(value)
    if number is None:
        return _type_error(name, value)
    limit = limits.for_field(name)
    error = _min_error(name, number, limit) or _max_error(name, number, limit)
    if error is None and name == "years" and require_whole_years:
        error = _whole_years_error(number)
    return error


def validate_params(
    raw: Mapping[str, Any] | CalculationParams,
    limits: Optional[CalculationLimits] = None,
) -> CalculationParams:
    """Validate raw calculator inputs, raising ``CalculationError`` on the first failure."""
    limits = limits or settings.limits
    if isinstance(raw, CalculationParams):
        raw = raw.model_dump()

    missing = [name for name in REQUIRED_PARAMS if name not in raw]
    if missing:
        raise CalculationError(
            ErrorCode.MISSING_PARAMETERS,
            "Missing required parameters",
            details={
                "requiredParams": list(REQUIRED_PARAMS),
                "providedParams": list(raw.keys()),
                "missingParams": missing,
            },
        )

    numbers: Dict[str, float] = {}
    for name in REQUIRED_PARAMS:
        number = parse_number(raw[name])
        if number is None:
            raise _type_error(name, raw[name])
        numbers[name] = number

    for bound_check in (_min_error, _max_error):
        for name in REQUIRED_PARAMS:
            error = bound_check(name, numbers[name], limits.for_field(name))
            if error is not None:
                raise error

    error = _whole_years_error(numbers["years"])
    if error is not None:
        raise error

    return CalculationParams(
        initialSavings=numbers["initialSavings"],
        monthlyDeposit=numbers["monthlyDeposit"],
        interestRate=numbers["interestRate"],
        years=int(numbers["years"]),
    )
