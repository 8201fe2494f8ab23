"""Client-side form state and live validation."""

from __future__ import annotations

import math
from dataclasses import dataclass, fields, replace
from typing import Dict, Optional, Union

from savings_calculator.config import CalculationLimits, settings
from savings_calculator.core.validation import (
    FIELD_RULES,
    REQUIRED_PARAMS,
    check_field,
    parse_number,
)

RawValue = Union[str, int, float]


@dataclass(frozen=True)
class FormState:
    """Raw field values as typed. Strings are kept so "100." survives mid-edit."""

    initialSavings: RawValue = 1000
    monthlyDeposit: RawValue = 100
    interestRate: RawValue = 4
    years: RawValue = 50

    def with_field(self, name: str, value: RawValue) -> "FormState":
        if name not in REQUIRED_PARAMS:
            raise KeyError(name)
        return replace(self, **{name: value})

    def as_dict(self) -> Dict[str, RawValue]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def field_error(name: str, value: RawValue, limits: CalculationLimits) -> Optional[str]:
    if parse_number(value) is None:
        return FIELD_RULES[name].min_message
    # "10." while typing: the whole-number rule waits until years holds a number
    error = check_field(name, value, limits, require_whole_years=not isinstance(value, str))
    return error.message if error else None


def field_errors(state: FormState, limits: Optional[CalculationLimits] = None) -> Dict[str, str]:
    """Per-field messages for every field that currently fails validation."""
    limits = limits or settings.limits
    errors: Dict[str, str] = {}
    for name, value in state.as_dict().items():
        message = field_error(name, value, limits)
        if message:
            errors[name] = message
    return errors


def to_numeric(state: FormState) -> Dict[str, float]:
    """Coerce the raw form values for sending: unparseable becomes 0, years are floored."""
    numeric: Dict[str, float] = {}
    for name, value in state.as_dict().items():
        number = parse_number(value)
        numeric[name] = number if number is not None else 0
    numeric["years"] = int(math.floor(numeric["years"]))
    return numeric
