"""Turn raw user input into parameter values a model can safely consume."""

from __future__ import annotations

import math
from typing import Dict, List, Mapping, Optional

from .registry import ModelSpec, ParamRules


class ValidationError(ValueError):
    """Raised when one or more parameters violate their declared rules."""

    def __init__(self, messages: List[str]):
        super().__init__("; ".join(messages))
        self.messages = list(messages)


def hint_for_rules(rules: ParamRules) -> str:
    if rules.integer:
        return "Required. Integer."
    if rules.positive:
        return "Required. > 0."
    if rules.min is not None:
        return f"Required. ≥ {rules.min}."
    return "Required."


def _to_number(raw: object) -> Optional[float]:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        return float(raw)
    try:
        return float(str(raw).strip())
    except ValueError:
        return None


def check_value(label: str, value: float, rules: ParamRules) -> List[str]:
    """Every rule `value` breaks, as user-facing messages."""
    errors = []
    if rules.positive and value <= 0:
        errors.append(f"{label} must be > 0.")
    if rules.min is not None and value < rules.min:
        errors.append(f"{label} must be ≥ {rules.min}.")
    if rules.max is not None and value > rules.max:
        errors.append(f"{label} must be ≤ {rules.max}.")
    if rules.integer and not float(value).is_integer():
        errors.append(f"{label} must be an integer.")
    return errors


def validate_params(spec: ModelSpec, raw: Mapping[str, object]) -> Dict[str, float]:
    """
    Validate raw inputs (strings or numbers) against `spec`.

    Returns the numeric values keyed by parameter id. Raises `ValidationError`
    listing every problem found; nothing should be computed in that case.
    """
    values: Dict[str, float] = {}
    errors: List[str] = []
    for p in spec.parameters:
        entry = raw.get(p.id)
        if entry is None or (isinstance(entry, str) and not entry.strip()):
            errors.append(f"{p.label} is required.")
            continue
        number = _to_number(entry)
        if number is None or not math.isfinite(number):
            errors.append(f"{p.label} must be numeric.")
            continue
        errors.extend(check_value(p.label, number, p.rules))
        values[p.id] = number

    if errors:
        raise ValidationError(errors)
    return values
