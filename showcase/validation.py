from __future__ import annotations

import json
import math
import re
from typing import Any

from showcase.models.schemas import FieldError, ValidationResult

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

_REQUIRED_STRING = "required, must be a string"


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def validate_record(record: dict[str, Any]) -> list[FieldError]:
    """
    Check a submitted record field by field.

    Errors are collected in name, email, age order; every field is checked even
    after an earlier one fails.
    """
    errors: list[FieldError] = []

    name = record.get("name")
    if not isinstance(name, str) or not name:
        errors.append(FieldError(field="name", message=_REQUIRED_STRING))
    elif len(name) < 2:
        errors.append(FieldError(field="name", message="must be at least 2 characters"))

    email = record.get("email")
    if not isinstance(email, str) or not email:
        errors.append(FieldError(field="email", message=_REQUIRED_STRING))
    elif not _EMAIL_RE.match(email):
        errors.append(FieldError(field="email", message="must be a valid email address"))

    if "age" in record:
        age = record["age"]
        if not _is_number(age) or age < 0 or age > 150:
            errors.append(FieldError(field="age", message="must be a number between 0 and 150"))

    return errors


def _reject_constant(name: str) -> float:
    raise ValueError(f"{name} is not a JSON number")


def _finite_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"{text} overflows a finite number")
    return value


def validate_payload(raw: bytes) -> ValidationResult:
    # Non-finite numbers cannot be echoed back as JSON, so they count as unparseable.
    try:
        body = json.loads(raw, parse_constant=_reject_constant, parse_float=_finite_float)
    except (ValueError, RecursionError):
        body = None

    if not isinstance(body, dict):
        return ValidationResult(
            valid=False,
            errors=[FieldError(field="body", message="Invalid or missing JSON body")],
        )

    errors = validate_record(body)
    if errors:
        return ValidationResult(valid=False, errors=errors, received=body)
    return ValidationResult(valid=True, data=body)
