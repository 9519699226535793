"""
Numeric Field Reader
====================
Turns the raw text typed into the parameter form into finite floats.

Parsing never raises: every field yields a `FieldReading` that is either a
value or an error message. `read_fields` then aggregates all problems of a
form into a single `ValidationError`, so a malformed value can never reach
the network payload.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

# Field roles in the order they appear in the form
LIGHT = "light"
CAMERA_FROM = "from"
CAMERA_TO = "to"
CAMERA_UP = "up"

ROLES: Tuple[str, ...] = (LIGHT, CAMERA_FROM, CAMERA_TO, CAMERA_UP)
AXES: Tuple[str, ...] = ("x", "y", "z")


def field_key(role: str, axis: str) -> str:
    return f"{role}.{axis}"


FIELD_KEYS: Tuple[str, ...] = tuple(field_key(r, a) for r in ROLES for a in AXES)


class ValidationError(ValueError):
    """One or more form fields cannot be used to build a request."""

    def __init__(self, problems: List[str]) -> None:
        self.problems = list(problems)
        super().__init__("; ".join(self.problems))


@dataclass(frozen=True)
class FieldReading:
    """Outcome of parsing one field: exactly one of value/error is set."""
    value: Optional[float] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def read_number(text: Optional[str]) -> FieldReading:
    """
    Parse a raw field value as a finite float.

    No clamping or range check is done; negative numbers and zero are fine.
    """
    stripped = (text or "").strip()
    if not stripped:
        return FieldReading(error="value is required")

    try:
        value = float(stripped)
    except ValueError:
        return FieldReading(error=f"'{stripped}' is not a number")

    if not math.isfinite(value):
        return FieldReading(error=f"'{stripped}' is not a finite number")

    return FieldReading(value=value)


def read_fields(raw: Mapping[str, str], keys: Iterable[str] = FIELD_KEYS) -> Dict[str, float]:
    """
    Read every required key from `raw`.

    Raises:
        ValidationError: listing every missing or malformed field at once.
    """
    values: Dict[str, float] = {}
    problems: List[str] = []

    for key in keys:
        if key not in raw:
            problems.append(f"{key}: missing value")
            continue
        reading = read_number(raw[key])
        if reading.ok:
            values[key] = reading.value
        else:
            problems.append(f"{key}: {reading.error}")

    if problems:
        raise ValidationError(problems)
    return values


def format_number(value: float) -> str:
    """Text shown in a field for a numeric value (no trailing ".0" noise)."""
    text = repr(float(value))
    return text[:-2] if text.endswith(".0") else text
