"""Argument normalization against an OperationDescriptor."""

from __future__ import annotations

import math
from typing import Any, Mapping

from .errors import InvalidParamsError
from .registry import ENUM, NUMBER, OperationDescriptor, ParameterSpec


def clamp_int(value: int, lo: int | None, hi: int | None) -> int:
    """Clamp an integer parameter to its declared range."""
    if hi is not None:
        value = min(value, hi)
    if lo is not None:
        value = max(value, lo)
    return value


def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _coerce_number(spec: ParameterSpec, value: Any) -> int:
    # bool is an int subclass; a JSON true is never a count
    if isinstance(value, bool):
        raise InvalidParamsError(f"Argument '{spec.name}' must be a number")
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            raise InvalidParamsError(f"Argument '{spec.name}' must be a number") from None
    if isinstance(value, float) and not (math.isfinite(value) and value.is_integer()):
        raise InvalidParamsError(f"Argument '{spec.name}' must be a whole number")
    if not isinstance(value, (int, float)):
        raise InvalidParamsError(f"Argument '{spec.name}' must be a whole number")
    return clamp_int(int(value), spec.minimum, spec.maximum)


def _normalize(spec: ParameterSpec, value: Any) -> Any:
    if spec.kind == NUMBER:
        return _coerce_number(spec, value)

    if not isinstance(value, str):
        raise InvalidParamsError(f"Argument '{spec.name}' must be a string")
    if spec.kind == ENUM and value not in spec.choices:
        raise InvalidParamsError(
            f"Argument '{spec.name}' must be one of {list(spec.choices)}, got '{value}'"
        )
    if spec.max_length is not None and len(value) > spec.max_length:
        raise InvalidParamsError(
            f"Argument '{spec.name}' exceeds {spec.max_length} characters"
        )
    return value


def normalize_arguments(
    descriptor: OperationDescriptor, arguments: Mapping[str, Any]
) -> dict[str, Any]:
    """
    Validate arguments and fill defaults.

    Returns a dict keyed by parameter name holding only the parameters that end
    up with a value. Counts are capped at the operation's maximum rather than
    rejected. Arguments the descriptor does not declare are dropped.

    Raises:
        InvalidParamsError: A required argument is missing or a value has the wrong type.
    """
    values: dict[str, Any] = {}
    for spec in descriptor.parameters:
        raw = arguments.get(spec.name)
        if _is_missing(raw):
            if spec.required:
                raise InvalidParamsError(f"Missing required argument: {spec.name}")
            if spec.default is not None:
                values[spec.name] = spec.default
            continue
        values[spec.name] = _normalize(spec, raw)
    return values
