"""
Correcting validators for combat data.

Malformed combat data is never rejected: each helper logs a warning and
returns a usable value so a simulation can always proceed.
"""

from typing import Any, Optional

from catchery import log_warning


def ensure_string(
    value: Any,
    param_name: str,
    default: str = "",
    context: Optional[dict[str, Any]] = None,
) -> str:
    """
    Ensures a value is a non-empty string, falling back to a default.

    Args:
        value: The value to ensure is a string
        param_name: Human-readable parameter name for error messages
        default: Value returned when the input is missing or blank
        context: Additional context for logging

    Returns:
        str: The string value or default
    """
    if value is None:
        log_warning(
            f"{param_name} is missing, using default: {default!r}",
            {**(context or {}), "param_name": param_name},
        )
        return default
    if not isinstance(value, str):
        log_warning(
            f"{param_name} should be string, got: {type(value).__name__}, converting",
            {
                **(context or {}),
                "param_name": param_name,
                "value": value,
            },
        )
        value = str(value)
    if not value.strip():
        log_warning(
            f"{param_name} is blank, using default: {default!r}",
            {**(context or {}), "param_name": param_name},
        )
        return default
    return value


def ensure_non_negative_int(
    value: Any, param_name: str, default: int = 0, context: Optional[dict[str, Any]] = None
) -> int:
    """
    Ensures a value is a non-negative integer, correcting if needed.

    Args:
        value: The value to ensure is a non-negative integer
        param_name: Human-readable parameter name for error messages
        default: Value used when the input cannot be converted
        context: Additional context for logging

    Returns:
        int: The corrected integer value
    """
    if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
        return value
    if value is None:
        log_warning(
            f"{param_name} is missing, using default: {default}",
            {**(context or {}), "param_name": param_name},
        )
        return default
    corrected = max(0, int(value)) if isinstance(value, (int, float)) else default
    log_warning(
        f"{param_name} must be non-negative integer, got: {value}, correcting to {corrected}",
        {
            **(context or {}),
            "param_name": param_name,
            "value": value,
            "corrected_to": corrected,
        },
    )
    return corrected


def ensure_int_in_range(
    value: Any,
    param_name: str,
    min_val: int,
    max_val: Optional[int] = None,
    default: Optional[int] = None,
    context: Optional[dict[str, Any]] = None,
) -> int:
    """
    Ensures a value is an integer within the specified range, correcting if needed.

    Args:
        value: The value to validate
        param_name: Human-readable parameter name for error messages
        min_val: Minimum allowed value (inclusive)
        max_val: Maximum allowed value (inclusive), None for no maximum
        default: Value used when the input cannot be converted, min_val if None
        context: Additional context for logging

    Returns:
        int: The corrected integer value
    """
    if default is None:
        default = min_val

    if (
        isinstance(value, int)
        and not isinstance(value, bool)
        and value >= min_val
        and (max_val is None or value <= max_val)
    ):
        return value

    try:
        converted = int(value) if isinstance(value, (int, float)) else default
    except (ValueError, TypeError, OverflowError):
        converted = default
    corrected = max(min_val, converted)
    if max_val is not None:
        corrected = min(max_val, corrected)

    range_desc = f">= {min_val}" if max_val is None else f"between {min_val} and {max_val}"
    log_warning(
        f"{param_name} must be integer {range_desc}, got: {value}, correcting to {corrected}",
        {
            **(context or {}),
            "param_name": param_name,
            "value": value,
            "corrected_to": corrected,
        },
    )
    return corrected
