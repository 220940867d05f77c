"""Exceptions raised by the scheduling engine."""


class ValidationError(ValueError):
    """Raised when tasks, schedules or horizon bounds are malformed."""


def require_mapping(value, what: str) -> dict:
    """Return `value` if it is a dict, else raise ValidationError naming `what`."""
    if not isinstance(value, dict):
        raise ValidationError(f"{what} must be a mapping, got {type(value).__name__}: {value!r}")
    return value


def require_list(value, what: str) -> list:
    """Return `value` (None as empty) if it is a list, else raise ValidationError."""
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValidationError(f"{what} must be a list, got {type(value).__name__}: {value!r}")
    return value
