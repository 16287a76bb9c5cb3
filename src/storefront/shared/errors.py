"""Helpers for reading domain validation errors."""

from protean.exceptions import ValidationError


def _first_message(messages) -> str:
    if isinstance(messages, dict):
        for value in messages.values():
            return _first_message(value)
        return ""
    if isinstance(messages, list | tuple):
        return str(messages[0]) if messages else ""
    return str(messages)


def error_message(exc: ValidationError) -> str:
    """Flatten a ValidationError payload into its first human-readable message."""
    return _first_message(exc.messages)
