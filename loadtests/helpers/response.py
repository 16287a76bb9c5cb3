"""Turn storefront error bodies into one-line messages for Locust output.

The API answers failures in three shapes:

- request validation (422): ``{"detail": [{"loc": [...], "msg": "..."}]}``
- HTTP errors (401/403/404/502): ``{"detail": "Not authenticated"}``
- domain errors (400/404): ``{"error": {"field": ["message", ...]}}``
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Response

MAX_LENGTH = 300


def _validation_errors(errors: list) -> str:
    messages = []
    for error in errors:
        if not isinstance(error, dict):
            messages.append(str(error))
            continue
        location = ".".join(str(part) for part in error.get("loc", []) if part != "body")
        message = error.get("msg", "invalid")
        messages.append(f"{location}: {message}" if location else message)
    return " | ".join(messages)


def _domain_errors(error) -> str:
    if not isinstance(error, dict):
        return str(error)

    messages = []
    for field_name, problems in error.items():
        if isinstance(problems, list):
            problems = ", ".join(str(problem) for problem in problems)
        messages.append(f"{field_name}: {problems}")
    return " | ".join(messages)


def extract_error_detail(response: Response) -> str:
    """Best-effort summary of an error response, never longer than ``MAX_LENGTH``."""
    try:
        body = response.json()
    except ValueError:
        return (getattr(response, "text", "") or "(empty response body)")[:MAX_LENGTH]

    if isinstance(body, dict) and "error" in body:
        summary = _domain_errors(body["error"])
    elif isinstance(body, dict) and isinstance(body.get("detail"), list):
        summary = _validation_errors(body["detail"])
    elif isinstance(body, dict) and "detail" in body:
        summary = str(body["detail"])
    else:
        summary = str(body)

    return summary[:MAX_LENGTH]
