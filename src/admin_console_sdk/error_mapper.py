from __future__ import annotations

from typing import Any, Mapping

from .exceptions import (
    ApiError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    RateLimitError,
    ServerError,
    UnauthorizedError,
    ValidationFailedError,
)

DEFAULT_FALLBACK_MESSAGE = "Request failed"


def extract_message(payload: Any) -> str | None:
    """Server message from a top-level ``message`` or the envelope's ``response.message``."""
    if not isinstance(payload, Mapping):
        return None
    message = payload.get("message")
    if isinstance(message, str) and message.strip():
        return message.strip()
    nested = payload.get("response")
    if isinstance(nested, Mapping):
        message = nested.get("message")
        if isinstance(message, str) and message.strip():
            return message.strip()
    return None


def map_error(
    status_code: int,
    payload: Any,
    fallback_message: str = DEFAULT_FALLBACK_MESSAGE,
) -> ApiError:
    body = payload if isinstance(payload, Mapping) else {}
    code = str(body.get("code") or "HTTP_ERROR")
    message = extract_message(body) or fallback_message
    details = body.get("details") or body.get("errors")
    mapped: type[ApiError]
    if status_code == 401:
        mapped = UnauthorizedError
    elif status_code == 403:
        mapped = ForbiddenError
    elif status_code == 404:
        mapped = NotFoundError
    elif status_code in {400, 422}:
        mapped = ValidationFailedError
    elif status_code == 409:
        mapped = ConflictError
    elif status_code == 429:
        mapped = RateLimitError
    elif status_code >= 500:
        mapped = ServerError
    else:
        mapped = ApiError
    return mapped(
        code=code,
        message=message,
        status_code=status_code,
        details=details,
        raw_payload=dict(body) if body else payload,
    )
