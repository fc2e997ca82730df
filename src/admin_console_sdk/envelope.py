from __future__ import annotations

from typing import Any, Mapping, TypeVar

from pydantic import BaseModel, ValidationError

from .error_mapper import DEFAULT_FALLBACK_MESSAGE, map_error
from .exceptions import MalformedResponseError

ModelT = TypeVar("ModelT", bound=BaseModel)

STATUS_KEYS = ("statusCodes", "statusCode")


def malformed(message: str, payload: Any, reason: str, status_code: int = 200) -> MalformedResponseError:
    return MalformedResponseError(
        code="MALFORMED_RESPONSE",
        message=message,
        status_code=status_code,
        details={"reason": reason},
        raw_payload=payload,
    )


def unwrap_envelope(payload: Any, fallback_message: str = DEFAULT_FALLBACK_MESSAGE) -> Any:
    """Return the ``response`` member of a ``{statusCodes, response}`` envelope.

    Bodies without an envelope are returned unchanged. An envelope that reports
    a non-2xx status inside a 2xx HTTP response is mapped like an HTTP error.
    """
    if not isinstance(payload, Mapping):
        return payload
    for key in STATUS_KEYS:
        status = payload.get(key)
        if isinstance(status, int) and not 200 <= status < 300:
            raise map_error(status, payload, fallback_message)
    if "response" in payload:
        return payload["response"]
    return payload


def unwrap_data(content: Any) -> Any:
    """Unwrap ``{data: record}`` while leaving paginated bodies and bare records alone."""
    if isinstance(content, Mapping) and isinstance(content.get("data"), Mapping) and "id" not in content:
        return content["data"]
    return content


def parse_model(
    model: type[ModelT],
    content: Any,
    *,
    fallback_message: str = DEFAULT_FALLBACK_MESSAGE,
) -> ModelT:
    if not isinstance(content, Mapping):
        raise malformed(fallback_message, content, f"expected a JSON object for {model.__name__}")
    try:
        return model.model_validate(content)
    except ValidationError as exc:
        raise malformed(fallback_message, content, f"{model.__name__}: {exc.error_count()} invalid field(s)") from exc
