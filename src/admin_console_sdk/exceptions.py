from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ApiError(Exception):
    code: str
    message: str
    status_code: int
    details: object | None = None
    raw_payload: object | None = None

    def __str__(self) -> str:
        return f"[{self.status_code}] {self.code}: {self.message}"


class NetworkUnavailableError(ApiError):
    """The service could not be reached; no HTTP response was received."""


class UnauthorizedError(ApiError):
    """Missing, invalid or expired token. Callers decide whether to sign out."""


class ForbiddenError(ApiError):
    pass


class NotFoundError(ApiError):
    pass


class ValidationFailedError(ApiError):
    """The server rejected the input and usually says why."""


class ConflictError(ApiError):
    """409 or conflict-style errors."""


class RateLimitError(ApiError):
    """429 throttling error."""


class ServerError(ApiError):
    """5xx server-side failures."""


class MalformedResponseError(ApiError):
    """2xx response whose body is missing or does not have the expected shape."""


class FeatureNotImplementedError(ApiError):
    """Returned by operations that exist in the interface but have no backend flow."""
