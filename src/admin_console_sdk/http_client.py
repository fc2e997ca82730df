from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Sequence
from urllib.parse import urljoin

import requests
from requests.adapters import HTTPAdapter

from .config import ClientConfig
from .error_mapper import DEFAULT_FALLBACK_MESSAGE, map_error
from .exceptions import MalformedResponseError, NetworkUnavailableError

logger = logging.getLogger(__name__)

# requests-style multipart parts: (field, (filename | None, content[, content_type]))
MultipartParts = Sequence[tuple[str, tuple[Any, ...]]]


@dataclass
class HttpClient:
    """Thin transport over a pooled ``requests.Session``.

    Returns the decoded JSON body of a 2xx response (``None`` when the body is
    empty) and raises an ``ApiError`` subclass for everything else. It never
    retries: mutations are not idempotent from the client's point of view.
    """

    config: ClientConfig
    session: requests.Session | None = None

    def __post_init__(self) -> None:
        if self.session is None:
            self.session = requests.Session()
            adapter = HTTPAdapter(
                pool_connections=self.config.max_connections,
                pool_maxsize=self.config.max_connections,
            )
            self.session.mount("http://", adapter)
            self.session.mount("https://", adapter)

    def _build_url(self, path: str) -> str:
        base = self.config.api_base_url.rstrip("/") + "/"
        return urljoin(base, path.lstrip("/"))

    def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        json_body: Any = None,
        params: dict[str, Any] | None = None,
        files: MultipartParts | None = None,
        operation: str = "unknown",
        fallback_message: str = DEFAULT_FALLBACK_MESSAGE,
    ) -> Any:
        if self.session is None:
            raise RuntimeError("HTTP session not initialized")
        if json_body is not None and files is not None:
            raise ValueError("json_body and files are mutually exclusive")
        request_headers = {"Accept": "application/json"}
        if headers:
            request_headers.update(headers)

        normalized_method = method.upper()
        url = self._build_url(path)
        logger.debug(
            "api_request",
            extra={"method": normalized_method, "url": url, "operation": operation, "multipart": files is not None},
        )

        started = time.monotonic()
        try:
            response = self.session.request(
                method=normalized_method,
                url=url,
                headers=request_headers,
                json=json_body,
                params=params,
                files=list(files) if files is not None else None,
                timeout=(self.config.connect_timeout_seconds, self.config.read_timeout_seconds),
                verify=self.config.verify_ssl,
            )
        except requests.RequestException as exc:
            logger.warning(
                "api_unreachable",
                extra={"method": normalized_method, "url": url, "operation": operation, "error": type(exc).__name__},
            )
            raise NetworkUnavailableError(
                code="NETWORK_UNAVAILABLE",
                message=fallback_message,
                status_code=0,
                details={"type": type(exc).__name__, "reason": str(exc)},
            ) from exc

        duration_ms = int((time.monotonic() - started) * 1000)
        logger.debug(
            "api_response",
            extra={
                "method": normalized_method,
                "url": url,
                "operation": operation,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            },
        )

        if response.ok:
            if not response.content:
                return None
            try:
                return response.json()
            except ValueError as exc:
                raise MalformedResponseError(
                    code="MALFORMED_RESPONSE",
                    message=fallback_message,
                    status_code=response.status_code,
                    details={"reason": "response body is not valid JSON"},
                    raw_payload=response.text[:500],
                ) from exc

        try:
            payload = response.json()
        except ValueError:
            payload = {"message": response.text[:500]} if response.text else {}
        logger.info(
            "api_error",
            extra={"method": normalized_method, "url": url, "operation": operation, "status_code": response.status_code},
        )
        raise map_error(response.status_code, payload, fallback_message)
