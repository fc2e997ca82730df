from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping

from ..envelope import malformed, parse_model, unwrap_data, unwrap_envelope
from ..exceptions import ApiError, FeatureNotImplementedError
from ..models import AuthenticatedUser, Session, User
from ..result import Result
from ..session_store import SessionStore
from .base import BaseClient

logger = logging.getLogger(__name__)

LOGIN_FALLBACK = "Login failed. Please try again."
LOGOUT_FALLBACK = "Failed to sign out. Please try again."


def _not_implemented(feature: str) -> Result[None]:
    return Result.failure(
        FeatureNotImplementedError(
            code="NOT_IMPLEMENTED",
            message=f"{feature} not implemented",
            status_code=0,
        )
    )


@dataclass
class AuthGateway(BaseClient):
    """Login/logout against the remote service, backed by a :class:`SessionStore`.

    Every network-dependent operation returns a :class:`Result`; no
    ``ApiError`` escapes this class.
    """

    login_path: str = "auth/login"
    logout_path: str = "auth/logout"
    notify_server_on_logout: bool = False

    def __post_init__(self) -> None:
        if self.session_store is None:
            self.session_store = SessionStore()

    @property
    def store(self) -> SessionStore:
        assert self.session_store is not None
        return self.session_store

    def login(self, email: str, password: str) -> Result[User]:
        logger.info("login_attempt")
        try:
            data = self._request(
                "POST",
                self.login_path,
                json_body={"email": email, "password": password},
                operation="auth.login",
                fallback_message=LOGIN_FALLBACK,
            )
            authenticated = self._parse_login(data)
            profile = authenticated.profile()
            self.store.save(Session(token=authenticated.auth.token, user=profile))
        except ApiError as exc:
            logger.warning("login_failure", extra={"status_code": exc.status_code, "code": exc.code})
            return Result.failure(exc)
        except OSError as exc:
            logger.error("login_session_persist_failed", exc_info=True)
            return Result.failure(
                ApiError(
                    code="SESSION_PERSIST_FAILED",
                    message=LOGIN_FALLBACK,
                    status_code=0,
                    details={"reason": str(exc)},
                )
            )
        logger.info("login_success", extra={"user_id": profile.id})
        return Result.success(profile)

    def logout(self) -> Result[None]:
        logger.info("logout")
        if self.notify_server_on_logout:
            try:
                self._request("POST", self.logout_path, operation="auth.logout", fallback_message=LOGOUT_FALLBACK)
            except ApiError as exc:
                logger.warning("logout_notify_failed", extra={"status_code": exc.status_code, "code": exc.code})
        try:
            self.store.clear()
        except OSError as exc:
            logger.error("logout_session_clear_failed", exc_info=True)
            return Result.failure(
                ApiError(
                    code="SESSION_CLEAR_FAILED",
                    message=LOGOUT_FALLBACK,
                    status_code=0,
                    details={"reason": str(exc)},
                )
            )
        return Result.success(None)

    def restore(self) -> bool:
        return self.store.load().is_authenticated

    def current_user(self) -> User | None:
        return self.store.current().user

    def is_authenticated(self) -> bool:
        return self.store.current().is_authenticated

    def sign_up(self, email: str, password: str, first_name: str = "", last_name: str = "") -> Result[None]:
        return _not_implemented("Sign up")

    def sign_in_with_oauth(self, provider: str) -> Result[None]:
        return _not_implemented("Social authentication")

    def reset_password(self, email: str) -> Result[None]:
        return _not_implemented("Password reset")

    def update_password(self, email: str) -> Result[None]:
        return _not_implemented("Update password")

    @staticmethod
    def _parse_login(data: object) -> AuthenticatedUser:
        if data is None:
            raise malformed(LOGIN_FALLBACK, data, "empty login response")
        content = unwrap_data(unwrap_envelope(data, LOGIN_FALLBACK))
        auth = content.get("auth") if isinstance(content, Mapping) else None
        token = auth.get("token") if isinstance(auth, Mapping) else None
        if not isinstance(token, str) or not token:
            raise malformed(LOGIN_FALLBACK, data, "login response did not include auth.token")
        return parse_model(AuthenticatedUser, content, fallback_message=LOGIN_FALLBACK)
