from __future__ import annotations

import json
import logging

from pydantic import ValidationError

from .auth_store import TOKEN_KEY, USER_KEY, KeyValueStore, MemoryKeyValueStore
from .models import Session, User

logger = logging.getLogger(__name__)

SESSION_KEYS = (TOKEN_KEY, USER_KEY)


class SessionStore:
    """Sole owner of the process-wide :class:`Session`.

    The in-memory session is an immutable value swapped by a single
    assignment, and the durable copy is written with one multi-key call, so
    the (token, user) pair is never observed half-updated.

    Restoring from the durable store trusts the cached copy: the token is not
    re-validated against the server, so a revoked token keeps reporting as
    authenticated until a request made with it fails.
    """

    def __init__(self, store: KeyValueStore | None = None) -> None:
        self.store: KeyValueStore = store if store is not None else MemoryKeyValueStore()
        self._session = Session.empty()

    def current(self) -> Session:
        return self._session

    def load(self) -> Session:
        try:
            values = self.store.get_many(SESSION_KEYS)
        except OSError:
            logger.warning("session_restore_unreadable", exc_info=True)
            self._session = Session.empty()
            return self._session

        token = values.get(TOKEN_KEY)
        raw_user = values.get(USER_KEY)
        if not token and not raw_user:
            self._session = Session.empty()
            return self._session

        restored = self._decode(token, raw_user)
        if restored is None:
            logger.info("session_restore_discarded")
            self._session = Session.empty()
            self._discard_durable()
            return self._session

        self._session = restored
        logger.info("session_restored", extra={"user_id": restored.user.id if restored.user else None})
        return self._session

    def save(self, session: Session) -> None:
        if not session.is_authenticated or session.user is None:
            self.clear()
            return
        self.store.set_many(
            {
                TOKEN_KEY: session.token or "",
                USER_KEY: json.dumps(session.user.model_dump(mode="json", by_alias=True)),
            }
        )
        self._session = session

    def clear(self) -> None:
        self._session = Session.empty()
        self.store.delete_many(SESSION_KEYS)

    @staticmethod
    def _decode(token: str | None, raw_user: str | None) -> Session | None:
        if not token or not raw_user:
            return None
        try:
            user = User.model_validate(json.loads(raw_user))
            return Session(token=token, user=user)
        except (json.JSONDecodeError, ValidationError):
            return None

    def _discard_durable(self) -> None:
        try:
            self.store.delete_many(SESSION_KEYS)
        except OSError:
            logger.warning("session_discard_failed", exc_info=True)
