from __future__ import annotations

from domain.models import UserSession
from domain.ports import (
    IdentityProviderPort,
    LoggerPort,
    NotificationPort,
    SessionStorePort,
)


class AuthenticationError(RuntimeError):
    """Raised when signing in with the identity provider fails."""


class SessionManager:
    """
    Explicit lifecycle for the signed-in identity.

    A session is created on successful sign-in, persisted so it survives
    restarts, and torn down on sign-out. Consumers receive the session
    object instead of reading a global cache.
    """

    def __init__(
        self,
        *,
        identity: IdentityProviderPort,
        store: SessionStorePort,
        notifier: NotificationPort,
        logger: LoggerPort,
    ) -> None:
        self._identity = identity
        self._store = store
        self._notifier = notifier
        self._logger = logger

    def current(self) -> UserSession | None:
        try:
            return self._store.load()
        except ValueError as exc:
            self._logger.warning("session_restore_failed", error=str(exc))
            self._store.clear()
            return None

    async def sign_in(self) -> UserSession:
        try:
            session = await self._identity.sign_in()
        except Exception as exc:
            self._logger.error("sign_in_failed", error=str(exc))
            self._notifier.error("Failed to sign in. Please try again.")
            raise AuthenticationError("Failed to sign in") from exc

        self._store.save(session)
        self._logger.info("signed_in", uid=session.uid)
        self._notifier.success(f"Welcome, {session.display_name or 'User'}!")
        return session

    async def sign_out(self) -> None:
        try:
            await self._identity.sign_out()
        except Exception as exc:
            self._logger.error("sign_out_failed", error=str(exc))
            self._notifier.error("Failed to log out")
            raise
        self._store.clear()
        self._logger.info("signed_out")
        self._notifier.success("Logged out successfully")
