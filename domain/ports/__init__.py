from __future__ import annotations

from abc import abstractmethod
from datetime import datetime
from typing import Any, Mapping, Protocol, Sequence, runtime_checkable

from domain.models import StoredDocument, TrackerConfig, UserProfile, UserSession


@runtime_checkable
class DocumentStorePort(Protocol):
    """
    Key-value style document collection.

    All methods are asynchronous; they are the suspension points of every
    read and write. Timestamp fields travel as timezone-aware ``datetime``.
    """

    async def query(
        self,
        collection: str,
        filters: Mapping[str, Any],
    ) -> Sequence[StoredDocument]:
        ...

    async def insert(self, collection: str, fields: Mapping[str, Any]) -> str:
        ...

    async def update_by_key(
        self,
        collection: str,
        document_id: str,
        fields: Mapping[str, Any],
    ) -> None:
        ...

    async def delete_by_key(self, collection: str, document_id: str) -> None:
        ...


@runtime_checkable
class IdentityProviderPort(Protocol):
    """Black-box authentication yielding a stable user identifier."""

    def current_user(self) -> UserSession | None:
        ...

    async def sign_in(self) -> UserSession:
        ...

    async def sign_out(self) -> None:
        ...


@runtime_checkable
class SessionStorePort(Protocol):
    """Persists the signed-in session across restarts."""

    @abstractmethod
    def load(self) -> UserSession | None:
        ...

    @abstractmethod
    def save(self, session: UserSession) -> None:
        ...

    @abstractmethod
    def clear(self) -> None:
        ...


@runtime_checkable
class NotificationPort(Protocol):
    """Fire-and-forget user-facing messages (toasts, console lines)."""

    def success(self, message: str) -> None:
        ...

    def error(self, message: str) -> None:
        ...

    def loading(self, message: str) -> None:
        ...

    def dismiss(self) -> None:
        ...


@runtime_checkable
class LinkOpenerPort(Protocol):
    """Opens a job posting link outside the application."""

    def open(self, url: str) -> None:
        ...


@runtime_checkable
class ConfigProviderPort(Protocol):
    """Read access to configuration and the local user profile."""

    def get_config(self) -> TrackerConfig:
        ...

    def get_profile(self) -> UserProfile:
        ...

    def validate(self) -> list[str]:
        ...


@runtime_checkable
class ClockPort(Protocol):
    """Time source for deterministic and easily testable code."""

    def now(self) -> datetime:
        ...


@runtime_checkable
class IdGeneratorPort(Protocol):
    """Generation of store-side document identifiers."""

    def new_document_id(self) -> str:
        ...


@runtime_checkable
class LoggerPort(Protocol):
    """Structured, testable logging abstraction."""

    def info(self, message: str, **fields: Any) -> None:
        ...

    def warning(self, message: str, **fields: Any) -> None:
        ...

    def error(self, message: str, **fields: Any) -> None:
        ...


__all__ = [
    "DocumentStorePort",
    "IdentityProviderPort",
    "SessionStorePort",
    "NotificationPort",
    "LinkOpenerPort",
    "ConfigProviderPort",
    "ClockPort",
    "IdGeneratorPort",
    "LoggerPort",
]
