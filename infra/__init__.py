"""Infrastructure adapters – concrete implementations of domain ports."""

from .config import FileSystemConfigProvider
from .identity import ProfileIdentityProvider
from .interaction import ConsoleNotifier, WebBrowserLinkOpener
from .persistence import DocumentNotFoundError, SQLiteDocumentStore
from .runtime import StructuredLogger, SystemClock, UuidIdGenerator
from .session import FileSystemSessionStore

__all__ = [
    "FileSystemConfigProvider",
    "ProfileIdentityProvider",
    "ConsoleNotifier",
    "WebBrowserLinkOpener",
    "DocumentNotFoundError",
    "SQLiteDocumentStore",
    "FileSystemSessionStore",
    "SystemClock",
    "UuidIdGenerator",
    "StructuredLogger",
]
