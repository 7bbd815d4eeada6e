"""
Domain layer package.

This package contains pure business logic models and ports that are
independent of any specific infrastructure or frameworks.
"""

from .models import (  # noqa: F401
    ApplicationRecord,
    ApplicationRow,
    ApplicationStatus,
    ApplicationUpdate,
    CreateApplicationForm,
    EditApplicationForm,
    NewApplication,
    StoredDocument,
    TrackerConfig,
    UserProfile,
    UserSession,
)
from .ports import (  # noqa: F401
    ClockPort,
    ConfigProviderPort,
    DocumentStorePort,
    IdentityProviderPort,
    IdGeneratorPort,
    LinkOpenerPort,
    LoggerPort,
    NotificationPort,
    SessionStorePort,
)

__all__ = [
    # Models
    "ApplicationStatus",
    "ApplicationRecord",
    "ApplicationRow",
    "NewApplication",
    "ApplicationUpdate",
    "CreateApplicationForm",
    "EditApplicationForm",
    "UserSession",
    "UserProfile",
    "StoredDocument",
    "TrackerConfig",
    # Ports
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
