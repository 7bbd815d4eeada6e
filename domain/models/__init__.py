from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping


class ApplicationStatus(str, Enum):
    """Lifecycle states of a job application, in their persisted form."""

    SUBMITTED = "Submitted"
    INTERVIEW = "Interview"
    REJECTED = "Rejected"
    ACCEPTED = "Accepted"
    PENDING = "Pending"

    @property
    def display(self) -> str:
        return self.value.lower()

    @classmethod
    def parse(cls, raw: str) -> "ApplicationStatus":
        """Accept either the persisted or the display spelling."""
        cleaned = raw.strip()
        for status in cls:
            if status.value.lower() == cleaned.lower():
                return status
        raise ValueError(f"Unknown application status: {raw!r}")


@dataclass(frozen=True)
class ApplicationRecord:
    """
    Persisted job application owned by a single user.

    ``id`` is assigned by the document store and never changes; ``owner_id``
    is set at creation and never rewritten by updates.
    """

    id: str
    company_name: str
    job_title: str
    location: str
    salary: float
    status: ApplicationStatus
    link: str
    owner_id: str
    date_applied: datetime


@dataclass(frozen=True)
class ApplicationRow:
    """
    Display form of an application as shown in the table.

    ``status`` is lower-case and ``date_applied`` is a short display date
    such as ``"Jun 15, 2025"``.
    """

    id: str
    company_name: str
    job_title: str
    location: str
    salary: float
    status: str
    date_applied: str
    link: str


@dataclass(frozen=True)
class NewApplication:
    """Validated data for a new record; ``date_applied=None`` means now."""

    company_name: str
    job_title: str
    location: str
    salary: float
    status: ApplicationStatus
    link: str
    owner_id: str
    date_applied: datetime | None = None


@dataclass(frozen=True)
class ApplicationUpdate:
    """Validated replacement values for every mutable field of a record."""

    company_name: str
    job_title: str
    location: str
    salary: float
    status: ApplicationStatus
    link: str
    date_applied: datetime


@dataclass(frozen=True)
class CreateApplicationForm:
    """Raw values typed into the add dialog."""

    company_name: str = ""
    job_title: str = ""
    location: str = ""
    salary: str = ""
    status: str = ApplicationStatus.SUBMITTED.value
    link: str = ""


@dataclass(frozen=True)
class EditApplicationForm:
    """Raw values held by the edit dialog."""

    company_name: str = ""
    job_title: str = ""
    location: str = ""
    salary: str = ""
    status: str = ApplicationStatus.SUBMITTED.value
    link: str = ""
    date_applied: date | None = None


@dataclass(frozen=True)
class UserSession:
    """Signed-in identity; ``uid`` is the owner key for every query and write."""

    uid: str
    display_name: str | None = None
    email: str | None = None
    photo_url: str | None = None

    @property
    def initials(self) -> str:
        if self.display_name:
            parts = [p for p in self.display_name.split(" ") if p]
            return "".join(p[0] for p in parts).upper()[:2] or "U"
        if self.email:
            return self.email[0].upper()
        return "U"

    def to_dict(self) -> dict[str, Any]:
        return {
            "uid": self.uid,
            "displayName": self.display_name,
            "email": self.email,
            "photoURL": self.photo_url,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "UserSession":
        uid = data.get("uid")
        if not isinstance(uid, str) or not uid:
            raise ValueError("session is missing a uid")
        return cls(
            uid=uid,
            display_name=data.get("displayName"),
            email=data.get("email"),
            photo_url=data.get("photoURL"),
        )


@dataclass(frozen=True)
class StoredDocument:
    """A document as returned by the document store: key plus raw fields."""

    id: str
    fields: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))


@dataclass(frozen=True)
class TrackerConfig:
    """Application-level configuration loaded from config.json."""

    db_path: str = "job_tracker.db"
    collection: str = "appliedjobs"
    display_timezone: str = "UTC"
    currency: str = "PHP"


@dataclass(frozen=True)
class UserProfile:
    """Identity details read from profile.json for the local identity provider."""

    full_name: str
    email: str
    uid: str | None = None
    photo_url: str | None = None


__all__ = [
    "ApplicationStatus",
    "ApplicationRecord",
    "ApplicationRow",
    "NewApplication",
    "ApplicationUpdate",
    "CreateApplicationForm",
    "EditApplicationForm",
    "UserSession",
    "StoredDocument",
    "TrackerConfig",
    "UserProfile",
]
