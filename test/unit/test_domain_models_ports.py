from datetime import date, datetime, timezone

import pytest

from domain import (
    ApplicationStatus,
    DocumentStorePort,
    IdentityProviderPort,
    LoggerPort,
    NotificationPort,
    SessionStorePort,
    StoredDocument,
    UserSession,
)
from domain.utils import format_display_date, parse_display_date, start_of_day
from test.mocks import (
    FakeIdentityProvider,
    InMemoryDocumentStore,
    InMemoryLogger,
    InMemorySessionStore,
    RecordingNotifier,
)


@pytest.mark.parametrize("status", list(ApplicationStatus))
def test_status_roundtrips_between_persisted_and_display_forms(
    status: ApplicationStatus,
) -> None:
    assert status.display == status.value.lower()
    assert status.display.capitalize() == status.value
    assert ApplicationStatus.parse(status.display) is status
    assert ApplicationStatus.parse(status.value) is status


def test_status_parse_rejects_unknown_values() -> None:
    with pytest.raises(ValueError):
        ApplicationStatus.parse("Ghosted")


def test_user_session_initials() -> None:
    assert UserSession(uid="u", display_name="Ada King Lovelace").initials == "AK"
    assert UserSession(uid="u", email="ada@example.com").initials == "A"
    assert UserSession(uid="u").initials == "U"


def test_user_session_dict_roundtrip() -> None:
    session = UserSession(
        uid="u-1",
        display_name="Ada",
        email="ada@example.com",
        photo_url="https://img.example/ada.png",
    )
    assert session.to_dict()["photoURL"] == "https://img.example/ada.png"
    assert UserSession.from_dict(session.to_dict()) == session


def test_user_session_from_dict_requires_uid() -> None:
    with pytest.raises(ValueError):
        UserSession.from_dict({"displayName": "Ada"})


def test_stored_document_fields_are_read_only() -> None:
    source = {"companyName": "Acme"}
    doc = StoredDocument(id="d1", fields=source)
    source["companyName"] = "Changed"
    assert doc.fields["companyName"] == "Acme"
    with pytest.raises(TypeError):
        doc.fields["companyName"] = "Other"  # type: ignore[index]


def test_display_date_format_and_parse() -> None:
    instant = datetime(2025, 6, 5, 23, 0, tzinfo=timezone.utc)
    assert format_display_date(instant) == "Jun 5, 2025"
    assert parse_display_date("Jun 5, 2025") == date(2025, 6, 5)
    assert parse_display_date("not a date") is None
    assert parse_display_date("Foo 5, 2025") is None


def test_start_of_day_is_utc_midnight_by_default() -> None:
    assert start_of_day(date(2025, 1, 2)) == datetime(2025, 1, 2, tzinfo=timezone.utc)


def test_fakes_conform_to_ports() -> None:
    assert isinstance(InMemoryDocumentStore(), DocumentStorePort)
    assert isinstance(FakeIdentityProvider(), IdentityProviderPort)
    assert isinstance(InMemorySessionStore(), SessionStorePort)
    assert isinstance(RecordingNotifier(), NotificationPort)
    assert isinstance(InMemoryLogger(), LoggerPort)
