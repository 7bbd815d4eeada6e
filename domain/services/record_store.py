from __future__ import annotations

from datetime import datetime, timezone, tzinfo
from typing import Any, Mapping

from domain.models import (
    ApplicationRecord,
    ApplicationRow,
    ApplicationStatus,
    ApplicationUpdate,
    NewApplication,
    StoredDocument,
)
from domain.ports import ClockPort, DocumentStorePort, LoggerPort, NotificationPort
from domain.utils import format_display_date

DEFAULT_COLLECTION = "appliedjobs"
OWNER_FIELD = "userUid"


class FetchError(RuntimeError):
    """Raised when listing applications fails; prior table state stays as is."""


class WriteError(RuntimeError):
    """Raised when a create, update or delete did not reach the store."""


class StaleRowError(WriteError):
    """Raised when a row action targets an id the table no longer holds."""


def document_to_record(doc: StoredDocument) -> ApplicationRecord:
    """Decode a stored document; raises ``ValueError`` for malformed ones."""
    fields = doc.fields
    try:
        date_applied = fields["dateApplied"]
        if not isinstance(date_applied, datetime):
            raise ValueError(f"dateApplied is not a timestamp: {date_applied!r}")
        if date_applied.tzinfo is None:
            date_applied = date_applied.replace(tzinfo=timezone.utc)
        salary = float(fields["salary"])
        if salary < 0:
            raise ValueError(f"negative salary: {salary}")
        return ApplicationRecord(
            id=doc.id,
            company_name=str(fields["companyName"]),
            job_title=str(fields["jobTitle"]),
            location=str(fields["location"]),
            salary=salary,
            status=ApplicationStatus.parse(str(fields["status"])),
            link=str(fields.get("link") or ""),
            owner_id=str(fields[OWNER_FIELD]),
            date_applied=date_applied,
        )
    except KeyError as exc:
        raise ValueError(f"document {doc.id} is missing field {exc}") from exc


def record_to_row(record: ApplicationRecord, tz: tzinfo = timezone.utc) -> ApplicationRow:
    return ApplicationRow(
        id=record.id,
        company_name=record.company_name,
        job_title=record.job_title,
        location=record.location,
        salary=record.salary,
        status=record.status.display,
        date_applied=format_display_date(record.date_applied, tz),
        link=record.link,
    )


def to_document_fields(
    data: NewApplication | ApplicationUpdate,
    date_applied: datetime,
) -> dict[str, Any]:
    """Shape mutable fields for the store. The owner key is added by callers."""
    if date_applied.tzinfo is None:
        date_applied = date_applied.replace(tzinfo=timezone.utc)
    return {
        "companyName": data.company_name.strip(),
        "jobTitle": data.job_title.strip(),
        "location": data.location.strip(),
        "salary": float(data.salary),
        "status": ApplicationStatus.parse(data.status).value,
        "link": data.link.strip(),
        "dateApplied": date_applied.astimezone(timezone.utc),
    }


class ApplicationRecordStore:
    """
    Translates between persisted application documents and table rows.

    This is the only component that knows the persisted representation:
    capitalized statuses, ``userUid`` owner keys and timestamp fields. The
    rest of the system sees ``ApplicationRow`` values only.
    """

    def __init__(
        self,
        *,
        store: DocumentStorePort,
        clock: ClockPort,
        notifier: NotificationPort,
        logger: LoggerPort,
        collection: str = DEFAULT_COLLECTION,
        display_tz: tzinfo = timezone.utc,
    ) -> None:
        self._store = store
        self._clock = clock
        self._notifier = notifier
        self._logger = logger
        self._collection = collection
        self._display_tz = display_tz

    async def list_for_owner(self, owner_id: str) -> list[ApplicationRow]:
        """
        Return every application owned by ``owner_id``, most recent first.

        Ordering uses the stored instant rather than the display string.
        """
        try:
            docs = await self._store.query(self._collection, {OWNER_FIELD: owner_id})
            records = [document_to_record(doc) for doc in docs]
        except Exception as exc:
            self._logger.error(
                "applications_fetch_failed",
                owner_id=owner_id,
                error=str(exc),
            )
            raise FetchError("Failed to fetch applied jobs") from exc

        owned = []
        for record in records:
            if record.owner_id != owner_id:
                self._logger.warning(
                    "foreign_application_dropped",
                    record_id=record.id,
                    owner_id=owner_id,
                )
                continue
            owned.append(record)

        owned.sort(key=lambda r: r.date_applied, reverse=True)
        self._logger.info("applications_fetched", owner_id=owner_id, count=len(owned))
        return [record_to_row(r, self._display_tz) for r in owned]

    async def create(self, data: NewApplication) -> str:
        date_applied = data.date_applied or self._clock.now()
        fields = to_document_fields(data, date_applied)
        fields[OWNER_FIELD] = data.owner_id

        self._notifier.loading("Adding job application...")
        try:
            new_id = await self._store.insert(self._collection, fields)
        except Exception as exc:
            self._logger.error(
                "application_create_failed",
                owner_id=data.owner_id,
                error=str(exc),
            )
            self._notifier.dismiss()
            self._notifier.error("Failed to add job application. Please try again.")
            raise WriteError("Failed to add applied job") from exc

        self._notifier.dismiss()
        self._notifier.success(
            f"Job application for {fields['jobTitle']} at {fields['companyName']} "
            "added successfully!",
        )
        self._logger.info("application_created", record_id=new_id, owner_id=data.owner_id)
        return new_id

    async def update(self, record_id: str, data: ApplicationUpdate) -> None:
        # Ownership is enforced by the store's access rules; ids come from
        # the owner-scoped table snapshot.
        fields = to_document_fields(data, data.date_applied)

        self._notifier.loading("Updating job application...")
        try:
            await self._store.update_by_key(self._collection, record_id, fields)
        except Exception as exc:
            self._logger.error(
                "application_update_failed",
                record_id=record_id,
                error=str(exc),
            )
            self._notifier.dismiss()
            self._notifier.error("Failed to update job application. Please try again.")
            raise WriteError("Failed to update applied job") from exc

        self._notifier.dismiss()
        self._notifier.success(
            f"Job application for {fields['jobTitle']} at {fields['companyName']} "
            "updated successfully!",
        )
        self._logger.info("application_updated", record_id=record_id)

    async def delete(self, record_id: str, *, label: str | None = None) -> None:
        """Remove a record permanently. ``label`` names it in notifications."""
        self._notifier.loading("Deleting job application...")
        try:
            await self._store.delete_by_key(self._collection, record_id)
        except Exception as exc:
            self._logger.error(
                "application_delete_failed",
                record_id=record_id,
                error=str(exc),
            )
            self._notifier.dismiss()
            self._notifier.error("Failed to delete job application. Please try again.")
            raise WriteError("Failed to delete applied job") from exc

        self._notifier.dismiss()
        self._notifier.success(
            f"Job application for {label} deleted successfully!"
            if label
            else "Job application deleted successfully!",
        )
        self._logger.info("application_deleted", record_id=record_id)


def row_label(row: ApplicationRow) -> str:
    return f"{row.job_title} at {row.company_name}"


__all__ = [
    "ApplicationRecordStore",
    "FetchError",
    "WriteError",
    "StaleRowError",
    "DEFAULT_COLLECTION",
    "OWNER_FIELD",
    "document_to_record",
    "record_to_row",
    "to_document_fields",
    "row_label",
]
