from __future__ import annotations

from dataclasses import replace
from datetime import date, timezone, tzinfo
from typing import Any

from domain.models import (
    ApplicationRow,
    ApplicationStatus,
    CreateApplicationForm,
    EditApplicationForm,
)
from domain.ports import ClockPort, LoggerPort, NotificationPort
from domain.services.record_store import ApplicationRecordStore, WriteError
from domain.services.table_state import TableStateController
from domain.services.validation import (
    ValidationError,
    validate_create_form,
    validate_edit_form,
)
from domain.utils import parse_display_date


def _format_salary_input(salary: float) -> str:
    return str(int(salary)) if float(salary).is_integer() else str(salary)


class CreateApplicationDialog:
    """State and submit flow of the "Add Application" dialog."""

    def __init__(
        self,
        *,
        record_store: ApplicationRecordStore,
        table: TableStateController,
        notifier: NotificationPort,
        logger: LoggerPort,
    ) -> None:
        self._record_store = record_store
        self._table = table
        self._notifier = notifier
        self._logger = logger
        self.is_open = False
        self.is_submitting = False
        self.form = CreateApplicationForm()
        self.errors: dict[str, str] = {}

    def open(self) -> None:
        self.is_open = True

    def set_field(self, name: str, value: Any) -> None:
        self.form = replace(self.form, **{name: value})

    def close(self) -> bool:
        """Close and reset; refused while a submit is in flight."""
        if self.is_submitting:
            return False
        self.is_open = False
        self._reset()
        return True

    async def submit(self) -> bool:
        if self.is_submitting:
            return False
        session = self._table.session
        if session is None:
            self._notifier.error("Please log in to add applications.")
            return False

        try:
            data = validate_create_form(self.form, owner_id=session.uid)
        except ValidationError as exc:
            self.errors = exc.errors
            self._notifier.error(next(iter(exc.errors.values())))
            return False

        self.errors = {}
        self.is_submitting = True
        try:
            new_id = await self._record_store.create(data)
        except WriteError:
            self._logger.warning("create_dialog_submit_failed", owner_id=session.uid)
            return False
        finally:
            self.is_submitting = False

        self.is_open = False
        self._reset()
        self._logger.info("create_dialog_submitted", record_id=new_id)
        await self._table.refresh()
        return True

    def _reset(self) -> None:
        self.form = CreateApplicationForm()
        self.errors = {}


class EditApplicationDialog:
    """State and submit flow of the "Edit Job Application" dialog."""

    def __init__(
        self,
        *,
        record_store: ApplicationRecordStore,
        table: TableStateController,
        notifier: NotificationPort,
        logger: LoggerPort,
        clock: ClockPort,
        display_tz: tzinfo = timezone.utc,
    ) -> None:
        self._record_store = record_store
        self._table = table
        self._notifier = notifier
        self._logger = logger
        self._clock = clock
        self._display_tz = display_tz
        self.is_open = False
        self.is_submitting = False
        self.row: ApplicationRow | None = None
        self.form = EditApplicationForm()
        self.errors: dict[str, str] = {}

    def open(self, row: ApplicationRow) -> bool:
        if self.is_submitting:
            return False
        if not self._table.contains(row.id):
            self._notifier.error("This application is no longer available.")
            return False
        self.row = row
        self.form = EditApplicationForm(
            company_name=row.company_name,
            job_title=row.job_title,
            location=row.location,
            salary=_format_salary_input(row.salary),
            status=ApplicationStatus.parse(row.status).value,
            link=row.link,
            date_applied=parse_display_date(row.date_applied) or self._today(),
        )
        self.errors = {}
        self.is_open = True
        return True

    def set_field(self, name: str, value: Any) -> None:
        self.form = replace(self.form, **{name: value})
        self.errors.pop(name, None)

    def close(self) -> bool:
        """Close and reset; refused while a submit is in flight."""
        if self.is_submitting:
            return False
        self.is_open = False
        self.row = None
        self.form = EditApplicationForm()
        self.errors = {}
        return True

    async def submit(self) -> bool:
        row = self.row
        if row is None or self.is_submitting:
            return False

        try:
            update = validate_edit_form(self.form, today=self._today(), tz=self._display_tz)
        except ValidationError as exc:
            self.errors = exc.errors
            return False

        # The dialog stays locked on ``row`` until the refresh has landed.
        self.is_submitting = True
        try:
            await self._record_store.update(row.id, update)
            await self._table.refresh()
        except WriteError:
            self._logger.warning("edit_dialog_submit_failed", record_id=row.id)
            return False
        finally:
            self.is_submitting = False

        self.close()
        return True

    def _today(self) -> date:
        return self._clock.now().astimezone(self._display_tz).date()
