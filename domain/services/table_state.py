from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Callable, Sequence

from domain.models import ApplicationRow, UserSession
from domain.ports import LoggerPort, NotificationPort
from domain.services.record_store import ApplicationRecordStore, FetchError
from domain.utils import parse_display_date


class TableStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    POPULATED = "populated"
    FAILED = "failed"


class SortColumn(str, Enum):
    COMPANY_NAME = "company_name"
    JOB_TITLE = "job_title"
    LOCATION = "location"
    SALARY = "salary"
    STATUS = "status"
    DATE_APPLIED = "date_applied"


@dataclass(frozen=True)
class SortState:
    column: SortColumn
    descending: bool = False


def _text_key(column: str) -> Callable[[ApplicationRow], Any]:
    return lambda row: str(getattr(row, column)).casefold()


def _date_key(row: ApplicationRow) -> date:
    return parse_display_date(row.date_applied) or date.min


_SORT_KEYS: dict[SortColumn, Callable[[ApplicationRow], Any]] = {
    SortColumn.COMPANY_NAME: _text_key("company_name"),
    SortColumn.JOB_TITLE: _text_key("job_title"),
    SortColumn.LOCATION: _text_key("location"),
    SortColumn.SALARY: lambda row: row.salary,
    SortColumn.STATUS: _text_key("status"),
    SortColumn.DATE_APPLIED: _date_key,
}


class TableStateController:
    """
    Owns the rows shown in the applications table.

    Every refresh replaces the snapshot wholesale; nothing patches it in
    place. Sorting and selection are views over the current snapshot and
    never touch the store.
    """

    def __init__(
        self,
        *,
        record_store: ApplicationRecordStore,
        notifier: NotificationPort,
        logger: LoggerPort,
        session: UserSession | None = None,
    ) -> None:
        self._record_store = record_store
        self._notifier = notifier
        self._logger = logger
        self._session = session
        self._rows: tuple[ApplicationRow, ...] = ()
        self._status = TableStatus.IDLE
        self._outcome = TableStatus.IDLE
        self._error: str | None = None
        self._in_flight = 0
        self._sort: SortState | None = None
        self._selected: set[str] = set()
        self._closed = False

    # -- snapshot -----------------------------------------------------------

    @property
    def session(self) -> UserSession | None:
        return self._session

    @property
    def status(self) -> TableStatus:
        return self._status

    @property
    def is_loading(self) -> bool:
        return self._in_flight > 0

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def rows(self) -> tuple[ApplicationRow, ...]:
        """Snapshot in the order returned by the store, most recent first."""
        return self._rows

    @property
    def total(self) -> int:
        return len(self._rows)

    def contains(self, row_id: str) -> bool:
        return any(row.id == row_id for row in self._rows)

    def find(self, row_id: str) -> ApplicationRow | None:
        for row in self._rows:
            if row.id == row_id:
                return row
        return None

    # -- lifecycle ----------------------------------------------------------

    async def mount(self) -> None:
        """Initial load; does nothing until an owner identity is known."""
        self._closed = False
        await self.refresh()

    async def set_session(self, session: UserSession | None) -> None:
        self._session = session
        self._rows = ()
        self._selected.clear()
        self._error = None
        self._status = TableStatus.IDLE
        self._outcome = TableStatus.IDLE
        if session is not None:
            await self.refresh()

    def close(self) -> None:
        """Tear down; refreshes that resolve afterwards are discarded."""
        self._closed = True

    async def refresh(self) -> None:
        session = self._session
        if session is None or self._closed:
            return

        self._in_flight += 1
        self._status = TableStatus.LOADING
        rows: list[ApplicationRow] = []
        failure: FetchError | None = None
        try:
            rows = await self._record_store.list_for_owner(session.uid)
        except FetchError as exc:
            failure = exc
        finally:
            self._in_flight -= 1

        if self._is_stale(session):
            self._logger.info("table_refresh_discarded", owner_id=session.uid)
            self._settle()
            return

        if failure is not None:
            self._logger.error("table_refresh_failed", owner_id=session.uid, error=str(failure))
            self._rows = ()
            self._error = str(failure)
            self._outcome = TableStatus.FAILED
            self._notifier.error("Failed to load applied jobs")
        else:
            self._rows = tuple(rows)
            self._error = None
            self._outcome = TableStatus.POPULATED
        self._prune_selection()
        self._settle()

    def _settle(self) -> None:
        # Status follows the latest completed refresh once none is in flight.
        if self._in_flight == 0:
            self._status = self._outcome

    def _is_stale(self, session: UserSession) -> bool:
        return self._closed or self._session is not session

    # -- sorting ------------------------------------------------------------

    @property
    def sort_state(self) -> SortState | None:
        return self._sort

    def toggle_sort(self, column: SortColumn | str) -> SortState:
        """Ascending first; a second toggle on the same column flips order."""
        column = SortColumn(column)
        current = self._sort
        if current is not None and current.column is column and not current.descending:
            self._sort = SortState(column, descending=True)
        else:
            self._sort = SortState(column, descending=False)
        return self._sort

    def set_sort(self, column: SortColumn | str, *, descending: bool = False) -> None:
        self._sort = SortState(SortColumn(column), descending=descending)

    def clear_sort(self) -> None:
        self._sort = None

    @property
    def visible_rows(self) -> list[ApplicationRow]:
        return sort_rows(self._rows, self._sort)

    # -- selection ----------------------------------------------------------

    @property
    def selected_ids(self) -> frozenset[str]:
        return frozenset(self._selected)

    @property
    def selected_rows(self) -> list[ApplicationRow]:
        return [row for row in self.visible_rows if row.id in self._selected]

    @property
    def all_selected(self) -> bool:
        return bool(self._rows) and len(self._selected) == len(self._rows)

    @property
    def some_selected(self) -> bool:
        return bool(self._selected) and not self.all_selected

    def toggle_row(self, row_id: str, selected: bool | None = None) -> bool:
        """Flip (or set) one row's selection; unknown ids are ignored."""
        if not self.contains(row_id):
            return False
        if selected is None:
            selected = row_id not in self._selected
        if selected:
            self._selected.add(row_id)
        else:
            self._selected.discard(row_id)
        return True

    def select_all(self, selected: bool = True) -> None:
        if selected:
            self._selected = {row.id for row in self.visible_rows}
        else:
            self._selected.clear()

    def clear_selection(self) -> None:
        self._selected.clear()

    def _prune_selection(self) -> None:
        present = {row.id for row in self._rows}
        self._selected &= present


def sort_rows(
    rows: Sequence[ApplicationRow],
    sort: SortState | None,
) -> list[ApplicationRow]:
    """Pure, stable sort; ``None`` keeps the given order."""
    if sort is None:
        return list(rows)
    return sorted(rows, key=_SORT_KEYS[sort.column], reverse=sort.descending)
