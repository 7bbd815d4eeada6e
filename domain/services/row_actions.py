from __future__ import annotations

from domain.models import ApplicationRow
from domain.ports import LinkOpenerPort, LoggerPort, NotificationPort
from domain.services.dialogs import EditApplicationDialog
from domain.services.record_store import (
    ApplicationRecordStore,
    StaleRowError,
    WriteError,
    row_label,
)
from domain.services.table_state import TableStateController


class RowActionHandler:
    """
    Per-row "View job", "Edit" and "Delete" actions.

    Actions only accept rows whose id is in the controller's current
    snapshot; anything else is refused and the table is reloaded.
    """

    def __init__(
        self,
        *,
        record_store: ApplicationRecordStore,
        table: TableStateController,
        edit_dialog: EditApplicationDialog,
        link_opener: LinkOpenerPort,
        notifier: NotificationPort,
        logger: LoggerPort,
    ) -> None:
        self._record_store = record_store
        self._table = table
        self._edit_dialog = edit_dialog
        self._link_opener = link_opener
        self._notifier = notifier
        self._logger = logger
        self.pending_delete: ApplicationRow | None = None
        self.is_deleting = False

    async def view(self, row: ApplicationRow) -> bool:
        if not await self._check_current(row):
            return False
        if not row.link:
            self._notifier.error("No job link saved for this application.")
            return False
        self._link_opener.open(row.link)
        return True

    async def edit(self, row: ApplicationRow) -> bool:
        if not await self._check_current(row):
            return False
        return self._edit_dialog.open(row)

    def request_delete(self, row: ApplicationRow) -> None:
        """Show the confirmation step for ``row``."""
        if self.is_deleting:
            return
        self.pending_delete = row

    def cancel_delete(self) -> bool:
        if self.is_deleting:
            return False
        self.pending_delete = None
        return True

    async def confirm_delete(self) -> bool:
        row = self.pending_delete
        if row is None or self.is_deleting:
            return False

        if not await self._check_current(row):
            self.pending_delete = None
            return False

        self.is_deleting = True
        try:
            await self._record_store.delete(row.id, label=row_label(row))
        except WriteError:
            self._logger.warning("row_delete_failed", record_id=row.id)
            return False
        finally:
            self.is_deleting = False

        await self._table.refresh()
        self.pending_delete = None
        return True

    async def _check_current(self, row: ApplicationRow) -> bool:
        """Refuse rows the table no longer holds and reload it."""
        try:
            self._ensure_current(row)
        except StaleRowError:
            await self._table.refresh()
            return False
        return True

    def _ensure_current(self, row: ApplicationRow) -> None:
        if not self._table.contains(row.id):
            self._logger.warning("stale_row_action", record_id=row.id)
            self._notifier.error("This application is no longer available.")
            raise StaleRowError(f"row {row.id} is not in the current table")
