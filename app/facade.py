from __future__ import annotations

from dataclasses import dataclass
from datetime import timezone, tzinfo

from domain.models import ApplicationRow, UserSession
from domain.ports import (
    ClockPort,
    DocumentStorePort,
    IdentityProviderPort,
    LinkOpenerPort,
    LoggerPort,
    NotificationPort,
    SessionStorePort,
)
from domain.services import (
    ApplicationRecordStore,
    CreateApplicationDialog,
    EditApplicationDialog,
    RowActionHandler,
    SessionManager,
    TableStateController,
)
from domain.services.record_store import DEFAULT_COLLECTION


@dataclass(frozen=True)
class RowView:
    """A table row with the salary formatted for display."""

    row: ApplicationRow
    salary_display: str
    selected: bool = False


def format_salary(amount: float, currency: str = "PHP") -> str:
    return f"{currency} {amount:,.2f}"


class TrackerFacade:
    """
    UI-facing facade for the dashboard: session, table, dialogs, row actions.

    A UI holds one facade for its lifetime; every surface shares the same
    table controller so that any mutation refreshes the one snapshot.
    """

    def __init__(
        self,
        *,
        document_store: DocumentStorePort,
        identity: IdentityProviderPort,
        session_store: SessionStorePort,
        notifier: NotificationPort,
        link_opener: LinkOpenerPort,
        clock: ClockPort,
        logger: LoggerPort,
        collection: str = DEFAULT_COLLECTION,
        display_tz: tzinfo = timezone.utc,
        currency: str = "PHP",
    ) -> None:
        self._currency = currency
        self.sessions = SessionManager(
            identity=identity,
            store=session_store,
            notifier=notifier,
            logger=logger,
        )
        self.record_store = ApplicationRecordStore(
            store=document_store,
            clock=clock,
            notifier=notifier,
            logger=logger,
            collection=collection,
            display_tz=display_tz,
        )
        self.table = TableStateController(
            record_store=self.record_store,
            notifier=notifier,
            logger=logger,
        )
        self.create_dialog = CreateApplicationDialog(
            record_store=self.record_store,
            table=self.table,
            notifier=notifier,
            logger=logger,
        )
        self.edit_dialog = EditApplicationDialog(
            record_store=self.record_store,
            table=self.table,
            notifier=notifier,
            logger=logger,
            clock=clock,
            display_tz=display_tz,
        )
        self.row_actions = RowActionHandler(
            record_store=self.record_store,
            table=self.table,
            edit_dialog=self.edit_dialog,
            link_opener=link_opener,
            notifier=notifier,
            logger=logger,
        )

    async def start(self) -> UserSession | None:
        """Restore a persisted session, if any, and load its applications."""
        session = self.sessions.current()
        await self.table.set_session(session)
        return session

    async def sign_in(self) -> UserSession:
        session = await self.sessions.sign_in()
        await self.table.set_session(session)
        return session

    async def sign_out(self) -> None:
        await self.sessions.sign_out()
        await self.table.set_session(None)

    def get_rows(self) -> list[RowView]:
        selected = self.table.selected_ids
        return [
            RowView(
                row=row,
                salary_display=format_salary(row.salary, self._currency),
                selected=row.id in selected,
            )
            for row in self.table.visible_rows
        ]

    def find_row(self, row_id: str) -> ApplicationRow | None:
        """Look up a row by id or by a unique id prefix."""
        row = self.table.find(row_id)
        if row is not None:
            return row
        matches = [r for r in self.table.rows if r.id.startswith(row_id)]
        return matches[0] if len(matches) == 1 else None
