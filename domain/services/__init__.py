"""
Domain services.

These services own the application-record lifecycle and the table state
while depending only on domain models and ports, so that infrastructure
and UI layers can remain thin.
"""

from .record_store import (  # noqa: F401
    ApplicationRecordStore,
    FetchError,
    StaleRowError,
    WriteError,
)
from .validation import ValidationError, validate_create_form, validate_edit_form
from .table_state import SortColumn, SortState, TableStateController, TableStatus
from .dialogs import CreateApplicationDialog, EditApplicationDialog
from .row_actions import RowActionHandler
from .session import AuthenticationError, SessionManager

__all__ = [
    "ApplicationRecordStore",
    "FetchError",
    "WriteError",
    "StaleRowError",
    "ValidationError",
    "validate_create_form",
    "validate_edit_form",
    "TableStateController",
    "TableStatus",
    "SortColumn",
    "SortState",
    "CreateApplicationDialog",
    "EditApplicationDialog",
    "RowActionHandler",
    "SessionManager",
    "AuthenticationError",
]
