"""SQLite-backed persistence adapters for domain store ports."""

from .sqlite_document_store import DocumentNotFoundError, SQLiteDocumentStore

__all__ = [
    "DocumentNotFoundError",
    "SQLiteDocumentStore",
]
