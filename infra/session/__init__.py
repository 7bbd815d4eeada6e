from .filesystem_session_store import FileSystemSessionStore

__all__ = ["FileSystemSessionStore"]
