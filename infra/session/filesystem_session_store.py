from __future__ import annotations

import json
from pathlib import Path

from domain.models import UserSession


class FileSystemSessionStore:
    """Keeps the signed-in ``UserSession`` in a small JSON file."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    def load(self) -> UserSession | None:
        if not self._path.is_file():
            return None
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise ValueError(f"Cannot read session file {self._path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ValueError(f"Session file {self._path} must contain a JSON object")
        return UserSession.from_dict(data)

    def save(self, session: UserSession) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(session.to_dict(), indent=2), encoding="utf-8")

    def clear(self) -> None:
        self._path.unlink(missing_ok=True)
