from __future__ import annotations

from datetime import datetime
from typing import Any

from domain import ClockPort, IdGeneratorPort, LoggerPort, NotificationPort


class FixedClock:
    def __init__(self, now_value: datetime) -> None:
        self._now = now_value

    def now(self) -> datetime:
        return self._now

    def set(self, now_value: datetime) -> None:
        self._now = now_value


class SequentialIdGenerator:
    def __init__(self) -> None:
        self._counter = 0

    def new_document_id(self) -> str:
        self._counter += 1
        return f"doc-{self._counter}"


class InMemoryLogger:
    def __init__(self) -> None:
        self.events: list[tuple[str, str, dict[str, Any]]] = []

    def info(self, message: str, **fields: Any) -> None:
        self.events.append(("info", message, fields))

    def warning(self, message: str, **fields: Any) -> None:
        self.events.append(("warning", message, fields))

    def error(self, message: str, **fields: Any) -> None:
        self.events.append(("error", message, fields))

    def messages(self, level: str) -> list[str]:
        return [message for lvl, message, _ in self.events if lvl == level]


class RecordingNotifier:
    def __init__(self) -> None:
        self.events: list[tuple[str, str]] = []

    def success(self, message: str) -> None:
        self.events.append(("success", message))

    def error(self, message: str) -> None:
        self.events.append(("error", message))

    def loading(self, message: str) -> None:
        self.events.append(("loading", message))

    def dismiss(self) -> None:
        self.events.append(("dismiss", ""))

    def messages(self, kind: str) -> list[str]:
        return [message for k, message in self.events if k == kind]


_clock_check: ClockPort = FixedClock(datetime(2025, 1, 1))
_id_check: IdGeneratorPort = SequentialIdGenerator()
_logger_check: LoggerPort = InMemoryLogger()
_notifier_check: NotificationPort = RecordingNotifier()
