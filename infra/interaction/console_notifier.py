from __future__ import annotations

import sys
from typing import TextIO


class ConsoleNotifier:
    """Simple stdout implementation of NotificationPort.

    Loading messages are only shown when ``verbose`` is set; a console has
    no spinner to dismiss.
    """

    def __init__(self, stream: TextIO | None = None, verbose: bool = False) -> None:
        self._stream = stream
        self._verbose = verbose

    def success(self, message: str) -> None:
        self._write(message)

    def error(self, message: str) -> None:
        self._write(f"error: {message}")

    def loading(self, message: str) -> None:
        if self._verbose:
            self._write(message)

    def dismiss(self) -> None:
        pass

    def _write(self, text: str) -> None:
        print(text, file=self._stream or sys.stdout)
