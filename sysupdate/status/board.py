from __future__ import annotations

import threading
from typing import Iterable

from .types import Status, UnknownTaskError


class StatusBoard:
    """
    Current status of every task in the run.

    The task runner is the only writer; the periodic renderer reads from
    another thread. A single lock keeps each read and write whole, nothing
    stronger is promised across keys.
    """

    def __init__(self, keys: Iterable[str]):
        self._order: tuple[str, ...] = tuple(keys)
        self._statuses: dict[str, Status] = {key: Status.PENDING for key in self._order}
        self._history: list[tuple[str, Status]] = []
        self._lock = threading.Lock()

    def set(self, key: str, status: Status) -> None:
        if key not in self._statuses:
            raise UnknownTaskError(key)

        with self._lock:
            self._statuses[key] = status
            self._history.append((key, status))

    def get(self, key: str) -> Status:
        if key not in self._statuses:
            raise UnknownTaskError(key)

        with self._lock:
            return self._statuses[key]

    def snapshot(self) -> dict[str, Status]:
        with self._lock:
            return {key: self._statuses[key] for key in self._order}

    def history(self) -> list[tuple[str, Status]]:
        with self._lock:
            return list(self._history)
