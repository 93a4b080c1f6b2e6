from __future__ import annotations

import logging
import threading
from typing import Callable

logger = logging.getLogger(__name__)


class PeriodicRenderer:
    """
    Background thread that calls ``render`` every ``interval`` seconds.

    Renders use whatever state is current; they are not tied to task
    boundaries. Use as a context manager around the task run.
    """

    def __init__(self, render: Callable[[], object], interval: float = 1.0):
        if interval <= 0:
            raise ValueError("interval must be greater than zero")

        self._render = render
        self.interval = interval
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None
        self.ticks = 0

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self._thread is not None:
            raise RuntimeError("periodic renderer already started")

        self._thread = threading.Thread(
            target=self._loop, name="sysupdate-render", daemon=True
        )
        self._thread.start()
        logger.debug("periodic renderer started, interval=%ss", self.interval)

    def stop(self) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join()
            logger.debug("periodic renderer stopped after %d ticks", self.ticks)

    def _loop(self) -> None:
        while not self._stop.wait(self.interval):
            try:
                self._render()
            except Exception:
                logger.exception("periodic render failed")
            self.ticks += 1

    def __enter__(self) -> PeriodicRenderer:
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()
