from __future__ import annotations

import logging
import os
import threading
from pathlib import Path
from typing import BinaryIO

logger = logging.getLogger(__name__)

_BLOCK_SIZE = 8192


class LogSink:
    """
    Append-only file holding the combined output of every command in a run.

    The file is created on the first append and is never truncated, so it
    is still there for the operator once the process exits.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._handle: BinaryIO | None = None
        self._written = 0
        self._lock = threading.Lock()

    @property
    def bytes_written(self) -> int:
        return self._written

    def exists(self) -> bool:
        return self.path.is_file()

    def append(self, data: bytes) -> None:
        if not data:
            return

        with self._lock:
            if self._handle is None:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                self._handle = open(self.path, "ab")
                logger.debug("opened log sink %s", self.path)
            self._handle.write(data)
            self._handle.flush()
            self._written += len(data)

    def tail_lines(self, n: int) -> list[str]:
        """Return the last ``n`` lines, fewer if the log is shorter."""
        if n <= 0:
            return []

        with self._lock:
            if not self.path.is_file():
                return []
            data = _read_tail(self.path, n)

        data = _drop_partial_char(data)
        if not data:
            return []

        raw_lines = data.split(b"\n")
        if data.endswith(b"\n"):
            raw_lines.pop()

        return [_clean(line) for line in raw_lines[-n:]]

    def close(self) -> None:
        with self._lock:
            if self._handle is not None:
                self._handle.close()
                self._handle = None

    def __enter__(self) -> LogSink:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def _read_tail(path: Path, n: int) -> bytes:
    # Walk backwards until there are more than n newlines, i.e. at least n
    # complete lines, or the start of the file is reached.
    with open(path, "rb") as handle:
        pos = handle.seek(0, os.SEEK_END)
        data = b""
        while pos > 0 and data.count(b"\n") <= n:
            step = min(_BLOCK_SIZE, pos)
            pos -= step
            handle.seek(pos)
            data = handle.read(step) + data
    return data


def _clean(line: bytes) -> str:
    text = line.decode("utf-8", errors="replace").rstrip("\r")
    # progress bars redraw with a bare carriage return; keep the last state
    if "\r" in text:
        text = text.rsplit("\r", 1)[-1]
    return text


def _drop_partial_char(data: bytes) -> bytes:
    # A command may be mid-way through writing a multi-byte UTF-8 character;
    # hide the incomplete tail until the rest of it is appended.
    for back in range(1, min(4, len(data)) + 1):
        byte = data[-back]
        if byte & 0xC0 == 0x80:
            continue
        if 0xC2 <= byte <= 0xF4:
            need = 2 if byte < 0xE0 else 3 if byte < 0xF0 else 4
            if back < need:
                return data[:-back]
        break
    return data
