from __future__ import annotations

import sys
import threading
from dataclasses import dataclass
from typing import Protocol, TextIO

from sysupdate.context import RunContext
from sysupdate.status import Status

CLEAR = "\033[H\033[2J"
RESET = "\033[0m"
BOX_TEXT = "\033[44;37m"  # Blue background, white text

STATUS_STYLES = {
    Status.PENDING: "\033[40;37m",  # Black background, white text
    Status.RUNNING: "\033[43;30m",  # Yellow background, black text
    Status.COMPLETED: "\033[42;37m",  # Green background, white text
    Status.SKIPPED: "\033[100;37m",  # Grey background, white text
    Status.FAILED: "\033[41;37m",  # Red background, white text
}

BADGES = {
    Status.PENDING: " PENDING ",
    Status.RUNNING: " RUNNING ",
    Status.COMPLETED: "COMPLETED",
    Status.SKIPPED: " SKIPPED ",
    Status.FAILED: "  FAILED ",
}

BOX_WIDTH = 44
LABEL_WIDTH = 27
# blank line, two borders and the reset line around the task rows,
# plus two rows kept free below the log for the cursor
SUMMARY_PADDING = 6


class Terminal(Protocol):
    def rows(self) -> int: ...

    def columns(self) -> int: ...


@dataclass(frozen=True)
class RenderFrame:
    rows: int
    columns: int
    too_small: bool
    summary: tuple[str, ...]
    log: tuple[str, ...]

    @property
    def log_shown(self) -> bool:
        return bool(self.log)

    def lines(self) -> list[str]:
        return [*self.summary, *self.log]

    def text(self) -> str:
        return "\n".join(self.lines())


def hard_wrap(line: str, width: int) -> list[str]:
    """Split ``line`` every ``width`` characters, no word-boundary logic."""
    line = line.expandtabs()
    if not line:
        return [""]
    return [line[i : i + width] for i in range(0, len(line), width)]


def wrap_tail(lines: list[str], width: int, rows: int) -> list[str]:
    wrapped: list[str] = []
    for line in lines:
        wrapped.extend(hard_wrap(line, width))
    return wrapped[-rows:] if rows > 0 else []


class SummaryRenderer:
    def __init__(
        self,
        ctx: RunContext,
        terminal: Terminal,
        stream: TextIO | None = None,
    ):
        self.ctx = ctx
        self.terminal = terminal
        self.stream = stream if stream is not None else sys.stdout
        self._lock = threading.Lock()

    @property
    def summary_height(self) -> int:
        return len(self.ctx.tasks) + SUMMARY_PADDING

    def frame(self) -> RenderFrame:
        settings = self.ctx.settings
        rows = self.terminal.rows()
        columns = self.terminal.columns()

        if rows < settings.min_height or columns < settings.min_width:
            message = (
                f"Error: The terminal must be at least {settings.min_width} columns wide"
                f" and {settings.min_height} lines high to display any output."
            )
            return RenderFrame(rows, columns, True, (message,), ())

        summary = tuple(self._summary_lines())

        log_rows = rows - self.summary_height
        if columns * log_rows < settings.log_min_characters:
            return RenderFrame(rows, columns, False, summary, ())

        tail = self.ctx.sink.tail_lines(log_rows)
        log = tuple(wrap_tail(tail, columns, log_rows))
        return RenderFrame(rows, columns, False, summary, log)

    def render(self) -> RenderFrame:
        # The ticker thread and the runner both draw; keep frames whole.
        with self._lock:
            frame = self.frame()
            self.stream.write(CLEAR + frame.text() + "\n")
            self.stream.flush()
        return frame

    def _summary_lines(self) -> list[str]:
        color = self.ctx.settings.color
        text = BOX_TEXT if color else ""
        statuses = self.ctx.board.snapshot()

        lines = ["", f"{text}{'=' * BOX_WIDTH}"]
        for task in self.ctx.tasks:
            status = statuses[task.key]
            badge = BADGES[status]
            if color:
                badge = f"{STATUS_STYLES[status]}{badge}{text}"
            label = task.label[:LABEL_WIDTH].ljust(LABEL_WIDTH, ".")
            lines.append(f"{text}= {label}[ {badge} ] =")
        lines.append(f"{text}{'=' * BOX_WIDTH}")
        lines.append(RESET if color else "")
        return lines
