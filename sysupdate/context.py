from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from sysupdate.config import Settings, TaskConfig
from sysupdate.logsink import LogSink
from sysupdate.status import StatusBoard


def make_run_id(now: datetime) -> str:
    # e.g. 2026-10-16_09-30-12-042
    return f"{now:%Y-%m-%d_%H-%M-%S}-{now.microsecond // 1000:03d}"


@dataclass(frozen=True)
class RunContext:
    run_id: str
    settings: Settings
    board: StatusBoard
    sink: LogSink
    debug_log_path: Path

    @classmethod
    def create(cls, settings: Settings, now: datetime | None = None) -> RunContext:
        run_id = make_run_id(now or datetime.now())
        log_dir = settings.log_dir
        return cls(
            run_id=run_id,
            settings=settings,
            board=StatusBoard(settings.task_keys()),
            sink=LogSink(log_dir / f"{run_id}_os-update.log"),
            debug_log_path=log_dir / f"{run_id}_sysupdate.debug.log",
        )

    @property
    def tasks(self) -> tuple[TaskConfig, ...]:
        return self.settings.tasks

    @property
    def log_path(self) -> Path:
        return self.sink.path
