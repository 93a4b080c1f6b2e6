from dataclasses import dataclass

from sysupdate.config import TaskConfig
from sysupdate.status import Status


@dataclass(frozen=True)
class TaskResult:
    task_id: str
    returncode: int
    duration_s: float


@dataclass(frozen=True)
class RunResult:
    order: list[str]
    results: dict[str, TaskResult]
    statuses: dict[str, Status]

    @property
    def failed(self) -> list[str]:
        return [tid for tid in self.order if self.statuses[tid] is Status.FAILED]

    @property
    def skipped(self) -> list[str]:
        return [tid for tid in self.order if self.statuses[tid] is Status.SKIPPED]


class TaskFailure(Exception):
    def __init__(self, task: TaskConfig, index: int, returncode: int) -> None:
        super().__init__(
            f"Task '{task.key}' failed with exit code {returncode}"
        )
        self.task = task
        self.index = index
        self.returncode = returncode
