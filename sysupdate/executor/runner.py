import logging
import time
from typing import Callable

from sysupdate.context import RunContext
from sysupdate.logsink import LogSink
from sysupdate.status import Status

from .shell import has_unneeded_packages, run_streaming
from .types import RunResult, TaskFailure, TaskResult

logger = logging.getLogger(__name__)

Execute = Callable[[str, LogSink], int]


class TaskRunner:
    def __init__(
        self,
        ctx: RunContext,
        render: Callable[[], object],
        *,
        execute: Execute = run_streaming,
        precheck: Callable[[], bool] | None = None,
    ):
        self.ctx = ctx
        self.render = render
        self.execute = execute
        self.precheck = precheck or self._default_precheck
        self.results: dict[str, TaskResult] = {}

    def _default_precheck(self) -> bool:
        return has_unneeded_packages(self.ctx.settings.unneeded_query)

    def _set(self, key: str, status: Status) -> None:
        self.ctx.board.set(key, status)
        logger.info("%s -> %s", key, status.value)

    def run_task(self, index: int) -> TaskResult:
        task = self.ctx.tasks[index]

        self._set(task.key, Status.RUNNING)
        self.render()

        start = time.monotonic()
        returncode = self.execute(task.command, self.ctx.sink)
        result = TaskResult(task.key, returncode, time.monotonic() - start)
        self.results[task.key] = result

        if returncode == 0:
            self._set(task.key, Status.COMPLETED)
            self.render()
            return result

        self._set(task.key, Status.FAILED)
        self._skip_after(index)
        self.render()
        logger.error("%s failed with exit code %d", task.key, returncode)
        raise TaskFailure(task, index, returncode)

    def _skip_after(self, index: int) -> None:
        tasks = self.ctx.tasks
        for later in range(index + 1, len(tasks)):
            self._set(tasks[later].key, Status.SKIPPED)

    def run(self) -> RunResult:
        """
        Run every task in order. Raises TaskFailure on the first nonzero
        exit code, after the remaining tasks have been marked skipped.
        """
        for index, task in enumerate(self.ctx.tasks):
            if task.conditional and not self.precheck():
                logger.info("%s: nothing to do", task.key)
                self._set(task.key, Status.COMPLETED)
                self.render()
                continue

            self.run_task(index)

        return self.result()

    def result(self) -> RunResult:
        return RunResult(
            order=self.ctx.settings.task_keys(),
            results=dict(self.results),
            statuses=self.ctx.board.snapshot(),
        )
