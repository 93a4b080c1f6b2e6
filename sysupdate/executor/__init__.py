from .runner import TaskRunner
from .shell import has_unneeded_packages, run_streaming, unneeded_packages
from .types import RunResult, TaskFailure, TaskResult

__all__ = [
    "TaskRunner",
    "RunResult",
    "TaskFailure",
    "TaskResult",
    "run_streaming",
    "has_unneeded_packages",
    "unneeded_packages",
]
