from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class TaskConfig:
    key: str
    label: str
    command: str
    conditional: bool = False


@dataclass(frozen=True)
class Settings:
    tasks: tuple[TaskConfig, ...]
    log_dir: Path = Path("/tmp")
    refresh_interval: float = 1.0
    color: bool = True
    log_level: str = "WARNING"
    min_width: int = 45
    min_height: int = 11
    log_min_characters: int = 300
    unneeded_query: str = "zypper packages --unneeded"
    restart_check: str = "zypper ps -s"
    rpmconfig_check: str = "rpmconfigcheck"
    source: Path | None = field(default=None, compare=False)

    def task_keys(self) -> list[str]:
        return [task.key for task in self.tasks]

    def get_task(self, key: str) -> TaskConfig:
        for task in self.tasks:
            if task.key == key:
                return task

        raise KeyError(key)


class ConfigError(Exception):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)


class UnsupportedConfigFormatError(ConfigError):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)
