from .defaults import DEFAULT_TASKS
from .loader import load_file, load_settings
from .types import ConfigError, Settings, TaskConfig, UnsupportedConfigFormatError

__all__ = [
    "DEFAULT_TASKS",
    "load_file",
    "load_settings",
    "Settings",
    "TaskConfig",
    "ConfigError",
    "UnsupportedConfigFormatError",
]
