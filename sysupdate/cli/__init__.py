import sys

from .commands import cmd_run, run_cli


def main() -> None:
    sys.exit(run_cli())


__all__ = ["main", "run_cli", "cmd_run"]
