"""Post-update checks: programs to restart and unresolved RPM configs."""

from __future__ import annotations

import logging
import subprocess

from sysupdate.config import Settings

logger = logging.getLogger(__name__)

NO_DELETED_FILES = "No processes using deleted files"
RPMCONFIG_SEARCHING = "Searching for unresolved configuration files"


def _capture(command: str) -> str:
    result = subprocess.run(
        command,
        shell=True,
        stdin=subprocess.DEVNULL,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        text=True,
    )
    logger.debug("%s exited with %d", command, result.returncode)
    return result.stdout.rstrip("\n")


def _banner(title: str) -> list[str]:
    rule = "#" * (len(title) + 4)
    return [rule, f"# {title} #", rule]


def restart_report(output: str) -> list[str]:
    if NO_DELETED_FILES in output:
        return ["No programs using deleted files so reboot is probably not necessary."]
    return [*_banner("Programs that should be restarted"), output]


def rpmconfig_report(output: str) -> list[str]:
    if not output.strip() or output.strip() == RPMCONFIG_SEARCHING:
        return ["No rpm configs that need updates."]
    return [*_banner("rpm config check"), output]


def post_update_report(settings: Settings) -> str:
    lines = ["", "", ""]
    lines += restart_report(_capture(settings.restart_check))
    lines += ["", "", ""]
    lines += rpmconfig_report(_capture(settings.rpmconfig_check))
    return "\n".join(lines)
