from .types import TaskConfig

DEFAULT_CONFIG_PATH = "~/.config/sysupdate/sysupdate.yml"
CONFIG_ENV = "SYSUPDATE_CONFIG"
LOG_DIR_ENV = "SYSUPDATE_LOG_DIR"

REMOVE_UNNEEDED = (
    "zypper packages --unneeded"
    " | awk -F'|' 'NR>4 {print $3}'"
    " | grep -v Name"
    " | xargs zypper -n remove --clean-deps"
)

# Order matters: every task relies on the system state left by the previous one.
DEFAULT_TASKS: tuple[TaskConfig, ...] = (
    TaskConfig("refresh", "Refreshing Repos", "zypper -n refresh"),
    TaskConfig("update", "Updating Packages", "zypper -n update"),
    TaskConfig("dist_upgrade", "Updating Distro", "zypper -n dist-upgrade"),
    TaskConfig(
        "remove_deps", "Removing old dependencies", REMOVE_UNNEEDED, conditional=True
    ),
    TaskConfig("update_flatpaks", "Updating flatpaks", "flatpak update --system -y"),
    TaskConfig(
        "remove_flatpaks",
        "Removing old flatpaks",
        "flatpak uninstall --unused --system -y",
    ),
)
