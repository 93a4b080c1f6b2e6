from __future__ import annotations

import argparse


def build_parser() -> argparse.ArgumentParser:
    # No options: a single invocation runs the whole update sequence.
    # Settings come from $SYSUPDATE_CONFIG or ~/.config/sysupdate/sysupdate.yml.
    return argparse.ArgumentParser(
        prog="sysupdate",
        description=(
            "Refresh repos, update packages and the distro, remove unneeded "
            "dependencies, then update and clean up flatpaks, with a live summary."
        ),
    )
