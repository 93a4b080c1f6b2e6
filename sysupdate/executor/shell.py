import logging
import subprocess
from typing import IO, cast

from sysupdate.logsink import LogSink

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 65536


def run_streaming(command: str, sink: LogSink) -> int:
    """
    Run ``command`` through the shell, appending stdout and stderr to
    ``sink`` as they are produced. Blocks until the command exits.
    """
    logger.info("running: %s", command)
    with subprocess.Popen(
        command,
        shell=True,
        stdin=subprocess.DEVNULL,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
    ) as proc:
        stdout = cast(IO[bytes], proc.stdout)
        for chunk in iter(lambda: stdout.read1(_CHUNK_SIZE), b""):
            sink.append(chunk)
        returncode = proc.wait()

    logger.info("exit code %d: %s", returncode, command)
    return returncode


def unneeded_packages(output: str) -> list[str]:
    """
    Package names from a ``zypper packages --unneeded`` table.

        S | Repository | Name | Version | Arch
        --+------------+------+---------+-----
        i | repo-oss   | foo  | 1.0-1.1 | x86_64
    """
    names = []
    for line in output.splitlines():
        columns = line.split("|")
        if len(columns) < 3:
            continue
        name = columns[2].strip()
        if not name or name == "Name" or set(name) <= {"-", "+"}:
            continue
        names.append(name)
    return names


def has_unneeded_packages(query: str) -> bool:
    result = subprocess.run(
        query,
        shell=True,
        stdin=subprocess.DEVNULL,
        capture_output=True,
        text=True,
    )
    names = unneeded_packages(result.stdout)
    logger.info("unneeded packages (%d): %s", len(names), " ".join(names))
    return len(names) > 0
