from __future__ import annotations

import logging
from pathlib import Path

_HANDLER_NAME = "sysupdate-file"


def setup_logging(log_file: str | Path, *, level: str | int = logging.WARNING) -> None:
    """
    Send the application's own log records to ``log_file``.

    The terminal belongs to the dashboard, so there is no console handler.
    The handler is delayed: no file appears unless something is logged.
    Safe to call again; the previous file handler is replaced.
    """
    log_file = Path(log_file)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger("sysupdate")
    logger.setLevel(level)
    logger.propagate = False

    for h in list(logger.handlers):
        if h.get_name() == _HANDLER_NAME:
            logger.removeHandler(h)
            h.close()

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    fh = logging.FileHandler(str(log_file), encoding="utf-8", delay=True)
    fh.set_name(_HANDLER_NAME)
    fh.setLevel(level)
    fh.setFormatter(fmt)
    logger.addHandler(fh)
