from __future__ import annotations

import logging
import sys
from typing import TextIO

from sysupdate.config import ConfigError, Settings, load_settings
from sysupdate.context import RunContext
from sysupdate.diagnostics import post_update_report
from sysupdate.display import PeriodicRenderer, SummaryRenderer, TerminalMetrics
from sysupdate.display.renderer import Terminal
from sysupdate.executor import RunResult, TaskFailure, TaskRunner
from sysupdate.logging_setup import setup_logging

from .args import build_parser

logger = logging.getLogger(__name__)


def run_cli(
    argv: list[str] | None = None,
    *,
    terminal: Terminal | None = None,
    stream: TextIO | None = None,
) -> int:
    parser = build_parser()
    try:
        parser.parse_args(argv)
        settings = load_settings()
        return cmd_run(settings, terminal=terminal, stream=stream)

    except ConfigError as exc:
        print(str(exc), file=sys.stderr)
        return 2

    except KeyboardInterrupt:
        return 130


def cmd_run(
    settings: Settings,
    *,
    terminal: Terminal | None = None,
    stream: TextIO | None = None,
) -> int:
    out = stream if stream is not None else sys.stdout
    ctx = RunContext.create(settings)
    setup_logging(ctx.debug_log_path, level=settings.log_level)
    logger.info("run %s, log %s", ctx.run_id, ctx.log_path)

    renderer = SummaryRenderer(ctx, terminal or TerminalMetrics(), out)
    runner = TaskRunner(ctx, renderer.render)

    try:
        try:
            with PeriodicRenderer(renderer.render, settings.refresh_interval):
                result = runner.run()
        except TaskFailure as failure:
            _log_results(runner.result())
            _print_failure(ctx, failure, out)
            return 1

        _log_results(result)
        renderer.render()
        print(post_update_report(settings), file=out)
        _print_success(ctx, out)
        return 0

    finally:
        ctx.sink.close()


def _print_failure(ctx: RunContext, failure: TaskFailure, out: TextIO) -> None:
    logger.error(str(failure))

    # Nothing on the system changed if the very first task failed.
    if failure.index > 0:
        print(post_update_report(ctx.settings), file=out)

    print("\n\n", file=out)
    print(
        f"If you want to view the log or keep it, please move it from {ctx.settings.log_dir}",
        file=out,
    )
    print(f"Log: {ctx.log_path}", file=out)


def _print_success(ctx: RunContext, out: TextIO) -> None:
    print("\n\n", file=out)
    print("Note: If you want to view the log", file=out)
    print(f"Log: {ctx.log_path}", file=out)
    print(
        f"If you want to keep it, make sure you move it from {ctx.settings.log_dir} before a reboot.",
        file=out,
    )


def _log_results(rr: RunResult) -> None:
    for tid in rr.order:
        if tid in rr.results:
            result = rr.results[tid]
            logger.info(
                "%s: %s, %.3fs, exit code = %d",
                tid,
                rr.statuses[tid].value,
                result.duration_s,
                result.returncode,
            )
        else:
            logger.info("%s: %s", tid, rr.statuses[tid].value)
