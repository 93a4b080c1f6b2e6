from __future__ import annotations

import io
from dataclasses import replace
from pathlib import Path

import pytest

from sysupdate.config import DEFAULT_TASKS, Settings
from sysupdate.context import RunContext
from sysupdate.display import SummaryRenderer, hard_wrap, wrap_tail
from sysupdate.display.renderer import BADGES, CLEAR, STATUS_STYLES
from sysupdate.status import Status


class FakeTerminal:
    def __init__(self, columns: int, rows: int):
        self.size = (columns, rows)
        self.calls = 0

    def rows(self) -> int:
        self.calls += 1
        return self.size[1]

    def columns(self) -> int:
        self.calls += 1
        return self.size[0]


def _ctx(tmp_path: Path, **overrides) -> RunContext:
    settings = Settings(tasks=DEFAULT_TASKS, log_dir=tmp_path, color=False)
    return RunContext.create(replace(settings, **overrides))


def _renderer(ctx: RunContext, columns: int, rows: int) -> SummaryRenderer:
    return SummaryRenderer(ctx, FakeTerminal(columns, rows), io.StringIO())


# -------------------------
# Wrapping
# -------------------------


def test_hard_wrap_splits_mid_token():
    assert hard_wrap("abcdefghij", 4) == ["abcd", "efgh", "ij"]
    assert hard_wrap("abcd", 4) == ["abcd"]
    assert hard_wrap("", 4) == [""]


def test_wrap_tail_keeps_most_recent_rows():
    assert wrap_tail(["aaaaaa", "bb", "cccccc"], 4, 3) == ["bb", "cccc", "cc"]
    assert wrap_tail(["a"], 4, 0) == []


# -------------------------
# Summary
# -------------------------


def test_summary_box_lists_every_task_with_status(tmp_path: Path):
    ctx = _ctx(tmp_path)
    ctx.board.set("refresh", Status.COMPLETED)
    ctx.board.set("update", Status.RUNNING)

    frame = _renderer(ctx, 80, 20).frame()

    assert not frame.too_small
    assert frame.summary == (
        "",
        "=" * 44,
        "= Refreshing Repos...........[ COMPLETED ] =",
        "= Updating Packages..........[  RUNNING  ] =",
        "= Updating Distro............[  PENDING  ] =",
        "= Removing old dependencies..[  PENDING  ] =",
        "= Updating flatpaks..........[  PENDING  ] =",
        "= Removing old flatpaks......[  PENDING  ] =",
        "=" * 44,
        "",
    )
    assert all(len(line) in (0, 44) for line in frame.summary)


def test_each_status_has_its_own_style(tmp_path: Path):
    assert len(set(STATUS_STYLES.values())) == len(Status)
    assert len(set(BADGES.values())) == len(Status)

    ctx = _ctx(tmp_path, color=True)
    ctx.board.set("refresh", Status.FAILED)
    frame = _renderer(ctx, 80, 20).frame()

    assert STATUS_STYLES[Status.FAILED] + BADGES[Status.FAILED] in frame.summary[2]
    assert STATUS_STYLES[Status.PENDING] + BADGES[Status.PENDING] in frame.summary[3]


# -------------------------
# Terminal size boundaries
# -------------------------


def test_minimum_size_renders_summary(tmp_path: Path):
    frame = _renderer(_ctx(tmp_path), 45, 11).frame()
    assert not frame.too_small
    assert len(frame.summary) == len(DEFAULT_TASKS) + 4


@pytest.mark.parametrize("columns, rows", [(44, 11), (45, 10), (20, 5)])
def test_below_minimum_only_shows_message(tmp_path: Path, columns: int, rows: int):
    ctx = _ctx(tmp_path)
    ctx.sink.append(b"output\n")

    frame = _renderer(ctx, columns, rows).frame()

    assert frame.too_small
    assert frame.lines() == [
        "Error: The terminal must be at least 45 columns wide and 11 lines high to display any output."
    ]


def test_log_hidden_below_minimum_characters(tmp_path: Path):
    ctx = _ctx(tmp_path)
    ctx.sink.append(b"output\n")

    # 17 rows leave 5 log rows: 59 * 5 = 295 < 300
    hidden = _renderer(ctx, 59, 17).frame()
    shown = _renderer(ctx, 60, 17).frame()

    assert not hidden.too_small
    assert not hidden.log_shown
    assert hidden.summary == shown.summary
    assert shown.log == ("output",)


def test_empty_log_renders_empty_region(tmp_path: Path):
    frame = _renderer(_ctx(tmp_path), 80, 40).frame()
    assert frame.log == ()
    assert not frame.too_small


# -------------------------
# Log excerpt
# -------------------------


def test_long_log_shows_latest_wrapped_rows(tmp_path: Path):
    ctx = _ctx(tmp_path)
    lines = [f"{i:03d} " + "x" * 100 for i in range(500)]
    ctx.sink.append("\n".join(lines).encode() + b"\n")

    frame = _renderer(ctx, 80, 20).frame()

    # 20 rows - 12 summary rows = 8 log rows, each source line wraps to two
    expected = []
    for line in lines[-4:]:
        expected += [line[:80], line[80:]]
    assert list(frame.log) == expected
    assert all(len(row) <= 80 for row in frame.log)
    assert frame.log[-1] == lines[-1][80:]
    assert frame.log[0].startswith("496 ")


def test_short_lines_fill_available_rows(tmp_path: Path):
    ctx = _ctx(tmp_path)
    ctx.sink.append(b"".join(f"line {i}\n".encode() for i in range(50)))

    frame = _renderer(ctx, 80, 20).frame()

    assert list(frame.log) == [f"line {i}" for i in range(42, 50)]


# -------------------------
# Drawing
# -------------------------


def test_frame_is_idempotent(tmp_path: Path):
    ctx = _ctx(tmp_path)
    ctx.sink.append(b"a\nb\n")
    ctx.board.set("refresh", Status.RUNNING)
    renderer = _renderer(ctx, 80, 24)

    assert renderer.frame() == renderer.frame()


def test_terminal_is_measured_every_frame(tmp_path: Path):
    ctx = _ctx(tmp_path)
    terminal = FakeTerminal(80, 24)
    renderer = SummaryRenderer(ctx, terminal, io.StringIO())

    assert not renderer.frame().too_small
    terminal.size = (30, 24)
    assert renderer.frame().too_small


def test_render_clears_and_writes_frame(tmp_path: Path):
    ctx = _ctx(tmp_path)
    ctx.sink.append(b"hello\n")
    out = io.StringIO()
    renderer = SummaryRenderer(ctx, FakeTerminal(80, 24), out)

    frame = renderer.render()

    assert out.getvalue() == CLEAR + frame.text() + "\n"
    assert out.getvalue().rstrip("\n").endswith("hello")


def test_render_does_not_mutate_state(tmp_path: Path):
    ctx = _ctx(tmp_path)
    ctx.sink.append(b"hello\n")
    before = (ctx.board.snapshot(), ctx.board.history(), ctx.sink.bytes_written)

    _renderer(ctx, 80, 24).render()

    assert (ctx.board.snapshot(), ctx.board.history(), ctx.sink.bytes_written) == before
