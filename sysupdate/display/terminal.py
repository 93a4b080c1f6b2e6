import shutil


class TerminalMetrics:
    """Current terminal size. Re-queried on every call so resizes show up."""

    def rows(self) -> int:
        return shutil.get_terminal_size().lines

    def columns(self) -> int:
        return shutil.get_terminal_size().columns
