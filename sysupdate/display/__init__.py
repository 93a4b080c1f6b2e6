from .renderer import RenderFrame, SummaryRenderer, hard_wrap, wrap_tail
from .terminal import TerminalMetrics
from .ticker import PeriodicRenderer

__all__ = [
    "RenderFrame",
    "SummaryRenderer",
    "TerminalMetrics",
    "PeriodicRenderer",
    "hard_wrap",
    "wrap_tail",
]
