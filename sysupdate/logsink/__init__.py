from .sink import LogSink

__all__ = ["LogSink"]
