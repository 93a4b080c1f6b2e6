from .board import StatusBoard
from .types import Status, UnknownTaskError

__all__ = ["StatusBoard", "Status", "UnknownTaskError"]
