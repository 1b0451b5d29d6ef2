"""Index checks used by operations that dereference a node."""

from __future__ import annotations


class HistoryIndexError(IndexError):
    """Raised when a node index does not refer to an active record."""

    def __init__(self, message: str, *, index: int) -> None:
        super().__init__(message)
        self.index = index


def ensure_index(index: int, size: int) -> int:
    # Negative indices would silently wrap around the log.
    if index < 0 or index >= size:
        raise HistoryIndexError(
            f"Node {index} is outside the active history (size {size})",
            index=index,
        )
    return index
