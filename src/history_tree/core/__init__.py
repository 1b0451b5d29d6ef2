"""Record log, cursor, and the children query."""

from .records import ROOT, ROOT_RECORD, Record
from .tree import HistoryTree
from .validation import HistoryIndexError, ensure_index

__all__ = [
    "HistoryTree",
    "HistoryIndexError",
    "Record",
    "ROOT",
    "ROOT_RECORD",
    "ensure_index",
]
