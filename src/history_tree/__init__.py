"""Persistent append-only history tree with linear undo/redo."""

from .core import HistoryIndexError, HistoryTree, Record
from .document import DocumentMirror, HistoryDocument
from .render import TreeView, build_view, dump, render

__all__ = [
    "adapters",
    "core",
    "runtime",
    "DocumentMirror",
    "HistoryDocument",
    "HistoryIndexError",
    "HistoryTree",
    "Record",
    "TreeView",
    "build_view",
    "dump",
    "render",
]

__version__ = "0.1.0"
