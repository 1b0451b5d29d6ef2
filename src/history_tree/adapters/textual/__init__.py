"""Textual host: the controller is importable without Textual installed."""

from .controller import HistoryTreeController, TextualUIHooks

__all__ = ["HistoryTreeController", "TextualUIHooks"]
