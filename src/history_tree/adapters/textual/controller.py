"""UI-agnostic controller that drives a HistoryDocument from host commands."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from history_tree.core import HistoryIndexError
from history_tree.document import DocumentMirror, HistoryDocument
from history_tree.render import build_view
from history_tree.runtime import telemetry


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the controller to update Textual widgets."""

    update_tree: Callable[[DocumentMirror], None]
    update_status: Callable[[str], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


class HistoryTreeController:
    """Tracks a selected node and maps commands onto document edits.

    Handles change on every edit, so the selection is stored as a handle and
    re-resolved to the visible version of the same logical node after each
    command.
    """

    COMMANDS = ("add", "rename", "delete", "undo", "redo", "next", "previous")

    def __init__(
        self, document: HistoryDocument[str], hooks: TextualUIHooks
    ) -> None:
        self.document = document
        self.hooks = hooks
        self.selected: int = document.root()
        self._refresh()

    def handle_command(self, name: str, argument: Optional[str] = None) -> str:
        """Run ``name`` against the selected node and return a status line."""

        if name not in self.COMMANDS:
            raise ValueError(f"Unknown command '{name}'")
        self._log_state("command ->", command=name, argument=argument)
        try:
            status = getattr(self, f"_command_{name}")(argument)
        except HistoryIndexError as exc:
            status = f"error: {exc}"
        telemetry.record_event(
            "controller.command",
            level="debug",
            data={"command": name, "selected": self.selected, "status": status},
        )
        self.hooks.update_status(status)
        self._refresh()
        self._log_state("result <-", status=status)
        return status

    def select(self, index: int) -> None:
        self.selected = self._resolve(index)
        self._refresh()

    def visible_nodes(self) -> List[int]:
        return build_view(self.document.tree, self.document.root()).flatten()

    def _command_add(self, argument: Optional[str]) -> str:
        label = argument or "node"
        self.selected = self.document.add(label, self.selected)
        return f"add {label!r} -> {self.selected}"

    def _command_rename(self, argument: Optional[str]) -> str:
        if self.selected == self.document.root():
            return "rename: root cannot be renamed"
        label = argument or self.document.payload(self.selected)
        self.selected = self.document.change(label, self.selected)
        return f"rename {label!r} -> {self.selected}"

    def _command_delete(self, _argument: Optional[str]) -> str:
        node = self.selected
        if node == self.document.root():
            return "delete: root cannot be deleted"
        parent = self.document.tree.record(node).parent
        self.document.delete(node)
        self.selected = self._resolve(parent)
        return f"delete {node}"

    def _command_undo(self, _argument: Optional[str]) -> str:
        if not self.document.tree.can_undo():
            return "undo: nothing to undo"
        self.document.undo()
        self.selected = self._resolve(self.selected)
        return f"undo -> cursor {self.document.tree.cursor()}"

    def _command_redo(self, _argument: Optional[str]) -> str:
        if not self.document.tree.can_redo():
            return "redo: nothing to redo"
        self.document.redo()
        self.selected = self._resolve(self.selected)
        return f"redo -> cursor {self.document.tree.cursor()}"

    def _command_next(self, _argument: Optional[str]) -> str:
        return self._step(1)

    def _command_previous(self, _argument: Optional[str]) -> str:
        return self._step(-1)

    def _step(self, offset: int) -> str:
        nodes = self.visible_nodes()
        position = nodes.index(self.selected) if self.selected in nodes else 0
        self.selected = nodes[(position + offset) % len(nodes)]
        return f"select {self.selected}"

    def _resolve(self, handle: int) -> int:
        """Map ``handle`` to the visible version of its logical node, or the root."""

        tree = self.document.tree
        if handle < 0 or handle >= len(tree):
            return tree.root()
        target = tree.origin(handle)
        if target > tree.cursor():
            return tree.root()
        for node in self.visible_nodes():
            if tree.origin(node) == target:
                return node
        return tree.root()

    def _refresh(self) -> None:
        self.hooks.update_tree(self.document.mirror(highlight=self.selected))

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        tree = self.document.tree
        return {
            "selected": self.selected,
            "cursor": tree.cursor(),
            "latest": tree.is_latest,
            "records": len(tree),
        }


__all__ = ["HistoryTreeController", "TextualUIHooks"]
