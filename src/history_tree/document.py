"""History tree paired with payloads stored under the same indices."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, List, Optional, TypeVar

from .core import HistoryTree, ensure_index
from .render import render

T = TypeVar("T")


@dataclass(slots=True)
class DocumentMirror:
    """Host-friendly snapshot of a document at its current cursor."""

    text: str
    cursor: int
    records: int
    can_undo: bool
    can_redo: bool
    highlight: Optional[int] = None


class HistoryDocument(Generic[T]):
    """Keeps one payload per record so ``payload(index)`` follows the tree.

    Index 0 holds the root payload. Every edit trims payloads past the cursor
    in step with the record log, so undone payloads are dropped together with
    the records they belonged to.
    """

    def __init__(self, root_payload: T, *, tree: Optional[HistoryTree] = None) -> None:
        self.tree = tree if tree is not None else HistoryTree()
        if len(self.tree) != 1:
            raise ValueError("HistoryDocument needs a tree holding only the root")
        self._payloads: List[T] = [root_payload]

    def __len__(self) -> int:
        return len(self._payloads)

    def root(self) -> int:
        return self.tree.root()

    def payload(self, index: int) -> T:
        return self._payloads[ensure_index(index, len(self._payloads))]

    def add(self, payload: T, parent: int) -> int:
        index = self.tree.add(parent)
        self._store(index, payload)
        return index

    def change(self, payload: T, node: int) -> int:
        index = self.tree.change(node)
        self._store(index, payload)
        return index

    def delete(self, node: int) -> int:
        # The tombstone slot repeats the deleted payload to keep indices aligned.
        index = self.tree.delete(node)
        self._store(index, self._payloads[node])
        return index

    def children(self, parent: int) -> List[int]:
        return self.tree.children(parent)

    def undo(self) -> None:
        self.tree.undo()

    def redo(self) -> None:
        self.tree.redo()

    def render(self, parent: int = 0, *, highlight: Optional[int] = None) -> str:
        """Dump the visible tree labelled by payload; ``highlight`` is bracketed."""

        def label(index: int) -> str:
            text = str(self._payloads[index])
            return f"[{text}]" if index == highlight else text

        return render(self.tree, parent, label=label)

    def mirror(
        self, parent: int = 0, *, highlight: Optional[int] = None
    ) -> DocumentMirror:
        return DocumentMirror(
            text=self.render(parent, highlight=highlight),
            cursor=self.tree.cursor(),
            records=len(self.tree),
            can_undo=self.tree.can_undo(),
            can_redo=self.tree.can_redo(),
            highlight=highlight,
        )

    def _store(self, index: int, payload: T) -> None:
        del self._payloads[index:]
        self._payloads.append(payload)


__all__ = ["DocumentMirror", "HistoryDocument"]
