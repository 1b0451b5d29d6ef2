"""Persistent history tree with linear undo/redo.

Records are appended, never edited. A record points at the previous version
of its logical node and at the parent it was created under; the visible tree
is a function of the records plus a cursor that decides which records are
active. A record is a child of a parent when it points at the parent or at
any earlier version of it, and a newer active version of a node hides the
older ones.

``add``/``change``/``delete`` are O(1). ``children`` is O(N * M) where N is
the number of parent versions and M the number of active records.
"""

from __future__ import annotations

from typing import Iterator, List, Optional, Tuple

from history_tree.runtime.telemetry import history_op, record_event

from .records import ROOT, ROOT_RECORD, Record
from .validation import ensure_index


class HistoryTree:
    """Append-only record log plus a cursor over it."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._records: List[Record] = [ROOT_RECORD]
        # ``None`` follows the end of the log.
        self._cursor: Optional[int] = None
        self._logger_name = logger_name

    def __len__(self) -> int:
        return len(self._records)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HistoryTree):
            return NotImplemented
        return self._records == other._records and self._cursor == other._cursor

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"HistoryTree(records={len(self._records)}, cursor={self._cursor!r})"

    @property
    def records(self) -> Tuple[Record, ...]:
        return tuple(self._records)

    def record(self, index: int) -> Record:
        return self._records[ensure_index(index, len(self._records))]

    @property
    def is_latest(self) -> bool:
        return self._cursor is None

    def root(self) -> int:
        return ROOT

    def cursor(self) -> int:
        """Return the effective cursor: the fixed index, or the last record."""

        if self._cursor is None:
            return len(self._records) - 1
        return self._cursor

    def copy(self) -> "HistoryTree":
        clone = HistoryTree(logger_name=self._logger_name)
        clone._records = list(self._records)
        clone._cursor = self._cursor
        return clone

    def add(self, parent: int) -> int:
        """Create a new logical node under ``parent`` and return its index.

        ``parent`` is not validated; an unknown parent simply yields a node
        that no ``children`` query will reach.
        """

        with history_op("add", logger_name=self._logger_name, parent=parent) as op:
            index = self._begin_edit()
            self._records.append(Record(prev=index, parent=parent))
            op.result(index, self.cursor())
            return index

    def change(self, node: int) -> int:
        """Append a new version of ``node`` and return the new handle.

        The new version keeps the parent of ``node``. Children recorded
        against any earlier version remain reachable from the new handle.
        """

        with history_op("change", logger_name=self._logger_name, node=node) as op:
            index = self._begin_edit(node)
            parent = self._records[node].parent
            self._records.append(Record(prev=node, parent=parent))
            op.result(index, self.cursor())
            return index

    def delete(self, node: int) -> int:
        """Append a tombstone for ``node`` and return the tombstone's index."""

        with history_op("delete", logger_name=self._logger_name, node=node) as op:
            index = self._begin_edit(node)
            parent = self._records[node].parent
            self._records.append(Record(prev=node, parent=parent, remove=True))
            op.result(index, self.cursor())
            return index

    def children(self, parent: int) -> List[int]:
        """Return the visible children of ``parent`` at the cursor, ascending."""

        cursor = self.cursor()
        if parent < 0 or cursor < parent:
            return []

        lineage = set(self._lineage(parent))
        nodes = [
            index
            for index in range(1, cursor + 1)
            if self._records[index].parent in lineage
        ]

        # Drop tombstones and every version superseded by a later candidate.
        positions = {node: position for position, node in enumerate(nodes)}
        keep = [True] * len(nodes)
        for position, node in enumerate(nodes):
            record = self._records[node]
            if record.remove:
                keep[position] = False
            previous = record.predecessor(node)
            if previous is None:
                continue
            superseded = positions.get(previous)
            if superseded is not None:
                keep[superseded] = False

        return [node for node, visible in zip(nodes, keep) if visible]

    def versions(self, node: int) -> List[int]:
        """Return ``node`` followed by each earlier version down to its origin."""

        ensure_index(node, len(self._records))
        return list(self._lineage(node))

    def origin(self, node: int) -> int:
        return self.versions(node)[-1]

    def can_undo(self) -> bool:
        return self.cursor() > 0

    def can_redo(self) -> bool:
        return self.cursor() < len(self._records) - 1

    def undo(self) -> None:
        """Move the cursor one record back; stops at the root."""

        if self._cursor is not None:
            self._cursor = max(self._cursor - 1, 0)
        else:
            self._cursor = max(len(self._records) - 2, 0)
        record_event(
            "history.undo",
            level="debug",
            data={"cursor": self._cursor, "records": len(self._records)},
            logger_name=self._logger_name,
        )

    def redo(self) -> None:
        """Move the cursor one record forward; past the end it follows the log."""

        if self._cursor is not None:
            if self._cursor + 1 >= len(self._records):
                self._cursor = None
            else:
                self._cursor += 1
        record_event(
            "history.redo",
            level="debug",
            data={"cursor": self._cursor, "records": len(self._records)},
            logger_name=self._logger_name,
        )

    def _begin_edit(self, node: Optional[int] = None) -> int:
        # Edits after an undo discard the redo future; the root always survives.
        active = self.cursor() + 1
        if node is not None:
            ensure_index(node, active)
        del self._records[active:]
        self._cursor = None
        return len(self._records)

    def _lineage(self, node: int) -> Iterator[int]:
        while True:
            yield node
            previous = self._records[node].predecessor(node)
            if previous is None:
                return
            node = previous


__all__ = ["HistoryTree"]
