"""Record type stored in the history log."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, slots=True)
class Record:
    """One immutable entry in the history log.

    A record is identified by its position in the log. ``prev`` points at the
    previous version of the same logical node; an origin record points back
    at itself. ``parent`` is the structural parent at the time the record was
    written, and ``remove`` marks a tombstone version.
    """

    prev: int
    parent: int
    remove: bool = False

    def is_origin(self, index: int) -> bool:
        return self.prev == index

    def predecessor(self, index: int) -> Optional[int]:
        """Return the previous version's index, or ``None`` for an origin."""

        return None if self.prev == index else self.prev


ROOT = 0
ROOT_RECORD = Record(prev=ROOT, parent=ROOT)

__all__ = ["Record", "ROOT", "ROOT_RECORD"]
