"""Debug dump of the visible tree."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Callable, FrozenSet, List, Optional, TextIO, Tuple

from .core import HistoryTree

Label = Callable[[int], object]


@dataclass(frozen=True, slots=True)
class TreeView:
    """Visible subtree rooted at ``index`` as of the tree's cursor."""

    index: int
    children: Tuple["TreeView", ...] = ()

    def flatten(self) -> List[int]:
        indices = [self.index]
        for child in self.children:
            indices.extend(child.flatten())
        return indices


def build_view(tree: HistoryTree, parent: int = 0) -> TreeView:
    """Build the visible subtree under ``parent``.

    ``add`` accepts any parent, so records can form a cycle; a child that is
    already on the path from ``parent`` is left out.
    """

    return _build(tree, parent, frozenset())


def _build(tree: HistoryTree, index: int, ancestors: FrozenSet[int]) -> TreeView:
    path = ancestors | {index}
    return TreeView(
        index=index,
        children=tuple(
            _build(tree, child, path)
            for child in tree.children(index)
            if child not in path
        ),
    )


def render(tree: HistoryTree, parent: int = 0, *, label: Label = str) -> str:
    """Return the indented dump, one node per line.

    The top node is printed bare; each nested node is prefixed with ``|-``
    and two spaces per level beyond the first.
    """

    lines: List[str] = []
    _render_into(lines, build_view(tree, parent), 0, label)
    return "\n".join(lines)


def dump(
    tree: HistoryTree,
    parent: int = 0,
    *,
    label: Label = str,
    file: Optional[TextIO] = None,
) -> None:
    print(render(tree, parent, label=label), file=file or sys.stdout)


def _render_into(lines: List[str], view: TreeView, depth: int, label: Label) -> None:
    prefix = "" if depth == 0 else "  " * (depth - 1) + "|-"
    lines.append(f"{prefix}{label(view.index)}")
    for child in view.children:
        _render_into(lines, child, depth + 1, label)


__all__ = ["TreeView", "build_view", "dump", "render"]
