import io

from history_tree import HistoryTree, TreeView, build_view, dump, render


def make_project() -> HistoryTree:
    tree = HistoryTree()
    assets = tree.add(tree.root())
    tree.add(assets)
    tree.add(tree.root())
    return tree


def test_build_view_nests_children() -> None:
    tree = make_project()

    view = build_view(tree)

    assert view == TreeView(
        index=0,
        children=(TreeView(1, (TreeView(2),)), TreeView(3)),
    )
    assert view.flatten() == [0, 1, 2, 3]


def test_render_indents_nested_nodes() -> None:
    tree = make_project()

    assert render(tree) == "0\n|-1\n  |-2\n|-3"


def test_render_subtree_with_labels() -> None:
    tree = make_project()
    names = {1: "assets", 2: "syntax"}

    assert render(tree, 1, label=names.__getitem__) == "assets\n|-syntax"


def test_render_tracks_cursor() -> None:
    tree = make_project()
    tree.undo()

    assert render(tree) == "0\n|-1\n  |-2"


def test_dump_writes_to_stream() -> None:
    tree = make_project()
    stream = io.StringIO()

    dump(tree, file=stream)

    assert stream.getvalue() == "0\n|-1\n  |-2\n|-3\n"


def test_render_stops_at_parent_cycle() -> None:
    tree = HistoryTree()
    tree.add(tree.root())
    tree.add(3)
    tree.add(2)

    assert render(tree, 2) == "2\n|-3"
    assert build_view(tree, 3).flatten() == [3, 2]
