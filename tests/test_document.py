import pytest

from history_tree import HistoryDocument, HistoryIndexError, HistoryTree


def make_document() -> HistoryDocument[str]:
    document = HistoryDocument("root")
    assets = document.add("asssets", document.root())
    document.add("syntax", assets)
    return document


def test_payloads_share_record_indices() -> None:
    document = make_document()

    assert len(document) == len(document.tree) == 3
    assert document.payload(1) == "asssets"
    assert document.payload(2) == "syntax"


def test_change_carries_children_over() -> None:
    document = make_document()

    assets = document.change("assets", 1)

    assert document.children(assets) == [2]
    assert document.render(assets) == "assets\n|-syntax"


def test_undo_then_add_drops_undone_payloads() -> None:
    document = make_document()
    document.change("assets", 1)
    document.undo()

    assets = document.children(document.root())[0]
    hello = document.add("hello", assets)

    assert assets == 1
    assert hello == 3
    assert len(document) == 4
    assert document.render() == "root\n|-asssets\n  |-syntax\n  |-hello"


def test_delete_keeps_indices_aligned() -> None:
    document = make_document()

    tombstone = document.delete(2)
    extra = document.add("extra", 1)

    assert document.payload(tombstone) == "syntax"
    assert document.payload(extra) == "extra"
    assert document.render() == "root\n|-asssets\n  |-extra"


def test_rejected_edit_keeps_payloads() -> None:
    document = make_document()
    document.undo()

    with pytest.raises(HistoryIndexError):
        document.change("late", 2)

    assert len(document) == 3
    assert document.payload(2) == "syntax"


def test_render_highlights_node() -> None:
    document = make_document()

    assert document.render(highlight=2) == "root\n|-asssets\n  |-[syntax]"


def test_mirror_reports_history_state() -> None:
    document = make_document()
    document.undo()

    mirror = document.mirror(highlight=1)

    assert mirror.text == "root\n|-[asssets]"
    assert mirror.cursor == 1
    assert mirror.records == 3
    assert mirror.can_undo is True
    assert mirror.can_redo is True
    assert mirror.highlight == 1


def test_document_requires_fresh_tree() -> None:
    tree = HistoryTree()
    tree.add(tree.root())

    with pytest.raises(ValueError):
        HistoryDocument("root", tree=tree)


def test_payload_rejects_negative_index() -> None:
    document = make_document()

    with pytest.raises(HistoryIndexError) as info:
        document.payload(-1)

    assert info.value.index == -1
