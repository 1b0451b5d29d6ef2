"""Executable Textual app for browsing and editing a history tree."""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Input, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use history_tree.adapters.textual.app"
    ) from exc

from history_tree.document import DocumentMirror, HistoryDocument
from history_tree.runtime import telemetry

from .controller import HistoryTreeController, TextualUIHooks


@dataclass
class UIState:
    tree_text: str = ""
    status_text: str = ""


class HistoryTreeApp(App[None]):
    """Tree view on top, status line and label prompt below."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#tree-view {
		height: 1fr;
		border: round $accent;
		padding: 1 1;
		content-align: left top;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("a", "prompt('add')", "Add child"),
        ("r", "prompt('rename')", "Rename"),
        ("d", "command('delete')", "Delete"),
        ("u", "command('undo')", "Undo"),
        ("ctrl+r", "command('redo')", "Redo"),
        ("j", "command('next')", "Next"),
        ("k", "command('previous')", "Previous"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, *, root_label: str = "root") -> None:
        super().__init__()
        self._state = UIState()
        self._root_label = root_label
        self.controller: HistoryTreeController | None = None
        self._tree_widget: Static | None = None
        self._status_widget: Static | None = None
        self._prompt_widget: Input | None = None
        self._pending_command: str | None = None
        self._logger = telemetry.get_logger("history_tree.app")

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="tree-area"):
            self._tree_widget = Static("", id="tree-view")
            yield self._tree_widget
        self._status_widget = Static("", id="status-line")
        self._prompt_widget = Input(placeholder="label", id="label-prompt")
        self._prompt_widget.display = False
        yield self._status_widget
        yield self._prompt_widget
        yield Footer()

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_tree=self._update_tree,
            update_status=self._update_status,
            log=self._log_line,
        )
        self.controller = HistoryTreeController(
            HistoryDocument(self._root_label), hooks
        )

    def action_command(self, name: str) -> None:
        if self.controller:
            self.controller.handle_command(name)

    def action_prompt(self, name: str) -> None:
        if self._prompt_widget is None:
            return
        self._pending_command = name
        self._prompt_widget.value = ""
        self._prompt_widget.display = True
        self._prompt_widget.focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        command = self._pending_command
        self._pending_command = None
        if self._prompt_widget is not None:
            self._prompt_widget.display = False
        if self.controller and command:
            self.controller.handle_command(command, event.value or None)

    def _update_tree(self, mirror: DocumentMirror) -> None:
        self._state.tree_text = mirror.text
        if self._tree_widget:
            self._tree_widget.update(self._state.tree_text)
        self.sub_title = f"cursor {mirror.cursor}/{mirror.records - 1}"

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)

    def _log_line(self, line: str) -> None:
        self._logger.debug(line)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the history tree Textual demo.")
    parser.add_argument(
        "--root-label",
        default=os.environ.get("HISTORY_TREE_ROOT_LABEL", "root"),
        help="Label shown for the root node (default: root)",
    )
    parser.add_argument(
        "--preset",
        choices=tuple(telemetry.PRESETS),
        default=None,
        help="Telemetry preset to activate before starting",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.preset:
        telemetry.configure(preset=args.preset)
    app = HistoryTreeApp(root_label=args.root_label)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
