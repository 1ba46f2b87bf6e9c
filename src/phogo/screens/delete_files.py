from textual.app import ComposeResult
from textual.containers import Grid
from textual.widgets import Label

from ..session import Mode, Session
from .session_overlay import SessionOverlay


class DeleteFiles(SessionOverlay):
    """Screen with a dialog to confirm whether to delete the selected image."""

    MODE = Mode.CONFIRMING_DELETE

    def compose(self) -> ComposeResult:
        with Grid(id="dialog"):
            yield Label("", id="question")
            yield Label("\\[Y]es", id="yes", classes="error")
            yield Label("\\[N]o", id="no", classes="primary")

    def show_session(self, session: Session) -> None:
        entry = session.catalog.selected
        name = entry.name if entry is not None else "this file"
        self.query_one("#question", Label).update(
            f"Are you sure you want to delete {name}?"
        )
