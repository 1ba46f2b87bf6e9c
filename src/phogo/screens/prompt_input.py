from textual.app import ComposeResult
from textual.containers import HorizontalGroup
from textual.widgets import Label

from ..session import Mode, Session
from .session_overlay import SessionOverlay


class PromptInput(SessionOverlay):
    """Single line text entry for searching and renaming."""

    def __init__(self, mode: Mode, **kwargs) -> None:
        super().__init__(**kwargs)
        self.MODE = mode

    def compose(self) -> ComposeResult:
        with HorizontalGroup(id="prompt"):
            yield Label("> ", id="icon", shrink=True)
            yield Label("", id="input")

    def show_session(self, session: Session) -> None:
        prompt = self.query_one("#prompt")
        if self.MODE is Mode.SEARCHING:
            prompt.border_title = "Search"
            prompt.border_subtitle = "Enter to search, Esc to cancel"
        else:
            entry = session.catalog.selected
            prompt.border_title = "Rename File"
            prompt.border_subtitle = (
                f"Current name: {entry.name}" if entry is not None else ""
            )
        self.query_one("#input", Label).update(f"{session.text_buffer}▏")
