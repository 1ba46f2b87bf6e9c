from textual import events
from textual.screen import ModalScreen

from ..session import Mode, Session


class SessionOverlay(ModalScreen):
    """A modal view of one session mode.

    Holds no state of its own: keys are handed to the app's session machine and
    the content is redrawn from the session after every event.
    """

    MODE: Mode

    def on_mount(self) -> None:
        self.show_session(self.app.session)

    def show_session(self, session: Session) -> None:
        raise NotImplementedError

    def on_key(self, event: events.Key) -> None:
        event.stop()
        self.app.handle_session_key(event)
