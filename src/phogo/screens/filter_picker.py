from textual.app import ComposeResult
from textual.containers import VerticalGroup
from textual.content import Content
from textual.widgets import OptionList
from textual.widgets.option_list import Option

from ..converter import RenderMode
from ..session import Mode, Session
from .session_overlay import SessionOverlay


class FilterPicker(SessionOverlay):
    """Lists the render presets, the highlighted one follows the session."""

    MODE = Mode.SELECTING_FILTER

    def compose(self) -> ComposeResult:
        with VerticalGroup(id="filter_group"):
            options = OptionList(
                *[
                    Option(
                        Content.from_markup(
                            f" [b]{mode.digit}[/b] $title [dim]$subtitle[/]",
                            title=mode.display_title,
                            subtitle=mode.display_subtitle,
                        ),
                        id=mode.name.lower(),
                    )
                    for mode in RenderMode
                ],
                id="filter_options",
            )
            options.can_focus = False
            yield options

    def show_session(self, session: Session) -> None:
        options = self.query_one("#filter_options", OptionList)
        options.border_title = "Render filter"
        options.border_subtitle = f"current: {session.render_mode.label}"
        options.highlighted = session.filter_cursor
