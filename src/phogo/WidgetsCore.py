from rich.text import Text
from textual.content import Content
from textual.widgets import OptionList, Static
from textual.widgets.option_list import Option

from . import state
from .catalog import Catalog, EntryKind
from .maps import SORT_LABELS
from .session import Mode, Session

HELP_KEYS = {
    Mode.BROWSING: [
        "j/k", "move", "enter", "view", "P", "slide", "s", "sort", "y", "path",
        "r", "name", "x", "del", "h", "hide", "/", "find", "d", "folders",
        "f", "filter", "?", "keys",
    ],
    Mode.VIEWING_IMAGE: ["1-4", "filter", "f", "pick", "j/k", "scroll", "esc", "back"],
    Mode.DIRECTORY_BROWSING: [
        "j/k", "move", "enter", "open", "d", "set", "h", "hide", "/", "find",
        "esc", "set & back",
    ],
    Mode.SEARCHING: ["enter", "search", "esc", "cancel"],
    Mode.RENAMING: ["enter", "rename", "esc", "cancel"],
    Mode.CONFIRMING_DELETE: ["y", "yes", "n", "no"],
    Mode.SELECTING_FILTER: ["j/k", "move", "1-4", "jump", "enter", "apply", "esc", "back"],
}


class FileList(OptionList, inherit_bindings=False):
    """
    Read-only view of the session's catalog, the cursor is driven by the session.
    """

    can_focus = False

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.shown_version = None

    def show_catalog(self, catalog: Catalog) -> None:
        """Rebuild the options when the catalog changed, then sync the cursor."""
        if self.shown_version != catalog.version:
            self.shown_version = catalog.version
            self.clear_options()
            if not catalog.entries:
                self.add_option(Option("  --no-images--", disabled=True))
            else:
                self.add_options([self.entry_option(entry) for entry in catalog.entries])
        if catalog.entries:
            self.highlighted = catalog.cursor

    @staticmethod
    def entry_option(entry) -> Option:
        icon, color = entry.icon
        prompt = Content.from_markup(
            f" [{color}]{icon}[/] $title\n   [dim]$subtitle[/]",
            title=entry.display_title,
            subtitle=entry.display_subtitle,
        )
        if entry.kind is EntryKind.ERROR:
            return Option(prompt, disabled=True)
        return Option(prompt, id=state.compress(entry.name))


class StatusBar(Static):
    def show_session(self, session: Session) -> None:
        title = state.setting("interface", "title")
        if session.slideshow_active:
            status = "SLIDESHOW LOOPING (Any key to stop)"
        else:
            status = (
                f"Sort: {SORT_LABELS[session.sort_key.value]} | "
                f"Hidden: {session.show_hidden} | "
                f"Filter: {session.render_mode.label}"
            )
            if session.search_query:
                status += f" | Search: {session.search_query}"
        self.update(
            Content.from_markup(
                "[reverse] $title [/reverse] $status", title=title, status=status
            )
        )


class ImageView(Static):
    """Shows the rendered text of the current image, or why there is none."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.shown = None

    def show_session(self, session: Session) -> None:
        key = (
            session.render_sequence,
            session.pending_render,
            session.displayed_content is None,
        )
        if key == self.shown:
            return
        self.shown = key
        if session.pending_render:
            self.update(f"\n\n  {state.setting('interface', 'rendering_placeholder')}")
        elif session.render_error is not None:
            self.update(Text(f"\n\n  {session.render_error}", style="bold red"))
        elif session.displayed_content is not None:
            self.update(Text.from_ansi(session.displayed_content))
        else:
            self.update("")


class HelpBar(Static):
    def show_session(self, session: Session) -> None:
        keys = HELP_KEYS[session.mode]
        text = Text()
        for index in range(0, len(keys), 2):
            if index:
                text.append(" • ", style="dim")
            text.append(keys[index], style="bold green")
            text.append(f" {keys[index + 1]}", style="grey50")
        if session.status_message:
            text.append(f"\n{session.status_message}")
        self.update(text)
