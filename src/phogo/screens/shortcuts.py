from textual import events
from textual.app import ComposeResult
from textual.containers import Horizontal, VerticalGroup
from textual.screen import ModalScreen
from textual.widgets import OptionList
from textual.widgets.option_list import Option

from ..maps import KEYBIND_DESCRIPTIONS
from ..state import config


class Shortcuts(ModalScreen):
    """Lists the configured keybinds. Not a session mode, only a view."""

    def compose(self) -> ComposeResult:
        keybind_data = self.get_keybind_data()

        key_options = [Option(f" {keys} ") for keys, _ in keybind_data]
        description_options = [
            Option(f" {description} ") for _, description in keybind_data
        ]

        with VerticalGroup(id="shortcuts_group"):
            with Horizontal():
                yield OptionList(*key_options, id="shortcuts_keys")
                yield OptionList(*description_options, id="shortcuts_descriptions")

    def on_mount(self) -> None:
        shortcuts_keys = self.query_one("#shortcuts_keys")
        shortcuts_keys.border_title = "Keys"
        shortcuts_keys.can_focus = False

        shortcuts_descriptions = self.query_one("#shortcuts_descriptions")
        shortcuts_descriptions.border_title = "Actions"
        shortcuts_descriptions.border_subtitle = "Press Esc or Q to close"
        shortcuts_descriptions.can_focus = False

    def on_key(self, event: events.Key) -> None:
        """Handle key presses."""
        event.stop()
        match event.key.lower():
            case "escape" | "q":
                self.dismiss()

    def get_keybind_data(self) -> list[tuple[str, str]]:
        keybind_data = []
        for action, description in KEYBIND_DESCRIPTIONS.items():
            keys = config.get("keybinds", {}).get(action)
            if keys:
                formatted_keys = ", ".join(f"<{key}>" for key in keys)
                keybind_data.append((formatted_keys, description))
        return keybind_data
