import logging
from os import path

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical, VerticalGroup, VerticalScroll
from textual.css.query import NoMatches
from textual.message import Message
from textual.timer import Timer
from textual.widgets import Header

from . import fileops, state
from .dispatcher import RenderCompleted, RenderDispatcher, RenderRequest
from .screens import DeleteFiles, FilterPicker, PromptInput, Shortcuts
from .screens.session_overlay import SessionOverlay
from .session import FORCE_QUIT, Mode, SessionMachine, new_session, resolve_start_path
from .slideshow import SlideshowScheduler, SlideshowTick
from .themes import get_custom_themes
from .WidgetsCore import FileList, HelpBar, ImageView, StatusBar

log = logging.getLogger(__name__)

# columns and rows around the viewer content: padding and border of #root and
# the viewer, header, status bar and help bar (see style.tcss)
CHROME_WIDTH = 4
CHROME_HEIGHT = 7


class DirectoryChanged(Message):
    """Something changed inside the directory being listed."""

    def __init__(self, changed_path: str) -> None:
        super().__init__()
        self.changed_path = changed_path


class Application(App):
    CSS_PATH = "style.tcss"

    BINDINGS = [
        Binding(FORCE_QUIT, "force_quit", "Quit", show=False, priority=True),
    ]

    def __init__(self, startup_path: str = "", *args, **kwargs):
        super().__init__(*args, **kwargs)
        directory, self.initial_image = resolve_start_path(startup_path)
        self.session = new_session(directory)
        self.machine = SessionMachine(self.session, self)
        self.dispatcher = RenderDispatcher(self)
        self.slideshow = SlideshowScheduler(
            self,
            float(state.setting("settings", "slideshow_interval")),
            is_active=lambda: self.session.slideshow_active,
        )
        self.watcher = state.DirectoryWatcher(
            lambda changed: self.post_message(DirectoryChanged(changed))
        )
        self._overlay: SessionOverlay | None = None
        self._reload_timer: Timer | None = None

    def compose(self) -> ComposeResult:
        yield Header(
            name=state.setting("interface", "title"),
            icon="🖼" if state.setting("interface", "nerd_font") else "px",
        )
        with Vertical(id="root"):
            yield StatusBar(id="status_bar")
            with VerticalGroup(id="file_list_container"):
                yield FileList(id="file_list", name="Images", classes="file-list")
            with VerticalScroll(id="image_container"):
                yield ImageView(id="image_view")
            yield HelpBar(id="help_bar")

    def on_mount(self) -> None:
        self.title = state.setting("interface", "title")
        for theme in get_custom_themes():
            self.register_theme(theme)
        default_theme = state.get_nested_value(state.config, ["theme", "default"])
        if default_theme in self.available_themes:
            self.theme = default_theme
        # overlays become the active screen, keep hold of the one with the widgets
        self.main_screen = self.screen
        self.main_screen.query_one("#image_container").can_focus = False
        log.info("Starting in %s", self.session.working_directory)
        self.machine.start(self.initial_image)
        self.sync_view()

    def on_unmount(self) -> None:
        self.slideshow.stop()
        self.watcher.stop()

    # events into the machine

    def on_key(self, event: events.Key) -> None:
        event.stop()
        self.handle_session_key(event)

    def handle_session_key(self, event: events.Key) -> None:
        self.machine.handle_key(event.key, event.character)
        self.sync_view()

    def action_force_quit(self) -> None:
        self.machine.handle_key(FORCE_QUIT)

    def on_render_completed(self, message: RenderCompleted) -> None:
        self.machine.handle_render_completed(message)
        self.sync_view()

    def on_slideshow_tick(self, message: SlideshowTick) -> None:
        self.machine.handle_tick()
        self.sync_view()

    def on_directory_changed(self, message: DirectoryChanged) -> None:
        """Debounce bursts of filesystem events, then reload once"""
        if self._reload_timer is not None:
            self._reload_timer.stop()
        self._reload_timer = self.set_timer(0.25, self.reload_from_disk)

    def reload_from_disk(self) -> None:
        self._reload_timer = None
        self.machine.handle_directory_changed()
        self.sync_view()

    # SessionHost

    def request_render(self, request: RenderRequest) -> None:
        self.dispatcher.request_render(request)

    def start_slideshow(self) -> None:
        self.slideshow.start()

    def stop_slideshow(self) -> None:
        self.slideshow.stop()

    def copy_to_clipboard(self, text: str) -> bool:
        """Copy to the system clipboard, False when only OSC 52 was tried."""
        if fileops.copy_to_clipboard(text):
            return True
        # OSC 52, the terminal may or may not honour it
        super().copy_to_clipboard(text)
        return False

    def viewport_size(self) -> tuple[int, int]:
        try:
            viewer = self.main_screen.query_one("#image_container")
            listing = self.main_screen.query_one("#file_list_container")
        except (AttributeError, NoMatches):
            viewer = listing = None
        if viewer is not None and viewer.display and viewer.size.area:
            region = viewer.scrollable_content_region
            return region.width, region.height
        if listing is not None and listing.display and listing.size.area:
            # the viewer is about to take the list's slot, same border and size
            region = listing.content_region
            return region.width, region.height
        if self.size.area:
            return (
                max(1, self.size.width - CHROME_WIDTH),
                max(1, self.size.height - CHROME_HEIGHT),
            )
        return (
            state.setting("render", "initial_width"),
            state.setting("render", "initial_height"),
        )

    def scroll_viewer(self, lines: int) -> None:
        self.main_screen.query_one("#image_container").scroll_relative(
            y=lines, animate=False
        )

    def show_shortcuts(self) -> None:
        self.push_screen(Shortcuts())

    # view

    def overlay_for(self, mode: Mode) -> SessionOverlay | None:
        match mode:
            case Mode.SEARCHING | Mode.RENAMING:
                return PromptInput(mode)
            case Mode.CONFIRMING_DELETE:
                return DeleteFiles()
            case Mode.SELECTING_FILTER:
                return FilterPicker()
        return None

    def sync_overlay(self) -> None:
        mode = self.session.mode
        if self._overlay is not None and self._overlay.MODE is not mode:
            if self.screen is self._overlay:
                self.pop_screen()
            self._overlay = None
        if self._overlay is None:
            self._overlay = self.overlay_for(mode)
            if self._overlay is not None:
                self.push_screen(self._overlay)
        elif self._overlay.is_mounted:
            self._overlay.show_session(self.session)

    def sync_view(self) -> None:
        """Redraw every widget from the session."""
        session = self.session
        view = self.main_screen
        viewing = session.mode is Mode.VIEWING_IMAGE or (
            session.mode is Mode.SELECTING_FILTER
            and session.return_mode is Mode.VIEWING_IMAGE
        )
        view.query_one("#file_list_container").display = not viewing
        view.query_one("#image_container").display = viewing

        view.query_one(StatusBar).show_session(session)
        file_list_container = view.query_one("#file_list_container")
        file_list_container.border_title = (
            "Folders" if session.listing_directories else "Images"
        )
        file_list_container.border_subtitle = session.listing_directory.replace(
            path.sep, "/"
        )
        view.query_one(FileList).show_catalog(session.catalog)
        image_container = view.query_one("#image_container")
        entry = session.catalog.selected
        image_container.border_title = (
            entry.name if entry is not None and entry.is_image else "Image View"
        )
        view.query_one(ImageView).show_session(session)
        view.query_one(HelpBar).show_session(session)
        self.sub_title = session.mode.value
        self.sync_overlay()

        if state.setting("settings", "watch_directory"):
            self.watcher.watch(session.listing_directory)
