"""The browsing session and the state machine that drives it.

Every key press, slideshow tick, render completion and directory change is fed
into SessionMachine one at a time from the app's event loop. The machine is the
only thing that mutates the Session; side effects that leave the session
(render requests, timers, clipboard, quitting) go through a SessionHost.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from os import path
from typing import Protocol

from . import state
from .catalog import Catalog, CatalogMode, EntryKind, SortKey, build_catalog
from .converter import RenderMode
from .dispatcher import RenderCompleted, RenderRequest
from .errors import FileOperationError
from .fileops import delete_entry, rename_entry

log = logging.getLogger(__name__)

FORCE_QUIT = "ctrl+c"


class Mode(Enum):
    BROWSING = "Browsing"
    VIEWING_IMAGE = "Viewing image"
    DIRECTORY_BROWSING = "Browsing directories"
    SEARCHING = "Searching"
    RENAMING = "Renaming"
    CONFIRMING_DELETE = "Confirming delete"
    SELECTING_FILTER = "Selecting filter"


TEXT_ENTRY_MODES = (Mode.SEARCHING, Mode.RENAMING)


class SessionHost(Protocol):
    """What the machine needs from the outside world."""

    def request_render(self, request: RenderRequest) -> None: ...

    def start_slideshow(self) -> None: ...

    def stop_slideshow(self) -> None: ...

    def copy_to_clipboard(self, text: str) -> bool: ...

    def viewport_size(self) -> tuple[int, int]: ...

    def scroll_viewer(self, lines: int) -> None: ...

    def show_shortcuts(self) -> None: ...

    def notify(self, message: str, severity: str = "information") -> None: ...

    def exit(self) -> None: ...


@dataclass
class Session:
    """All of the mutable state of one run of the browser."""

    working_directory: str
    browsing_directory: str
    mode: Mode = Mode.BROWSING
    search_query: str = ""
    show_hidden: bool = False
    sort_key: SortKey = SortKey.NAME
    render_mode: RenderMode = RenderMode.COLOR
    catalog: Catalog = field(default_factory=Catalog)
    pending_render: bool = False
    render_sequence: int = 0
    displayed_content: str | None = None
    render_error: str | None = None
    slideshow_active: bool = False
    status_message: str = ""
    # search / rename text being edited
    text_buffer: str = ""
    # where Searching and SelectingFilter go back to
    return_mode: Mode = Mode.BROWSING
    filter_cursor: int = 0

    @property
    def listing_directories(self) -> bool:
        """Whether the active catalog lists subdirectories of browsing_directory."""
        return self.mode is Mode.DIRECTORY_BROWSING or (
            self.mode is Mode.SEARCHING
            and self.return_mode is Mode.DIRECTORY_BROWSING
        )

    @property
    def listing_directory(self) -> str:
        if self.listing_directories:
            return self.browsing_directory
        return self.working_directory

    @property
    def selected_path(self) -> str | None:
        entry = self.catalog.selected
        if entry is None or not entry.is_image:
            return None
        return path.join(self.working_directory, entry.name)


def resolve_start_path(start_path: str) -> tuple[str, str | None]:
    """Work out the directory to open and the image to preselect.

    Args:
        start_path (str): A directory or file, relative or absolute.

    Returns:
        tuple[str, str | None]: The absolute directory, and the file name when
            a file was given. Missing paths fall back to their closest existing
            ancestor.
    """
    target = path.abspath(start_path or ".")
    while not path.exists(target) and path.dirname(target) != target:
        target = path.dirname(target)
    if path.isfile(target):
        return path.dirname(target), path.basename(target)
    return target, None


def new_session(directory: str) -> Session:
    """A session seeded from the config defaults."""
    try:
        sort_key = SortKey(state.setting("settings", "sort_by"))
    except ValueError:
        sort_key = SortKey.NAME
    try:
        render_mode = RenderMode.from_label(state.setting("settings", "render_mode"))
    except ValueError:
        render_mode = RenderMode.COLOR
    return Session(
        working_directory=directory,
        browsing_directory=directory,
        show_hidden=bool(state.setting("settings", "show_hidden")),
        sort_key=sort_key,
        render_mode=render_mode,
    )


class SessionMachine:
    def __init__(self, session: Session, host: SessionHost) -> None:
        self.session = session
        self.host = host

    # helpers

    @staticmethod
    def bound(action: str, key: str, character: str | None = None) -> bool:
        binds = state.keybinds(action)
        return key in binds or (character is not None and character in binds)

    def set_mode(self, mode: Mode) -> None:
        if mode is not self.session.mode:
            log.debug("Mode %s -> %s", self.session.mode.value, mode.value)
            self.session.mode = mode
            self.session.status_message = ""

    def reload(self, keep_selection: bool = True) -> None:
        """Rebuild the active catalog for whichever directory is being listed."""
        session = self.session
        mode = (
            CatalogMode.DIRECTORIES
            if session.listing_directories
            else CatalogMode.IMAGES
        )
        entries = build_catalog(
            session.listing_directory,
            mode,
            query=session.search_query,
            show_hidden=session.show_hidden,
            sort_key=session.sort_key,
        )
        session.catalog.replace(entries, keep_selection=keep_selection)
        if entries and entries[0].kind is EntryKind.ERROR:
            session.status_message = entries[0].message

    def request_render(self) -> None:
        session = self.session
        image_path = session.selected_path
        if image_path is None:
            return
        width, height = self.host.viewport_size()
        session.render_sequence += 1
        session.pending_render = True
        self.host.request_render(
            RenderRequest(
                sequence=session.render_sequence,
                path=path.abspath(image_path),
                width=width,
                height=height,
                mode=session.render_mode,
            )
        )

    def move_cursor(self, key: str, character: str | None) -> bool:
        catalog = self.session.catalog
        page = max(1, self.host.viewport_size()[1] - 1)
        if self.bound("up", key, character):
            catalog.move(-1)
        elif self.bound("down", key, character):
            catalog.move(1)
        elif self.bound("page_up", key, character):
            catalog.move(-page)
        elif self.bound("page_down", key, character):
            catalog.move(page)
        elif self.bound("home", key, character):
            catalog.first()
        elif self.bound("end", key, character):
            catalog.last()
        else:
            return False
        return True

    def stop_slideshow(self, message: str = "") -> None:
        self.session.slideshow_active = False
        self.host.stop_slideshow()
        self.session.status_message = message

    def back_to_browsing(self) -> None:
        session = self.session
        if session.mode is Mode.DIRECTORY_BROWSING:
            self.commit_directory()
            return
        self.set_mode(Mode.BROWSING)

    def commit_directory(self) -> None:
        session = self.session
        changed = session.working_directory != session.browsing_directory
        session.working_directory = session.browsing_directory
        self.set_mode(Mode.BROWSING)
        self.reload(keep_selection=not changed)

    # entry points

    def start(self, initial_image: str | None = None) -> None:
        """Load the first catalog, opening the viewer if an image was given."""
        self.reload(keep_selection=False)
        if initial_image is None:
            return
        catalog = self.session.catalog
        if catalog.select_name(initial_image) and catalog.selected.is_image:
            self.set_mode(Mode.VIEWING_IMAGE)
            self.request_render()

    def handle_key(self, key: str, character: str | None = None) -> None:
        session = self.session
        if key == FORCE_QUIT:
            self.host.exit()
            return
        # any key stops the show, and does nothing else
        if session.slideshow_active:
            self.stop_slideshow("Slideshow Stopped")
            return
        if session.mode in TEXT_ENTRY_MODES:
            self.on_text_entry_key(key, character)
            return
        if self.bound("back", key, character):
            if session.mode is Mode.BROWSING:
                self.host.exit()
            else:
                self.back_to_browsing()
            return
        match session.mode:
            case Mode.BROWSING:
                self.on_browsing_key(key, character)
            case Mode.VIEWING_IMAGE:
                self.on_viewing_key(key, character)
            case Mode.DIRECTORY_BROWSING:
                self.on_directory_key(key, character)
            case Mode.CONFIRMING_DELETE:
                self.on_confirm_delete_key(key, character)
            case Mode.SELECTING_FILTER:
                self.on_filter_key(key, character)

    def handle_tick(self) -> None:
        session = self.session
        if not session.slideshow_active or session.mode is not Mode.VIEWING_IMAGE:
            return
        if session.pending_render:
            # let the current image land before moving on
            log.debug("Slideshow tick skipped, render #%d pending", session.render_sequence)
            return
        session.catalog.advance_circular()
        self.request_render()

    def handle_render_completed(self, completion: RenderCompleted) -> None:
        session = self.session
        if completion.sequence != session.render_sequence:
            log.debug(
                "Dropping stale render #%d (latest #%d)",
                completion.sequence,
                session.render_sequence,
            )
            return
        session.pending_render = False
        if completion.failed:
            session.displayed_content = None
            session.render_error = completion.error
        else:
            session.displayed_content = completion.text
            session.render_error = None

    def handle_directory_changed(self) -> None:
        if self.session.mode in TEXT_ENTRY_MODES + (Mode.CONFIRMING_DELETE,):
            # the entry being acted on must not move under the prompt
            return
        self.reload()

    # per mode handlers

    def on_browsing_key(self, key: str, character: str | None) -> None:
        session = self.session
        entry = session.catalog.selected
        if self.move_cursor(key, character):
            return
        if self.bound("select", key, character):
            if entry is not None and entry.is_image:
                self.set_mode(Mode.VIEWING_IMAGE)
                self.request_render()
        elif self.bound("slideshow", key, character):
            if entry is not None and entry.is_image:
                self.set_mode(Mode.VIEWING_IMAGE)
                session.slideshow_active = True
                self.request_render()
                self.host.start_slideshow()
        elif self.bound("browse_directories", key, character):
            self.set_mode(Mode.DIRECTORY_BROWSING)
            self.reload(keep_selection=False)
        elif self.bound("search", key, character):
            session.return_mode = Mode.BROWSING
            session.text_buffer = session.search_query
            self.set_mode(Mode.SEARCHING)
        elif self.bound("toggle_hidden", key, character):
            session.show_hidden = not session.show_hidden
            self.reload()
        elif self.bound("cycle_sort", key, character):
            session.sort_key = session.sort_key.next()
            self.reload()
        elif self.bound("select_filter", key, character):
            self.open_filter_picker()
        elif self.bound("rename", key, character):
            if entry is not None and entry.is_image:
                session.text_buffer = entry.name
                self.set_mode(Mode.RENAMING)
            else:
                session.status_message = "Nothing to rename."
        elif self.bound("delete", key, character):
            if entry is not None and entry.is_image:
                self.set_mode(Mode.CONFIRMING_DELETE)
            else:
                session.status_message = "Nothing to delete."
        elif self.bound("copy_path", key, character):
            if session.selected_path is None:
                session.status_message = "Nothing to copy."
                return
            if self.host.copy_to_clipboard(path.abspath(session.selected_path)):
                session.status_message = "Path Copied!"
            else:
                session.status_message = "Path sent to the terminal clipboard."
        elif self.bound("show_shortcuts", key, character):
            self.host.show_shortcuts()

    def on_viewing_key(self, key: str, character: str | None) -> None:
        session = self.session
        if self.bound("render_modes", key, character):
            session.render_mode = RenderMode.from_digit(character or key)
            self.request_render()
        elif self.bound("select_filter", key, character):
            self.open_filter_picker()
        elif self.bound("up", key, character):
            self.host.scroll_viewer(-1)
        elif self.bound("down", key, character):
            self.host.scroll_viewer(1)
        elif self.bound("page_up", key, character):
            self.host.scroll_viewer(-self.host.viewport_size()[1])
        elif self.bound("page_down", key, character):
            self.host.scroll_viewer(self.host.viewport_size()[1])

    def on_directory_key(self, key: str, character: str | None) -> None:
        session = self.session
        if self.move_cursor(key, character):
            return
        if self.bound("select", key, character):
            entry = session.catalog.selected
            if entry is None:
                return
            came_from = None
            if entry.kind in (EntryKind.PARENT, EntryKind.ERROR):
                # an unreadable folder has no "..", so its error entry leads up
                came_from = path.basename(session.browsing_directory)
                new_path = path.dirname(session.browsing_directory)
            else:
                new_path = path.join(session.browsing_directory, entry.name)
            if not path.isdir(new_path):
                session.status_message = f"'{new_path}' is no longer a directory."
                self.reload()
                return
            session.browsing_directory = new_path
            self.reload(keep_selection=False)
            if came_from:
                session.catalog.select_name(came_from)
        elif self.bound("browse_directories", key, character):
            self.commit_directory()
        elif self.bound("search", key, character):
            session.return_mode = Mode.DIRECTORY_BROWSING
            session.text_buffer = session.search_query
            self.set_mode(Mode.SEARCHING)
        elif self.bound("toggle_hidden", key, character):
            session.show_hidden = not session.show_hidden
            self.reload()

    def on_text_entry_key(self, key: str, character: str | None) -> None:
        session = self.session
        if key == "enter":
            if session.mode is Mode.SEARCHING:
                self.confirm_search()
            else:
                self.confirm_rename()
        elif key == "escape":
            self.set_mode(
                session.return_mode if session.mode is Mode.SEARCHING else Mode.BROWSING
            )
            session.text_buffer = ""
        elif self.bound("backspace", key, character):
            session.text_buffer = session.text_buffer[:-1]
        elif character is not None and len(character) == 1 and character.isprintable():
            session.text_buffer += character

    def confirm_search(self) -> None:
        session = self.session
        session.search_query = session.text_buffer
        session.text_buffer = ""
        self.set_mode(session.return_mode)
        self.reload(keep_selection=False)

    def confirm_rename(self) -> None:
        session = self.session
        entry = session.catalog.selected
        new_name = session.text_buffer.strip()
        session.text_buffer = ""
        self.set_mode(Mode.BROWSING)
        if entry is None or not entry.is_image or new_name in ("", entry.name):
            self.reload()
            return
        try:
            rename_entry(session.working_directory, entry.name, new_name)
        except FileOperationError as e:
            log.warning("Rename failed: %s", e.message)
            session.status_message = e.message
            self.host.notify(e.message, severity="error")
            self.reload()
            return
        self.reload()
        session.catalog.select_name(new_name)
        session.status_message = f"Renamed to {new_name}"

    def on_confirm_delete_key(self, key: str, character: str | None) -> None:
        session = self.session
        entry = session.catalog.selected
        self.set_mode(Mode.BROWSING)
        if not self.bound("confirm_yes", key, character):
            return
        if entry is None or not entry.is_image:
            return
        try:
            delete_entry(
                session.working_directory,
                entry.name,
                use_trash=bool(state.setting("settings", "use_recycle_bin")),
            )
        except FileOperationError as e:
            log.warning("Delete failed: %s", e.message)
            self.reload()
            session.status_message = e.message
            self.host.notify(e.message, severity="error")
            return
        self.reload()
        session.status_message = f"Deleted {entry.name}"

    def open_filter_picker(self) -> None:
        session = self.session
        session.return_mode = session.mode
        session.filter_cursor = list(RenderMode).index(session.render_mode)
        self.set_mode(Mode.SELECTING_FILTER)

    def on_filter_key(self, key: str, character: str | None) -> None:
        session = self.session
        modes = list(RenderMode)
        if self.bound("up", key, character):
            session.filter_cursor = max(0, session.filter_cursor - 1)
        elif self.bound("down", key, character):
            session.filter_cursor = min(len(modes) - 1, session.filter_cursor + 1)
        elif self.bound("render_modes", key, character):
            session.filter_cursor = modes.index(RenderMode.from_digit(character or key))
        elif self.bound("select", key, character):
            session.render_mode = modes[session.filter_cursor]
            self.set_mode(session.return_mode)
            if session.mode is Mode.VIEWING_IMAGE:
                self.request_render()
