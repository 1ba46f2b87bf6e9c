"""Builds the filtered, sorted list of entries shown in the file list."""

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from os import path, scandir

from humanize import naturalsize, naturaltime

from . import state
from .maps import ASCII_ICONS, ICONS

log = logging.getLogger(__name__)

PARENT_NAME = ".."


class EntryKind(Enum):
    IMAGE = "image"
    DIRECTORY = "folder"
    PARENT = "parent"
    ERROR = "error"


class CatalogMode(Enum):
    IMAGES = "images"
    DIRECTORIES = "directories"


class SortKey(Enum):
    NAME = "name"
    SIZE = "size"
    MODIFIED = "modified"

    def next(self) -> "SortKey":
        members = list(SortKey)
        return members[(members.index(self) + 1) % len(members)]


@dataclass(frozen=True)
class Entry:
    """One item of a listing, snapshotted when the catalog was built."""

    name: str
    kind: EntryKind
    size: int = 0
    modified: float = 0.0
    message: str = ""

    @property
    def is_directory(self) -> bool:
        return self.kind in (EntryKind.DIRECTORY, EntryKind.PARENT)

    @property
    def is_image(self) -> bool:
        return self.kind is EntryKind.IMAGE

    @property
    def icon(self) -> list:
        icons = ICONS if state.setting("interface", "nerd_font") else ASCII_ICONS
        return icons[self.kind.value]

    @property
    def display_title(self) -> str:
        if self.kind is EntryKind.ERROR:
            return self.message
        return self.name

    @property
    def display_subtitle(self) -> str:
        match self.kind:
            case EntryKind.DIRECTORY:
                return "Directory"
            case EntryKind.PARENT:
                return "Parent directory"
            case EntryKind.ERROR:
                return "Unreadable directory"
            case _:
                return (
                    f"{naturalsize(self.size, binary=True)} • "
                    f"{naturaltime(datetime.fromtimestamp(self.modified))}"
                )

    def sort_key(self, key: SortKey) -> tuple:
        """Key for sorted(); the parent entry always comes first."""
        rank = 0 if self.kind is EntryKind.PARENT else 1
        by_name = (self.name.lower(), self.name)
        match key:
            case SortKey.SIZE:
                return (rank, -self.size, *by_name)
            case SortKey.MODIFIED:
                return (rank, -self.modified, *by_name)
            case _:
                return (rank, *by_name)


def error_entry(directory: str, error: OSError) -> Entry:
    reason = error.strerror or type(error).__name__
    return Entry(
        name="",
        kind=EntryKind.ERROR,
        message=f"Unable to read {directory}: {reason}",
    )


def is_root(directory: str) -> bool:
    return path.dirname(directory) == directory


def has_image_extension(name: str, extensions=None) -> bool:
    if extensions is None:
        extensions = state.setting("settings", "image_extensions")
    return path.splitext(name)[1].lower() in {ext.lower() for ext in extensions}


def build_catalog(
    directory: str,
    mode: CatalogMode,
    query: str = "",
    show_hidden: bool = False,
    sort_key: SortKey = SortKey.NAME,
    extensions=None,
) -> list[Entry]:
    """Build the ordered entries of a directory.

    Args:
        directory (str): The directory to list.
        mode (CatalogMode): Whether to list images or subdirectories.
        query (str): Case-insensitive substring a name must contain.
        show_hidden (bool): Whether dotfiles are kept.
        sort_key (SortKey): Name ascending, or size/modified time descending.
        extensions (list[str] | None): Image extensions, defaults to the config.

    Returns:
        list[Entry]: The entries. An unreadable directory yields a single
            error entry instead of raising.
    """
    entries = []
    needle = query.lower()
    try:
        with scandir(directory) as listed_dir:
            for item in listed_dir:
                name = item.name
                if not show_hidden and name.startswith("."):
                    continue
                try:
                    if mode is CatalogMode.DIRECTORIES:
                        if not item.is_dir():
                            continue
                        kind = EntryKind.DIRECTORY
                    else:
                        if not item.is_file() or not has_image_extension(
                            name, extensions
                        ):
                            continue
                        kind = EntryKind.IMAGE
                    info = item.stat()
                except OSError as e:
                    # dangling symlinks and the like
                    log.debug("Skipping %s: %s", name, e)
                    continue
                if needle and needle not in name.lower():
                    continue
                entries.append(
                    Entry(
                        name=name,
                        kind=kind,
                        size=0 if kind is EntryKind.DIRECTORY else info.st_size,
                        modified=info.st_mtime,
                    )
                )
    except OSError as e:
        log.warning("Unable to list %s: %s", directory, e)
        return [error_entry(directory, e)]
    if mode is CatalogMode.DIRECTORIES and not is_root(directory):
        entries.append(Entry(name=PARENT_NAME, kind=EntryKind.PARENT))
    entries.sort(key=lambda entry: entry.sort_key(sort_key))
    log.debug("Built %s catalog of %s with %d entries", mode.value, directory, len(entries))
    return entries


class Catalog:
    """The active list of entries plus a cursor into it."""

    def __init__(self, entries: list[Entry] | None = None) -> None:
        self.entries: list[Entry] = list(entries or [])
        self.cursor: int = 0
        # bumped on every replace so views know when to rebuild
        self.version: int = 0

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def selected(self) -> Entry | None:
        if not self.entries:
            return None
        return self.entries[self.cursor]

    def replace(self, entries: list[Entry], keep_selection: bool = True) -> None:
        """Swap in a fresh listing, staying on the same name when possible."""
        current = self.selected
        self.entries = list(entries)
        self.version += 1
        if not keep_selection:
            self.cursor = 0
            return
        if current is not None and self.select_name(current.name):
            return
        self.cursor = max(0, min(self.cursor, len(self.entries) - 1))

    def select_name(self, name: str) -> bool:
        for index, entry in enumerate(self.entries):
            if entry.kind is not EntryKind.ERROR and entry.name == name:
                self.cursor = index
                return True
        return False

    def move(self, delta: int) -> None:
        if not self.entries:
            return
        self.cursor = max(0, min(self.cursor + delta, len(self.entries) - 1))

    def first(self) -> None:
        self.cursor = 0

    def last(self) -> None:
        self.cursor = max(0, len(self.entries) - 1)

    def advance_circular(self) -> None:
        if self.entries:
            self.cursor = (self.cursor + 1) % len(self.entries)
