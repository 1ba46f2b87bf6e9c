"""Module that holds the loaded config + other shared helpers"""

import logging
from os import makedirs, path

import toml
from lzstring import LZString
from platformdirs import PlatformDirs
from textual.logging import TextualHandler
from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

lzstring = LZString()
dirs = PlatformDirs("phogo", "phogo")

config = {}

DEFAULTS = {
    "settings": {
        "slideshow_interval": 5.0,
        "show_hidden": False,
        "sort_by": "name",
        "render_mode": "Color",
        "use_recycle_bin": False,
        "watch_directory": True,
        "image_extensions": [".png", ".jpg", ".jpeg"],
    },
    "render": {
        "initial_width": 120,
        "initial_height": 40,
        "convert_width": 80,
        "convert_height": 40,
        "charset": " .,:;i1tfLCG08@",
    },
    "interface": {
        "title": "phogo",
        "rendering_placeholder": "Rendering...",
        "nerd_font": False,
    },
    "logging": {"level": "INFO", "to_file": False},
}

log = logging.getLogger(__name__)


def compress(text: str) -> str:
    return lzstring.compressToEncodedURIComponent(text)


def decompress(text: str) -> str:
    return lzstring.decompressFromEncodedURIComponent(text)


def get_nested_value(dictionary, keys_list):
    """
    Get a value from a nested dictionary using a list of keys.

    Args:
        dictionary (dict): The dictionary to traverse
        keys_list (list): List of keys to navigate the dictionary

    Returns:
        The value at the specified path, the built-in default when the
        config does not carry it, or None if neither has it
    """
    for source in (dictionary, DEFAULTS):
        current = source
        try:
            for key in keys_list:
                current = current[key]
            return current
        except (KeyError, TypeError):
            continue
    return None


def setting(*keys_list):
    """Shorthand for get_nested_value(config, keys_list)"""
    return get_nested_value(config, list(keys_list))


def load_config() -> None:
    """
    Load the bundled configuration from its TOML file.
    """
    global config
    with open(path.join(path.dirname(__file__), "config/config.toml"), "r") as f:
        config = toml.loads(f.read())


def keybinds(action: str) -> list[str]:
    """Get the keys bound to an action, or an empty list."""
    return config.get("keybinds", {}).get(action, [])


def setup_logging() -> None:
    """
    Route the package's loggers through textual's devtools console, and
    into a log file under the user log directory when enabled.
    """
    logger = logging.getLogger("phogo")
    if logger.handlers:
        return
    logger.setLevel(setting("logging", "level"))
    logger.addHandler(TextualHandler())
    if setting("logging", "to_file"):
        makedirs(dirs.user_log_dir, exist_ok=True)
        file_handler = logging.FileHandler(
            path.join(dirs.user_log_dir, "phogo.log"), encoding="utf-8"
        )
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)


class DirectoryEventHandler(FileSystemEventHandler):
    """Forwards any change inside the watched directory to a callback."""

    def __init__(self, on_change) -> None:
        super().__init__()
        self.on_change = on_change

    def on_any_event(self, event):
        # opened/closed events fire on every read, including our own renders
        if event.event_type in ("opened", "closed", "closed_no_write"):
            return
        self.on_change(event.src_path)


class DirectoryWatcher:
    """Watches a single directory (non recursive) with a watchdog observer."""

    def __init__(self, on_change) -> None:
        self.on_change = on_change
        self.watched: str | None = None
        self._observer = None

    def watch(self, directory: str) -> None:
        if directory == self.watched:
            return
        self.stop()
        if not path.isdir(directory):
            return
        observer = Observer()
        observer.daemon = True
        try:
            observer.schedule(
                DirectoryEventHandler(self.on_change), path=directory, recursive=False
            )
            observer.start()
        except OSError as e:
            log.warning("Unable to watch %s: %s", directory, e)
            return
        self._observer = observer
        self.watched = directory

    def stop(self) -> None:
        if self._observer is not None:
            # daemon thread, let it wind down without blocking the event loop
            self._observer.stop()
            self._observer = None
        self.watched = None


load_config()
