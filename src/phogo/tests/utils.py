from os import mkdir, utime
from pathlib import Path

from PIL import Image

TEST_FILE_CONTENT_1 = "file data"


# Let the exceptions roam wild
def setup_test_dir(*args: Path):
    for dir in args:
        mkdir(dir)


# Let the exceptions roam wild
def setup_test_files(*args: Path):
    for file in args:
        file.write_text(TEST_FILE_CONTENT_1)


def setup_test_image(file: Path, size=(4, 2), color=(255, 0, 0)) -> Path:
    Image.new("RGB", size, color).save(file)
    return file


def set_size_and_mtime(file: Path, size: int, mtime: float) -> None:
    file.write_bytes(b"\0" * size)
    utime(file, (mtime, mtime))


class FakeHost:
    """Records what the session machine asks of the outside world."""

    def __init__(self, viewport=(20, 10), clipboard_works=True):
        self.viewport = viewport
        self.clipboard_works = clipboard_works
        self.renders = []
        self.slideshow_running = False
        self.clipboard = []
        self.scrolled = []
        self.notifications = []
        self.shortcuts_shown = 0
        self.exited = False

    def request_render(self, request):
        self.renders.append(request)

    def start_slideshow(self):
        self.slideshow_running = True

    def stop_slideshow(self):
        self.slideshow_running = False

    def copy_to_clipboard(self, text):
        self.clipboard.append(text)
        return self.clipboard_works

    def viewport_size(self):
        return self.viewport

    def scroll_viewer(self, lines):
        self.scrolled.append(lines)

    def show_shortcuts(self):
        self.shortcuts_shown += 1

    def notify(self, message, severity="information"):
        self.notifications.append((message, severity))

    def exit(self):
        self.exited = True
