import logging
from typing import Callable

from textual.app import App
from textual.message import Message
from textual.timer import Timer

log = logging.getLogger(__name__)


class SlideshowTick(Message):
    """Time to show the next image."""


class SlideshowScheduler:
    """A repeating one-shot timer that only rearms while the show is on.

    Args:
        app (App): The app whose event loop owns the timer.
        interval (float): Seconds between ticks.
        is_active (Callable[[], bool]): Checked before every tick, a False
            ends the schedule without firing.
    """

    def __init__(self, app: App, interval: float, is_active: Callable[[], bool]):
        self.app = app
        self.interval = interval
        self.is_active = is_active
        self._timer: Timer | None = None

    @property
    def running(self) -> bool:
        return self._timer is not None

    def start(self) -> None:
        self.stop()
        log.info("Slideshow started, every %ss", self.interval)
        self._timer = self.app.set_timer(self.interval, self._fire)

    def stop(self) -> None:
        if self._timer is not None:
            self._timer.stop()
            self._timer = None
            log.info("Slideshow stopped")

    def _fire(self) -> None:
        self._timer = None
        if not self.is_active():
            return
        self.app.post_message(SlideshowTick())
        self._timer = self.app.set_timer(self.interval, self._fire)
