"""Runs image renders off the event loop and reports back as messages."""

import logging
from dataclasses import dataclass
from functools import partial

from textual.app import App
from textual.message import Message

from .converter import RenderMode, render_image
from .errors import RenderError

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderRequest:
    """A single render, tagged with the sequence number it was issued under."""

    sequence: int
    path: str
    width: int
    height: int
    mode: RenderMode


class RenderCompleted(Message):
    """Posted once a render request finished, successfully or not."""

    def __init__(
        self, sequence: int, text: str | None = None, error: str | None = None
    ) -> None:
        super().__init__()
        self.sequence = sequence
        self.text = text
        self.error = error

    @property
    def failed(self) -> bool:
        return self.error is not None


def run_render(request: RenderRequest) -> RenderCompleted:
    """Do the conversion for a request, turning a failure into an error completion."""
    try:
        text = render_image(request.path, request.width, request.height, request.mode)
    except RenderError as e:
        log.info("Render #%d failed: %s", request.sequence, e.message)
        return RenderCompleted(request.sequence, error=e.message)
    return RenderCompleted(request.sequence, text=text)


class RenderDispatcher:
    """Fire-and-forget render requests, executed in thread workers.

    The result comes back as a RenderCompleted message posted to the app, so
    it is consumed on the event loop like any key press.
    """

    def __init__(self, app: App) -> None:
        self.app = app

    def request_render(self, request: RenderRequest) -> None:
        log.debug(
            "Render #%d requested: %s at %dx%d (%s)",
            request.sequence,
            request.path,
            request.width,
            request.height,
            request.mode.label,
        )
        self.app.run_worker(
            partial(self._render, request),
            name=f"render-{request.sequence}",
            group="render",
            thread=True,
            exit_on_error=False,
        )

    def _render(self, request: RenderRequest) -> None:
        # post_message is thread safe
        self.app.post_message(run_render(request))
