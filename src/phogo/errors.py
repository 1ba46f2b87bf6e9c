class PhogoError(Exception):
    """Base class for errors raised by phogo."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class RenderError(PhogoError):
    """Raised when an image cannot be turned into text."""


class FileOperationError(PhogoError):
    """Raised when a rename or delete could not be carried out."""
