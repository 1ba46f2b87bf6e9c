"""Filesystem and clipboard operations the session performs on entries."""

import logging
import shutil
from os import path, remove, rename

import pyperclip
from pathvalidate import ValidationError, validate_filename
from send2trash import send2trash
from send2trash.exceptions import TrashPermissionError

from .errors import FileOperationError

log = logging.getLogger(__name__)


def rename_entry(directory: str, old_name: str, new_name: str) -> str:
    """Rename an entry inside a directory.

    Args:
        directory (str): The directory holding the entry.
        old_name (str): The current name of the file or directory.
        new_name (str): The new name for the file or directory.

    Returns:
        str: The new absolute path.

    Raises:
        FileOperationError: The new name is invalid or taken, the entry is gone,
            or the OS refused the rename. Existing files are never overwritten.
    """
    new_name = new_name.strip()
    try:
        validate_filename(new_name)
    except ValidationError as e:
        raise FileOperationError(f"'{new_name}' is not a valid name: {e.reason.name}")
    # the entry itself, a symlink is renamed rather than its target
    old_path = path.abspath(path.join(directory, old_name))
    new_path = path.abspath(path.join(directory, new_name))

    if not path.lexists(old_path):
        raise FileOperationError(f"'{old_name}' does not exist.")
    if path.lexists(new_path):
        raise FileOperationError(f"'{new_name}' already exists.")

    try:
        rename(old_path, new_path)
    except OSError as e:
        raise FileOperationError(
            f"Error renaming '{old_name}' to '{new_name}': {e.strerror or e}"
        )
    log.info("Renamed %s to %s", old_path, new_path)
    return new_path


def delete_entry(directory: str, name: str, use_trash: bool = False) -> None:
    """Remove an entry from the filesystem.

    Args:
        directory (str): The directory holding the entry.
        name (str): Name of the file or directory to remove.
        use_trash (bool): Send it to the recycle bin instead of deleting it for good.

    Raises:
        FileOperationError: The entry is gone or could not be removed.
    """
    target = path.join(directory, name)
    if not path.lexists(target):
        raise FileOperationError(f"'{name}' does not exist.")
    try:
        if use_trash:
            send2trash(target)
        elif path.isdir(target) and not path.islink(target):
            shutil.rmtree(target)
        else:
            remove(target)
    except TrashPermissionError as e:
        raise FileOperationError(f"Error sending '{name}' to trash: {e}")
    except OSError as e:
        raise FileOperationError(f"Error removing '{name}': {e.strerror or e}")
    log.info("Deleted %s%s", target, " (trash)" if use_trash else "")


def copy_to_clipboard(text: str) -> bool:
    """Best-effort copy to the system clipboard, returns whether it worked."""
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as e:
        log.info("System clipboard unavailable: %s", e)
        return False
    return True
