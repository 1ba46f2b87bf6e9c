from .delete_files import DeleteFiles
from .filter_picker import FilterPicker
from .prompt_input import PromptInput
from .shortcuts import Shortcuts

__all__ = [
    "DeleteFiles",
    "FilterPicker",
    "PromptInput",
    "Shortcuts",
]
