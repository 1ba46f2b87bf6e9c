"""Image to text-art conversion, done with Pillow."""

from enum import Enum

from PIL import Image, UnidentifiedImageError

from . import state
from .errors import RenderError

RESET = "\x1b[0m"


class RenderMode(Enum):
    """The four render presets as (colored, reversed) pairs."""

    COLOR = ("Color", True, False)
    GRAYSCALE = ("Grayscale", False, False)
    INVERTED = ("Inverted", True, True)
    DUOTONE = ("Duotone", False, True)

    def __init__(self, label: str, colored: bool, reversed_ramp: bool) -> None:
        self.label = label
        self.colored = colored
        self.reversed_ramp = reversed_ramp

    @classmethod
    def from_label(cls, label: str) -> "RenderMode":
        for mode in cls:
            if mode.label.lower() == label.lower():
                return mode
        raise ValueError(f"Unknown render mode {label!r}")

    @classmethod
    def from_digit(cls, digit: str) -> "RenderMode":
        return list(cls)[int(digit) - 1]

    @property
    def digit(self) -> str:
        return str(list(RenderMode).index(self) + 1)

    @property
    def display_title(self) -> str:
        return self.label

    @property
    def display_subtitle(self) -> str:
        return f"{'colour' if self.colored else 'monochrome'}" + (
            ", reversed" if self.reversed_ramp else ""
        )


def pixel_to_char(brightness: int, ramp: str) -> str:
    return ramp[brightness * len(ramp) // 256]


def render_image(
    image_path: str, width: int, height: int, mode: RenderMode = RenderMode.COLOR
) -> str:
    """Convert an image file into a block of text.

    Args:
        image_path (str): Path to the image.
        width (int): Number of columns of the output.
        height (int): Number of rows of the output.
        mode (RenderMode): Which preset to render with.

    Returns:
        str: Newline separated rows, with ANSI colour codes when the mode is colored.

    Raises:
        RenderError: The file is missing or is not a readable image.
    """
    ramp = state.setting("render", "charset")
    if mode.reversed_ramp:
        ramp = ramp[::-1]
    try:
        with Image.open(image_path) as image:
            image = image.convert("RGB").resize((max(1, width), max(1, height)))
    except FileNotFoundError:
        raise RenderError(f"{image_path} does not exist")
    except UnidentifiedImageError:
        raise RenderError(f"{image_path} is not a supported image")
    except Image.DecompressionBombError:
        raise RenderError(f"{image_path} is too large to render")
    except (OSError, ValueError) as e:
        raise RenderError(f"Unable to read {image_path}: {e}")

    gray = image.convert("L")
    rows = []
    for y in range(image.height):
        row = []
        for x in range(image.width):
            char = pixel_to_char(gray.getpixel((x, y)), ramp)
            if mode.colored:
                r, g, b = image.getpixel((x, y))
                row.append(f"\x1b[38;2;{r};{g};{b}m{char}")
            else:
                row.append(char)
        if mode.colored:
            row.append(RESET)
        rows.append("".join(row))
    return "\n".join(rows)
