import argparse
import sys

from . import state
from .app import Application
from .converter import RenderMode, render_image
from .errors import RenderError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="phogo",
        description="Browse folders of images and preview them as text art.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="directory to open, or an image to open straight in the viewer",
    )
    parser.add_argument(
        "--convert",
        action="store_true",
        help="print the image at PATH as text art to stdout and exit",
    )
    return parser


def convert(image_path: str) -> int:
    """Render once at the fallback size, without starting the interface."""
    try:
        text = render_image(
            image_path,
            state.setting("render", "convert_width"),
            state.setting("render", "convert_height"),
            RenderMode.COLOR,
        )
    except RenderError as e:
        print(e.message, file=sys.stderr)
        return 1
    sys.stdout.write(text)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    if args.convert:
        return convert(args.path)

    state.setup_logging()
    app = Application(startup_path=args.path)
    app.run()
    return app.return_code or 0


if __name__ == "__main__":
    sys.exit(main())
