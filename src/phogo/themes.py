"""Custom themes declared as [[custom_theme]] tables in the config."""

import logging

from textual.theme import Theme

from . import state

log = logging.getLogger(__name__)

COLOUR_KEYS = (
    "primary",
    "secondary",
    "accent",
    "foreground",
    "background",
    "success",
    "warning",
    "error",
    "surface",
    "panel",
    "boost",
)


def theme_from_config(table: dict) -> Theme:
    """
    Build a textual theme from one [[custom_theme]] table.

    Args:
        table (dict): Needs `name` and `primary`, the other colours are optional.
            `is_dark` defaults to true.

    Returns:
        Theme: The theme, named the way textual names its own (lowercase, dashes).

    Raises:
        KeyError: `name` or `primary` is missing.
    """
    colours = {key: table[key] for key in COLOUR_KEYS if key in table}
    if "primary" not in colours:
        raise KeyError("primary")
    return Theme(
        name=table["name"].lower().replace(" ", "-"),
        dark=table.get("is_dark", True),
        variables=table.get("variables", {}),
        **colours,
    )


def get_custom_themes() -> list[Theme]:
    themes = []
    for table in state.config.get("custom_theme", []):
        try:
            themes.append(theme_from_config(table))
        except KeyError as e:
            log.warning("Skipping custom theme %s, missing %s", table.get("name"), e)
    return themes
