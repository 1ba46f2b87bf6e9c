ICONS = {
    "folder": ["\uf07b", "gold"],
    "parent": ["\uf062", "white"],
    "image": ["\uf1c5", "purple"],
    "error": ["\uf071", "red"],
}

ASCII_ICONS = {
    "folder": ["📁", "#99CCFF"],
    "parent": ["^", "white"],
    "image": [" ", "white"],
    "error": ["!", "red"],
}

SORT_LABELS = {
    "name": "Name",
    "size": "Size",
    "modified": "Date",
}

# key -> description, in the order they show up in the shortcuts overlay
KEYBIND_DESCRIPTIONS = {
    "up": "Up",
    "down": "Down",
    "page_up": "Page Up",
    "page_down": "Page Down",
    "home": "First",
    "end": "Last",
    "select": "Open image / enter folder",
    "slideshow": "Start slideshow",
    "cycle_sort": "Cycle sort (name, size, date)",
    "toggle_hidden": "Toggle hidden files",
    "search": "Search",
    "rename": "Rename",
    "delete": "Delete",
    "copy_path": "Copy absolute path",
    "browse_directories": "Browse / set folder",
    "select_filter": "Pick render filter",
    "render_modes": "Render filter (viewer)",
    "back": "Back / quit",
    "show_shortcuts": "Show shortcuts",
}
