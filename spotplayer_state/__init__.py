"""Data models, caches, player state and UI state for a terminal music player client."""

__version__ = "0.1.0"

__all__ = [
    "data",
    "line_input",
    "models",
    "page_state",
    "player",
    "playlist_folders",
    "popup_state",
    "ui_state",
    "utils",
]