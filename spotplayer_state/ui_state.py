"""The application's UI state: navigation history, popup, theme and layout orientation."""

from __future__ import annotations

import enum
import logging
import math
import os
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence, TypeVar

from .models import ContextId, ContextKind, TracksId
from .page_state import ContextPage, ContextPageType, LibraryPage, PageState
from .popup_state import PopupState, SearchPopup

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Terminal cells are taller than wide, so a wide ratio is needed for a horizontal layout.
_HORIZONTAL_RATIO = 2.3


class Orientation(enum.Enum):
    """Screen orientation used to lay out the application's windows."""

    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"

    @classmethod
    def from_size(cls, columns: int, rows: int) -> Orientation:
        """Pick an orientation from the terminal's size in cells."""
        if rows:
            ratio = columns / rows
        else:
            ratio = math.inf if columns else math.nan
        return cls.HORIZONTAL if ratio > _HORIZONTAL_RATIO else cls.VERTICAL


def _terminal_orientation() -> Orientation:
    try:
        size = os.get_terminal_size()
    except OSError as err:
        logger.warning("Unable to get terminal size, error: %s", err)
        return Orientation.HORIZONTAL
    return Orientation.from_size(size.columns, size.lines)


def _default_history() -> list[PageState]:
    return [LibraryPage()]


@dataclass
class UIState:
    """UI state of the application.

    ``playback_progress_bar_rect`` is the ``(x, y, width, height)`` area of the
    progress bar, used to map mouse clicks to seek positions.
    """

    is_running: bool = True
    theme: Any = None
    input_key_sequence: list[Any] = field(default_factory=list)
    orientation: Orientation = field(default_factory=_terminal_orientation)
    history: list[PageState] = field(default_factory=_default_history)
    popup: Optional[PopupState] = None
    playback_progress_bar_rect: tuple[int, int, int, int] = (0, 0, 0, 0)

    def current_page(self) -> PageState:
        """The page on top of the navigation history."""
        if not self.history:
            raise IndexError("navigation history is empty")
        return self.history[-1]

    def new_search_popup(self) -> None:
        """Reset the focused selection and open an empty search popup."""
        self.current_page().select(0)
        self.popup = SearchPopup(query="")

    def new_page(self, page: PageState) -> None:
        """Navigate to ``page``, closing any popup."""
        self.history.append(page)
        self.popup = None

    def new_radio_page(self, uri: str) -> None:
        """Navigate to a recommendations page seeded by ``uri``."""
        radio_id = ContextId(ContextKind.TRACKS, TracksId(f"radio:{uri}", "Recommendations"))
        self.new_page(
            ContextPage(id=None, context_page_type=ContextPageType(radio_id), state=None)
        )

    def has_focused_popup(self) -> bool:
        """Whether a popup holds focus; the search popup never does."""
        return self.popup is not None and not isinstance(self.popup, SearchPopup)

    def search_filtered_items(self, items: Sequence[T]) -> list[T]:
        """Items whose text contains every word of the search popup's query."""
        if not isinstance(self.popup, SearchPopup):
            return list(items)
        words = [w for w in self.popup.query.lower().split(" ") if w]
        if not words:
            return list(items)
        result = []
        for item in items:
            text = str(item).lower()
            if all(w in text for w in words):
                result.append(item)
        return result