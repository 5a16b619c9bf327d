"""Per-page UI state: focused windows, selections and scroll offsets."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, TypeVar, Union

from .line_input import LineInput
from .models import Category, ContextId, ContextKind, TracksId


@dataclass
class SelectionState:
    """Selected row of a list or table window."""

    selected: Optional[int] = None

    def select(self, index: Optional[int]) -> None:
        self.selected = index

    def adjust(self, length: int) -> None:
        """Clamp the selection to a window holding ``length`` items."""
        if self.selected is not None:
            if self.selected >= length:
                self.selected = length - 1 if length > 0 else 0
        elif length > 0:
            self.selected = 0


@dataclass
class ScrollOffset:
    """Scroll position of a scrollable text or table window."""

    offset: int = 0

    def select(self, index: int) -> None:
        self.offset = index

    @property
    def selected(self) -> int:
        return self.offset


WindowState = Union[SelectionState, ScrollOffset]

_E = TypeVar("_E", bound=enum.Enum)


def _step(member: _E, delta: int) -> _E:
    """The member ``delta`` places after ``member``, wrapping around."""
    members = list(type(member))
    return members[(members.index(member) + delta) % len(members)]


class LibraryFocusState(enum.Enum):
    PLAYLISTS = "playlists"
    SAVED_ALBUMS = "saved_albums"
    FOLLOWED_ARTISTS = "followed_artists"

    def next(self) -> LibraryFocusState:
        return _step(self, 1)

    def previous(self) -> LibraryFocusState:
        return _step(self, -1)


class ArtistFocusState(enum.Enum):
    TOP_TRACKS = "top_tracks"
    ALBUMS = "albums"
    RELATED_ARTISTS = "related_artists"

    def next(self) -> ArtistFocusState:
        return _step(self, 1)

    def previous(self) -> ArtistFocusState:
        return _step(self, -1)


class SearchFocusState(enum.Enum):
    INPUT = "input"
    TRACKS = "tracks"
    ALBUMS = "albums"
    ARTISTS = "artists"
    PLAYLISTS = "playlists"
    SHOWS = "shows"
    EPISODES = "episodes"

    def next(self) -> SearchFocusState:
        return _step(self, 1)

    def previous(self) -> SearchFocusState:
        return _step(self, -1)


class PageType(enum.Enum):
    LIBRARY = "library"
    CONTEXT = "context"
    SEARCH = "search"
    BROWSE = "browse"
    LYRIC = "lyric"
    QUEUE = "queue"
    COMMAND_HELP = "command_help"


@dataclass
class LibraryPageUIState:
    playlist_list: SelectionState = field(default_factory=SelectionState)
    saved_album_list: SelectionState = field(default_factory=SelectionState)
    followed_artist_list: SelectionState = field(default_factory=SelectionState)
    focus: LibraryFocusState = LibraryFocusState.PLAYLISTS
    playlist_folder_id: int = 0

    def focus_window_state(self) -> SelectionState:
        return {
            LibraryFocusState.PLAYLISTS: self.playlist_list,
            LibraryFocusState.SAVED_ALBUMS: self.saved_album_list,
            LibraryFocusState.FOLLOWED_ARTISTS: self.followed_artist_list,
        }[self.focus]


@dataclass
class SearchPageUIState:
    track_list: SelectionState = field(default_factory=SelectionState)
    album_list: SelectionState = field(default_factory=SelectionState)
    artist_list: SelectionState = field(default_factory=SelectionState)
    playlist_list: SelectionState = field(default_factory=SelectionState)
    show_list: SelectionState = field(default_factory=SelectionState)
    episode_list: SelectionState = field(default_factory=SelectionState)
    focus: SearchFocusState = SearchFocusState.INPUT

    def focus_window_state(self) -> Optional[SelectionState]:
        """The focused result list; ``None`` while the query input has focus."""
        return {
            SearchFocusState.INPUT: None,
            SearchFocusState.TRACKS: self.track_list,
            SearchFocusState.ALBUMS: self.album_list,
            SearchFocusState.ARTISTS: self.artist_list,
            SearchFocusState.PLAYLISTS: self.playlist_list,
            SearchFocusState.SHOWS: self.show_list,
            SearchFocusState.EPISODES: self.episode_list,
        }[self.focus]


_CONTEXT_TITLES = {
    ContextKind.PLAYLIST: "Playlist",
    ContextKind.ALBUM: "Album",
    ContextKind.ARTIST: "Artist",
    ContextKind.SHOW: "Show",
}


@dataclass(frozen=True)
class ContextPageType:
    """The current-playing context page, or a page browsing ``browsing``."""

    browsing: Optional[ContextId] = None

    def title(self) -> str:
        if self.browsing is None:
            return "Current Playing"
        if isinstance(self.browsing.id, TracksId):
            return self.browsing.id.kind
        return _CONTEXT_TITLES[self.browsing.kind]


@dataclass
class ContextPageUIState:
    """Window states of a context page.

    ``table`` is the track table (the top-track table for artists, the episode
    table for shows). Artist pages also have an album table, a related-artist
    list and a focus.
    """

    kind: ContextKind
    table: SelectionState = field(default_factory=SelectionState)
    album_table: Optional[SelectionState] = None
    related_artist_list: Optional[SelectionState] = None
    focus: Optional[ArtistFocusState] = None

    @classmethod
    def new_playlist(cls) -> ContextPageUIState:
        return cls(ContextKind.PLAYLIST)

    @classmethod
    def new_album(cls) -> ContextPageUIState:
        return cls(ContextKind.ALBUM)

    @classmethod
    def new_artist(cls) -> ContextPageUIState:
        return cls(
            ContextKind.ARTIST,
            album_table=SelectionState(),
            related_artist_list=SelectionState(),
            focus=ArtistFocusState.TOP_TRACKS,
        )

    @classmethod
    def new_tracks(cls) -> ContextPageUIState:
        return cls(ContextKind.TRACKS)

    @classmethod
    def new_show(cls) -> ContextPageUIState:
        return cls(ContextKind.SHOW)

    def focus_window_state(self) -> SelectionState:
        if self.kind is ContextKind.ARTIST:
            if self.focus is ArtistFocusState.ALBUMS and self.album_table is not None:
                return self.album_table
            if (
                self.focus is ArtistFocusState.RELATED_ARTISTS
                and self.related_artist_list is not None
            ):
                return self.related_artist_list
        return self.table


@dataclass
class BrowsePageUIState:
    """The category list, or the playlist list of ``category`` when it is set."""

    state: SelectionState = field(default_factory=SelectionState)
    category: Optional[Category] = None


class PageState(ABC):
    """State of one page in the navigation history."""

    @abstractmethod
    def page_type(self) -> PageType:
        """The type of the page."""

    def focus_window_state(self) -> Optional[WindowState]:
        """The state of the currently focused window, if any."""
        return None

    def select(self, index: int) -> None:
        """Select the ``index``-th item in the focused window."""
        state = self.focus_window_state()
        if state is not None:
            state.select(index)

    def selected(self) -> Optional[int]:
        """Position selected in the focused window."""
        state = self.focus_window_state()
        return state.selected if state is not None else None

    def _cycle_focus(self, forward: bool) -> None:
        """Move focus between windows; pages with one window do nothing."""

    def next_focus(self) -> None:
        self._cycle_focus(True)
        self.select(0)

    def previous_focus(self) -> None:
        self._cycle_focus(False)
        self.select(0)


@dataclass
class LibraryPage(PageState):
    state: LibraryPageUIState = field(default_factory=LibraryPageUIState)

    def page_type(self) -> PageType:
        return PageType.LIBRARY

    def focus_window_state(self) -> SelectionState:
        return self.state.focus_window_state()

    def _cycle_focus(self, forward: bool) -> None:
        focus = self.state.focus
        self.state.focus = focus.next() if forward else focus.previous()


@dataclass
class ContextPage(PageState):
    id: Optional[ContextId] = None
    context_page_type: ContextPageType = field(default_factory=ContextPageType)
    state: Optional[ContextPageUIState] = None

    def page_type(self) -> PageType:
        return PageType.CONTEXT

    def focus_window_state(self) -> Optional[SelectionState]:
        return self.state.focus_window_state() if self.state is not None else None

    def _cycle_focus(self, forward: bool) -> None:
        state = self.state
        if state is not None and state.kind is ContextKind.ARTIST and state.focus is not None:
            state.focus = state.focus.next() if forward else state.focus.previous()


@dataclass
class SearchPage(PageState):
    line_input: LineInput = field(default_factory=LineInput)
    current_query: str = ""
    state: SearchPageUIState = field(default_factory=SearchPageUIState)

    def page_type(self) -> PageType:
        return PageType.SEARCH

    def focus_window_state(self) -> Optional[SelectionState]:
        return self.state.focus_window_state()

    def _cycle_focus(self, forward: bool) -> None:
        focus = self.state.focus
        self.state.focus = focus.next() if forward else focus.previous()


@dataclass
class BrowsePage(PageState):
    state: BrowsePageUIState = field(default_factory=BrowsePageUIState)

    def page_type(self) -> PageType:
        return PageType.BROWSE

    def focus_window_state(self) -> SelectionState:
        return self.state.state


@dataclass
class LyricPage(PageState):
    track: str
    artists: str
    scroll_offset: ScrollOffset = field(default_factory=ScrollOffset)

    def page_type(self) -> PageType:
        return PageType.LYRIC

    def focus_window_state(self) -> ScrollOffset:
        return self.scroll_offset


@dataclass
class QueuePage(PageState):
    scroll_offset: ScrollOffset = field(default_factory=ScrollOffset)

    def page_type(self) -> PageType:
        return PageType.QUEUE

    def focus_window_state(self) -> ScrollOffset:
        return self.scroll_offset


@dataclass
class CommandHelpPage(PageState):
    scroll_offset: ScrollOffset = field(default_factory=ScrollOffset)

    def page_type(self) -> PageType:
        return PageType.COMMAND_HELP

    def focus_window_state(self) -> ScrollOffset:
        return self.scroll_offset