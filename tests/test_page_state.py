import pytest

from spotplayer_state.models import (
    USER_TOP_TRACKS_ID,
    Category,
    ContextId,
    ContextKind,
    ItemType,
    SpotifyId,
)
from spotplayer_state.page_state import (
    ArtistFocusState,
    BrowsePage,
    BrowsePageUIState,
    CommandHelpPage,
    ContextPage,
    ContextPageType,
    ContextPageUIState,
    LibraryFocusState,
    LibraryPage,
    LyricPage,
    PageType,
    QueuePage,
    ScrollOffset,
    SearchFocusState,
    SearchPage,
    SelectionState,
)


@pytest.mark.parametrize("enum_cls", [LibraryFocusState, ArtistFocusState, SearchFocusState])
def test_focus_cycle_returns_to_start(enum_cls):
    for member in enum_cls:
        state = member
        for _ in enum_cls:
            state = state.next()
        assert state is member
        assert member.next().previous() is member


def test_focus_order_follows_source():
    assert LibraryFocusState.PLAYLISTS.next() is LibraryFocusState.SAVED_ALBUMS
    assert LibraryFocusState.FOLLOWED_ARTISTS.next() is LibraryFocusState.PLAYLISTS
    assert ArtistFocusState.TOP_TRACKS.previous() is ArtistFocusState.RELATED_ARTISTS
    assert SearchFocusState.EPISODES.next() is SearchFocusState.INPUT
    assert SearchFocusState.INPUT.next() is SearchFocusState.TRACKS


@pytest.mark.parametrize(
    "selected,length,expected",
    [(None, 0, None), (None, 3, 0), (5, 3, 2), (5, 0, 0), (1, 3, 1)],
)
def test_selection_adjust(selected, length, expected):
    state = SelectionState(selected)
    state.adjust(length)
    assert state.selected == expected


def test_scroll_offset_select():
    offset = ScrollOffset()
    offset.select(7)
    assert offset.offset == 7
    assert offset.selected == 7


def test_library_page_selection_follows_focus():
    page = LibraryPage()
    page.select(3)
    assert page.state.playlist_list.selected == 3
    page.next_focus()
    assert page.state.focus is LibraryFocusState.SAVED_ALBUMS
    assert page.selected() == 0
    assert page.state.playlist_list.selected == 3
    page.previous_focus()
    assert page.state.focus is LibraryFocusState.PLAYLISTS
    assert page.selected() == 0


def test_search_page_input_focus_has_no_window():
    page = SearchPage()
    assert page.focus_window_state() is None
    page.select(4)
    assert page.selected() is None
    page.next_focus()
    assert page.state.focus is SearchFocusState.TRACKS
    assert page.state.track_list.selected == 0


def test_context_page_artist_focus():
    page = ContextPage(state=ContextPageUIState.new_artist())
    page.select(2)
    assert page.state.table.selected == 2
    page.next_focus()
    assert page.state.focus is ArtistFocusState.ALBUMS
    assert page.focus_window_state() is page.state.album_table
    page.next_focus()
    assert page.focus_window_state() is page.state.related_artist_list


def test_context_page_without_state():
    page = ContextPage()
    page.select(1)
    assert page.selected() is None
    page.next_focus()
    assert page.state is None


def test_context_page_non_artist_keeps_table():
    page = ContextPage(state=ContextPageUIState.new_show())
    page.select(3)
    page.next_focus()
    assert page.state.focus is None
    assert page.state.table.selected == 0


def test_context_page_type_titles():
    assert ContextPageType().title() == "Current Playing"
    playlist = ContextId(ContextKind.PLAYLIST, SpotifyId(ItemType.PLAYLIST, "abc123"))
    assert ContextPageType(playlist).title() == "Playlist"
    tracks = ContextId(ContextKind.TRACKS, USER_TOP_TRACKS_ID)
    assert ContextPageType(tracks).title() == USER_TOP_TRACKS_ID.kind


def test_scroll_pages_and_types():
    pages = [
        (QueuePage(), PageType.QUEUE),
        (CommandHelpPage(), PageType.COMMAND_HELP),
        (LyricPage("song", "band"), PageType.LYRIC),
    ]
    for page, page_type in pages:
        assert page.page_type() is page_type
        page.select(9)
        assert page.selected() == 9
        page.next_focus()
        assert page.selected() == 0


def test_browse_page():
    page = BrowsePage(BrowsePageUIState(category=Category("pop", "Pop")))
    assert page.page_type() is PageType.BROWSE
    page.select(2)
    assert page.state.state.selected == 2
    assert LibraryPage().page_type() is PageType.LIBRARY
    assert SearchPage().page_type() is PageType.SEARCH
    assert ContextPage().page_type() is PageType.CONTEXT