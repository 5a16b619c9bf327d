# spotplayer-state

The state layer of a terminal music player client. It holds the data models for
tracks, albums, artists, playlists, shows and episodes. It arranges playlists
into folders. It keeps JSON file caches and time-limited in-memory caches. It
tracks player state and estimates playback progress. It also keeps the UI state
that a terminal front end would draw from: pages, focus, selections, popups and
a single-line text input.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `spotplayer_state.utils`
  - `format_duration(seconds)` formats seconds or a `timedelta` as `m:ss`.
  - `map_join(items, func, sep)` joins `func(item)` over the items.
  - `parse_uri(uri)` rewrites `spotify:user:{user}:{type}:{id}` as `spotify:{type}:{id}`.
- `spotplayer_state.models`
  - `SpotifyId` (typed ids with `from_uri` / `uri`), `ItemType`, `AlbumType` and `RepeatState`.
  - `Artist`, `Album`, `Track`, `Playlist`, `Show` and `Episode`. Each one is built from
    API-shaped dicts (`from_api`, `from_simplified`, `from_full`) and round-trips through
    `to_dict` / `from_dict`.
  - `PlaylistFolder`, `PlaylistFolderNode`, `folder_item_to_dict` and `folder_item_from_dict`.
  - `Category`, `TracksId`, and the constants `USER_TOP_TRACKS_ID`,
    `USER_RECENTLY_PLAYED_TRACKS_ID` and `USER_LIKED_TRACKS_ID`.
  - `ContextId` and `ContextKind`.
  - `Context`, with the kinds `PlaylistContext`, `AlbumContext`, `ArtistContext`,
    `TracksContext` and `ShowContext`. Each has a `description()`.
  - `SearchResults`, `TrackOrder` (with `compare`), `Device`, `CurrentPlayback` and
    `PlaybackMetadata`.
  - `Playback`. Its `uri_offset(uri, limit)` keeps at most `limit` ids around the chosen item.
- `spotplayer_state.playlist_folders`
  - `structurize(playlists, nodes)` lays out playlists along a folder tree. Each folder gets
    an entry and an "up" (`← name`) entry. Playlists not in the tree go to the root.
- `spotplayer_state.data`
  - `AppData`, `UserData`, `MemoryCaches` (`cachetools.TTLCache`, 64 entries, one-hour TTL)
    and `BrowseData`.
  - `FileCacheKey`, `store_data_into_file_cache` and `load_data_from_file_cache`. These
    functions write and read `<Key>_cache.json` files. A file that is missing or unreadable
    loads as `None`.
- `spotplayer_state.player`
  - `PlayerState`, with `current_playback`, `currently_playing`, `playback_progress` and
    `playing_context_id`.
  - Progress is estimated from an injectable `clock`.
- `spotplayer_state.line_input`
  - `LineInput`, an editable line with a cursor.
  - `input(key)` takes a one-character string or a `KeyCode` and returns an `InputEffect`.
    It returns `None` for a key it does not handle.
  - `widget(is_active)` returns `(text, highlighted)` segments.
- `spotplayer_state.page_state`
  - `SelectionState` (with `adjust(length)` to clamp the selection) and `ScrollOffset`.
  - The focus enums `LibraryFocusState`, `ArtistFocusState` and `SearchFocusState`, with
    wrapping `next` / `previous`.
  - `PageType`.
  - `PageState`, with the pages `LibraryPage`, `ContextPage`, `SearchPage`, `BrowsePage`,
    `LyricPage`, `QueuePage` and `CommandHelpPage`.
- `spotplayer_state.popup_state`
  - `PopupState`, with `SearchPopup`, the list popups and `PlaylistCreatePopup`.
  - `PlaylistPopupAction`, `ArtistPopupAction`, `ActionListItem` and
    `PlaylistCreateCurrentField`.
- `spotplayer_state.ui_state`
  - `UIState` holds the navigation history, the popup and `search_filtered_items`.
  - `Orientation.from_size(columns, rows)` picks a horizontal layout above a 2.3 column/row
    ratio.

## Example

```python
from spotplayer_state.models import SpotifyId
from spotplayer_state.utils import format_duration, parse_uri

print(format_duration(185))  # "3:05"
print(parse_uri("spotify:user:someone:playlist:abc123"))  # "spotify:playlist:abc123"
print(SpotifyId.from_uri("spotify:track:abc123").uri())  # "spotify:track:abc123"
```

## What this package does not do

This package only holds state. It does not:

- talk to any music service's web API;
- play or stream audio;
- draw anything to the terminal;
- read configuration, themes or key bindings;
- provide a command to run.

Themes, key sequences and actions are kept as opaque values.