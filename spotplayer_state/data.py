"""Application data: the user's library, in-memory caches and file caches."""

from __future__ import annotations

import enum
import json
import logging
from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path
from typing import Any, Callable, Optional, Union

from cachetools import TTLCache

from .models import (
    Album,
    AlbumContext,
    Artist,
    ArtistContext,
    Category,
    Context,
    ContextId,
    Playlist,
    PlaylistContext,
    PlaylistFolderItem,
    PlaylistFolderNode,
    Show,
    SpotifyId,
    Track,
    TracksContext,
    folder_item_from_dict,
    folder_item_to_dict,
)

logger = logging.getLogger(__name__)

TTL_CACHE_DURATION = timedelta(hours=1)
CACHE_CAPACITY = 64


class FileCacheKey(enum.Enum):
    """Data sets persisted as JSON files in the cache folder."""

    PLAYLISTS = "Playlists"
    PLAYLIST_FOLDERS = "PlaylistFolders"
    FOLLOWED_ARTISTS = "FollowedArtists"
    SAVED_SHOWS = "SavedShows"
    SAVED_ALBUMS = "SavedAlbums"
    SAVED_TRACKS = "SavedTracks"

    def path(self, cache_folder: Union[str, Path]) -> Path:
        return Path(cache_folder) / f"{self.value}_cache.json"


def _node_to_dict(node: PlaylistFolderNode) -> dict[str, Any]:
    return {
        "name": node.name,
        "type": node.node_type,
        "uri": node.uri,
        "children": [_node_to_dict(child) for child in node.children],
    }


_Codec = tuple[Callable[[Any], Any], Callable[[Any], Any]]

_CODECS: dict[FileCacheKey, _Codec] = {
    FileCacheKey.PLAYLISTS: (
        lambda items: [folder_item_to_dict(item) for item in items],
        lambda raw: [folder_item_from_dict(item) for item in raw],
    ),
    FileCacheKey.PLAYLIST_FOLDERS: (_node_to_dict, PlaylistFolderNode.from_dict),
    FileCacheKey.FOLLOWED_ARTISTS: (
        lambda items: [a.to_dict() for a in items],
        lambda raw: [Artist.from_dict(a) for a in raw],
    ),
    FileCacheKey.SAVED_SHOWS: (
        lambda items: [s.to_dict() for s in items],
        lambda raw: [Show.from_dict(s) for s in raw],
    ),
    FileCacheKey.SAVED_ALBUMS: (
        lambda items: [a.to_dict() for a in items],
        lambda raw: [Album.from_dict(a) for a in raw],
    ),
    FileCacheKey.SAVED_TRACKS: (
        lambda tracks: {uri: t.to_dict() for uri, t in tracks.items()},
        lambda raw: {uri: Track.from_dict(t) for uri, t in raw.items()},
    ),
}


def store_data_into_file_cache(key: FileCacheKey, cache_folder: Union[str, Path], data: Any) -> None:
    """Write ``data`` for ``key`` as JSON into the cache folder."""
    encode, _ = _CODECS[key]
    with key.path(cache_folder).open("w", encoding="utf-8") as fh:
        json.dump(encode(data), fh, ensure_ascii=False)


def load_data_from_file_cache(key: FileCacheKey, cache_folder: Union[str, Path]) -> Optional[Any]:
    """Read the data for ``key``; ``None`` if the file is missing or unreadable."""
    path = key.path(cache_folder)
    if not path.exists():
        return None
    logger.info("Loading %s data from %s...", key.value, path)
    _, decode = _CODECS[key]
    try:
        with path.open(encoding="utf-8") as fh:
            data = decode(json.load(fh))
    except (ValueError, KeyError, TypeError, AttributeError) as err:
        logger.error("Failed to load %s data: %s", key.value, err)
        return None
    logger.info("Successfully loaded %s data!", key.value)
    return data


def _new_cache() -> TTLCache:
    return TTLCache(maxsize=CACHE_CAPACITY, ttl=TTL_CACHE_DURATION.total_seconds())


@dataclass
class MemoryCaches:
    """Time-limited in-memory caches keyed by URI or query."""

    context: TTLCache = field(default_factory=_new_cache)
    search: TTLCache = field(default_factory=_new_cache)
    lyrics: TTLCache = field(default_factory=_new_cache)
    images: TTLCache = field(default_factory=_new_cache)


@dataclass
class BrowseData:
    """Browse categories and their playlists."""

    categories: list[Category] = field(default_factory=list)
    category_playlists: dict[str, list[Playlist]] = field(default_factory=dict)


def _in_folder(item: PlaylistFolderItem, folder_id: int) -> bool:
    if isinstance(item, Playlist):
        return item.current_folder_id == folder_id
    return item.current_id == folder_id


@dataclass
class UserData:
    """The current user's library. ``user`` is the signed-in user's id."""

    user: Optional[SpotifyId] = None
    playlists: list[PlaylistFolderItem] = field(default_factory=list)
    playlist_folder_node: Optional[PlaylistFolderNode] = None
    followed_artists: list[Artist] = field(default_factory=list)
    saved_shows: list[Show] = field(default_factory=list)
    saved_albums: list[Album] = field(default_factory=list)
    saved_tracks: dict[str, Track] = field(default_factory=dict)

    @classmethod
    def new_from_file_caches(cls, cache_folder: Union[str, Path]) -> UserData:
        """Build user data from whatever file caches exist in ``cache_folder``."""

        def load(key: FileCacheKey, default: Any) -> Any:
            data = load_data_from_file_cache(key, cache_folder)
            return default if data is None else data

        return cls(
            user=None,
            playlists=load(FileCacheKey.PLAYLISTS, []),
            playlist_folder_node=load_data_from_file_cache(FileCacheKey.PLAYLIST_FOLDERS, cache_folder),
            followed_artists=load(FileCacheKey.FOLLOWED_ARTISTS, []),
            saved_shows=load(FileCacheKey.SAVED_SHOWS, []),
            saved_albums=load(FileCacheKey.SAVED_ALBUMS, []),
            saved_tracks=load(FileCacheKey.SAVED_TRACKS, {}),
        )

    def modifiable_playlist_items(self, folder_id: Optional[int]) -> list[PlaylistFolderItem]:
        """Items the user can possibly modify, optionally limited to one folder."""
        if self.user is None:
            return []
        return [
            item
            for item in self.playlists
            if (folder_id is None or _in_folder(item, folder_id))
            and (
                not isinstance(item, Playlist)
                or item.owner[1] == self.user
                or item.collaborative
            )
        ]

    def folder_playlists_items(self, folder_id: int) -> list[PlaylistFolderItem]:
        """Items that live in the given folder."""
        return [item for item in self.playlists if _in_folder(item, folder_id)]

    def is_liked_track(self, track: Track) -> bool:
        return track.id.uri() in self.saved_tracks


class AppData:
    """The application's data: user library, caches and browse data."""

    def __init__(self, cache_folder: Union[str, Path, None] = None) -> None:
        self.user_data = (
            UserData.new_from_file_caches(cache_folder) if cache_folder is not None else UserData()
        )
        self.caches = MemoryCaches()
        self.browse = BrowseData()

    def context_tracks(self, context_id: ContextId) -> Optional[list[Track]]:
        """The (mutable) track list of a cached context; ``None`` for shows or misses."""
        context: Optional[Context] = self.caches.context.get(context_id.uri())
        if isinstance(context, (PlaylistContext, AlbumContext, TracksContext)):
            return context.tracks
        if isinstance(context, ArtistContext):
            return context.top_tracks
        return None