"""Domain models: tracks, albums, artists, playlists, shows, contexts and playback."""

from __future__ import annotations

import enum
import html
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Optional, Union

from .utils import map_join

_BASE62 = re.compile(r"[0-9A-Za-z]+")
_HTML_TAG = re.compile(r"(<.*?>|</.*?>)")


class ItemType(enum.Enum):
    """Kinds of Spotify objects an id can refer to."""

    TRACK = "track"
    ALBUM = "album"
    ARTIST = "artist"
    PLAYLIST = "playlist"
    SHOW = "show"
    EPISODE = "episode"
    USER = "user"


@dataclass(frozen=True)
class SpotifyId:
    """A typed Spotify object id."""

    kind: ItemType
    id: str

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("empty Spotify id")
        if self.kind is not ItemType.USER and not _BASE62.fullmatch(self.id):
            raise ValueError(f"invalid {self.kind.value} id: {self.id!r}")

    @classmethod
    def from_uri(cls, uri: str) -> SpotifyId:
        """Parse a ``spotify:{type}:{id}`` URI."""
        parts = uri.split(":")
        if len(parts) != 3 or parts[0] != "spotify":
            raise ValueError(f"invalid Spotify URI: {uri!r}")
        try:
            kind = ItemType(parts[1])
        except ValueError:
            raise ValueError(f"unknown item type in URI: {uri!r}") from None
        return cls(kind, parts[2])

    def uri(self) -> str:
        return f"spotify:{self.kind.value}:{self.id}"

    def __str__(self) -> str:
        return self.uri()


def _make_id(value: Any, kind: ItemType) -> SpotifyId:
    if isinstance(value, SpotifyId):
        result = value
    elif isinstance(value, str) and value.startswith("spotify:"):
        result = SpotifyId.from_uri(value)
    else:
        return SpotifyId(kind, value)
    if result.kind is not kind:
        raise ValueError(f"expected a {kind.value} id, got {result.uri()!r}")
    return result


def _duration_from_ms(ms: int) -> timedelta:
    if ms < 0:
        raise ValueError(f"negative duration: {ms}ms")
    return timedelta(milliseconds=ms)


def _duration_to_dict(duration: timedelta) -> dict[str, int]:
    micros = duration // timedelta(microseconds=1)
    secs, rest = divmod(micros, 1_000_000)
    return {"secs": secs, "nanos": rest * 1000}


def _duration_from_dict(data: dict[str, int]) -> timedelta:
    return timedelta(seconds=data["secs"], microseconds=data["nanos"] // 1000)


class AlbumType(enum.Enum):
    ALBUM = "album"
    SINGLE = "single"
    APPEARS_ON = "appears_on"
    COMPILATION = "compilation"


class RepeatState(enum.Enum):
    OFF = "off"
    TRACK = "track"
    CONTEXT = "context"


@dataclass
class Artist:
    """A Spotify artist."""

    id: SpotifyId
    name: str

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Optional[Artist]:
        """Build from an API artist object; ``None`` if it has no id."""
        if data.get("id") is None:
            return None
        return cls(_make_id(data["id"], ItemType.ARTIST), data["name"])

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id.id, "name": self.name}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Artist:
        return cls(_make_id(data["id"], ItemType.ARTIST), data["name"])

    def __str__(self) -> str:
        return self.name


def _artists_from_api(items: list[dict[str, Any]]) -> list[Artist]:
    return [a for a in (Artist.from_api(item) for item in items) if a is not None]


@dataclass
class Album:
    """A Spotify album."""

    id: SpotifyId
    release_date: str
    name: str
    artists: list[Artist] = field(default_factory=list)
    album_type: Optional[AlbumType] = None

    @classmethod
    def from_simplified(cls, data: dict[str, Any]) -> Optional[Album]:
        """Build from a simplified API album; ``None`` if it has no id."""
        if data.get("id") is None:
            return None
        raw_type = data.get("album_type")
        album_type = None
        if raw_type is not None:
            try:
                album_type = AlbumType(raw_type.lower())
            except ValueError:
                album_type = None
        return cls(
            id=_make_id(data["id"], ItemType.ALBUM),
            release_date=data.get("release_date") or "",
            name=data["name"],
            artists=_artists_from_api(data.get("artists", [])),
            album_type=album_type,
        )

    @classmethod
    def from_full(cls, data: dict[str, Any]) -> Album:
        return cls(
            id=_make_id(data["id"], ItemType.ALBUM),
            release_date=data["release_date"],
            name=data["name"],
            artists=_artists_from_api(data.get("artists", [])),
            album_type=AlbumType(data["album_type"].lower()),
        )

    def year(self) -> str:
        return self.release_date.split("-")[0]

    def album_type_name(self) -> str:
        return self.album_type.value if self.album_type is not None else ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id.id,
            "release_date": self.release_date,
            "name": self.name,
            "artists": [a.to_dict() for a in self.artists],
            "album_type": self.album_type_name() or None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Album:
        raw_type = data.get("album_type")
        return cls(
            id=_make_id(data["id"], ItemType.ALBUM),
            release_date=data["release_date"],
            name=data["name"],
            artists=[Artist.from_dict(a) for a in data.get("artists", [])],
            album_type=AlbumType(raw_type) if raw_type is not None else None,
        )

    def __str__(self) -> str:
        artists = map_join(self.artists, lambda a: a.name, ", ")
        return f"{self.name} • {artists} ({self.year()})"


def _playable_track_id(data: dict[str, Any]) -> Optional[SpotifyId]:
    if data.get("is_playable") is False:
        return None
    linked = data.get("linked_from")
    raw = linked.get("id") if linked is not None else data.get("id")
    if raw is None:
        return None
    return _make_id(raw, ItemType.TRACK)


@dataclass
class Track:
    """A Spotify track."""

    id: SpotifyId
    name: str
    artists: list[Artist] = field(default_factory=list)
    album: Optional[Album] = None
    duration: timedelta = timedelta(0)
    explicit: bool = False
    added_at: int = 0

    @classmethod
    def from_simplified(cls, data: dict[str, Any]) -> Optional[Track]:
        """Build from a simplified API track; ``None`` if unplayable or id-less."""
        track_id = _playable_track_id(data)
        if track_id is None:
            return None
        return cls(
            id=track_id,
            name=data["name"],
            artists=_artists_from_api(data.get("artists", [])),
            album=None,
            duration=_duration_from_ms(data["duration_ms"]),
            explicit=data.get("explicit", False),
        )

    @classmethod
    def from_full(cls, data: dict[str, Any]) -> Optional[Track]:
        """Build from a full API track; ``None`` if unplayable or id-less."""
        track_id = _playable_track_id(data)
        if track_id is None:
            return None
        return cls(
            id=track_id,
            name=data["name"],
            artists=_artists_from_api(data.get("artists", [])),
            album=Album.from_simplified(data["album"]),
            duration=_duration_from_ms(data["duration_ms"]),
            explicit=data.get("explicit", False),
        )

    def artists_info(self) -> str:
        return map_join(self.artists, lambda a: a.name, ", ")

    def album_info(self) -> str:
        return self.album.name if self.album is not None else ""

    def display_name(self) -> str:
        return f"{self.name} (E)" if self.explicit else self.name

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id.id,
            "name": self.name,
            "artists": [a.to_dict() for a in self.artists],
            "album": self.album.to_dict() if self.album is not None else None,
            "duration": _duration_to_dict(self.duration),
            "explicit": self.explicit,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Track:
        album = data.get("album")
        return cls(
            id=_make_id(data["id"], ItemType.TRACK),
            name=data["name"],
            artists=[Artist.from_dict(a) for a in data.get("artists", [])],
            album=Album.from_dict(album) if album is not None else None,
            duration=_duration_from_dict(data["duration"]),
            explicit=data["explicit"],
        )

    def __str__(self) -> str:
        return f"{self.display_name()} • {self.artists_info()} ▎ {self.album_info()}"


@dataclass
class Playlist:
    """A Spotify playlist."""

    id: SpotifyId
    collaborative: bool
    name: str
    owner: tuple[str, SpotifyId]
    desc: str = ""
    current_folder_id: int = 0

    @classmethod
    def _from_api(cls, data: dict[str, Any], desc: str) -> Playlist:
        owner = data["owner"]
        return cls(
            id=_make_id(data["id"], ItemType.PLAYLIST),
            collaborative=data.get("collaborative", False),
            name=data["name"],
            owner=(owner.get("display_name") or "", _make_id(owner["id"], ItemType.USER)),
            desc=desc,
        )

    @classmethod
    def from_simplified(cls, data: dict[str, Any]) -> Playlist:
        return cls._from_api(data, "")

    @classmethod
    def from_full(cls, data: dict[str, Any]) -> Playlist:
        """Build from a full API playlist, stripping HTML from its description."""
        raw = data.get("description") or ""
        return cls._from_api(data, html.unescape(_HTML_TAG.sub("", raw)))

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id.id,
            "collaborative": self.collaborative,
            "name": self.name,
            "owner": [self.owner[0], self.owner[1].id],
            "desc": self.desc,
            "current_folder_id": self.current_folder_id,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Playlist:
        owner_name, owner_id = data["owner"]
        return cls(
            id=_make_id(data["id"], ItemType.PLAYLIST),
            collaborative=data["collaborative"],
            name=data["name"],
            owner=(owner_name, _make_id(owner_id, ItemType.USER)),
            desc=data["desc"],
            current_folder_id=data.get("current_folder_id", 0),
        )

    def __str__(self) -> str:
        return f"{self.name} • {self.owner[0]}"


@dataclass
class Show:
    """A Spotify show (podcast)."""

    id: SpotifyId
    name: str

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Show:
        return cls(_make_id(data["id"], ItemType.SHOW), data["name"])

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id.id, "name": self.name}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Show:
        return cls(_make_id(data["id"], ItemType.SHOW), data["name"])

    def __str__(self) -> str:
        return self.name


@dataclass
class Episode:
    """A Spotify podcast episode."""

    id: SpotifyId
    name: str
    description: str
    duration: timedelta
    show: Optional[Show]
    release_date: str

    @classmethod
    def from_simplified(cls, data: dict[str, Any]) -> Episode:
        return cls(
            id=_make_id(data["id"], ItemType.EPISODE),
            name=data["name"],
            description=data.get("description", ""),
            duration=_duration_from_ms(data["duration_ms"]),
            show=None,
            release_date=data["release_date"],
        )

    @classmethod
    def from_full(cls, data: dict[str, Any]) -> Episode:
        episode = cls.from_simplified(data)
        episode.show = Show.from_api(data["show"])
        return episode

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id.id,
            "name": self.name,
            "description": self.description,
            "duration": _duration_to_dict(self.duration),
            "show": self.show.to_dict() if self.show is not None else None,
            "release_date": self.release_date,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Episode:
        show = data.get("show")
        return cls(
            id=_make_id(data["id"], ItemType.EPISODE),
            name=data["name"],
            description=data["description"],
            duration=_duration_from_dict(data["duration"]),
            show=Show.from_dict(show) if show is not None else None,
            release_date=data["release_date"],
        )

    def __str__(self) -> str:
        if self.show is not None:
            return f"{self.name} • {self.show.name}"
        return self.name


@dataclass
class PlaylistFolder:
    """A folder entry in the playlist tree."""

    name: str
    current_id: int
    target_id: int

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "current_id": self.current_id, "target_id": self.target_id}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PlaylistFolder:
        return cls(data["name"], data["current_id"], data["target_id"])

    def __str__(self) -> str:
        return f"{self.name}/"


PlaylistFolderItem = Union[Playlist, PlaylistFolder]


def folder_item_to_dict(item: PlaylistFolderItem) -> dict[str, Any]:
    """Serialise a playlist or folder as a single-key tagged mapping."""
    if isinstance(item, Playlist):
        return {"Playlist": item.to_dict()}
    if isinstance(item, PlaylistFolder):
        return {"Folder": item.to_dict()}
    raise TypeError(f"not a playlist folder item: {item!r}")


def folder_item_from_dict(data: dict[str, Any]) -> PlaylistFolderItem:
    """Inverse of :func:`folder_item_to_dict`."""
    if not isinstance(data, dict) or len(data) != 1:
        raise ValueError(f"invalid playlist folder item: {data!r}")
    (tag, body), = data.items()
    if tag == "Playlist":
        return Playlist.from_dict(body)
    if tag == "Folder":
        return PlaylistFolder.from_dict(body)
    raise ValueError(f"unknown playlist folder item tag: {tag!r}")


@dataclass
class PlaylistFolderNode:
    """A node of an exported playlist folder hierarchy."""

    name: Optional[str]
    node_type: str
    uri: str = ""
    children: list[PlaylistFolderNode] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PlaylistFolderNode:
        if "type" not in data:
            raise ValueError("playlist folder node is missing its 'type'")
        return cls(
            name=data.get("name"),
            node_type=data["type"],
            uri=data.get("uri", ""),
            children=[cls.from_dict(child) for child in data.get("children", [])],
        )


@dataclass
class Category:
    """A Spotify browse category."""

    id: str
    name: str

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Category:
        return cls(data["id"], data["name"])

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class TracksId:
    """Id of a synthetic track collection; ``kind`` is its display title."""

    uri: str
    kind: str


USER_TOP_TRACKS_ID = TracksId("tracks:user-top-tracks", "Top Tracks")
USER_RECENTLY_PLAYED_TRACKS_ID = TracksId(
    "tracks:user-recently-played-tracks", "Recently Played Tracks"
)
USER_LIKED_TRACKS_ID = TracksId("tracks:user-liked-tracks", "Liked Tracks")


class ContextKind(enum.Enum):
    PLAYLIST = "playlist"
    ALBUM = "album"
    ARTIST = "artist"
    TRACKS = "tracks"
    SHOW = "show"


@dataclass(frozen=True)
class ContextId:
    """Id of a playing or browsed context."""

    kind: ContextKind
    id: Union[SpotifyId, TracksId]

    def __post_init__(self) -> None:
        if self.kind is ContextKind.TRACKS:
            if not isinstance(self.id, TracksId):
                raise TypeError("a tracks context needs a TracksId")
            return
        if not isinstance(self.id, SpotifyId):
            raise TypeError(f"a {self.kind.value} context needs a SpotifyId")
        if self.id.kind is not ItemType(self.kind.value):
            raise ValueError(f"id {self.id.uri()!r} does not match context kind {self.kind.value}")

    def uri(self) -> str:
        if isinstance(self.id, TracksId):
            return self.id.uri
        return self.id.uri()


class Context(ABC):
    """A playable context with its items."""

    @abstractmethod
    def description(self) -> str:
        """One-line description of the context."""


@dataclass
class PlaylistContext(Context):
    playlist: Playlist
    tracks: list[Track] = field(default_factory=list)

    def description(self) -> str:
        return f"{self.playlist.name} | {self.playlist.owner[0]} | {len(self.tracks)} songs"


@dataclass
class AlbumContext(Context):
    album: Album
    tracks: list[Track] = field(default_factory=list)

    def description(self) -> str:
        return f"{self.album.name} | {self.album.release_date} | {len(self.tracks)} songs"


@dataclass
class ArtistContext(Context):
    artist: Artist
    top_tracks: list[Track] = field(default_factory=list)
    albums: list[Album] = field(default_factory=list)
    related_artists: list[Artist] = field(default_factory=list)

    def description(self) -> str:
        return self.artist.name


@dataclass
class TracksContext(Context):
    tracks: list[Track]
    desc: str

    def description(self) -> str:
        return f"{self.desc} | {len(self.tracks)} songs"


@dataclass
class ShowContext(Context):
    show: Show
    episodes: list[Episode] = field(default_factory=list)

    def description(self) -> str:
        return f"{self.show.name} | {len(self.episodes)} episodes"


@dataclass
class SearchResults:
    """Results of a search query."""

    tracks: list[Track] = field(default_factory=list)
    artists: list[Artist] = field(default_factory=list)
    albums: list[Album] = field(default_factory=list)
    playlists: list[Playlist] = field(default_factory=list)
    shows: list[Show] = field(default_factory=list)
    episodes: list[Episode] = field(default_factory=list)


class TrackOrder(enum.Enum):
    """Orders by which a track list can be sorted."""

    ADDED_AT = "added_at"
    TRACK_NAME = "track_name"
    ALBUM = "album"
    ARTISTS = "artists"
    DURATION = "duration"

    def _key(self, track: Track) -> Any:
        if self is TrackOrder.ADDED_AT:
            return track.added_at
        if self is TrackOrder.TRACK_NAME:
            return track.name
        if self is TrackOrder.ALBUM:
            return track.album_info()
        if self is TrackOrder.ARTISTS:
            return track.artists_info()
        return track.duration

    def compare(self, x: Track, y: Track) -> int:
        """Return -1, 0 or 1 as ``x`` sorts before, with or after ``y``."""
        a, b = self._key(x), self._key(y)
        return (a > b) - (a < b)


@dataclass
class Device:
    """A Spotify Connect device."""

    id: str
    name: str

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Optional[Device]:
        if data.get("id") is None:
            return None
        return cls(data["id"], data["name"])


@dataclass
class CurrentPlayback:
    """Snapshot of the current playback as reported by the service."""

    device_name: str
    device_id: Optional[str] = None
    volume_percent: Optional[int] = None
    is_playing: bool = False
    repeat_state: RepeatState = RepeatState.OFF
    shuffle_state: bool = False
    progress: Optional[timedelta] = None
    item: Optional[Union[Track, Episode]] = None
    context_uri: Optional[str] = None
    context_type: Optional[ItemType] = None


@dataclass
class PlaybackMetadata:
    """Locally buffered playback metadata."""

    device_name: str
    device_id: Optional[str]
    volume: Optional[int]
    is_playing: bool
    repeat_state: RepeatState
    shuffle_state: bool
    mute_state: Optional[int] = None
    fake_track_repeat_state: bool = False

    @classmethod
    def from_playback(cls, playback: CurrentPlayback) -> PlaybackMetadata:
        return cls(
            device_name=playback.device_name,
            device_id=playback.device_id,
            volume=playback.volume_percent,
            is_playing=playback.is_playing,
            repeat_state=playback.repeat_state,
            shuffle_state=playback.shuffle_state,
        )


Offset = Union[int, str, None]


@dataclass
class Playback:
    """Data to start a playback: a context or an explicit list of ids, with an offset.

    An offset is either an absolute position (``int``) or an item URI (``str``).
    """

    context_id: Optional[ContextId] = None
    uris: Optional[list[SpotifyId]] = None
    offset: Offset = None

    def __post_init__(self) -> None:
        if (self.context_id is None) == (self.uris is None):
            raise ValueError("a playback needs exactly one of context_id or uris")

    def uri_offset(self, uri: str, limit: int) -> Playback:
        """New playback starting at ``uri``, keeping at most ``limit`` ids around it."""
        if self.context_id is not None:
            return Playback(context_id=self.context_id, offset=uri)
        ids = list(self.uris or [])
        if len(ids) >= limit:
            pos = next((i for i, pid in enumerate(ids) if pid.uri() == uri), 0)
            left = max(pos - limit // 2, 0)
            right = min(left + limit, len(ids))
            ids = ids[left:right]
        return Playback(uris=ids, offset=uri)