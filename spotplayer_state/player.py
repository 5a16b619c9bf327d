"""Player state: devices, current playback, buffered metadata and queue."""

from __future__ import annotations

import time
from dataclasses import dataclass, field, replace
from datetime import timedelta
from typing import Callable, Optional, Union

from .models import (
    ContextId,
    ContextKind,
    CurrentPlayback,
    Device,
    Episode,
    ItemType,
    PlaybackMetadata,
    SpotifyId,
    Track,
)
from .utils import parse_uri

_CONTEXT_KINDS = {
    ItemType.PLAYLIST: ContextKind.PLAYLIST,
    ItemType.ALBUM: ContextKind.ALBUM,
    ItemType.ARTIST: ContextKind.ARTIST,
    ItemType.SHOW: ContextKind.SHOW,
}


@dataclass
class PlayerState:
    """State of the player as last reported, plus locally buffered changes.

    ``playback_last_updated_time`` is a reading of ``clock`` (seconds).
    """

    devices: list[Device] = field(default_factory=list)
    playback: Optional[CurrentPlayback] = None
    playback_last_updated_time: Optional[float] = None
    buffered_playback: Optional[PlaybackMetadata] = None
    queue: Optional[list[Union[Track, Episode]]] = None
    clock: Callable[[], float] = field(default=time.monotonic, repr=False, compare=False)

    def _elapsed(self) -> timedelta:
        if self.playback_last_updated_time is None:
            raise ValueError("playback has no last update time")
        return timedelta(seconds=max(self.clock() - self.playback_last_updated_time, 0.0))

    def current_playback(self) -> Optional[CurrentPlayback]:
        """Estimate the current playback from the stored and buffered data."""
        if self.playback is None:
            return None
        playback = replace(self.playback)
        if playback.progress is not None and playback.is_playing:
            playback.progress = playback.progress + self._elapsed()

        buffered = self.buffered_playback
        if buffered is not None:
            playback = replace(
                playback,
                device_name=buffered.device_name,
                device_id=buffered.device_id,
                is_playing=buffered.is_playing,
                volume_percent=buffered.volume,
                repeat_state=buffered.repeat_state,
                shuffle_state=buffered.shuffle_state,
            )
        return playback

    def currently_playing(self) -> Optional[Union[Track, Episode]]:
        return self.playback.item if self.playback is not None else None

    def playback_progress(self) -> Optional[timedelta]:
        """Estimated progress of the playback; ``None`` if there is no playback."""
        if self.playback is None:
            return None
        if self.playback.progress is None:
            raise ValueError("playback has no progress")
        if self.playback.is_playing:
            return self.playback.progress + self._elapsed()
        return self.playback.progress

    def playing_context_id(self) -> Optional[ContextId]:
        """Id of the playing context, if it is a playlist, album, artist or show."""
        playback = self.playback
        if playback is None or playback.context_uri is None:
            return None
        kind = _CONTEXT_KINDS.get(playback.context_type)
        if kind is None:
            return None
        try:
            spotify_id = SpotifyId.from_uri(parse_uri(playback.context_uri))
        except ValueError:
            return None
        if spotify_id.kind is not playback.context_type:
            return None
        return ContextId(kind, spotify_id)