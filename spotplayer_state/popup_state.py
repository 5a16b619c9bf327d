"""Popup UI state: list popups, the search popup and the playlist creation form."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from .line_input import LineInput
from .models import Album, Artist, Episode, ItemType, Playlist, Show, SpotifyId, Track
from .page_state import SelectionState


class PlaylistCreateCurrentField(enum.Enum):
    NAME = "name"
    DESC = "desc"


class ArtistPopupAction(enum.Enum):
    """What choosing an artist in an artist popup does."""

    BROWSE = "browse"
    SHOW_ACTIONS = "show_actions"


@dataclass(frozen=True)
class PlaylistPopupAction:
    """Browse a playlist folder, or add a track or an episode to a playlist in it."""

    folder_id: int
    track_id: Optional[SpotifyId] = None
    episode_id: Optional[SpotifyId] = None

    def __post_init__(self) -> None:
        if self.track_id is not None and self.episode_id is not None:
            raise ValueError("a playlist popup adds either a track or an episode, not both")
        if self.track_id is not None and self.track_id.kind is not ItemType.TRACK:
            raise ValueError(f"not a track id: {self.track_id.uri()!r}")
        if self.episode_id is not None and self.episode_id.kind is not ItemType.EPISODE:
            raise ValueError(f"not an episode id: {self.episode_id.uri()!r}")

    @property
    def is_browse(self) -> bool:
        return self.track_id is None and self.episode_id is None


ActionTarget = Union[Track, Artist, Album, Playlist, Show, Episode]


@dataclass
class ActionListItem:
    """An item together with the actions that can be run on it."""

    item: ActionTarget
    actions: list[Any] = field(default_factory=list)

    def n_actions(self) -> int:
        return len(self.actions)

    def name(self) -> str:
        return self.item.name

    def actions_desc(self) -> list[str]:
        return [a.name if isinstance(a, enum.Enum) else str(a) for a in self.actions]


class PopupState:
    """Base of every popup; list popups carry a selection ``state``."""

    def list_state(self) -> Optional[SelectionState]:
        return None

    def list_selected(self) -> Optional[int]:
        state = self.list_state()
        return state.selected if state is not None else None

    def list_select(self, index: Optional[int]) -> None:
        state = self.list_state()
        if state is not None:
            state.select(index)


class _ListPopup(PopupState):
    state: SelectionState

    def list_state(self) -> SelectionState:
        return self.state


@dataclass
class SearchPopup(PopupState):
    query: str = ""


@dataclass
class UserPlaylistListPopup(_ListPopup):
    action: PlaylistPopupAction
    state: SelectionState = field(default_factory=SelectionState)


@dataclass
class UserFollowedArtistListPopup(_ListPopup):
    state: SelectionState = field(default_factory=SelectionState)


@dataclass
class UserSavedAlbumListPopup(_ListPopup):
    state: SelectionState = field(default_factory=SelectionState)


@dataclass
class DeviceListPopup(_ListPopup):
    state: SelectionState = field(default_factory=SelectionState)


@dataclass
class ArtistListPopup(_ListPopup):
    action: ArtistPopupAction
    artists: list[Artist] = field(default_factory=list)
    state: SelectionState = field(default_factory=SelectionState)


@dataclass
class ThemeListPopup(_ListPopup):
    themes: list[Any] = field(default_factory=list)
    state: SelectionState = field(default_factory=SelectionState)


@dataclass
class ActionListPopup(_ListPopup):
    item: ActionListItem
    state: SelectionState = field(default_factory=SelectionState)


@dataclass
class PlaylistCreatePopup(PopupState):
    name: LineInput = field(default_factory=LineInput)
    desc: LineInput = field(default_factory=LineInput)
    current_field: PlaylistCreateCurrentField = PlaylistCreateCurrentField.NAME