import enum

import pytest

from spotplayer_state.models import Artist, ItemType, SpotifyId, Track
from spotplayer_state.page_state import SelectionState
from spotplayer_state.popup_state import (
    ActionListItem,
    ActionListPopup,
    ArtistListPopup,
    ArtistPopupAction,
    DeviceListPopup,
    PlaylistCreateCurrentField,
    PlaylistCreatePopup,
    PlaylistPopupAction,
    SearchPopup,
    ThemeListPopup,
    UserFollowedArtistListPopup,
    UserPlaylistListPopup,
    UserSavedAlbumListPopup,
)


class _Action(enum.Enum):
    PlayContext = 1
    AddToQueue = 2


def _track():
    return Track(SpotifyId(ItemType.TRACK, "trk1"), "Song")


def test_non_list_popups_have_no_list_state():
    for popup in (SearchPopup("abc"), PlaylistCreatePopup()):
        assert popup.list_state() is None
        popup.list_select(3)
        assert popup.list_selected() is None


@pytest.mark.parametrize(
    "popup",
    [
        UserPlaylistListPopup(PlaylistPopupAction(0)),
        UserFollowedArtistListPopup(),
        UserSavedAlbumListPopup(),
        DeviceListPopup(),
        ArtistListPopup(ArtistPopupAction.BROWSE, [Artist(SpotifyId(ItemType.ARTIST, "a1"), "A")]),
        ThemeListPopup(["dark"]),
        ActionListPopup(ActionListItem(_track(), [])),
    ],
)
def test_list_popups_select(popup):
    assert popup.list_selected() is None
    popup.list_select(2)
    assert popup.list_selected() == 2
    assert popup.list_state() is popup.state
    popup.list_select(None)
    assert popup.list_selected() is None


def test_list_popup_shares_given_state():
    state = SelectionState(4)
    popup = DeviceListPopup(state)
    assert popup.list_selected() == 4


def test_action_list_item():
    item = ActionListItem(_track(), [_Action.PlayContext, _Action.AddToQueue])
    assert item.n_actions() == 2
    assert item.name() == "Song"
    assert item.actions_desc() == ["PlayContext", "AddToQueue"]


def test_playlist_popup_action_variants():
    assert PlaylistPopupAction(1).is_browse
    add = PlaylistPopupAction(1, track_id=SpotifyId(ItemType.TRACK, "t1"))
    assert not add.is_browse
    with pytest.raises(ValueError):
        PlaylistPopupAction(
            0,
            track_id=SpotifyId(ItemType.TRACK, "t1"),
            episode_id=SpotifyId(ItemType.EPISODE, "e1"),
        )
    with pytest.raises(ValueError):
        PlaylistPopupAction(0, track_id=SpotifyId(ItemType.EPISODE, "e1"))


def test_playlist_create_defaults():
    popup = PlaylistCreatePopup()
    assert popup.current_field is PlaylistCreateCurrentField.NAME
    assert popup.name.is_empty()
    assert popup.desc.get_text() == ""