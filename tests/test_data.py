from datetime import timedelta

import pytest

from spotplayer_state.data import (
    AppData,
    FileCacheKey,
    UserData,
    load_data_from_file_cache,
    store_data_into_file_cache,
)
from spotplayer_state.models import (
    Album,
    AlbumContext,
    AlbumType,
    Artist,
    ArtistContext,
    ContextId,
    ContextKind,
    ItemType,
    Playlist,
    PlaylistContext,
    PlaylistFolder,
    PlaylistFolderNode,
    Show,
    ShowContext,
    SpotifyId,
    Track,
    TracksContext,
    TracksId,
)

OWNER = SpotifyId(ItemType.USER, "me")
OTHER = SpotifyId(ItemType.USER, "someone")


def artist():
    return Artist(SpotifyId(ItemType.ARTIST, "ar1"), "Band")


def album():
    return Album(
        SpotifyId(ItemType.ALBUM, "al1"), "2020-01-02", "Record", [artist()], AlbumType.ALBUM
    )


def track(tid="t1", name="Song"):
    return Track(
        SpotifyId(ItemType.TRACK, tid), name, [artist()], album(), timedelta(seconds=200), True
    )


def playlist(pid, owner=OWNER, collaborative=False, folder=0):
    return Playlist(
        SpotifyId(ItemType.PLAYLIST, pid), collaborative, pid, ("Name", owner), "", folder
    )


@pytest.mark.parametrize(
    "key, data",
    [
        (FileCacheKey.PLAYLISTS, [PlaylistFolder("Mix", 0, 1), playlist("p1", folder=1)]),
        (
            FileCacheKey.PLAYLIST_FOLDERS,
            PlaylistFolderNode(
                "root", "folder", "spotify:folder:x", [PlaylistFolderNode(None, "playlist", "spotify:playlist:p1")]
            ),
        ),
        (FileCacheKey.FOLLOWED_ARTISTS, [artist()]),
        (FileCacheKey.SAVED_SHOWS, [Show(SpotifyId(ItemType.SHOW, "s1"), "Pod")]),
        (FileCacheKey.SAVED_ALBUMS, [album()]),
        (FileCacheKey.SAVED_TRACKS, {track().id.uri(): track()}),
    ],
)
def test_file_cache_round_trip(tmp_path, key, data):
    store_data_into_file_cache(key, tmp_path, data)
    assert load_data_from_file_cache(key, tmp_path) == data


def test_cache_file_name(tmp_path):
    store_data_into_file_cache(FileCacheKey.PLAYLISTS, tmp_path, [])
    assert (tmp_path / "Playlists_cache.json").exists()


def test_missing_cache_file_loads_none(tmp_path):
    assert load_data_from_file_cache(FileCacheKey.SAVED_ALBUMS, tmp_path) is None


@pytest.mark.parametrize("content", ["not json", "{}", "[1, 2]"])
def test_corrupted_cache_file_loads_none(tmp_path, content):
    (tmp_path / "Playlists_cache.json").write_text(content)
    assert load_data_from_file_cache(FileCacheKey.PLAYLISTS, tmp_path) is None


def test_user_data_from_empty_folder_has_defaults(tmp_path):
    data = UserData.new_from_file_caches(tmp_path)
    assert data == UserData()


def test_user_data_from_file_caches(tmp_path):
    store_data_into_file_cache(FileCacheKey.FOLLOWED_ARTISTS, tmp_path, [artist()])
    store_data_into_file_cache(FileCacheKey.SAVED_TRACKS, tmp_path, {track().id.uri(): track()})
    data = UserData.new_from_file_caches(tmp_path)
    assert data.followed_artists == [artist()]
    assert data.is_liked_track(track())
    assert data.user is None
    assert data.saved_albums == []


def test_app_data_loads_from_cache_folder(tmp_path):
    store_data_into_file_cache(FileCacheKey.SAVED_ALBUMS, tmp_path, [album()])
    assert AppData(tmp_path).user_data.saved_albums == [album()]


def test_modifiable_items_without_user_is_empty():
    data = UserData(playlists=[playlist("p1")])
    assert data.modifiable_playlist_items(None) == []


def test_modifiable_items_filters_owner_and_collaborative():
    own = playlist("p1")
    foreign = playlist("p2", owner=OTHER)
    shared = playlist("p3", owner=OTHER, collaborative=True)
    folder = PlaylistFolder("Mix", 0, 1)
    data = UserData(user=OWNER, playlists=[own, foreign, shared, folder])
    assert data.modifiable_playlist_items(None) == [own, shared, folder]


def test_modifiable_items_in_folder():
    inside = playlist("p1", folder=1)
    outside = playlist("p2")
    up = PlaylistFolder("← Mix", 1, 0)
    data = UserData(user=OWNER, playlists=[inside, outside, up])
    assert data.modifiable_playlist_items(1) == [inside, up]


def test_folder_playlists_items():
    folder = PlaylistFolder("Mix", 0, 1)
    up = PlaylistFolder("← Mix", 1, 0)
    inside = playlist("p1", owner=OTHER, folder=1)
    root = playlist("p2")
    data = UserData(playlists=[folder, up, inside, root])
    assert data.folder_playlists_items(0) == [folder, root]
    assert data.folder_playlists_items(1) == [up, inside]


def test_is_liked_track():
    liked = track("t1")
    data = UserData(saved_tracks={liked.id.uri(): liked})
    assert data.is_liked_track(liked)
    assert not data.is_liked_track(track("t2"))


def test_context_tracks_by_kind():
    app = AppData()
    tracks = [track("t1"), track("t2")]
    pl = playlist("p1")
    pl_id = ContextId(ContextKind.PLAYLIST, pl.id)
    app.caches.context[pl_id.uri()] = PlaylistContext(pl, tracks)
    assert app.context_tracks(pl_id) is tracks

    al_id = ContextId(ContextKind.ALBUM, album().id)
    app.caches.context[al_id.uri()] = AlbumContext(album(), tracks)
    assert app.context_tracks(al_id) == tracks

    ar_id = ContextId(ContextKind.ARTIST, artist().id)
    app.caches.context[ar_id.uri()] = ArtistContext(artist(), top_tracks=tracks[:1])
    assert app.context_tracks(ar_id) == tracks[:1]

    tr_id = ContextId(ContextKind.TRACKS, TracksId("tracks:custom", "Custom"))
    app.caches.context[tr_id.uri()] = TracksContext(tracks, "Custom")
    assert app.context_tracks(tr_id) == tracks


def test_context_tracks_returns_mutable_list():
    app = AppData()
    pl = playlist("p1")
    pl_id = ContextId(ContextKind.PLAYLIST, pl.id)
    app.caches.context[pl_id.uri()] = PlaylistContext(pl, [track("t1")])
    app.context_tracks(pl_id).append(track("t2"))
    assert len(app.caches.context[pl_id.uri()].tracks) == 2


def test_context_tracks_show_and_missing():
    app = AppData()
    show = Show(SpotifyId(ItemType.SHOW, "s1"), "Pod")
    show_id = ContextId(ContextKind.SHOW, show.id)
    app.caches.context[show_id.uri()] = ShowContext(show)
    assert app.context_tracks(show_id) is None
    missing = ContextId(ContextKind.PLAYLIST, SpotifyId(ItemType.PLAYLIST, "nope"))
    assert app.context_tracks(missing) is None