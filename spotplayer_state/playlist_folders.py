"""Arrange a flat list of playlists into a folder hierarchy."""

from __future__ import annotations

import itertools
from dataclasses import replace
from typing import Iterable, Iterator, Sequence

from .models import Playlist, PlaylistFolder, PlaylistFolderItem, PlaylistFolderNode


def structurize(
    playlists: Iterable[Playlist], nodes: Sequence[PlaylistFolderNode]
) -> list[PlaylistFolderItem]:
    """Lay out ``playlists`` following the folder tree ``nodes``.

    Every folder yields two entries: the folder itself and an "up" entry leading
    back to its parent. Playlists not referenced by any node are appended at the
    root (folder id 0), in their input order.
    """
    remaining = {p.id.id: p for p in playlists}
    folder_ids = itertools.count(1)
    items: list[PlaylistFolderItem] = []

    def walk(children: Sequence[PlaylistFolderNode], current_id: int) -> Iterator[PlaylistFolderItem]:
        for node in children:
            head, sep, item_id = node.uri.rpartition(":")
            if not sep:
                continue
            if node.node_type == "folder":
                target_id = next(folder_ids)
                name = node.name if node.name is not None else f"folder_{current_id}"
                yield PlaylistFolder(name=name, current_id=current_id, target_id=target_id)
                yield PlaylistFolder(name=f"← {name}", current_id=target_id, target_id=current_id)
                yield from walk(node.children, target_id)
            else:
                playlist = remaining.pop(item_id, None)
                if playlist is not None:
                    yield replace(playlist, current_folder_id=current_id)

    items.extend(walk(nodes, 0))
    items.extend(replace(p, current_folder_id=0) for p in remaining.values())
    return items