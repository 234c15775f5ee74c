"""
Bookmarks/tracks manager.

The manager is the single source of truth for track metadata. Screens read
from it and write back through it; they never touch a `Library` directly.

`BookmarksManager` keeps the library in memory. When it was loaded from a
file it writes the whole library back after every mutation. A mutation takes
effect in memory only once that write has succeeded; a failed write raises
`OSError` and leaves the manager as it was.
"""

from __future__ import annotations

import json
import logging
import uuid
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol

from ridgeline.core.colors import normalize_color
from ridgeline.errors import GroupNotFoundError, LibraryFormatError, TrackNotFoundError
from ridgeline.model import Group, Library, Track


logger = logging.getLogger(__name__)

LIBRARY_VERSION = 1
DEFAULT_GROUP_TITLE = "My Places"


class TrackManagerProtocol(Protocol):
    """Interface the edit form and pickers consume."""

    def fetch_track(self, track_id: str) -> Track:
        """Return the track or raise TrackNotFoundError."""
        ...

    def fetch_owning_group(self, track_id: str) -> Group:
        """Return the group containing the track or raise TrackNotFoundError."""
        ...

    def update_track(self, track_id: str, group_id: str, color: str, title: str) -> None:
        """Overwrite a track's group, color and title."""
        ...

    def delete_track(self, track_id: str) -> None:
        """Remove a track."""
        ...

    def list_groups(self) -> List[Group]:
        ...

    def list_tracks(self) -> List[Track]:
        ...

    def create_group(self, title: str) -> Group:
        ...


def _new_id() -> str:
    return uuid.uuid4().hex


class BookmarksManager:
    def __init__(self, library: Optional[Library] = None, *, path: Optional[Path] = None) -> None:
        self.library = library if library is not None else Library()
        self.path = Path(path) if path is not None else None

    # --- Persistence ---------------------------------------------------------

    @classmethod
    def load(cls, path: Path) -> "BookmarksManager":
        """
        Load a library file.

        A missing file yields a library holding only the default group; it is
        written on the first mutation.

        Raises:
            LibraryFormatError: if the file is not valid JSON or has the wrong shape.
        """
        p = Path(path)
        if not p.exists():
            logger.info("Library %s does not exist; starting empty", p)
            lib = Library(groups=[Group(id=_new_id(), title=DEFAULT_GROUP_TITLE)])
            return cls(lib, path=p)
        try:
            raw = json.loads(p.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise LibraryFormatError(f"{p}: invalid JSON ({e})") from e
        lib = library_from_dict(raw, source=str(p))
        logger.info("Loaded %d track(s) in %d group(s) from %s", len(lib.tracks), len(lib.groups), p)
        return cls(lib, path=p)

    def save(self) -> None:
        self._write(self.library)

    def _commit(self, library: Library) -> None:
        """Write `library` and only then make it the current one."""
        self._write(library)
        self.library = library

    def _write(self, library: Library) -> None:
        if self.path is None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(
            json.dumps(library_to_dict(library), ensure_ascii=False, indent=2) + "\n",
            encoding="utf-8",
        )
        tmp.replace(self.path)
        logger.debug("Wrote library to %s", self.path)

    # --- Reads ---------------------------------------------------------------

    def fetch_track(self, track_id: str) -> Track:
        track = self.library.get_track(track_id)
        if track is None:
            raise TrackNotFoundError(track_id)
        return track

    def fetch_owning_group(self, track_id: str) -> Group:
        track = self.fetch_track(track_id)
        group = self.library.get_group(track.group_id)
        if group is None:
            # A track always belongs to a group; a dangling reference is a corrupt library.
            raise GroupNotFoundError(track.group_id)
        return group

    def list_groups(self) -> List[Group]:
        return list(self.library.groups)

    def list_tracks(self) -> List[Track]:
        return list(self.library.tracks)

    # --- Writes --------------------------------------------------------------

    def update_track(self, track_id: str, group_id: str, color: str, title: str) -> None:
        track = self.fetch_track(track_id)
        if self.library.get_group(group_id) is None:
            raise GroupNotFoundError(group_id)
        updated = replace(track, group_id=group_id, color=normalize_color(color), name=title)
        tracks = [updated if t is track else t for t in self.library.tracks]
        self._commit(replace(self.library, tracks=tracks))
        logger.info("Updated track %s (group=%s color=%s)", track_id, group_id, updated.color)

    def delete_track(self, track_id: str) -> None:
        track = self.fetch_track(track_id)
        tracks = [t for t in self.library.tracks if t is not track]
        self._commit(replace(self.library, tracks=tracks))
        logger.info("Deleted track %s", track_id)

    def create_group(self, title: str) -> Group:
        group = Group(id=_new_id(), title=title)
        self._commit(replace(self.library, groups=[*self.library.groups, group]))
        logger.info("Created group %s (%r)", group.id, title)
        return group


def library_from_dict(raw: Any, *, source: str = "<library>") -> Library:
    if not isinstance(raw, dict):
        raise LibraryFormatError(f"{source}: expected a JSON object")
    try:
        groups = [
            Group(id=str(g["id"]), title=str(g.get("title") or ""), extra=dict(g.get("extra") or {}))
            for g in raw.get("groups") or []
        ]
        tracks = [
            Track(
                id=str(t["id"]),
                name=str(t.get("name") or ""),
                color=normalize_color(str(t.get("color") or "")),
                group_id=str(t["group_id"]),
                points=[tuple(pt) for pt in t.get("points") or []],  # type: ignore[misc]
                extra=dict(t.get("extra") or {}),
            )
            for t in raw.get("tracks") or []
        ]
    except (KeyError, TypeError, AttributeError, ValueError) as e:
        raise LibraryFormatError(f"{source}: malformed entry ({e})") from e

    lib = Library(groups=groups, tracks=tracks, metadata=dict(raw.get("metadata") or {}))
    for t in lib.tracks:
        if lib.get_group(t.group_id) is None:
            raise LibraryFormatError(f"{source}: track {t.id!r} references unknown group {t.group_id!r}")
    return lib


def library_to_dict(lib: Library) -> Dict[str, Any]:
    return {
        "version": LIBRARY_VERSION,
        "groups": [
            {"id": g.id, "title": g.title, **({"extra": g.extra} if g.extra else {})}
            for g in lib.groups
        ],
        "tracks": [
            {
                "id": t.id,
                "name": t.name,
                "color": t.color,
                "group_id": t.group_id,
                "points": [list(pt) for pt in t.points],
                **({"extra": t.extra} if t.extra else {}),
            }
            for t in lib.tracks
        ],
        **({"metadata": lib.metadata} if lib.metadata else {}),
    }
