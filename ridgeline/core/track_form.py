"""
Edit-track form controller.

Holds the uncommitted draft of a track's title, color and group, exposes the
form as an ordered list of row descriptors, and commits or discards the draft
when the form closes. It has no UI dependency: whatever presents the form
implements `FormHost` and forwards user events here.

Lifecycle:
    open -> (set_title | apply_color | apply_group)* -> save | delete | cancel

`on_complete(True)` fires on save and `on_complete(False)` on cancel. Delete
closes the form without calling `on_complete`; hosts that need to know about
it observe the close itself.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Callable, List, Optional, Protocol, Sequence

from ridgeline.core.colors import BOOKMARK_PALETTE, PaletteColor, normalize_color, palette_entry
from ridgeline.core.manager import TrackManagerProtocol
from ridgeline.errors import FormClosedError, GroupNotFoundError


logger = logging.getLogger(__name__)

CompletionCallback = Callable[[bool], None]

ROW_TITLE = "title"
ROW_COLOR = "color"
ROW_GROUP = "group"
ROW_DELETE = "delete"

SECTION_INFO = "info"
SECTION_DELETE = "delete"


@dataclass
class TrackDraft:
    title: Optional[str]
    color: str
    group_id: str
    group_title: Optional[str]


@dataclass(frozen=True)
class GroupChoice:
    group_id: str
    title: str


@dataclass(frozen=True)
class RowView:
    """What a row shows. `swatch` is a "#RRGGBB" color chip when present."""

    label: str
    value: str = ""
    hint: str = ""
    swatch: Optional[str] = None


@dataclass(frozen=True)
class FormRow:
    key: str
    kind: str  # "text" | "disclosure" | "action"
    section: str
    render: Callable[[], RowView]
    activate: Optional[Callable[[], None]] = None
    destructive: bool = False


class FormHost(Protocol):
    """Callbacks the presenting UI provides to the controller."""

    def present_color_picker(
        self, initial_color: str, on_result: Callable[[Optional[str]], None]
    ) -> None:
        ...

    def present_group_picker(
        self,
        initial_group_id: str,
        initial_title: Optional[str],
        on_result: Callable[[Optional[GroupChoice]], None],
    ) -> None:
        ...

    def refresh_row(self, key: str) -> None:
        ...

    def close_form(self) -> None:
        ...


class TrackFormController:
    def __init__(
        self,
        manager: TrackManagerProtocol,
        track_id: str,
        on_complete: CompletionCallback,
        *,
        host: Optional[FormHost] = None,
        palette: Sequence[PaletteColor] = BOOKMARK_PALETTE,
    ) -> None:
        # Unknown ids raise TrackNotFoundError; callers only open known tracks.
        track = manager.fetch_track(track_id)
        group = manager.fetch_owning_group(track_id)

        self._manager = manager
        self._on_complete = on_complete
        self._host = host
        self._palette = tuple(palette)
        self._closed = False
        self.track_id = track_id
        self.draft = TrackDraft(
            title=track.name,
            color=normalize_color(track.color),
            group_id=group.id,
            group_title=group.title,
        )
        self._rows = self._build_rows()
        logger.debug("Opened edit form for track %s", track_id)

    @classmethod
    def open(
        cls,
        manager: TrackManagerProtocol,
        track_id: str,
        on_complete: CompletionCallback,
        *,
        host: Optional[FormHost] = None,
        palette: Sequence[PaletteColor] = BOOKMARK_PALETTE,
    ) -> "TrackFormController":
        return cls(manager, track_id, on_complete, host=host, palette=palette)

    @property
    def closed(self) -> bool:
        return self._closed

    # --- Rows ----------------------------------------------------------------

    def _build_rows(self) -> List[FormRow]:
        return [
            FormRow(ROW_TITLE, "text", SECTION_INFO, self._render_title),
            FormRow(ROW_COLOR, "disclosure", SECTION_INFO, self._render_color, self._activate_color),
            FormRow(ROW_GROUP, "disclosure", SECTION_INFO, self._render_group, self._activate_group),
            FormRow(
                ROW_DELETE,
                "action",
                SECTION_DELETE,
                self._render_delete,
                self.delete,
                destructive=True,
            ),
        ]

    def rows(self) -> List[FormRow]:
        return list(self._rows)

    def row(self, key: str) -> FormRow:
        for r in self._rows:
            if r.key == key:
                return r
        raise KeyError(key)

    def activate(self, key: str) -> None:
        """Activate a row by key. Rows without a handler (the title) ignore it."""
        handler = self.row(key).activate
        if handler is not None:
            handler()

    def _render_title(self) -> RowView:
        return RowView(label="Title", value=self.draft.title or "", hint="Track name")

    def _render_color(self) -> RowView:
        entry = palette_entry(self.draft.color, self._palette)
        value = entry.label if entry is not None else self.draft.color
        return RowView(label="Change color", value=value, swatch=self.draft.color)

    def _render_group(self) -> RowView:
        return RowView(label="Group", value=self.draft.group_title or "")

    def _render_delete(self) -> RowView:
        return RowView(label="Delete track")

    # --- Draft edits ---------------------------------------------------------

    def set_title(self, text: str) -> None:
        self.draft.title = text

    def _activate_color(self) -> None:
        if self._host is not None:
            self._host.present_color_picker(self.draft.color, self.apply_color)

    def _activate_group(self) -> None:
        if self._host is not None:
            self._host.present_group_picker(
                self.draft.group_id, self.draft.group_title, self.apply_group
            )

    def apply_color(self, value: Optional[str]) -> bool:
        """
        Apply a color picker result. `None` means the picker was cancelled.

        Returns True when the draft changed.
        """
        if value is None:
            return False
        self.draft.color = normalize_color(value)
        self._refresh(ROW_COLOR)
        return True

    def apply_group(self, choice: Optional[GroupChoice]) -> bool:
        """
        Apply a group picker result. `None` means the picker was cancelled.

        Group id and title are replaced together.
        """
        if choice is None:
            return False
        if not any(g.id == choice.group_id for g in self._manager.list_groups()):
            raise GroupNotFoundError(choice.group_id)
        self.draft = replace(self.draft, group_id=choice.group_id, group_title=choice.title)
        self._refresh(ROW_GROUP)
        return True

    def _refresh(self, key: str) -> None:
        if self._host is not None:
            self._host.refresh_row(key)

    # --- Exits ---------------------------------------------------------------

    def _ensure_open(self) -> None:
        if self._closed:
            raise FormClosedError(f"Edit form for track {self.track_id!r} is already closed")

    def _close(self) -> None:
        self._closed = True
        if self._host is not None:
            self._host.close_form()

    def save(self) -> None:
        self._ensure_open()
        d = self.draft
        self._manager.update_track(self.track_id, d.group_id, d.color, d.title or "")
        logger.debug("Saved edit form for track %s", self.track_id)
        self._on_complete(True)
        self._close()

    def delete(self) -> None:
        self._ensure_open()
        self._manager.delete_track(self.track_id)
        logger.debug("Deleted track %s from edit form", self.track_id)
        self._close()

    def cancel(self) -> None:
        self._ensure_open()
        logger.debug("Cancelled edit form for track %s", self.track_id)
        self._on_complete(False)
        self._close()
