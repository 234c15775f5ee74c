"""Modal pickers used by the edit-track form.

Both pickers dismiss with the selected value, or with None when cancelled.
"""

from __future__ import annotations

from typing import Optional, Sequence

from textual.app import ComposeResult
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import DataTable, Input, Static

from ridgeline.core.colors import (
    BOOKMARK_PALETTE,
    PaletteColor,
    closest_palette_color,
    normalize_color,
)
from ridgeline.core.manager import TrackManagerProtocol
from ridgeline.core.track_form import GroupChoice
from ridgeline.errors import InvalidColorError
from ridgeline.tui.modals import InfoModal, NewGroupModal
from ridgeline.tui.models import NEW_GROUP_ROW_KEY, WidgetIds
from ridgeline.tui.shared import color_chip, cursor_row_key, move_cursor_to_key


class ColorPickerModal(ModalScreen[Optional[str]]):
    """
    Palette table plus a free-form hex field.

    Enter on a palette row applies that color; Enter in the custom field
    applies the typed color when it parses. Esc cancels.
    """

    AUTO_FOCUS = "#palette_table"

    def __init__(
        self,
        initial_color: str,
        *,
        palette: Sequence[PaletteColor] = BOOKMARK_PALETTE,
        title: str = "Track color",
    ) -> None:
        super().__init__()
        self._initial = normalize_color(initial_color)
        self._palette = list(palette)
        self._title = title
        self._filter: str = ""
        self.error_message: str = ""

    @property
    def initial_color(self) -> str:
        return self._initial

    def compose(self) -> ComposeResult:
        with Vertical(id=WidgetIds.COLOR_MODAL):
            yield Static(self._title, classes="title")
            yield Static(color_chip(self._initial, f"Current: {self._initial}"), classes="muted")
            yield Input(placeholder="Filter colors…", id=WidgetIds.COLOR_SEARCH)
            tbl = DataTable(id=WidgetIds.PALETTE_TABLE, cursor_type="row")
            tbl.add_columns("Color", "Hex")
            yield tbl
            yield Input(placeholder="Custom color (#RRGGBB)", id=WidgetIds.COLOR_CUSTOM)
            yield Static("", id="color_error", classes="error")
            yield Static("Enter: apply  Esc: cancel  /: filter", classes="muted")

    def on_mount(self) -> None:
        self._refresh_table()
        tbl = self.query_one(f"#{WidgetIds.PALETTE_TABLE}", DataTable)
        if self._palette:
            move_cursor_to_key(tbl, closest_palette_color(self._initial, self._palette).hex)
        tbl.focus()

    def _refresh_table(self) -> None:
        tbl = self.query_one(f"#{WidgetIds.PALETTE_TABLE}", DataTable)
        tbl.clear()
        q = (self._filter or "").strip().lower()
        seen: set[str] = set()
        for p in self._palette:
            if q and q not in p.name.lower() and q not in p.hex.lower():
                continue
            if p.hex in seen:
                continue
            seen.add(p.hex)
            tbl.add_row(color_chip(p.hex, p.label), p.hex, key=p.hex)

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id != WidgetIds.COLOR_SEARCH:
            return
        self._filter = event.value or ""
        self._refresh_table()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == WidgetIds.COLOR_SEARCH:
            tbl = self.query_one(f"#{WidgetIds.PALETTE_TABLE}", DataTable)
            key = cursor_row_key(tbl)
            if key:
                self.dismiss(key)
            return
        if event.input.id == WidgetIds.COLOR_CUSTOM:
            try:
                color = normalize_color(event.value)
            except InvalidColorError as e:
                self.error_message = str(e)
                self.query_one("#color_error", Static).update(self.error_message)
                return
            self.dismiss(color)

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        if event.data_table.id != WidgetIds.PALETTE_TABLE:
            return
        rgb = str(event.row_key.value or "")
        if rgb:
            self.dismiss(rgb)

    def on_key(self, event) -> None:  # type: ignore[override]
        key = str(getattr(event, "key", "") or "")
        if key in ("/", "slash"):
            self.query_one(f"#{WidgetIds.COLOR_SEARCH}", Input).focus()
            event.stop()
            return
        if key == "escape":
            self.dismiss(None)
            event.stop()


class GroupPickerModal(ModalScreen[Optional[GroupChoice]]):
    """
    Lists every group with a check mark on the current one, plus a trailing
    "New group…" row that creates a group through the manager.
    """

    AUTO_FOCUS = "#group_table"

    def __init__(
        self,
        manager: TrackManagerProtocol,
        initial_group_id: str,
        initial_title: Optional[str] = None,
    ) -> None:
        super().__init__()
        self._manager = manager
        self._initial_group_id = initial_group_id
        self._initial_title = initial_title

    def compose(self) -> ComposeResult:
        with Vertical(id=WidgetIds.GROUP_MODAL):
            yield Static("Select group", classes="title")
            yield Static(f"Current: {self._initial_title or ''}", classes="muted")
            tbl = DataTable(id=WidgetIds.GROUP_TABLE, cursor_type="row")
            tbl.add_columns("", "Group", "Tracks")
            yield tbl
            yield Static("Enter: select  Esc: cancel", classes="muted")

    def on_mount(self) -> None:
        self._refresh_table()
        tbl = self.query_one(f"#{WidgetIds.GROUP_TABLE}", DataTable)
        move_cursor_to_key(tbl, self._initial_group_id)
        tbl.focus()

    def _refresh_table(self) -> None:
        tbl = self.query_one(f"#{WidgetIds.GROUP_TABLE}", DataTable)
        tbl.clear()
        counts: dict[str, int] = {}
        for t in self._manager.list_tracks():
            counts[t.group_id] = counts.get(t.group_id, 0) + 1
        for g in self._manager.list_groups():
            mark = "✓" if g.id == self._initial_group_id else ""
            tbl.add_row(mark, g.title, str(counts.get(g.id, 0)), key=g.id)
        tbl.add_row("+", "New group…", "", key=NEW_GROUP_ROW_KEY)

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        if event.data_table.id != WidgetIds.GROUP_TABLE:
            return
        key = str(event.row_key.value or "")
        if key == NEW_GROUP_ROW_KEY:
            self._create_group()
            return
        for g in self._manager.list_groups():
            if g.id == key:
                self.dismiss(GroupChoice(group_id=g.id, title=g.title))
                return

    def _create_group(self) -> None:
        def handle_group_name(name: Optional[str]) -> None:
            if not name:
                return
            try:
                group = self._manager.create_group(name)
            except OSError as e:
                self.app.push_screen(InfoModal(f"Could not create group: {e}", title="Not saved"))
                return
            self.dismiss(GroupChoice(group_id=group.id, title=group.title))

        titles = [g.title for g in self._manager.list_groups()]
        self.app.push_screen(NewGroupModal(existing_titles=titles), handle_group_name)

    def on_key(self, event) -> None:  # type: ignore[override]
        if event.key == "escape":
            self.dismiss(None)
            event.stop()
