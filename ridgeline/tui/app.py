from __future__ import annotations

import logging
from typing import Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.screen import Screen
from textual.widgets import DataTable, Footer, Header, Static

from ridgeline.core.config import RidgelineConfig
from ridgeline.core.manager import TrackManagerProtocol
from ridgeline.tui.debug import DebugLogger
from ridgeline.tui.edit_track import EditTrackScreen
from ridgeline.tui.models import WidgetIds
from ridgeline.tui.shared import color_chip, cursor_row_key, move_cursor_to_key


logger = logging.getLogger(__name__)


class TrackListScreen(Screen[None]):
    """All tracks in the library; Enter opens the editor for the row under the cursor."""

    BINDINGS = [
        Binding("q", "app.quit", "Quit"),
        Binding("e", "edit", "Edit"),
    ]

    empty_message: str = ""

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static("", id=WidgetIds.TRACKS_EMPTY, classes="muted")
        tbl = DataTable(id=WidgetIds.TRACKS_TABLE, cursor_type="row")
        tbl.add_columns("Name", "Color", "Group")
        yield tbl
        yield Footer()

    def on_mount(self) -> None:
        self.refresh_tracks()
        self.query_one(f"#{WidgetIds.TRACKS_TABLE}", DataTable).focus()

    def on_screen_resume(self) -> None:
        if self.is_mounted:
            self.refresh_tracks()

    def refresh_tracks(self) -> None:
        app: RidgelineApp = self.app  # type: ignore[assignment]
        tbl = self.query_one(f"#{WidgetIds.TRACKS_TABLE}", DataTable)
        keep = cursor_row_key(tbl)
        tbl.clear()
        groups = {g.id: g.title for g in app.manager.list_groups()}
        tracks = app.manager.list_tracks()
        for t in tracks:
            tbl.add_row(t.name or "(untitled)", color_chip(t.color, t.color), groups.get(t.group_id, ""), key=t.id)
        if keep:
            move_cursor_to_key(tbl, keep)
        self.empty_message = "" if tracks else "No tracks in this library."
        self.query_one(f"#{WidgetIds.TRACKS_EMPTY}", Static).update(self.empty_message)

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        if event.data_table.id != WidgetIds.TRACKS_TABLE:
            return
        self.app.open_track_editor(str(event.row_key.value))  # type: ignore[attr-defined]

    def action_edit(self) -> None:
        tbl = self.query_one(f"#{WidgetIds.TRACKS_TABLE}", DataTable)
        key = cursor_row_key(tbl)
        if key:
            self.app.open_track_editor(key)  # type: ignore[attr-defined]


class RidgelineApp(App[Optional[str]]):
    """
    Ridgeline - track metadata editor.

    Shows the track list, or with `track_id` opens that track's editor
    directly and exits with the editor's outcome when it closes.
    """

    CSS_PATH = "theme.tcss"
    TITLE = "Ridgeline"

    def __init__(
        self,
        manager: TrackManagerProtocol,
        *,
        config: Optional[RidgelineConfig] = None,
        track_id: Optional[str] = None,
    ) -> None:
        super().__init__()
        self.manager = manager
        self.config = config or RidgelineConfig()
        self.single_track_id = track_id
        self.debug_log = DebugLogger(self)
        self.completions: list[tuple[str, bool]] = []

    def on_mount(self) -> None:
        if self.single_track_id is not None:
            self.open_track_editor(self.single_track_id)
        else:
            self.push_screen(TrackListScreen())

    def open_track_editor(self, track_id: str) -> None:
        def on_complete(ok: bool) -> None:
            self.completions.append((track_id, ok))
            logger.debug("Edit of track %s completed (success=%s)", track_id, ok)

        screen = EditTrackScreen(
            self.manager,
            track_id,
            on_complete,
            palette=self.config.palette,
            confirm_delete=self.config.confirm_delete,
        )
        self.push_screen(screen, self._on_editor_closed)

    def _on_editor_closed(self, outcome: Optional[str]) -> None:
        self.debug_log.log(event="editor_closed", data={"outcome": outcome})
        if self.single_track_id is not None:
            self.exit(outcome)
        elif outcome:
            self.notify(f"Track {outcome}.")

    def on_unmount(self) -> None:
        self.debug_log.close()
