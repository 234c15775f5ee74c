"""Edit-track form screen.

Renders a `TrackFormController` as a form: the title row is a text input,
disclosure rows (color, group) live in a table and open modal pickers, and
the destructive row is a button. The screen is the controller's `FormHost`.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import Screen
from textual.widgets import Button, DataTable, Footer, Input, Static

from ridgeline.core.colors import BOOKMARK_PALETTE, PaletteColor
from ridgeline.core.manager import TrackManagerProtocol
from ridgeline.core.track_form import (
    CompletionCallback,
    FormRow,
    GroupChoice,
    TrackFormController,
)
from ridgeline.tui.modals import ConfirmModal, InfoModal
from ridgeline.tui.models import VALUE_COLUMN_KEY, WidgetIds
from ridgeline.tui.pickers import ColorPickerModal, GroupPickerModal
from ridgeline.tui.shared import color_chip


logger = logging.getLogger(__name__)

OUTCOME_SAVED = "saved"
OUTCOME_CANCELLED = "cancelled"
OUTCOME_DELETED = "deleted"

LABEL_COLUMN_KEY = "label"


class EditTrackScreen(Screen[str]):
    """
    Form for a track's title, color and group.

    Dismisses with "saved", "cancelled" or "deleted". `on_complete` is called
    with True on save and False on cancel; delete does not call it.
    """

    AUTO_FOCUS = "#track_title_input"

    BINDINGS = [
        Binding("ctrl+s", "save", "Save"),
        Binding("escape", "cancel", "Cancel", key_display="Esc", priority=True),
    ]

    def __init__(
        self,
        manager: TrackManagerProtocol,
        track_id: str,
        on_complete: CompletionCallback,
        *,
        palette: Sequence[PaletteColor] = BOOKMARK_PALETTE,
        confirm_delete: bool = False,
    ) -> None:
        super().__init__(id=WidgetIds.EDIT_TRACK)
        self._manager = manager
        self._palette = tuple(palette)
        self._confirm_delete = confirm_delete
        self._outcome = OUTCOME_CANCELLED
        # Raises TrackNotFoundError for an unknown id; not handled here.
        self.controller = TrackFormController.open(
            manager, track_id, on_complete, host=self, palette=self._palette
        )

    @property
    def track_id(self) -> str:
        return self.controller.track_id

    # --- Layout --------------------------------------------------------------

    def compose(self) -> ComposeResult:
        with Vertical(id="edit_track_body"):
            yield Static("Track", classes="title")
            for row in self.controller.rows():
                if row.kind == "text":
                    view = row.render()
                    yield Static(view.label, classes="muted")
                    yield Input(value=view.value, placeholder=view.hint, id=WidgetIds.TITLE_INPUT)
            tbl = DataTable(id=WidgetIds.INFO_TABLE, cursor_type="row", show_header=False)
            tbl.add_column("", key=LABEL_COLUMN_KEY)
            tbl.add_column("", key=VALUE_COLUMN_KEY)
            yield tbl
            with Horizontal(id="edit_track_actions"):
                yield Button("Save", variant="primary", id=WidgetIds.SAVE_BTN)
                for row in self.controller.rows():
                    if row.kind == "action":
                        yield Button(
                            row.render().label,
                            variant="error" if row.destructive else "default",
                            id=WidgetIds.DELETE_BTN,
                        )
        yield Footer()

    def on_mount(self) -> None:
        tbl = self.query_one(f"#{WidgetIds.INFO_TABLE}", DataTable)
        for row in self.controller.rows():
            if row.kind == "disclosure":
                label, value = self._cells(row)
                tbl.add_row(label, value, key=row.key)
        self.query_one(f"#{WidgetIds.TITLE_INPUT}", Input).focus()
        self._trace("form_open", {})

    def _cells(self, row: FormRow) -> tuple[Text, Text]:
        view = row.render()
        label = color_chip(view.swatch, view.label) if view.swatch else Text(view.label, style="bold")
        value = Text(view.value)
        value.append("  ›", style="dim")
        return label, value

    # --- FormHost ------------------------------------------------------------

    def present_color_picker(
        self, initial_color: str, on_result: Callable[[Optional[str]], None]
    ) -> None:
        self._trace("color_picker_open", {"initial": initial_color})
        self.app.push_screen(ColorPickerModal(initial_color, palette=self._palette), on_result)

    def present_group_picker(
        self,
        initial_group_id: str,
        initial_title: Optional[str],
        on_result: Callable[[Optional[GroupChoice]], None],
    ) -> None:
        self._trace("group_picker_open", {"initial": initial_group_id})
        self.app.push_screen(
            GroupPickerModal(self._manager, initial_group_id, initial_title), on_result
        )

    def refresh_row(self, key: str) -> None:
        row = self.controller.row(key)
        label, value = self._cells(row)
        tbl = self.query_one(f"#{WidgetIds.INFO_TABLE}", DataTable)
        tbl.update_cell(key, LABEL_COLUMN_KEY, label)
        tbl.update_cell(key, VALUE_COLUMN_KEY, value)
        self._trace("row_refreshed", {"row": key})

    def close_form(self) -> None:
        self._trace("form_close", {"outcome": self._outcome})
        self.dismiss(self._outcome)

    # --- Events --------------------------------------------------------------

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == WidgetIds.TITLE_INPUT:
            self.controller.set_title(event.value)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == WidgetIds.TITLE_INPUT:
            self.query_one(f"#{WidgetIds.INFO_TABLE}", DataTable).focus()

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        if event.data_table.id != WidgetIds.INFO_TABLE:
            return
        self.controller.activate(str(event.row_key.value))

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == WidgetIds.SAVE_BTN:
            self.action_save()
        elif event.button.id == WidgetIds.DELETE_BTN:
            self.action_delete()

    # --- Actions -------------------------------------------------------------

    def action_save(self) -> None:
        if self.controller.closed:
            return
        self._commit(OUTCOME_SAVED, self.controller.save)

    def action_cancel(self) -> None:
        if self.controller.closed:
            return
        self._outcome = OUTCOME_CANCELLED
        self.controller.cancel()

    def action_delete(self) -> None:
        if self.controller.closed:
            return
        if not self._confirm_delete:
            self._delete()
            return

        def handle_confirm(yes: Optional[bool]) -> None:
            if yes:
                self._delete()

        self.app.push_screen(
            ConfirmModal(
                "Delete this track? This cannot be undone.",
                title="Delete track",
                confirm_label="Delete",
                cancel_label="Keep",
            ),
            handle_confirm,
        )

    def _delete(self) -> None:
        self._commit(OUTCOME_DELETED, self.controller.delete)

    def _commit(self, outcome: str, commit: Callable[[], None]) -> None:
        self._outcome = outcome
        try:
            commit()
        except OSError as e:
            # The form stays open with its draft; the user can retry or cancel.
            self._outcome = OUTCOME_CANCELLED
            logger.error("Could not write track %s: %s", self.track_id, e)
            self._trace("commit_failed", {"outcome": outcome, "error": str(e)})
            self.app.push_screen(InfoModal(f"Could not write the library: {e}", title="Not saved"))

    def _trace(self, event: str, data: dict) -> None:
        debug = getattr(self.app, "debug_log", None)
        if debug is not None:
            debug.log_form(event, self.controller, data)
