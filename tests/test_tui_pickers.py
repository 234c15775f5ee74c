"""Tests for the color/group pickers and the new-group dialog in isolation."""

from __future__ import annotations

import asyncio
from typing import Any, List

from textual.app import App
from textual.widgets import Button, DataTable, Input

from ridgeline.core.colors import PaletteColor
from ridgeline.core.track_form import GroupChoice
from ridgeline.tui.modals import ConfirmModal, NewGroupModal
from ridgeline.tui.pickers import ColorPickerModal, GroupPickerModal
from ridgeline.tui.shared import validate_group_name
from tests.tui_harness import GROUP_RIDES, RecordingManager, row_keys


class PickerHost(App):
    """Pushes one modal on mount and records what it dismisses with."""

    def __init__(self, modal) -> None:
        super().__init__()
        self._modal = modal
        self.results: List[Any] = []

    def on_mount(self) -> None:
        self.push_screen(self._modal, self.results.append)


class TestColorPicker:
    def test_cursor_starts_on_closest_palette_color(self) -> None:
        async def _run() -> None:
            app = PickerHost(ColorPickerModal("#0167CB"))
            async with app.run_test() as pilot:
                await pilot.pause()
                tbl = app.screen.query_one("#palette_table", DataTable)
                assert row_keys(tbl)[tbl.cursor_row] == "#0066CC"  # blue
                await pilot.press("enter")
                await pilot.pause()
                assert app.results == ["#0066CC"]

        asyncio.run(_run())

    def test_filter_narrows_palette(self) -> None:
        async def _run() -> None:
            app = PickerHost(ColorPickerModal("#E51B23"))
            async with app.run_test() as pilot:
                await pilot.pause()
                app.screen.query_one("#color_search", Input).value = "blue"
                await pilot.pause()
                tbl = app.screen.query_one("#palette_table", DataTable)
                assert row_keys(tbl) == ["#0066CC", "#249CF2", "#597380"]

        asyncio.run(_run())

    def test_filter_enter_applies_cursor_row(self) -> None:
        async def _run() -> None:
            app = PickerHost(ColorPickerModal("#E51B23"))
            async with app.run_test() as pilot:
                await pilot.pause()
                await pilot.press("slash")
                await pilot.pause()
                assert getattr(app.focused, "id", None) == "color_search"
                await pilot.press(*"teal")
                await pilot.press("enter")
                await pilot.pause()
                assert app.results == ["#00A58C"]

        asyncio.run(_run())

    def test_invalid_custom_color_shows_error(self) -> None:
        async def _run() -> None:
            app = PickerHost(ColorPickerModal("#E51B23"))
            async with app.run_test() as pilot:
                await pilot.pause()
                custom = app.screen.query_one("#color_custom", Input)
                custom.focus()
                await pilot.pause()
                await pilot.press(*"zzz", "enter")
                await pilot.pause()
                assert app.results == []
                assert "Unrecognized color" in app.screen.error_message

        asyncio.run(_run())

    def test_custom_palette_skips_duplicate_colors(self) -> None:
        palette = [PaletteColor("a", 1, 2, 3), PaletteColor("b", 1, 2, 3), PaletteColor("c", 9, 9, 9)]

        async def _run() -> None:
            app = PickerHost(ColorPickerModal("#010203", palette=palette))
            async with app.run_test() as pilot:
                await pilot.pause()
                tbl = app.screen.query_one("#palette_table", DataTable)
                assert row_keys(tbl) == ["#010203", "#090909"]

        asyncio.run(_run())

    def test_escape_returns_none(self) -> None:
        async def _run() -> None:
            app = PickerHost(ColorPickerModal("#E51B23"))
            async with app.run_test() as pilot:
                await pilot.pause()
                await pilot.press("escape")
                await pilot.pause()
                assert app.results == [None]

        asyncio.run(_run())


class TestGroupPicker:
    def test_lists_groups_with_track_counts(self) -> None:
        async def _run() -> None:
            mgr = RecordingManager()
            app = PickerHost(GroupPickerModal(mgr, GROUP_RIDES, "Rides"))
            async with app.run_test() as pilot:
                await pilot.pause()
                tbl = app.screen.query_one("#group_table", DataTable)
                rows = [[str(c) for c in tbl.get_row(k)] for k in row_keys(tbl)]
                assert rows == [
                    ["", "Hikes", "2"],
                    ["✓", "Rides", "1"],
                    ["+", "New group…", ""],
                ]
                assert tbl.cursor_row == 1
                await pilot.press("enter")
                await pilot.pause()
                assert app.results == [GroupChoice(group_id=GROUP_RIDES, title="Rides")]

        asyncio.run(_run())

    def test_new_group_cancel_returns_to_picker(self) -> None:
        async def _run() -> None:
            mgr = RecordingManager()
            picker = GroupPickerModal(mgr, GROUP_RIDES, "Rides")
            app = PickerHost(picker)
            async with app.run_test() as pilot:
                await pilot.pause()
                await pilot.press("down", "enter")
                await pilot.pause()
                assert isinstance(app.screen, NewGroupModal)
                await pilot.press("escape")
                await pilot.pause()
                assert app.screen is picker
                assert app.results == []
                assert len(mgr.list_groups()) == 2

        asyncio.run(_run())

    def test_new_group_rejects_duplicate_name(self) -> None:
        async def _run() -> None:
            mgr = RecordingManager()
            app = PickerHost(GroupPickerModal(mgr, GROUP_RIDES, "Rides"))
            async with app.run_test() as pilot:
                await pilot.pause()
                await pilot.press("down", "enter")
                await pilot.pause()
                modal = app.screen
                modal.query_one("#new_group_input", Input).value = "hikes"
                await pilot.press("enter")
                await pilot.pause()
                assert app.screen is modal
                assert "already exists" in modal.error_message
                assert len(mgr.list_groups()) == 2

        asyncio.run(_run())


class TestConfirmModal:
    def test_enter_on_initial_focus_keeps(self) -> None:
        async def _run() -> None:
            app = PickerHost(ConfirmModal("Delete?", confirm_label="Delete", cancel_label="Keep"))
            async with app.run_test() as pilot:
                await pilot.pause()
                assert getattr(app.focused, "id", None) == "confirm_no_btn"
                await pilot.press("enter")
                await pilot.pause()
                assert app.results == [False]

        asyncio.run(_run())

    def test_y_key_and_confirm_button_answer_yes(self) -> None:
        async def _run() -> None:
            app = PickerHost(ConfirmModal("Delete?"))
            async with app.run_test() as pilot:
                await pilot.pause()
                await pilot.press("y")
                await pilot.pause()
                app.push_screen(ConfirmModal("Again?"), app.results.append)
                await pilot.pause()
                app.screen.query_one("#confirm_yes_btn", Button).press()
                await pilot.pause()
                assert app.results == [True, True]

        asyncio.run(_run())


class TestValidateGroupName:
    def test_valid(self) -> None:
        assert validate_group_name("Winter", ["Hikes"]) == (True, None)

    def test_empty(self) -> None:
        ok, err = validate_group_name("   ")
        assert not ok
        assert "empty" in (err or "")

    def test_surrounding_spaces(self) -> None:
        ok, err = validate_group_name(" Winter")
        assert not ok
        assert "spaces" in (err or "")

    def test_duplicate_is_case_insensitive(self) -> None:
        ok, err = validate_group_name("RIDES", ["Hikes", "Rides"])
        assert not ok
        assert "Rides" in (err or "")
