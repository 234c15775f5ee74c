from __future__ import annotations

import asyncio
from pathlib import Path

from textual.widgets import DataTable, Input

from ridgeline.core.manager import BookmarksManager
from ridgeline.tui.app import RidgelineApp, TrackListScreen
from ridgeline.tui.edit_track import EditTrackScreen
from tests.tui_harness import (
    TRACK_CANYON,
    TRACK_LAKE,
    TRACK_RIDGE,
    RecordingManager,
    make_manager,
    row_keys,
    row_text,
)


class TestTrackList:
    def test_lists_all_tracks(self) -> None:
        async def _run() -> None:
            app = RidgelineApp(RecordingManager())
            async with app.run_test() as pilot:
                await pilot.pause()
                assert isinstance(app.screen, TrackListScreen)
                tbl = app.screen.query_one("#tracks_table", DataTable)
                assert row_keys(tbl) == [TRACK_RIDGE, TRACK_LAKE, TRACK_CANYON]
                name, color, group = row_text(tbl, TRACK_CANYON)
                assert name == "Canyon descent"
                assert "#123456" in color
                assert group == "Rides"

        asyncio.run(_run())

    def test_enter_opens_editor_and_list_refreshes_after_save(self) -> None:
        async def _run() -> None:
            mgr = RecordingManager()
            app = RidgelineApp(mgr)
            async with app.run_test() as pilot:
                await pilot.pause()
                await pilot.press("enter")
                await pilot.pause()
                editor = app.screen
                assert isinstance(editor, EditTrackScreen)
                assert editor.track_id == TRACK_RIDGE

                editor.query_one("#track_title_input", Input).value = "Ridge loop (long)"
                await pilot.pause()
                editor.action_save()
                await pilot.pause()

                assert isinstance(app.screen, TrackListScreen)
                tbl = app.screen.query_one("#tracks_table", DataTable)
                assert row_text(tbl, TRACK_RIDGE)[0] == "Ridge loop (long)"
                assert app.completions == [(TRACK_RIDGE, True)]

        asyncio.run(_run())

    def test_delete_from_editor_removes_row(self) -> None:
        async def _run() -> None:
            mgr = RecordingManager()
            app = RidgelineApp(mgr)
            async with app.run_test() as pilot:
                await pilot.pause()
                await pilot.press("down", "e")
                await pilot.pause()
                editor = app.screen
                assert isinstance(editor, EditTrackScreen)
                assert editor.track_id == TRACK_LAKE

                editor.action_delete()
                await pilot.pause()

                tbl = app.screen.query_one("#tracks_table", DataTable)
                assert row_keys(tbl) == [TRACK_RIDGE, TRACK_CANYON]
                assert app.completions == []

        asyncio.run(_run())

    def test_empty_library_message(self, tmp_path: Path) -> None:
        async def _run() -> None:
            app = RidgelineApp(BookmarksManager.load(tmp_path / "empty.json"))
            async with app.run_test() as pilot:
                await pilot.pause()
                assert app.screen.query_one("#tracks_table", DataTable).row_count == 0
                assert "No tracks" in app.screen.empty_message

        asyncio.run(_run())


class TestSingleTrackMode:
    def test_save_exits_with_outcome(self, tmp_path: Path) -> None:
        mgr = make_manager(tmp_path)

        async def _run() -> None:
            app = RidgelineApp(mgr, track_id=TRACK_CANYON)
            async with app.run_test() as pilot:
                await pilot.pause()
                assert isinstance(app.screen, EditTrackScreen)
                app.screen.controller.apply_color("#FFC800")
                await pilot.press("ctrl+s")
            assert app.return_value == "saved"

        asyncio.run(_run())
        reloaded = BookmarksManager.load(tmp_path / "library.json")
        assert reloaded.fetch_track(TRACK_CANYON).color == "#FFC800"

    def test_cancel_exits_with_outcome(self) -> None:
        mgr = RecordingManager()

        async def _run() -> None:
            app = RidgelineApp(mgr, track_id=TRACK_RIDGE)
            async with app.run_test() as pilot:
                await pilot.pause()
                await pilot.press("escape")
            assert app.return_value == "cancelled"
            assert app.completions == [(TRACK_RIDGE, False)]

        asyncio.run(_run())
        assert mgr.calls == []
