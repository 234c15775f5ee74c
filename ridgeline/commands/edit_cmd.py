"""
Textual full-screen editor entrypoint.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from ridgeline.commands.shared import console, open_library, state_from
from ridgeline.errors import TrackNotFoundError


def edit(
    ctx: typer.Context,
    library: Optional[Path] = typer.Argument(None, help="Library file (JSON)"),
    track: Optional[str] = typer.Option(None, "--track", "-t", help="Open this track's editor directly"),
) -> None:
    """Launch the Ridgeline track editor."""
    cfg = state_from(ctx).config
    manager = open_library(library, cfg)

    if track is not None:
        # The editor treats an unknown id as a programming error, so check here.
        try:
            manager.fetch_track(track)
        except TrackNotFoundError as e:
            console.print(f"[bold red]❌ Error:[/] {e}")
            raise typer.Exit(1)

    try:
        from ridgeline.tui.app import RidgelineApp
    except Exception as e:  # pragma: no cover
        raise typer.Exit(f"Failed to import TUI dependencies: {e}")

    outcome = RidgelineApp(manager, config=cfg, track_id=track).run()
    if track is not None and outcome:
        console.print(f"Track {track}: {outcome}")
