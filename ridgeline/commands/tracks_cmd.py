"""Tracks listing command."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from ridgeline.commands.shared import console, open_library, state_from
from ridgeline.core.colors import color_name, parse_color


def tracks(
    ctx: typer.Context,
    library: Optional[Path] = typer.Argument(None, help="Library file (JSON)"),
    group: Optional[str] = typer.Option(None, "--group", "-g", help="Only tracks in this group (id or title)"),
) -> None:
    """List tracks with their color and group."""
    cfg = state_from(ctx).config
    manager = open_library(library, cfg)

    groups = {g.id: g for g in manager.list_groups()}
    rows = manager.list_tracks()
    if group:
        rows = [
            t for t in rows
            if t.group_id == group or (t.group_id in groups and groups[t.group_id].title == group)
        ]

    table = Table(title=f"Tracks ({len(rows)})")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="bold")
    table.add_column("Color")
    table.add_column("Group", style="cyan")
    for t in rows:
        r, g, b = parse_color(t.color)
        swatch = f"[rgb({r},{g},{b})]■[/] {t.color} ({color_name(t.color)})"
        grp = groups.get(t.group_id)
        table.add_row(t.id, t.name, swatch, grp.title if grp else "")
    console.print(table)
