"""Helpers shared by CLI commands."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from ridgeline.core.config import RidgelineConfig
from ridgeline.core.manager import BookmarksManager
from ridgeline.errors import RidgelineError

console = Console()


@dataclass
class CliState:
    config: RidgelineConfig = field(default_factory=RidgelineConfig)


def state_from(ctx: typer.Context) -> CliState:
    obj = ctx.obj if ctx is not None else None
    return obj if isinstance(obj, CliState) else CliState()


def open_library(library: Optional[Path], cfg: RidgelineConfig) -> BookmarksManager:
    """Resolve the library path (argument, then config) and load it."""
    path = library or cfg.library_path
    if path is None:
        console.print("[bold red]❌ Error:[/] No library file given")
        console.print("[dim]Pass a LIBRARY path or set library_path in the config file[/]")
        raise typer.Exit(1)
    try:
        return BookmarksManager.load(path)
    except RidgelineError as e:
        console.print(f"[bold red]❌ Error:[/] {e}")
        raise typer.Exit(1)
