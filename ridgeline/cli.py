#!/usr/bin/env python3
"""
Ridgeline - track metadata editor
Main CLI entry point
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from ridgeline.commands import config_cmd, edit_cmd, tracks_cmd
from ridgeline.commands.shared import CliState
from ridgeline.core.config import load_config
from ridgeline.utils.logs import configure_logging

app = typer.Typer(
    name="ridgeline",
    help="Edit recorded GPS tracks: title, color and group",
    no_args_is_help=True,
    add_completion=True,
)

app.command(name="edit", help="Open the full-screen track editor")(edit_cmd.edit)
app.command(name="tracks", help="List tracks in a library")(tracks_cmd.tracks)

app.add_typer(config_cmd.app, name="config", help="Show configuration settings")


@app.callback()
def callback(
    ctx: typer.Context,
    config_file: Optional[Path] = typer.Option(
        None, "--config", help="Config file (default: ~/.ridgeline/config.yaml)"
    ),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help="Write logs to this file"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING, ERROR"),
) -> None:
    """
    Ridgeline - track metadata editor

    Commands:
      edit    - Browse tracks and edit title, color and group
      tracks  - Print the tracks in a library
      config  - Show configuration settings
    """
    cfg = load_config(config_file)
    configure_logging(log_level or cfg.log_level, log_file or cfg.log_file)
    ctx.obj = CliState(config=cfg)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
