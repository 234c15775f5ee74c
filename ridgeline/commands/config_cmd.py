"""Config command for Ridgeline CLI."""

import typer
from rich.console import Console

from ridgeline.commands.shared import state_from
from ridgeline.core.config import get_config_path
from ridgeline.tui.shared import color_chip

app = typer.Typer()
console = Console()


@app.command("show")
def show(ctx: typer.Context):
    """Show current configuration."""
    cfg = state_from(ctx).config
    summary = cfg.summary()

    console.print("\n[bold]Current Configuration:[/]")
    console.print(f"  Config file: [cyan]{summary['config_file'] or '(defaults)'}[/]")
    console.print(f"  Library: [cyan]{summary['library_path'] or '(not set)'}[/]")
    console.print(f"  Confirm delete: [cyan]{'Enabled' if summary['confirm_delete'] else 'Disabled'}[/]")
    console.print(f"  Log level: [cyan]{summary['log_level']}[/]")
    console.print(f"  Log file: [cyan]{summary['log_file'] or '(none)'}[/]")

    console.print(f"\n[bold]Palette ({summary['palette_size']} colors):[/]")
    for p in cfg.palette:
        console.print("  ", color_chip(p.hex, p.label), f" [dim]{p.hex}[/]", sep="")
    console.print()


@app.command("path")
def path():
    """Print the default config file location."""
    console.print(str(get_config_path()))
