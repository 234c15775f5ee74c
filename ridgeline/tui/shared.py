"""Shared helpers for TUI screens."""

from __future__ import annotations

from typing import Iterable, Optional

from rich.text import Text
from textual.widgets import DataTable
from textual.widgets.data_table import CellDoesNotExist, RowDoesNotExist

from ridgeline.core.colors import parse_color


def validate_group_name(name: str, existing: Iterable[str] = ()) -> tuple[bool, Optional[str]]:
    """
    Validate a new group name.

    Returns:
        (is_valid, error_message) - error_message is None if valid
    """
    if not name or not name.strip():
        return False, "Group name cannot be empty"

    if name != name.strip():
        return False, "Group name cannot start or end with spaces"

    lowered = name.casefold()
    for other in existing:
        if (other or "").casefold() == lowered:
            return False, f"A group named '{other}' already exists"

    return True, None


def color_chip(color: str, label: str = "") -> Text:
    """A colored square followed by an optional bold label."""
    r, g, b = parse_color(color)
    chip = Text("■ ", style=f"rgb({r},{g},{b})")
    if label:
        chip.append(label, style="bold")
    return chip


def cursor_row_key(table: DataTable) -> Optional[str]:
    """Key of the row under the cursor, or None when the table is empty."""
    if not table.row_count:
        return None
    try:
        row_key, _ = table.coordinate_to_cell_key(table.cursor_coordinate)
    except CellDoesNotExist:
        return None
    return row_key.value


def move_cursor_to_key(table: DataTable, key: str) -> bool:
    """Put the table cursor on the row with `key`. Returns False if absent."""
    try:
        idx = table.get_row_index(key)
    except RowDoesNotExist:
        return False
    table.move_cursor(row=idx)
    return True
