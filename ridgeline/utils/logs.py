"""Logging setup for the Ridgeline CLI and TUI."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "WARNING", log_file: Optional[Path] = None) -> None:
    """
    Configure the `ridgeline` logger.

    The TUI owns the terminal, so records only go to `log_file`. Without a
    file the logger gets a NullHandler and stays silent.
    """
    root = logging.getLogger("ridgeline")
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    root.setLevel(getattr(logging, str(level).upper(), logging.WARNING))

    if log_file is None:
        root.addHandler(logging.NullHandler())
        return

    p = Path(log_file).expanduser()
    p.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(p, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
