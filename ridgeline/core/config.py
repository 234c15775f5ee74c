"""
User configuration for Ridgeline.

Settings live in a YAML file, by default ~/.ridgeline/config.yaml. A missing,
empty or unreadable file falls back to defaults; an unreadable one also logs
a warning.

Example:

    library_path: ~/tracks/library.json
    confirm_delete: true
    log_level: INFO
    log_file: ~/.ridgeline/ridgeline.log
    palette:
      - {name: red, color: "#E51B23"}
      - {name: sky, color: "rgb(36,156,242)"}
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from ridgeline.core.colors import BOOKMARK_PALETTE, PaletteColor, palette_from_config
from ridgeline.errors import InvalidColorError


logger = logging.getLogger(__name__)

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def get_config_path() -> Path:
    """Get config file path in user home directory."""
    config_dir = Path.home() / ".ridgeline"
    config_dir.mkdir(exist_ok=True)
    return config_dir / "config.yaml"


@dataclass
class RidgelineConfig:
    library_path: Optional[Path] = None
    confirm_delete: bool = False
    log_level: str = "WARNING"
    log_file: Optional[Path] = None
    palette: Tuple[PaletteColor, ...] = BOOKMARK_PALETTE
    source_path: Optional[Path] = None
    raw: Dict[str, Any] = field(default_factory=dict)

    def summary(self) -> Dict[str, Any]:
        return {
            "config_file": str(self.source_path) if self.source_path else None,
            "library_path": str(self.library_path) if self.library_path else None,
            "confirm_delete": self.confirm_delete,
            "log_level": self.log_level,
            "log_file": str(self.log_file) if self.log_file else None,
            "palette_size": len(self.palette),
        }


def _opt_path(v: Any) -> Optional[Path]:
    if v is None or str(v).strip() == "":
        return None
    return Path(str(v)).expanduser()


def config_from_dict(data: Dict[str, Any], *, source_path: Optional[Path] = None) -> RidgelineConfig:
    """
    Build a config from parsed YAML.

    Unknown keys are kept in `raw` and otherwise ignored. Invalid values
    (bad log level, unparseable palette) fall back to defaults with a warning.
    """
    cfg = RidgelineConfig(source_path=source_path, raw=dict(data))
    cfg.library_path = _opt_path(data.get("library_path"))
    cfg.log_file = _opt_path(data.get("log_file"))
    cfg.confirm_delete = bool(data.get("confirm_delete", False))

    level = str(data.get("log_level") or "WARNING").upper()
    if level in VALID_LOG_LEVELS:
        cfg.log_level = level
    else:
        logger.warning("Ignoring unknown log_level %r in config", level)

    entries: List[Dict[str, Any]] = data.get("palette") or []
    if entries:
        try:
            cfg.palette = palette_from_config(entries)
        except (InvalidColorError, AttributeError) as e:
            logger.warning("Ignoring invalid palette in config: %s", e)
    return cfg


def load_config(config_path: Optional[Path] = None) -> RidgelineConfig:
    """
    Load configuration from file.

    Args:
        config_path: Path to a YAML config (defaults to ~/.ridgeline/config.yaml)
    """
    path = Path(config_path) if config_path is not None else get_config_path()
    if not path.exists():
        return RidgelineConfig(source_path=None)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (yaml.YAMLError, OSError) as e:
        logger.warning("Could not load config %s: %s", path, e)
        return RidgelineConfig(source_path=path)
    if not isinstance(data, dict):
        return RidgelineConfig(source_path=path)
    return config_from_dict(data, source_path=path)
