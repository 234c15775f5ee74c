"""
Track color parsing and the bookmark color palette.

Tracks store their color as an opaque sRGB hex string ("#RRGGBB"). Alpha is
not supported; any alpha component in the input is dropped.

The palette is what the color picker offers by default. Colors outside the
palette are still valid track colors (the picker accepts a custom hex value).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple

import re

from ridgeline.errors import InvalidColorError


_RGB_REGEX = re.compile(r"^rgba?\s*\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*(?:,\s*[\d.]+\s*)?\)$")
_HEX_REGEX = re.compile(r"^#?([0-9a-fA-F]{6})(?:[0-9a-fA-F]{2})?$")


def to_hex(r: int, g: int, b: int) -> str:
    return f"#{r:02X}{g:02X}{b:02X}"


@dataclass(frozen=True)
class PaletteColor:
    """A named palette entry."""

    name: str
    r: int
    g: int
    b: int

    @property
    def hex(self) -> str:
        return to_hex(self.r, self.g, self.b)

    @property
    def label(self) -> str:
        return self.name.replace("-", " ").capitalize()


BOOKMARK_PALETTE: Tuple[PaletteColor, ...] = (
    PaletteColor("red", 229, 27, 35),
    PaletteColor("pink", 255, 65, 130),
    PaletteColor("purple", 155, 36, 178),
    PaletteColor("deep-purple", 102, 57, 191),
    PaletteColor("blue", 0, 102, 204),
    PaletteColor("light-blue", 36, 156, 242),
    PaletteColor("cyan", 20, 190, 205),
    PaletteColor("teal", 0, 165, 140),
    PaletteColor("green", 60, 140, 60),
    PaletteColor("lime", 147, 191, 57),
    PaletteColor("yellow", 255, 200, 0),
    PaletteColor("orange", 255, 150, 0),
    PaletteColor("deep-orange", 240, 100, 50),
    PaletteColor("brown", 128, 70, 51),
    PaletteColor("gray", 115, 115, 115),
    PaletteColor("blue-gray", 89, 115, 128),
)

DEFAULT_TRACK_COLOR = BOOKMARK_PALETTE[0].hex


def parse_color(color_str: str) -> Tuple[int, int, int]:
    """
    Parse a color string to an RGB tuple.

    Supports:
    - Hex: #FF0000, #ff0000, FF0000 (an 8-digit #RRGGBBAA has its alpha dropped)
    - RGB: rgb(255, 0, 0)
    - RGBA: rgba(255, 0, 0, 1)

    Raises:
        InvalidColorError: if the string is empty, malformed, or a component
            is outside 0-255.

    Example:
        >>> parse_color("#00FF00")
        (0, 255, 0)
        >>> parse_color("rgba(8, 122, 255, 0.5)")
        (8, 122, 255)
    """
    s = (color_str or "").strip()
    if not s:
        raise InvalidColorError("Empty color value")

    m = _HEX_REGEX.match(s)
    if m:
        h = m.group(1)
        return (int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16))

    m = _RGB_REGEX.match(s.lower())
    if m:
        r, g, b = (int(x) for x in m.groups())
        if any(c > 255 for c in (r, g, b)):
            raise InvalidColorError(f"Color component out of range: {color_str!r}")
        return (r, g, b)

    raise InvalidColorError(f"Unrecognized color: {color_str!r}")


def normalize_color(color_str: str) -> str:
    """Parse any supported color string and return it as "#RRGGBB"."""
    return to_hex(*parse_color(color_str))


def is_valid_color(color_str: str) -> bool:
    try:
        parse_color(color_str)
    except InvalidColorError:
        return False
    return True


def closest_palette_color(
    color_str: str, palette: Optional[Iterable[PaletteColor]] = None
) -> PaletteColor:
    """
    Find the closest palette entry using squared Euclidean distance in RGB space.

    Used to place the picker cursor when a track's color is not a palette color.
    """
    r, g, b = parse_color(color_str)
    best: Optional[PaletteColor] = None
    best_dist: Optional[int] = None
    for p in palette or BOOKMARK_PALETTE:
        dr = r - p.r
        dg = g - p.g
        db = b - p.b
        dist = (dr * dr) + (dg * dg) + (db * db)
        if best is None or best_dist is None or dist < best_dist:
            best = p
            best_dist = dist
    if best is None:
        raise InvalidColorError("Palette is empty")
    return best


def palette_entry(
    color_str: str, palette: Sequence[PaletteColor] = BOOKMARK_PALETTE
) -> Optional[PaletteColor]:
    """The palette entry with exactly this color, if any."""
    rgb = parse_color(color_str)
    for p in palette:
        if rgb == (p.r, p.g, p.b):
            return p
    return None


def color_name(color_str: str, palette: Sequence[PaletteColor] = BOOKMARK_PALETTE) -> str:
    """
    Human-readable name of a color, or "custom" if it is not a palette color.
    """
    entry = palette_entry(color_str, palette)
    return entry.name if entry is not None else "custom"


def palette_from_config(entries: Sequence[dict]) -> Tuple[PaletteColor, ...]:
    """
    Build a palette from config entries of the form {"name": ..., "color": ...}.

    Raises:
        InvalidColorError: if an entry's color does not parse.
    """
    out = []
    for entry in entries:
        name = str(entry.get("name") or "").strip()
        color = str(entry.get("color") or "")
        r, g, b = parse_color(color)
        out.append(PaletteColor(name or to_hex(r, g, b), r, g, b))
    return tuple(out)
