"""
In-memory data model for Ridgeline.

A `Library` is the user's collection of groups (folders) and the recorded
tracks filed in them. Every track belongs to exactly one group.

Track geometry is carried along untouched; nothing in the editor reads it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


TrackPoint = Tuple[float, float, Optional[float], Optional[int]]
"""
TrackPoint: (lon, lat, ele_m, epoch_ms)
"""


@dataclass
class Group:
    id: str
    title: str
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass
class Track:
    id: str
    name: str
    color: str  # "#RRGGBB"
    group_id: str
    points: List[TrackPoint] = field(default_factory=list)
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass
class Library:
    """
    Canonical representation of a user's bookmark library.
    """

    groups: List[Group] = field(default_factory=list)
    tracks: List[Track] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    def get_group(self, group_id: str) -> Optional[Group]:
        for g in self.groups:
            if g.id == group_id:
                return g
        return None

    def get_track(self, track_id: str) -> Optional[Track]:
        for t in self.tracks:
            if t.id == track_id:
                return t
        return None
