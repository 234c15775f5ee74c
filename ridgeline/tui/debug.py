"""Form event trace for the TUI.

Set RIDGELINE_TUI_DEBUG to keep recent events in memory, or
RIDGELINE_TUI_DEBUG_FILE to also append them to a file as NDJSON. Events
raised by the edit form carry a snapshot of the draft, so a trace shows
what the form held at each step and what it committed.
"""

from __future__ import annotations

import json
import logging
import os
import time
from collections import deque
from dataclasses import asdict, dataclass, field
from typing import Any, Deque, Dict, List, Optional, TextIO

from ridgeline.core.track_form import TrackFormController


logger = logging.getLogger(__name__)

ENV_TRACE = "RIDGELINE_TUI_DEBUG"
ENV_TRACE_FILE = "RIDGELINE_TUI_DEBUG_FILE"


@dataclass
class TraceEvent:
    event: str
    screen: str
    data: Dict[str, Any]
    draft: Optional[Dict[str, Any]] = None
    t: float = field(default_factory=time.time)


def draft_snapshot(controller: TrackFormController) -> Dict[str, Any]:
    d = controller.draft
    return {
        "track_id": controller.track_id,
        "title": d.title,
        "color": d.color,
        "group_id": d.group_id,
        "group_title": d.group_title,
        "closed": controller.closed,
    }


class DebugLogger:
    """Collects `TraceEvent`s for one app run."""

    def __init__(self, app, *, max_events: int = 250) -> None:
        self.app = app
        self._events: Deque[TraceEvent] = deque(maxlen=max_events)
        self._file: Optional[TextIO] = None
        self._file_path: Optional[str] = None

    @staticmethod
    def enabled() -> bool:
        return bool(os.getenv(ENV_TRACE) or os.getenv(ENV_TRACE_FILE))

    def log(self, *, event: str, data: Optional[Dict[str, Any]] = None) -> None:
        self._record(event, data, None)

    def log_form(
        self, event: str, controller: TrackFormController, data: Optional[Dict[str, Any]] = None
    ) -> None:
        """Record an edit-form event together with the form's current draft."""
        if self.enabled():
            self._record(event, data, draft_snapshot(controller))

    def _record(
        self, event: str, data: Optional[Dict[str, Any]], draft: Optional[Dict[str, Any]]
    ) -> None:
        if not self.enabled():
            return
        stack = self.app.screen_stack
        rec = TraceEvent(
            event=event,
            screen=type(stack[-1]).__name__ if stack else "",
            data=dict(data or {}),
            draft=draft,
        )
        self._events.append(rec)
        path = os.getenv(ENV_TRACE_FILE)
        if path:
            self._stream(path, rec)

    def _stream(self, path: str, rec: TraceEvent) -> None:
        try:
            if self._file is None or self._file_path != path:
                self.close()
                self._file = open(path, "a", encoding="utf-8")
                self._file_path = path
            self._file.write(json.dumps(asdict(rec), ensure_ascii=False) + "\n")
            self._file.flush()
        except OSError as e:
            # Tracing must not take the editor down with it.
            logger.warning("Could not write trace file %s: %s", path, e)
            self.close()

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
        self._file = None
        self._file_path = None

    @property
    def debug_events(self) -> List[Dict[str, Any]]:
        return [asdict(e) for e in self._events]
