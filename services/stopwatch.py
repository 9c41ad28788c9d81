import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from core.time_utils import now_local

IDLE = "idle"
RUNNING = "running"

STOPWATCH = "stopwatch"
MANUAL = "manual"

def round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))

def minutes_from_seconds(seconds: float) -> int:
    return max(1, round_half_up(seconds / 60.0))

def split_minutes(duration_minutes: int):
    """90 -> (1, 30)"""
    return int(duration_minutes) // 60, int(duration_minutes) % 60


@dataclass
class Stopwatch:
    state: str = IDLE
    started_at: Optional[datetime] = None
    elapsed_seconds: int = 0

    @property
    def running(self) -> bool:
        return self.state == RUNNING

    def start(self, now: Optional[datetime] = None):
        if self.running:
            return
        self.started_at = now or now_local()
        self.elapsed_seconds = 0
        self.state = RUNNING

    def tick(self, now: Optional[datetime] = None) -> int:
        if self.running and self.started_at is not None:
            diff = ((now or now_local()) - self.started_at).total_seconds()
            self.elapsed_seconds = max(0, int(math.floor(diff)))
        return self.elapsed_seconds

    def stop(self, now: Optional[datetime] = None) -> int:
        # keeps the value on screen so it can still be submitted
        self.tick(now)
        self.state = IDLE
        return self.elapsed_seconds

    def reset(self):
        self.state = IDLE
        self.started_at = None
        self.elapsed_seconds = 0


@dataclass
class TrackerState:
    """Per-session state of the time tracker view."""
    stopwatch: Stopwatch = field(default_factory=Stopwatch)
    mode: str = STOPWATCH
    editing: Optional[Dict[str, Any]] = None

    @property
    def manual(self) -> bool:
        return self.mode == MANUAL

    def toggle(self, now: Optional[datetime] = None):
        """Start/pause button."""
        if self.stopwatch.running:
            self.stopwatch.stop(now)
        else:
            self.mode = STOPWATCH
            self.stopwatch.start(now)

    def switch_mode(self):
        self.mode = STOPWATCH if self.manual else MANUAL
        self.stopwatch.reset()
        if not self.manual:
            self.editing = None

    def begin_edit(self, entry: Dict[str, Any]) -> Dict[str, Any]:
        """Switch to manual mode and return the prefilled form values."""
        self.editing = entry
        self.mode = MANUAL
        self.stopwatch.reset()
        hours, minutes = split_minutes(entry["duration_minutes"])
        return {"goal_id": entry["goal_id"], "notes": entry.get("notes") or "",
                "hours": hours, "minutes": minutes}

    def cancel_edit(self):
        self.editing = None

    def reset(self):
        self.stopwatch.reset()
        self.mode = STOPWATCH
        self.editing = None
