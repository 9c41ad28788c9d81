from datetime import date
from typing import Any, Dict, List, Optional

from core.constants import GOALS, TIME_ENTRIES
from core.context import AppContext

GOAL_FIELDS = ("title", "category", "daily_target_minutes")

def list_time_entries(ctx: AppContext) -> List[Dict[str, Any]]:
    """Full log, newest day first, each row carrying its goal."""
    return ctx.cache.fetch((TIME_ENTRIES, "log"), lambda: ctx.backend.select(
        TIME_ENTRIES, order=[("date", -1), ("created_at", -1)],
        embed={"goal": (GOALS, "goal_id", GOAL_FIELDS)},
    ))

def list_entries_between(ctx: AppContext, start: date, end: date) -> List[Dict[str, Any]]:
    start_iso, end_iso = start.isoformat(), end.isoformat()
    return ctx.cache.fetch((TIME_ENTRIES, "range", start_iso, end_iso), lambda: ctx.backend.select(
        TIME_ENTRIES, filters={"date": {"$gte": start_iso, "$lte": end_iso}},
        order=[("date", 1), ("created_at", 1)],
        embed={"goal": (GOALS, "goal_id", GOAL_FIELDS)},
    ))

def create_time_entry(ctx: AppContext, goal_id: str, duration_minutes: int, date_iso: str,
                      notes: Optional[str] = None) -> Dict[str, Any]:
    return ctx.backend.insert(TIME_ENTRIES, {
        "goal_id": goal_id,
        "duration_minutes": max(1, int(duration_minutes)),
        "date": date_iso,
        "notes": (notes or "").strip() or None,
    })

def update_time_entry(ctx: AppContext, entry_id: str, goal_id: str, duration_minutes: int,
                      notes: Optional[str] = None) -> Dict[str, Any]:
    return ctx.backend.update(TIME_ENTRIES, entry_id, {
        "goal_id": goal_id,
        "duration_minutes": max(1, int(duration_minutes)),
        "notes": (notes or "").strip() or None,
    })
