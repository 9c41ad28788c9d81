from typing import Any, Dict, List

from core.constants import DAILY_GOALS
from core.context import AppContext

def list_daily_goals(ctx: AppContext, date_iso: str) -> List[Dict[str, Any]]:
    return ctx.cache.fetch((DAILY_GOALS, date_iso), lambda: ctx.backend.select(
        DAILY_GOALS, filters={"date": date_iso}, order=[("priority", 1), ("created_at", 1)],
    ))

def create_daily_goal(ctx: AppContext, title: str, priority: int, date_iso: str) -> Dict[str, Any]:
    return ctx.backend.insert(DAILY_GOALS, {
        "title": title.strip(), "priority": int(priority), "date": date_iso, "completed": False,
    })

def set_daily_goal_completed(ctx: AppContext, goal_id: str, completed: bool) -> Dict[str, Any]:
    return ctx.backend.update(DAILY_GOALS, goal_id, {"completed": bool(completed)})

def delete_daily_goal(ctx: AppContext, goal_id: str):
    ctx.backend.delete(DAILY_GOALS, goal_id)
