from typing import Any, Dict, List, Optional

from core.constants import GOALS, DEFAULT_DAILY_TARGET
from core.context import AppContext

def list_goals(ctx: AppContext, order: str = "priority") -> List[Dict[str, Any]]:
    return ctx.cache.fetch((GOALS, order), lambda: ctx.backend.select(GOALS, order=order))

def create_goal(ctx: AppContext, title: str, category: str, daily_target_minutes: int = DEFAULT_DAILY_TARGET,
                priority: int = 3, description: Optional[str] = None) -> Dict[str, Any]:
    return ctx.backend.insert(GOALS, {
        "title": title.strip(),
        "description": (description or "").strip() or None,
        "category": category.strip(),
        "daily_target_minutes": int(daily_target_minutes),
        "priority": int(priority),
    })

def delete_goal(ctx: AppContext, goal_id: str):
    # refused by the backend while time entries still reference the goal
    ctx.backend.delete(GOALS, goal_id)
