"""Chart data derived from already-fetched rows.

Pure functions: nothing here queries the backend or mutates its inputs. Time
entries are expected to carry their goal under ``entry["goal"]`` (title,
category, daily_target_minutes), or ``None`` when the goal is gone.
"""
from datetime import date, timedelta
from typing import Any, Dict, List, Sequence

import numpy as np
import pandas as pd

from core.constants import UNCATEGORIZED
from core.time_utils import day_label

ENTRY_COLS = ["date", "goal_id", "duration_minutes", "category", "target"]

def safe_div(n, d, default=0.0):
    try:
        if d in (0, None):
            return default
        return float(n) / float(d)
    except (TypeError, ValueError):
        return default

def entries_frame(entries: Sequence[Dict[str, Any]]) -> pd.DataFrame:
    rows = []
    for e in entries:
        g = e.get("goal") or {}
        rows.append({
            "date": e.get("date"),
            "goal_id": e.get("goal_id"),
            "duration_minutes": int(e.get("duration_minutes") or 0),
            "category": g.get("category") or UNCATEGORIZED,
            "target": g.get("daily_target_minutes"),
        })
    return pd.DataFrame(rows, columns=ENTRY_COLS)

def daily_progress(entries: Sequence[Dict[str, Any]], week_start: date) -> pd.DataFrame:
    """Seven rows from ``week_start``: minutes logged vs. that day's target.

    The target is the daily target of whichever goal the day's first entry
    belongs to, or 0 for a day without entries.
    """
    df = entries_frame(entries)
    actual = df.groupby("date")["duration_minutes"].sum()
    first = df.drop_duplicates("date", keep="first").set_index("date")["target"]
    out = []
    for i in range(7):
        d = week_start + timedelta(days=i)
        key = d.isoformat()
        tgt = first.get(key)
        out.append({
            "day": day_label(d),
            "date": key,
            "actual": int(actual.get(key, 0)),
            "target": int(tgt) if tgt is not None and not pd.isna(tgt) else 0,
        })
    return pd.DataFrame(out, columns=["day", "date", "actual", "target"])

def goal_completion(goals: Sequence[Dict[str, Any]], entries: Sequence[Dict[str, Any]]) -> pd.DataFrame:
    """Share of each goal's weekly target (7 x daily) reached, 0-100."""
    totals = entries_frame(entries).groupby("goal_id")["duration_minutes"].sum()
    out = []
    for g in goals:
        minutes = int(totals.get(g["id"], 0))
        weekly = int(g.get("daily_target_minutes") or 0) * 7
        pct = float(np.clip(safe_div(minutes, weekly) * 100.0, 0.0, 100.0))
        out.append({"goal": g.get("title", g["id"]), "goal_id": g["id"], "minutes": minutes, "percentage": pct})
    return pd.DataFrame(out, columns=["goal", "goal_id", "minutes", "percentage"])

def category_distribution(entries: Sequence[Dict[str, Any]]) -> pd.DataFrame:
    df = entries_frame(entries)
    grouped = df.groupby("category", sort=True)["duration_minutes"].sum()
    out = pd.DataFrame({"category": grouped.index.astype(str), "minutes": grouped.values.astype(int)})
    return out.reset_index(drop=True)

def today_summary(entries: Sequence[Dict[str, Any]], today_iso: str) -> Dict[str, int]:
    todays: List[Dict[str, Any]] = [e for e in entries if e.get("date") == today_iso]
    return {
        "minutes": sum(int(e.get("duration_minutes") or 0) for e in todays),
        "entries": len(todays),
        "goals": len({e.get("goal_id") for e in todays}),
    }
