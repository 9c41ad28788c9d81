from datetime import datetime, timedelta, timezone, date
from typing import Tuple
import pytz

from core.config import APP_TZ, WEEK_STARTS_ON

TZ = pytz.timezone(APP_TZ)

WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]

def utc_now_naive() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)

def now_local() -> datetime:
    return datetime.now(TZ)

def week_start_for(d: date, starts_on: str = WEEK_STARTS_ON) -> date:
    first = WEEKDAYS.index(starts_on) if starts_on in WEEKDAYS else 6
    return d - timedelta(days=(d.weekday() - first) % 7)

def analytics_window(today: date, starts_on: str = WEEK_STARTS_ON) -> Tuple[date, date]:
    """[7 days before this week's start, today]"""
    return week_start_for(today, starts_on) - timedelta(days=7), today

def day_label(d: date) -> str:
    return d.strftime("%a")

def fmt_duration(minutes: int) -> str:
    return f"{int(minutes) // 60}h {int(minutes) % 60}m"

def fmt_elapsed(seconds: int) -> str:
    seconds = max(0, int(seconds))
    return f"{seconds // 3600:02d}:{seconds % 3600 // 60:02d}:{seconds % 60:02d}"
