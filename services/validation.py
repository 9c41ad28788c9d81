"""Client-side form rules.

Each ``validate_*`` takes the raw form values and returns the cleaned values,
or raises ``ValidationError`` with one message per failing field. Nothing in
here talks to the backend.
"""
import re
from typing import Any, Dict, Mapping, Optional, Tuple

from core.constants import MOODS, GOAL_PRIORITIES, DAILY_PRIORITIES
from core.errors import ValidationError

EMAIL_RE = re.compile(r"^[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}$", re.IGNORECASE)
MIN_PASSWORD = 6

def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())

def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    try:
        f = float(str(value).strip())
    except (TypeError, ValueError):
        return None
    return int(f) if f.is_integer() else None

def _text(form: Mapping[str, Any], field: str) -> str:
    return str(form.get(field) or "").strip()

def _required(errors: Dict[str, str], form: Mapping[str, Any], field: str, message: str) -> bool:
    if _blank(form.get(field)):
        errors[field] = message
        return False
    return True

def _bounded(errors: Dict[str, str], form: Mapping[str, Any], field: str, required_msg: str,
             lo: Optional[int] = None, hi: Optional[int] = None,
             lo_msg: str = "", hi_msg: str = "") -> Optional[int]:
    if not _required(errors, form, field, required_msg):
        return None
    n = _as_int(form.get(field))
    if n is None:
        errors[field] = "Must be a whole number"
    elif lo is not None and n < lo:
        errors[field] = lo_msg
    elif hi is not None and n > hi:
        errors[field] = hi_msg
    else:
        return n
    return None

def validate_goal(form: Mapping[str, Any]) -> Dict[str, Any]:
    errors: Dict[str, str] = {}
    _required(errors, form, "title", "Title is required")
    _required(errors, form, "category", "Category is required")
    target = _bounded(errors, form, "daily_target_minutes", "Daily target is required",
                      lo=1, lo_msg="Must be at least 1 minute")
    priority = _bounded(errors, form, "priority", "Priority is required",
                        lo=min(GOAL_PRIORITIES), hi=max(GOAL_PRIORITIES),
                        lo_msg="Priority must be between 1 and 5", hi_msg="Priority must be between 1 and 5")
    if errors:
        raise ValidationError(errors)
    return {
        "title": _text(form, "title"),
        "description": _text(form, "description") or None,
        "category": _text(form, "category"),
        "daily_target_minutes": target,
        "priority": priority,
    }

def validate_manual_time(form: Mapping[str, Any]) -> Tuple[str, int, Optional[str]]:
    """-> (goal_id, total minutes, notes)"""
    errors: Dict[str, str] = {}
    _required(errors, form, "goal_id", "Please select a goal")
    hours = _bounded(errors, form, "hours", "Hours is required",
                     lo=0, lo_msg="Hours must be 0 or greater")
    minutes = _bounded(errors, form, "minutes", "Minutes is required",
                       lo=0, hi=59, lo_msg="Minutes must be 0 or greater",
                       hi_msg="Minutes must be less than 60")
    if errors:
        raise ValidationError(errors)
    total = hours * 60 + minutes
    if total <= 0:
        raise ValidationError({"duration": "Please enter a valid time"})
    return _text(form, "goal_id"), total, _text(form, "notes") or None

def validate_goal_choice(form: Mapping[str, Any]) -> Tuple[str, Optional[str]]:
    errors: Dict[str, str] = {}
    _required(errors, form, "goal_id", "Please select a goal")
    if errors:
        raise ValidationError(errors)
    return _text(form, "goal_id"), _text(form, "notes") or None

def validate_daily_goal(form: Mapping[str, Any]) -> Dict[str, Any]:
    errors: Dict[str, str] = {}
    _required(errors, form, "title", "Please enter a goal")
    priority = _bounded(errors, form, "priority", "Please select priority",
                        lo=min(DAILY_PRIORITIES), hi=max(DAILY_PRIORITIES),
                        lo_msg="Please select priority", hi_msg="Please select priority")
    if errors:
        raise ValidationError(errors)
    return {"title": _text(form, "title"), "priority": priority}

def validate_journal(form: Mapping[str, Any]) -> Dict[str, str]:
    errors: Dict[str, str] = {}
    if _text(form, "mood") not in MOODS:
        errors["mood"] = "Please select your mood"
    _required(errors, form, "reflection", "Please write your reflection")
    if errors:
        raise ValidationError(errors)
    return {"mood": _text(form, "mood"), "reflection": _text(form, "reflection")}

def _email(errors: Dict[str, str], form: Mapping[str, Any]):
    if _required(errors, form, "email", "Email is required") and not EMAIL_RE.match(_text(form, "email")):
        errors["email"] = "Invalid email address"

def _password(errors: Dict[str, str], form: Mapping[str, Any], field: str, required_msg: str):
    if _required(errors, form, field, required_msg) and len(str(form.get(field))) < MIN_PASSWORD:
        errors[field] = f"Password must be at least {MIN_PASSWORD} characters"

def validate_credentials(form: Mapping[str, Any]) -> Tuple[str, str]:
    errors: Dict[str, str] = {}
    _email(errors, form)
    _password(errors, form, "password", "Password is required")
    if errors:
        raise ValidationError(errors)
    return _text(form, "email"), str(form["password"])

def validate_password_reset(form: Mapping[str, Any]) -> Tuple[str, str]:
    errors: Dict[str, str] = {}
    _email(errors, form)
    _password(errors, form, "new_password", "New password is required")
    _password(errors, form, "confirm_password", "Please confirm your password")
    if errors:
        raise ValidationError(errors)
    if form["new_password"] != form["confirm_password"]:
        raise ValidationError({"confirm_password": "Passwords do not match"})
    return _text(form, "email"), str(form["new_password"])
