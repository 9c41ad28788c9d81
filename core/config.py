import os
from typing import Any, Optional

import streamlit as st


def _secret(name: str) -> Optional[str]:
    # st.secrets raises when no secrets.toml exists; env vars still apply then.
    try:
        val = st.secrets.get(name)
    except Exception:
        return None
    return str(val) if val is not None else None


def setting(name: str, default: Any = None) -> Any:
    """secrets.toml first, then the environment, then the default."""
    val = _secret(name) or os.getenv(name) or os.getenv(name.lower())
    if val is None or not str(val).strip():
        return default
    return str(val).strip()


def int_setting(name: str, default: int) -> int:
    try:
        return int(setting(name, default))
    except (TypeError, ValueError):
        return default


APP_TITLE = setting("APP_TITLE", "Goal Time Tracker")
PAGE_ICON = setting("PAGE_ICON", "🎯")

MONGO_URI = setting("MONGO_URI", "")
DB_NAME = setting("DB_NAME", "goal_tracker")

APP_TZ = setting("APP_TZ", "UTC")
WEEK_STARTS_ON = setting("WEEK_STARTS_ON", "sunday").lower()

CACHE_TTL_SECONDS = int_setting("CACHE_TTL_SECONDS", 5)
QUERY_RETRIES = int_setting("QUERY_RETRIES", 3)
LOG_LEVEL = setting("LOG_LEVEL", "INFO").upper()
