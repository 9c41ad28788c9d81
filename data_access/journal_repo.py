from typing import Any, Dict, Optional

from core.constants import JOURNAL_ENTRIES
from core.context import AppContext

def get_journal_entry(ctx: AppContext, date_iso: str) -> Optional[Dict[str, Any]]:
    # None means nothing written for that day yet
    return ctx.cache.fetch((JOURNAL_ENTRIES, date_iso), lambda: ctx.backend.select_one(
        JOURNAL_ENTRIES, filters={"date": date_iso},
    ))

def save_journal_entry(ctx: AppContext, date_iso: str, mood: str, reflection: str) -> Dict[str, Any]:
    return ctx.backend.upsert(
        JOURNAL_ENTRIES,
        {"date": date_iso, "mood": mood, "reflection": reflection.strip()},
        on_conflict=("date",),
    )
