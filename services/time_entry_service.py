from datetime import datetime
from typing import Any, Mapping, Optional

from core.constants import TIME_ENTRIES
from core.context import AppContext
from core.errors import ValidationError
from data_access.time_entries_repo import create_time_entry, update_time_entry
from services.mutations import MutationResult, Notifier, run_mutation
from services.stopwatch import TrackerState, minutes_from_seconds
from services.validation import validate_goal_choice, validate_manual_time

def submit_time_entry(ctx: AppContext, notifier: Notifier, state: TrackerState,
                      form: Mapping[str, Any], date_iso: str,
                      now: Optional[datetime] = None) -> MutationResult:
    """Save the tracker form as a new entry, or as an update when editing.

    Raises ValidationError before any backend call when the form is incomplete.
    """
    if state.editing is not None:
        goal_id, minutes, notes = validate_manual_time(form)
        entry_id = state.editing["id"]
        res = run_mutation(
            ctx.cache, notifier,
            lambda: update_time_entry(ctx, entry_id, goal_id, minutes, notes),
            success="Time entry updated successfully", failure="Failed to update time entry",
            invalidate=[(TIME_ENTRIES,)],
        )
        if res.ok:
            state.cancel_edit()
        return res

    if state.manual:
        goal_id, minutes, notes = validate_manual_time(form)
    else:
        goal_id, notes = validate_goal_choice(form)
        elapsed = state.stopwatch.tick(now)
        if elapsed <= 0:
            raise ValidationError({"duration": "Timer duration must be greater than 0"})
        minutes = minutes_from_seconds(elapsed)

    res = run_mutation(
        ctx.cache, notifier,
        lambda: create_time_entry(ctx, goal_id, minutes, date_iso, notes),
        success="Time entry saved successfully", failure="Failed to save time entry",
        invalidate=[(TIME_ENTRIES,)],
    )
    if res.ok:
        state.reset()
    return res
