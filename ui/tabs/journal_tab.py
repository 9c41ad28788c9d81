import streamlit as st

from core.constants import JOURNAL_ENTRIES, MOODS
from core.context import AppContext
from core.errors import BackendError, ValidationError
from data_access.journal_repo import get_journal_entry, save_journal_entry
from services.mutations import Notifier, run_mutation
from services.validation import validate_journal
from ui.components.forms import fkey, reset_form, show_errors
from ui.components.loading import load

FORM = "journal"

def render_journal_tab(ctx: AppContext, notifier: Notifier, today: str):
    st.subheader("📓 Daily Journal")

    try:
        entry = load(ctx, (JOURNAL_ENTRIES, today), lambda: get_journal_entry(ctx, today))
    except BackendError as e:
        st.error(f"Could not load today's journal: {e.message}")
        return

    entry = entry or {}
    moods = list(MOODS)
    with st.form(fkey(FORM, "form")):
        mood = st.selectbox(
            "How are you feeling today?", moods, format_func=MOODS.get,
            index=moods.index(entry["mood"]) if entry.get("mood") in MOODS else None,
            placeholder="Select your mood", key=fkey(FORM, "mood"),
        )
        reflection = st.text_area(
            "Daily Reflection", value=entry.get("reflection", ""), height=140,
            placeholder="Write your thoughts, achievements, and areas for improvement...",
            key=fkey(FORM, "reflection"),
        )
        submitted = st.form_submit_button("💾 Save Journal Entry", use_container_width=True)

    if not submitted:
        return
    try:
        clean = validate_journal({"mood": mood, "reflection": reflection})
    except ValidationError as err:
        show_errors(err)
        return
    res = run_mutation(
        ctx.cache, notifier, lambda: save_journal_entry(ctx, today, clean["mood"], clean["reflection"]),
        success="Journal entry saved", failure="Failed to save journal entry",
        invalidate=[(JOURNAL_ENTRIES,)],
    )
    if res.ok:
        reset_form(FORM)
    st.rerun()
