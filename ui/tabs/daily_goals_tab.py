import streamlit as st

from core.constants import DAILY_GOALS, DAILY_PRIORITIES
from core.context import AppContext
from core.errors import BackendError, ValidationError
from data_access.daily_goals_repo import (
    list_daily_goals, create_daily_goal, set_daily_goal_completed, delete_daily_goal
)
from services.mutations import Notifier, run_mutation
from services.validation import validate_daily_goal
from ui.components.forms import fkey, reset_form, show_errors
from ui.components.loading import load

FORM = "daily_goal"
PRIORITY_BADGE = {1: "🔴 High", 2: "🟡 Medium", 3: "🟢 Low"}

def render_daily_goals(ctx: AppContext, notifier: Notifier, today: str):
    st.subheader("✅ Today's Goals")

    with st.form(fkey(FORM, "form")):
        c1, c2, c3 = st.columns([0.6, 0.25, 0.15])
        title = c1.text_input("Goal", placeholder="Add a new daily goal...", key=fkey(FORM, "title"),
                              label_visibility="collapsed")
        priority = c2.selectbox("Priority", list(DAILY_PRIORITIES), format_func=DAILY_PRIORITIES.get,
                                key=fkey(FORM, "priority"), label_visibility="collapsed")
        submitted = c3.form_submit_button("➕", use_container_width=True)

    if submitted:
        try:
            clean = validate_daily_goal({"title": title, "priority": priority})
        except ValidationError as err:
            show_errors(err)
        else:
            res = run_mutation(
                ctx.cache, notifier, lambda: create_daily_goal(ctx, clean["title"], clean["priority"], today),
                success="Daily goal added", failure="Failed to add daily goal",
                invalidate=[(DAILY_GOALS,)],
            )
            if res.ok:
                reset_form(FORM)
            st.rerun()

    try:
        items = load(ctx, (DAILY_GOALS, today), lambda: list_daily_goals(ctx, today))
    except BackendError as e:
        st.error(f"Could not load today's goals: {e.message}")
        return

    if not items:
        st.caption("Nothing on today's list yet.")
        return

    for item in items:
        c1, c2, c3 = st.columns([0.7, 0.18, 0.12])
        key = f"dg_done_{item['id']}"
        c1.checkbox(item["title"], value=bool(item.get("completed")), key=key,
                    on_change=_set_completed, args=(ctx, notifier, item["id"], key))
        c2.caption(PRIORITY_BADGE.get(item["priority"], "Unknown"))
        if c3.button("🗑️", key=f"dg_del_{item['id']}", help="Remove"):
            run_mutation(
                ctx.cache, notifier, lambda i=item["id"]: delete_daily_goal(ctx, i),
                success="Daily goal removed", failure="Failed to remove daily goal",
                invalidate=[(DAILY_GOALS,)],
            )
            st.rerun()

def _set_completed(ctx: AppContext, notifier: Notifier, item_id: str, key: str):
    # a failed write drops the widget state so the box falls back to the stored value
    done = st.session_state[key]
    res = run_mutation(
        ctx.cache, notifier, lambda: set_daily_goal_completed(ctx, item_id, done),
        failure="Failed to update daily goal", invalidate=[(DAILY_GOALS,)],
    )
    if not res.ok:
        del st.session_state[key]
