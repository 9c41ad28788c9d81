import streamlit as st

from core.constants import GOALS, GOAL_PRIORITIES, DEFAULT_DAILY_TARGET
from core.context import AppContext
from core.errors import BackendError, ValidationError
from data_access.goals_repo import list_goals, create_goal, delete_goal
from services.mutations import Notifier, run_mutation
from services.validation import validate_goal
from ui.components.forms import fkey, reset_form, show_errors
from ui.components.loading import load

FORM = "goal"

def render_goals_tab(ctx: AppContext, notifier: Notifier):
    st.header("🎯 Goals")

    with st.expander("➕ Add Goal", expanded=False):
        _render_goal_form(ctx, notifier)

    try:
        goals = load(ctx, (GOALS, "priority"), lambda: list_goals(ctx), "Loading goals...")
    except BackendError as e:
        st.error(f"Could not load goals: {e.message}")
        return

    if not goals:
        st.info("No goals yet. Add one to start tracking time against it.")
        return

    for g in goals:
        with st.container(border=True):
            left, right = st.columns([0.85, 0.15])
            with left:
                st.markdown(f"**{g['title']}**")
                if g.get("description"):
                    st.caption(g["description"])
                st.caption(f"🏷️ {g['category']} • ⏱️ {g['daily_target_minutes']} minutes daily • Priority: {g['priority']}")
            with right:
                if st.button("🗑️", key=f"del_goal_{g['id']}", help="Delete goal"):
                    run_mutation(
                        ctx.cache, notifier, lambda gid=g["id"]: delete_goal(ctx, gid),
                        success="Goal deleted successfully", failure="Failed to delete goal",
                        invalidate=[(GOALS,)],
                    )
                    st.rerun()

def _render_goal_form(ctx: AppContext, notifier: Notifier):
    with st.form(fkey(FORM, "form")):
        title = st.text_input("Title", key=fkey(FORM, "title"))
        description = st.text_area("Description", height=80, key=fkey(FORM, "description"))
        c1, c2 = st.columns(2)
        with c1:
            target = st.number_input("Daily Target (minutes)", min_value=0, value=DEFAULT_DAILY_TARGET,
                                     step=5, key=fkey(FORM, "target"))
        with c2:
            priority = st.selectbox("Priority", list(GOAL_PRIORITIES), format_func=GOAL_PRIORITIES.get,
                                    key=fkey(FORM, "priority"))
        category = st.text_input("Category", placeholder="e.g., Work, Study, Health", key=fkey(FORM, "category"))
        submitted = st.form_submit_button("Create Goal", type="primary")

    if not submitted:
        return
    try:
        clean = validate_goal({
            "title": title, "description": description, "category": category,
            "daily_target_minutes": target, "priority": priority,
        })
    except ValidationError as err:
        show_errors(err)
        return
    res = run_mutation(
        ctx.cache, notifier, lambda: create_goal(ctx, **clean),
        success="Goal created successfully", failure="Failed to create goal",
        invalidate=[(GOALS,)],
    )
    if res.ok:
        reset_form(FORM)
    st.rerun()
