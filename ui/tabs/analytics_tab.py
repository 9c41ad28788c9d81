from datetime import date

import plotly.express as px
import streamlit as st

from core.constants import GOALS, TIME_ENTRIES
from core.context import AppContext
from core.errors import BackendError
from core.time_utils import analytics_window, week_start_for
from data_access.goals_repo import list_goals
from data_access.time_entries_repo import list_entries_between
from services.analytics_service import daily_progress, goal_completion, category_distribution
from ui.components.loading import load

def load_week(ctx: AppContext, today: date):
    start, end = analytics_window(today)
    entries = load(ctx, (TIME_ENTRIES, "range", start.isoformat(), end.isoformat()),
                   lambda: list_entries_between(ctx, start, end), "Loading analytics...")
    goals = load(ctx, (GOALS, "priority"), lambda: list_goals(ctx))
    return entries, goals

def render_analytics_tab(ctx: AppContext, today: date):
    st.subheader("📊 Analytics")
    try:
        entries, goals = load_week(ctx, today)
    except BackendError as e:
        st.error(f"Could not load analytics: {e.message}")
        return

    week_start = week_start_for(today)
    dfp = daily_progress(entries, week_start)
    with st.container(border=True):
        st.markdown("**Daily Progress**")
        fig = px.bar(dfp, x="day", y=["actual", "target"], barmode="group",
                     labels={"value": "Minutes", "day": "", "variable": ""},
                     color_discrete_map={"actual": "#3B82F6", "target": "#93C5FD"})
        fig.update_layout(height=320, margin=dict(t=10, b=10))
        st.plotly_chart(fig, use_container_width=True)

    c1, c2 = st.columns(2)
    with c1, st.container(border=True):
        st.markdown("**Goal Completion (%)**")
        dfg = goal_completion(goals, entries)
        if dfg.empty:
            st.info("No goals yet.")
        else:
            st.dataframe(
                dfg[["goal", "percentage"]], hide_index=True, use_container_width=True,
                column_config={"goal": "Goal", "percentage": st.column_config.ProgressColumn(
                    "Completion", format="%.0f%%", min_value=0, max_value=100)},
            )
    with c2, st.container(border=True):
        st.markdown("**Time by Category**")
        dfc = category_distribution(entries)
        if dfc.empty:
            st.info("No time logged in this window.")
        else:
            fig = px.pie(dfc, names="category", values="minutes", hole=0.0)
            fig.update_traces(texttemplate="%{label}: %{value}m")
            fig.update_layout(height=300, margin=dict(t=10, b=10))
            st.plotly_chart(fig, use_container_width=True)
