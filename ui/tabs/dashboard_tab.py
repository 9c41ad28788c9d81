from datetime import date

import streamlit as st

from core.context import AppContext
from core.errors import BackendError
from core.time_utils import fmt_duration
from services.analytics_service import today_summary
from services.mutations import Notifier
from ui.tabs.analytics_tab import load_week, render_analytics_tab
from ui.tabs.daily_goals_tab import render_daily_goals
from ui.tabs.journal_tab import render_journal_tab
from ui.tabs.timer_tab import render_timer_tab

def render_dashboard(ctx: AppContext, notifier: Notifier, today: date):
    today_iso = today.isoformat()
    try:
        entries, goals = load_week(ctx, today)
    except BackendError as e:
        st.error(f"Could not load today's numbers: {e.message}")
    else:
        summary = today_summary(entries, today_iso)
        m1, m2, m3 = st.columns(3)
        m1.metric("Logged today", fmt_duration(summary["minutes"]))
        m2.metric("Entries today", summary["entries"])
        m3.metric("Active goals", len(goals))

    render_analytics_tab(ctx, today)
    st.divider()
    left, right = st.columns(2)
    with left:
        render_journal_tab(ctx, notifier, today_iso)
    with right:
        render_daily_goals(ctx, notifier, today_iso)
    st.divider()
    render_timer_tab(ctx, notifier, today_iso, show_log=False)
