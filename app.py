import logging

import streamlit as st

from core.auth import AuthClient
from core.backend import Backend
from core.cache import QueryCache
from core.config import APP_TITLE, PAGE_ICON, CACHE_TTL_SECONDS, QUERY_RETRIES, LOG_LEVEL
from core.context import AppContext
from core.db import get_db
from core.time_utils import now_local
from services.auth_service import bind_cache
from ui.components.notify import StreamlitNotifier, render_flash
from ui.navigation import render_navigation
from ui.tabs.analytics_tab import render_analytics_tab
from ui.tabs.dashboard_tab import render_dashboard
from ui.tabs.goals_tab import render_goals_tab
from ui.tabs.journal_tab import render_journal_tab
from ui.tabs.login_tab import render_login, render_reset_form
from ui.tabs.timer_tab import render_timer_tab, tick_if_running
from ui.theme import THEME_KEY, apply_theme, theme_button

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger("goal_tracker")

st.set_page_config(page_title=APP_TITLE, page_icon=PAGE_ICON, layout="wide")

def _session_context() -> AppContext:
    """One auth session and query cache per browser session."""
    if "ctx" not in st.session_state:
        db = get_db()
        auth = AuthClient(db)
        cache = QueryCache(ttl=CACHE_TTL_SECONDS, retries=QUERY_RETRIES)
        bind_cache(auth, cache)
        st.session_state.ctx = AppContext(backend=Backend(db, auth), cache=cache)
    return st.session_state.ctx

ctx = _session_context()
notifier = StreamlitNotifier()
apply_theme()
render_flash()

# Auth gate
if ctx.user is None:
    render_login(ctx.auth, notifier)
    st.stop()

today = now_local().date()

# Shell
head_l, head_r1, head_r2 = st.columns([0.84, 0.08, 0.08])
with head_l:
    st.title(f"{PAGE_ICON} {APP_TITLE}")
    st.caption(f"Signed in as **{ctx.user['email']}** • {today.strftime('%A, %d %B %Y')}")
with head_r1:
    theme_button()
with head_r2:
    if st.button("🚪", key="logout", help="Sign out"):
        ctx.auth.sign_out()
        for k in [k for k in st.session_state if k not in ("ctx", THEME_KEY)]:
            del st.session_state[k]
        st.rerun()

view = render_navigation()
with st.sidebar.expander("🔑 Change password", expanded=False):
    render_reset_form(ctx.auth, notifier, form="change_password")

if view == "dashboard":
    render_dashboard(ctx, notifier, today)
elif view == "goals":
    render_goals_tab(ctx, notifier)
elif view == "time":
    render_timer_tab(ctx, notifier, today.isoformat())
elif view == "journal":
    render_journal_tab(ctx, notifier, today.isoformat())
elif view == "analytics":
    render_analytics_tab(ctx, today)

tick_if_running()
