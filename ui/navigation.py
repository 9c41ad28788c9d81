import streamlit as st

from core.constants import VIEWS, DEFAULT_VIEW

VIEW_KEY = "active_view"
# session keys owned by a single view; dropped when the view is left
VIEW_LOCAL_KEYS = ("tracker", "tracker_prefill", "forgot_password")

def _leave_view():
    for k in VIEW_LOCAL_KEYS:
        st.session_state.pop(k, None)

def active_view() -> str:
    if st.session_state.get(VIEW_KEY) not in VIEWS:
        st.session_state[VIEW_KEY] = DEFAULT_VIEW
    return st.session_state[VIEW_KEY]

def render_navigation() -> str:
    active_view()
    st.sidebar.radio("Navigate", list(VIEWS), format_func=VIEWS.get, key=VIEW_KEY,
                     on_change=_leave_view, label_visibility="collapsed")
    return st.session_state[VIEW_KEY]
