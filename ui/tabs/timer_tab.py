import time
import streamlit as st

from core.constants import TIME_ENTRIES, GOALS
from core.context import AppContext
from core.errors import BackendError, ValidationError
from core.time_utils import fmt_duration, fmt_elapsed, now_local
from data_access.goals_repo import list_goals
from data_access.time_entries_repo import list_time_entries
from services.mutations import Notifier
from services.stopwatch import TrackerState
from services.time_entry_service import submit_time_entry
from ui.components.forms import fkey, reset_form, show_errors
from ui.components.loading import load

FORM = "tracker"

def tracker_state() -> TrackerState:
    if "tracker" not in st.session_state:
        st.session_state.tracker = TrackerState()
    return st.session_state.tracker

def tick_if_running():
    """Re-run the page in a second while the stopwatch runs; idle stops the loop."""
    tracker = st.session_state.get("tracker")
    if tracker is not None and tracker.stopwatch.running:
        time.sleep(1)
        st.rerun()

def render_timer_tab(ctx: AppContext, notifier: Notifier, today: str, show_log: bool = True):
    st.subheader("⏱️ Time Tracker")
    tracker = tracker_state()
    tracker.stopwatch.tick(now_local())

    try:
        goals = load(ctx, (GOALS, "title"), lambda: list_goals(ctx, order="title"), "Loading goals...")
    except BackendError as e:
        st.error(f"Could not load goals: {e.message}")
        return
    if not goals:
        st.info("Create a goal first to log time against it.")
        return

    titles = {g["id"]: g["title"] for g in goals}
    prefill = st.session_state.get("tracker_prefill") or {}
    goal_ids = list(titles)

    if tracker.editing is not None:
        st.caption(f"✏️ Editing entry from {tracker.editing['date']}")

    goal_id = st.selectbox(
        "Select Goal", goal_ids, format_func=titles.get,
        index=goal_ids.index(prefill["goal_id"]) if prefill.get("goal_id") in titles else None,
        placeholder="Select a goal...", key=fkey(FORM, "goal"),
    )
    notes = st.text_area("Notes (optional)", value=prefill.get("notes", ""), height=80, key=fkey(FORM, "notes"))

    hours = minutes = None
    if tracker.manual:
        c1, c2 = st.columns(2)
        hours = c1.number_input("Hours", min_value=0, value=int(prefill.get("hours", 0)), step=1,
                                key=fkey(FORM, "hours"))
        minutes = c2.number_input("Minutes", min_value=0, max_value=59, value=int(prefill.get("minutes", 0)),
                                  step=1, key=fkey(FORM, "minutes"))
    else:
        st.markdown(
            f"""<div style="font-size:2.6rem;font-weight:700;font-family:monospace;letter-spacing:1px;">
            {fmt_elapsed(tracker.stopwatch.elapsed_seconds)}</div>""",
            unsafe_allow_html=True,
        )

    b1, b2, b3, b4 = st.columns(4)
    if not tracker.manual:
        if b1.button("⏸️ Pause" if tracker.stopwatch.running else "▶️ Start", use_container_width=True,
                     key="btn_toggle_timer"):
            tracker.toggle(now_local())
            st.rerun()
    if b2.button("⏱️ Use Timer" if tracker.manual else "🕒 Manual Entry", use_container_width=True,
                 key="btn_switch_mode"):
        tracker.switch_mode()
        st.session_state.pop("tracker_prefill", None)
        reset_form(FORM)
        st.rerun()
    save = b3.button("💾 Save", type="primary", use_container_width=True, key="btn_save_entry")
    if tracker.editing is not None and b4.button("✖️ Cancel edit", use_container_width=True, key="btn_cancel_edit"):
        tracker.cancel_edit()
        st.session_state.pop("tracker_prefill", None)
        reset_form(FORM)
        st.rerun()

    if save:
        form = {"goal_id": goal_id, "notes": notes, "hours": hours, "minutes": minutes}
        try:
            res = submit_time_entry(ctx, notifier, tracker, form, today, now=now_local())
        except ValidationError as err:
            show_errors(err)
        else:
            if res.ok:
                st.session_state.pop("tracker_prefill", None)
                reset_form(FORM)
            st.rerun()

    if show_log:
        _render_time_log(ctx, tracker)

def _render_time_log(ctx: AppContext, tracker: TrackerState):
    st.divider()
    st.subheader("📝 Time Log")
    try:
        entries = load(ctx, (TIME_ENTRIES, "log"), lambda: list_time_entries(ctx), "Loading time log...")
    except BackendError as e:
        st.error(f"Could not load time entries: {e.message}")
        return
    if not entries:
        st.info("No time logged yet.")
        return

    head = st.columns([0.18, 0.3, 0.14, 0.3, 0.08])
    for col, label in zip(head, ["Date", "Goal", "Duration", "Notes", ""]):
        col.caption(f"**{label}**")
    for e in entries:
        c = st.columns([0.18, 0.3, 0.14, 0.3, 0.08])
        c[0].write(e["date"])
        c[1].write((e.get("goal") or {}).get("title", "—"))
        c[2].write(fmt_duration(e["duration_minutes"]))
        c[3].write(e.get("notes") or "")
        if c[4].button("✏️", key=f"edit_entry_{e['id']}", help="Edit entry"):
            st.session_state["tracker_prefill"] = tracker.begin_edit(e)
            reset_form(FORM)
            st.rerun()
