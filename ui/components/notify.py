import streamlit as st

FLASH_KEY = "_flash"


class StreamlitNotifier:
    """Queues toasts so they survive the st.rerun() that follows a write."""

    def success(self, message: str):
        st.session_state.setdefault(FLASH_KEY, []).append(("✅", message))

    def error(self, message: str):
        st.session_state.setdefault(FLASH_KEY, []).append(("⚠️", message))


def render_flash():
    for icon, message in st.session_state.pop(FLASH_KEY, []):
        st.toast(message, icon=icon)
