import streamlit as st

THEME_KEY = "ui_theme"

DARK_CSS = """
<style>
  .stApp { background-color: #111827; color: #f9fafb; }
  [data-testid="stSidebar"] { background-color: #1f2937; }
  .stApp h1, .stApp h2, .stApp h3, .stApp label, .stApp p { color: #f9fafb; }
  [data-testid="stMetricValue"] { color: #93c5fd; }
</style>
"""

def current_theme() -> str:
    if st.session_state.get(THEME_KEY) not in ("light", "dark"):
        st.session_state[THEME_KEY] = "light"
    return st.session_state[THEME_KEY]

def toggle_theme():
    st.session_state[THEME_KEY] = "light" if current_theme() == "dark" else "dark"

def apply_theme():
    if current_theme() == "dark":
        st.markdown(DARK_CSS, unsafe_allow_html=True)

def theme_button():
    dark = current_theme() == "dark"
    st.button("☀️" if dark else "🌙", key="toggle_theme_mode", on_click=toggle_theme,
              help="Switch to light mode" if dark else "Switch to dark mode")
