from __future__ import annotations

from streamlit.testing.v1 import AppTest

from ui.theme import DARK_CSS


def themed_page():
    from ui.theme import apply_theme, theme_button

    apply_theme()
    theme_button()


def dark_css_injected(at) -> bool:
    return any(m.value == DARK_CSS for m in at.markdown)


def test_light_by_default():
    at = AppTest.from_function(themed_page).run()
    assert at.session_state["ui_theme"] == "light"
    assert not dark_css_injected(at)
    assert at.button(key="toggle_theme_mode").label == "🌙"


def test_toggle_switches_both_ways():
    at = AppTest.from_function(themed_page).run()

    at.button(key="toggle_theme_mode").click().run()
    assert at.session_state["ui_theme"] == "dark"
    assert dark_css_injected(at)
    assert at.button(key="toggle_theme_mode").label == "☀️"

    at.button(key="toggle_theme_mode").click().run()
    assert at.session_state["ui_theme"] == "light"
    assert not dark_css_injected(at)
