import streamlit as st

from core.auth import AuthClient
from core.config import APP_TITLE
from core.errors import ValidationError
from services.auth_service import sign_in, sign_up, reset_password
from services.mutations import Notifier
from ui.components.forms import fkey, show_errors

def render_login(auth: AuthClient, notifier: Notifier):
    _, mid, _ = st.columns([1, 1.4, 1])
    with mid:
        st.title(APP_TITLE)
        if st.session_state.get("forgot_password"):
            st.caption("Reset your password")
            render_reset_form(auth, notifier, form="reset")
            if st.button("Back to Sign In", use_container_width=True):
                st.session_state["forgot_password"] = False
                st.rerun()
            return

        st.caption("Sign in to manage your goals and track your time")
        with st.form(fkey("login", "form")):
            email = st.text_input("Email address", key=fkey("login", "email"))
            password = st.text_input("Password", type="password", key=fkey("login", "password"))
            c1, c2 = st.columns(2)
            do_sign_in = c1.form_submit_button("Sign in", type="primary", use_container_width=True)
            do_sign_up = c2.form_submit_button("Sign up", use_container_width=True)

        if do_sign_in or do_sign_up:
            form = {"email": email, "password": password}
            try:
                (sign_in if do_sign_in else sign_up)(auth, notifier, form)
            except ValidationError as err:
                show_errors(err)
            else:
                st.rerun()

        if st.button("Forgot your password?"):
            st.session_state["forgot_password"] = True
            st.rerun()

def render_reset_form(auth: AuthClient, notifier: Notifier, form: str):
    with st.form(fkey(form, "form")):
        email = st.text_input("Email address", key=fkey(form, "email"))
        new_password = st.text_input("New password", type="password", key=fkey(form, "new"))
        confirm = st.text_input("Confirm new password", type="password", key=fkey(form, "confirm"))
        submitted = st.form_submit_button("Reset Password", use_container_width=True)
    if not submitted:
        return
    try:
        res = reset_password(auth, notifier, {
            "email": email, "new_password": new_password, "confirm_password": confirm,
        })
    except ValidationError as err:
        show_errors(err)
        return
    if res.ok:
        st.session_state["forgot_password"] = False
    st.rerun()
