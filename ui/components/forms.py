import streamlit as st

from core.errors import ValidationError

def _nonce_key(form: str) -> str:
    return f"_nonce_{form}"

def fkey(form: str, field: str) -> str:
    """Widget key that changes whenever the form is reset."""
    return f"{form}_{st.session_state.get(_nonce_key(form), 0)}_{field}"

def reset_form(form: str):
    st.session_state[_nonce_key(form)] = st.session_state.get(_nonce_key(form), 0) + 1

def show_errors(err: ValidationError):
    for message in err.errors.values():
        st.error(message)
