from typing import Any, Callable, Hashable, Tuple

import streamlit as st

from core.context import AppContext

def load(ctx: AppContext, key: Tuple[Hashable, ...], fn: Callable[[], Any], label: str = "Loading...") -> Any:
    """Run a cached query, with a spinner only on the first (uncached) load."""
    if ctx.cache.has(key):
        return fn()
    with st.spinner(label):
        return fn()
