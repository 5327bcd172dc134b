import logging
from typing import List, Tuple

import streamlit as st

logger = logging.getLogger(__name__)

ICONS = {"error": "⚠️", "success": "✅", "info": "ℹ️", "warning": "⚠️"}
_PENDING_KEY = "_pending_toasts"


def notify(level: str, message: str) -> None:
    """Notification transitoire (st.toast)."""
    logger.debug("toast[%s] %s", level, message)
    st.toast(message, icon=ICONS.get(level, "ℹ️"))


def defer(level: str, message: str) -> None:
    """Notification affichée au prochain run (avant une redirection)."""
    pending: List[Tuple[str, str]] = st.session_state.setdefault(_PENDING_KEY, [])
    pending.append((level, message))


def flush_deferred() -> None:
    pending = st.session_state.pop(_PENDING_KEY, [])
    for level, message in pending:
        notify(level, message)
