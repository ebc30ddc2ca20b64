"""Password gate for the Streamlit UI.

State lives in a per-browser-session mapping (``st.session_state``); there is
no server-side session, so this only keeps casual visitors out.
"""

from __future__ import annotations

import hmac
from collections.abc import MutableMapping
from typing import Any

AUTH_KEY = "pm-copilot-auth"


def is_authenticated(state: MutableMapping[str, Any], secret: str) -> bool:
    if not secret:
        return True
    return bool(state.get(AUTH_KEY, False))


def login(state: MutableMapping[str, Any], password: str, secret: str) -> bool:
    """Mark the session as authenticated if ``password`` matches ``secret``."""
    if not secret:
        return True
    if hmac.compare_digest(password.encode("utf-8"), secret.encode("utf-8")):
        state[AUTH_KEY] = True
        return True
    return False


def logout(state: MutableMapping[str, Any]) -> None:
    state.pop(AUTH_KEY, None)
