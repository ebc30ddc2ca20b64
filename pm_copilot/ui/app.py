"""PM Operations Copilot -- Streamlit UI.

Password-gated pages for analysing meeting transcripts and project emails.
All analysis happens in the FastAPI backend; this module only renders results.
"""

from __future__ import annotations

from typing import Any

import streamlit as st

from pm_copilot.config import settings
from pm_copilot.ui.api_client import analyze_email, analyze_meeting, check_health
from pm_copilot.ui.samples import SAMPLE_EMAIL, SAMPLE_TRANSCRIPT
from pm_copilot.ui.session_gate import is_authenticated, login, logout

LEVEL_ICONS = {
    "High": ":red_circle:",
    "Medium": ":large_yellow_circle:",
    "Low": ":large_blue_circle:",
}
HEALTH_ICONS = {"On Track": ":white_check_mark:", "At Risk": ":warning:", "Blocked": ":no_entry:"}
UPDATE_ICONS = {
    "Progress": ":large_green_circle:",
    "Blocker": ":red_circle:",
    "Delay": ":red_circle:",
    "Resource Issue": ":large_yellow_circle:",
    "Budget": ":large_yellow_circle:",
}

# ---------------------------------------------------------------------------
# Page config (must be first Streamlit call)
# ---------------------------------------------------------------------------
st.set_page_config(page_title="PM Operations Copilot", layout="wide")


def render_result(result: dict[str, Any], mode: str) -> None:
    """Render one analysis result as categorized panels."""
    metadata = result.get(f"{mode}_metadata", {})
    health = result.get("project_health", {})

    st.subheader(metadata.get("project_name", "Project"))
    if mode == "email":
        st.write(f"**Subject:** {metadata.get('subject', '')}")
        st.write(f"**From:** {metadata.get('from', '')}")
    st.write(f"**Date:** {metadata.get('date', '')}")
    attendees = metadata.get("attendees", [])
    if attendees:
        st.write(f"**Attendees:** {', '.join(attendees)}")

    status = health.get("status", "On Track")
    st.markdown(f"### {HEALTH_ICONS.get(status, '')} Project health: {status}")
    st.write(health.get("summary", ""))

    topics = result.get("key_topics", [])
    if topics:
        st.markdown("**Key topics:** " + ", ".join(f"`{t}`" for t in topics))

    updates = result.get("status_updates", [])
    if updates:
        st.markdown("#### Status updates")
        for u in updates:
            icon = UPDATE_ICONS.get(u["type"], ":large_blue_circle:")
            st.write(f"{icon} **{u['area']}** ({u['type']}): {u['status']}")

    col_actions, col_risks, col_decisions = st.columns(3)

    with col_actions:
        st.markdown("#### Action items")
        items = result.get("action_items", [])
        if not items:
            st.caption("No action items found.")
        for a in items:
            st.write(f"{LEVEL_ICONS.get(a['priority'], '')} **{a['task']}**")
            st.caption(f"Assignee: {a['assignee']} | Due: {a['due_date']}")

    with col_risks:
        st.markdown("#### Risks")
        risks = result.get("risks", [])
        if not risks:
            st.caption("No risks found.")
        for r in risks:
            st.write(f"{LEVEL_ICONS.get(r['severity'], '')} **{r['risk']}**")
            st.caption(f"Impact: {r['impact']} | Raised by: {r['mentioned_by']}")

    with col_decisions:
        st.markdown("#### Decisions")
        decisions = result.get("decisions", [])
        if not decisions:
            st.caption("No decisions found.")
        for d in decisions:
            st.write(f"**{d['decision']}**")
            st.caption(d["context"])


def analyzer_page(mode: str, label: str, sample: str, api_healthy: bool) -> None:
    text_key = f"{mode}_text"
    if st.button("Load sample"):
        st.session_state[text_key] = sample

    text = st.text_area(label, key=text_key, height=300)

    if st.button("Analyze", type="primary"):
        if not text.strip():
            st.error(f"Please enter {'an email' if mode == 'email' else 'a meeting transcript'}")
        elif not api_healthy:
            st.error("Cannot analyze: the API server is not reachable.")
        else:
            with st.spinner("Analyzing with Claude..."):
                result = analyze_email(text) if mode == "email" else analyze_meeting(text)
            if "error" in result:
                st.error(f"Analysis failed: {result['error']}")
            else:
                render_result(result, mode)


# ---------------------------------------------------------------------------
# Session gate
# ---------------------------------------------------------------------------
if not is_authenticated(st.session_state, settings.access_password):
    st.title("PM Operations Copilot")
    st.write("AI-powered intelligence for project management teams")
    password = st.text_input("Password", type="password")
    if st.button("Enter"):
        if login(st.session_state, password, settings.access_password):
            st.rerun()
        else:
            st.error("Incorrect password. Please try again.")
    st.stop()

# ---------------------------------------------------------------------------
# Sidebar -- navigation + API status
# ---------------------------------------------------------------------------
with st.sidebar:
    st.title("PM Operations Copilot")
    st.markdown("---")

    page = st.radio(
        "Navigate",
        ["Meeting Analyzer", "Email Analyzer"],
        label_visibility="collapsed",
    )

    st.markdown("---")

    api_healthy = check_health()
    if api_healthy:
        st.markdown(":green_circle: API connected")
    else:
        st.markdown(":red_circle: API unreachable")

    if settings.access_password and st.button("Log out"):
        logout(st.session_state)
        st.rerun()

# ---------------------------------------------------------------------------
# Pages
# ---------------------------------------------------------------------------
if page == "Meeting Analyzer":
    st.header("Meeting Analyzer")
    st.write("Paste a meeting transcript to extract action items, risks and decisions.")
    analyzer_page("meeting", "Meeting transcript", SAMPLE_TRANSCRIPT, api_healthy)
else:
    st.header("Email Analyzer")
    st.write("Paste a project email to extract status updates, risks and next steps.")
    analyzer_page("email", "Email", SAMPLE_EMAIL, api_healthy)
