"""HTTP client wrapper for the PM Copilot FastAPI backend."""

from __future__ import annotations

from typing import Any

import httpx

from pm_copilot.config import settings

API_URL = settings.api_url


def check_health() -> bool:
    """Return True if the API server responds to /health."""
    try:
        r = httpx.get(f"{API_URL}/health", timeout=5.0)
        return r.status_code == 200
    except httpx.HTTPError:
        return False


def _post_analysis(path: str, payload: dict[str, str]) -> dict[str, Any]:
    """POST to an analysis endpoint.

    Returns the result JSON on success, the server's error body when it sent
    one, or ``{"error": ...}`` when the request itself failed.
    """
    try:
        # Claude calls can take a while; allow more than the server-side timeout.
        r = httpx.post(
            f"{API_URL}{path}",
            json=payload,
            timeout=settings.request_timeout + 30.0,
        )
    except httpx.HTTPError as e:
        return {"error": f"Request failed: {e}"}

    try:
        data = r.json()
    except ValueError:
        data = {}
    if r.is_error:
        return {"error": data.get("error", f"HTTP {r.status_code}")}
    return data  # type: ignore[no-any-return]


def analyze_email(email_text: str) -> dict[str, Any]:
    """Send an email to the email analysis endpoint."""
    return _post_analysis("/api/analyze-email", {"emailText": email_text})


def analyze_meeting(transcript: str) -> dict[str, Any]:
    """Send a transcript to the meeting analysis endpoint."""
    return _post_analysis("/api/analyze-meeting", {"transcript": transcript})
