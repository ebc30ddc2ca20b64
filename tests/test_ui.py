"""Tests for the UI helpers: session gate and API client (no server required)."""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock, patch

import httpx

from pm_copilot.ui import api_client
from pm_copilot.ui.session_gate import AUTH_KEY, is_authenticated, login, logout

# ---------------------------------------------------------------------------
# Session gate
# ---------------------------------------------------------------------------


class TestSessionGate:
    def test_correct_password_authenticates(self) -> None:
        state: dict[str, Any] = {}
        assert login(state, "open-sesame", "open-sesame") is True
        assert state[AUTH_KEY] is True
        assert is_authenticated(state, "open-sesame")

    def test_wrong_password_is_rejected(self) -> None:
        state: dict[str, Any] = {}
        assert login(state, "guess", "open-sesame") is False
        assert AUTH_KEY not in state
        assert not is_authenticated(state, "open-sesame")

    def test_logout_clears_flag(self) -> None:
        state: dict[str, Any] = {AUTH_KEY: True}
        logout(state)
        assert not is_authenticated(state, "open-sesame")

    def test_logout_without_login_is_noop(self) -> None:
        state: dict[str, Any] = {}
        logout(state)
        assert state == {}

    def test_empty_secret_disables_gate(self) -> None:
        state: dict[str, Any] = {}
        assert is_authenticated(state, "")
        assert login(state, "anything", "") is True


# ---------------------------------------------------------------------------
# API client
# ---------------------------------------------------------------------------


def _response(status: int, body: Any) -> httpx.Response:
    return httpx.Response(status, json=body, request=httpx.Request("POST", "http://test"))


class TestApiClient:
    @patch("pm_copilot.ui.api_client.httpx.post")
    def test_analyze_email_posts_email_text(self, mock_post: MagicMock) -> None:
        mock_post.return_value = _response(200, {"risks": []})
        assert api_client.analyze_email("hello") == {"risks": []}
        assert mock_post.call_args.args[0].endswith("/api/analyze-email")
        assert mock_post.call_args.kwargs["json"] == {"emailText": "hello"}

    @patch("pm_copilot.ui.api_client.httpx.post")
    def test_analyze_meeting_posts_transcript(self, mock_post: MagicMock) -> None:
        mock_post.return_value = _response(200, {"decisions": []})
        assert api_client.analyze_meeting("Sarah: hi") == {"decisions": []}
        assert mock_post.call_args.args[0].endswith("/api/analyze-meeting")
        assert mock_post.call_args.kwargs["json"] == {"transcript": "Sarah: hi"}

    @patch("pm_copilot.ui.api_client.httpx.post")
    def test_server_error_returns_generic_error(self, mock_post: MagicMock) -> None:
        mock_post.return_value = _response(
            500, {"error": "Failed to analyze email", "details": "empty_response: x"}
        )
        assert api_client.analyze_email("hello") == {"error": "Failed to analyze email"}

    @patch("pm_copilot.ui.api_client.httpx.post")
    def test_connection_error_is_reported(self, mock_post: MagicMock) -> None:
        mock_post.side_effect = httpx.ConnectError("refused")
        result = api_client.analyze_meeting("x")
        assert result["error"].startswith("Request failed")

    @patch("pm_copilot.ui.api_client.httpx.get")
    def test_check_health(self, mock_get: MagicMock) -> None:
        mock_get.return_value = httpx.Response(200, json={"status": "healthy"})
        assert api_client.check_health() is True
        mock_get.side_effect = httpx.ConnectError("refused")
        assert api_client.check_health() is False
