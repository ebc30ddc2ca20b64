"""Tests for API endpoints (no external API keys required)."""

from __future__ import annotations

import json
import logging
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from pm_copilot.api.main import app
from pm_copilot.api.models import EmailAnalysisResponse, MeetingAnalysisResponse
from pm_copilot.extraction.errors import EmptyResponse, GenerationFailure, MalformedResponse
from pm_copilot.extraction.models import AnalysisMode
from pm_copilot.extraction.normalizer import normalize_reply

client = TestClient(app)

EMAIL_REPLY = json.dumps(
    {
        "email_metadata": {
            "subject": "Delay",
            "from": "Sarah",
            "date": "Not specified",
            "project_name": "Conference Room",
        },
        "action_items": [
            {"task": "Escalate", "assignee": "Sarah", "due_date": "Friday", "priority": "Urgent"}
        ],
        "risks": [
            {
                "risk": "processor delay",
                "severity": "High",
                "impact": "install date",
                "mentioned_by": "supplier",
            }
        ],
        "status_updates": [{"area": "Equipment", "status": "Staged", "type": "Progress"}],
        "project_health": {"status": "At Risk", "summary": "Automation late."},
    }
)


def test_health():
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


# --- Email endpoint ---


def test_analyze_email_success():
    result = normalize_reply(f"```json\n{EMAIL_REPLY}\n```", AnalysisMode.EMAIL)
    with patch("pm_copilot.api.routes.analysis.analyze_email", return_value=result) as mock:
        response = client.post("/api/analyze-email", json={"emailText": "Subject: Delay"})

    assert response.status_code == 200, response.text
    mock.assert_called_once_with("Subject: Delay")
    body = response.json()
    assert body["email_metadata"]["from"] == "Sarah"
    assert body["action_items"][0]["priority"] == "Medium"
    assert body["risks"][0]["mentioned_by"] == "supplier"
    assert body["decisions"] == []
    assert body["key_topics"] == []
    assert body["status_updates"][0]["type"] == "Progress"
    assert body["project_health"] == {"status": "At Risk", "summary": "Automation late."}


@pytest.mark.parametrize("payload", [{}, {"emailText": ""}, {"emailText": "   "}])
def test_analyze_email_missing_text_returns_400(payload):
    with patch("pm_copilot.extraction.analyzer.generate") as mock_generate:
        response = client.post("/api/analyze-email", json=payload)
    assert response.status_code == 400
    assert response.json()["error"] == "Email text is required"
    assert response.json()["details"].startswith("input_missing")
    mock_generate.assert_not_called()


def test_analyze_email_generation_failure_returns_500():
    with patch(
        "pm_copilot.extraction.analyzer.generate",
        side_effect=GenerationFailure("ANTHROPIC_API_KEY is not configured"),
    ):
        response = client.post("/api/analyze-email", json={"emailText": "hello"})
    assert response.status_code == 500
    assert response.json() == {
        "error": "Failed to analyze email",
        "details": "generation_failed: ANTHROPIC_API_KEY is not configured",
    }


def test_analyze_email_empty_reply_returns_500():
    with patch("pm_copilot.extraction.analyzer.generate", return_value=""):
        response = client.post("/api/analyze-email", json={"emailText": "hello"})
    assert response.status_code == 500
    assert response.json()["details"].startswith("empty_response")


def test_malformed_reply_details_do_not_leak_model_output(caplog):
    leaked = "SECRET-MODEL-OUTPUT {not json"
    with (
        caplog.at_level(logging.ERROR, logger="pm_copilot.api.routes.analysis"),
        patch("pm_copilot.extraction.analyzer.generate", return_value=leaked),
    ):
        response = client.post("/api/analyze-email", json={"emailText": "hello"})

    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "Failed to analyze email"
    assert body["details"].startswith("malformed_response")
    assert "SECRET-MODEL-OUTPUT" not in response.text
    # Operators still get the cleaned text in the log.
    assert "SECRET-MODEL-OUTPUT" in caplog.text


def test_analyze_email_without_body_returns_400():
    response = client.post("/api/analyze-email")
    assert response.status_code == 400
    assert set(response.json()) == {"error", "details"}
    assert response.json()["error"] == "Email text is required"


@pytest.mark.parametrize("payload", [{"emailText": 123}, {"emailText": ["a"]}, ["hello"]])
def test_analyze_email_non_string_text_returns_400(payload):
    with patch("pm_copilot.extraction.analyzer.generate") as mock_generate:
        response = client.post("/api/analyze-email", json=payload)
    assert response.status_code == 400
    assert response.json()["error"] == "Email text is required"
    mock_generate.assert_not_called()


def test_analyze_email_invalid_json_returns_400():
    response = client.post(
        "/api/analyze-email",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert set(response.json()) == {"error", "details"}


# --- Meeting endpoint ---


def test_analyze_meeting_success():
    reply = '{"meeting_metadata": {"project_name": "Buildout", "attendees": ["Sarah"]}}'
    with patch("pm_copilot.extraction.analyzer.generate", return_value=reply):
        response = client.post("/api/analyze-meeting", json={"transcript": "Sarah: hi"})

    assert response.status_code == 200, response.text
    body = response.json()
    assert body["meeting_metadata"] == {
        "project_name": "Buildout",
        "date": "Not specified",
        "attendees": ["Sarah"],
    }
    assert body["risks"] == []
    assert body["project_health"]["status"] == "On Track"
    assert "status_updates" not in body


def test_analyze_meeting_missing_transcript_returns_400():
    response = client.post("/api/analyze-meeting", json={})
    assert response.status_code == 400
    assert response.json()["error"] == "Transcript is required"


def test_analyze_meeting_invalid_bodies_return_400():
    assert client.post("/api/analyze-meeting").status_code == 400
    response = client.post("/api/analyze-meeting", json={"transcript": {"text": "x"}})
    assert response.status_code == 400
    assert response.json()["error"] == "Transcript is required"


def test_analyze_meeting_failure_uses_uniform_shape():
    with patch(
        "pm_copilot.api.routes.analysis.analyze_meeting",
        side_effect=EmptyResponse(),
    ):
        response = client.post("/api/analyze-meeting", json={"transcript": "x"})
    assert response.status_code == 500
    assert set(response.json()) == {"error", "details"}
    assert response.json()["error"] == "Failed to analyze meeting"


def test_malformed_meeting_reply_returns_500():
    with patch(
        "pm_copilot.api.routes.analysis.analyze_meeting",
        side_effect=MalformedResponse(cleaned_text="[]", parse_error="top-level value is list"),
    ):
        response = client.post("/api/analyze-meeting", json={"transcript": "x"})
    assert response.status_code == 500


def test_analyze_endpoints_no_get_method():
    assert client.get("/api/analyze-email").status_code == 405
    assert client.get("/api/analyze-meeting").status_code == 405


# --- Response models stay in step with ExtractionResult.to_dict() ---


_FULL_ITEMS = {
    "action_items": [{"task": "t", "assignee": "a", "due_date": "d", "priority": "Low"}],
    "decisions": [{"decision": "d", "context": "c"}],
    "risks": [{"risk": "r", "severity": "High", "impact": "i", "mentioned_by": "m"}],
    "key_topics": ["k"],
    "project_health": {"status": "Blocked", "summary": "s"},
}


@pytest.mark.parametrize(
    ("mode", "response_model", "extra"),
    [
        (
            AnalysisMode.EMAIL,
            EmailAnalysisResponse,
            {
                "email_metadata": {"subject": "s", "from": "f", "date": "d", "project_name": "p"},
                "status_updates": [{"area": "a", "status": "s", "type": "Budget"}],
            },
        ),
        (
            AnalysisMode.MEETING,
            MeetingAnalysisResponse,
            {"meeting_metadata": {"project_name": "p", "date": "d", "attendees": ["x"]}},
        ),
    ],
)
def test_response_models_match_result_serialization(mode, response_model, extra):
    payload = {**extra, **_FULL_ITEMS}
    data = normalize_reply(json.dumps(payload), mode).to_dict()
    assert data == payload
    dumped = response_model.model_validate(data).model_dump(by_alias=True, mode="json")
    assert dumped == data
