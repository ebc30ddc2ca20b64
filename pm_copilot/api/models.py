"""Pydantic request/response schemas for the PM Copilot API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from pm_copilot.extraction.models import HealthStatus, Priority, Severity, UpdateType


class AnalyzeEmailRequest(BaseModel):
    """Request body for /api/analyze-email.

    The field is optional at the schema level so a missing value yields the
    400 "required" error rather than FastAPI's 422.
    """

    model_config = ConfigDict(populate_by_name=True)

    email_text: str | None = Field(default=None, alias="emailText")


class AnalyzeMeetingRequest(BaseModel):
    """Request body for /api/analyze-meeting."""

    transcript: str | None = None


class ActionItemResponse(BaseModel):
    task: str
    assignee: str
    due_date: str
    priority: Priority


class DecisionResponse(BaseModel):
    decision: str
    context: str


class RiskResponse(BaseModel):
    risk: str
    severity: Severity
    impact: str
    mentioned_by: str


class StatusUpdateResponse(BaseModel):
    area: str
    status: str
    type: UpdateType


class ProjectHealthResponse(BaseModel):
    status: HealthStatus
    summary: str


class EmailMetadataResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    subject: str
    from_: str = Field(alias="from")
    date: str
    project_name: str


class MeetingMetadataResponse(BaseModel):
    project_name: str
    date: str
    attendees: list[str] = []


class EmailAnalysisResponse(BaseModel):
    """Response body for /api/analyze-email."""

    email_metadata: EmailMetadataResponse
    action_items: list[ActionItemResponse] = []
    decisions: list[DecisionResponse] = []
    risks: list[RiskResponse] = []
    key_topics: list[str] = []
    status_updates: list[StatusUpdateResponse] = []
    project_health: ProjectHealthResponse


class MeetingAnalysisResponse(BaseModel):
    """Response body for /api/analyze-meeting."""

    meeting_metadata: MeetingMetadataResponse
    action_items: list[ActionItemResponse] = []
    decisions: list[DecisionResponse] = []
    risks: list[RiskResponse] = []
    key_topics: list[str] = []
    project_health: ProjectHealthResponse


class ErrorResponse(BaseModel):
    """Uniform error body; ``details`` carries the error code and message only."""

    error: str
    details: str | None = None
