"""Data models for normalized analysis results."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

NOT_SPECIFIED = "Not specified"


class AnalysisMode(str, Enum):
    """Kind of source text being analysed."""

    EMAIL = "email"
    MEETING = "meeting"


class Priority(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class Severity(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class UpdateType(str, Enum):
    """Category of an email status update."""

    PROGRESS = "Progress"
    BLOCKER = "Blocker"
    DELAY = "Delay"
    RESOURCE_ISSUE = "Resource Issue"
    BUDGET = "Budget"
    OTHER = "Other"


class HealthStatus(str, Enum):
    ON_TRACK = "On Track"
    AT_RISK = "At Risk"
    BLOCKED = "Blocked"


@dataclass
class EmailMetadata:
    subject: str = NOT_SPECIFIED
    from_party: str = NOT_SPECIFIED
    date: str = NOT_SPECIFIED
    project_name: str = NOT_SPECIFIED

    def to_dict(self) -> dict[str, Any]:
        return {
            "subject": self.subject,
            "from": self.from_party,
            "date": self.date,
            "project_name": self.project_name,
        }


@dataclass
class MeetingMetadata:
    project_name: str = NOT_SPECIFIED
    date: str = NOT_SPECIFIED
    attendees: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "project_name": self.project_name,
            "date": self.date,
            "attendees": list(self.attendees),
        }


@dataclass
class ActionItem:
    task: str
    assignee: str = NOT_SPECIFIED
    due_date: str = NOT_SPECIFIED
    priority: Priority = Priority.MEDIUM


@dataclass
class Decision:
    decision: str
    context: str = NOT_SPECIFIED


@dataclass
class Risk:
    risk: str
    severity: Severity = Severity.MEDIUM
    impact: str = NOT_SPECIFIED
    raised_by: str = NOT_SPECIFIED  # "mentioned_by" on the wire


@dataclass
class StatusUpdate:
    area: str
    status: str = NOT_SPECIFIED
    type: UpdateType = UpdateType.OTHER


@dataclass
class ProjectHealth:
    status: HealthStatus = HealthStatus.ON_TRACK
    summary: str = NOT_SPECIFIED


@dataclass
class ExtractionResult:
    """Normalized output of one analysis request.

    Built fresh per request and never persisted. ``schema_issues`` lists every
    field that had to be defaulted or coerced; it is diagnostic only and is not
    part of the serialized result.
    """

    mode: AnalysisMode
    metadata: EmailMetadata | MeetingMetadata
    action_items: list[ActionItem] = field(default_factory=list)
    decisions: list[Decision] = field(default_factory=list)
    risks: list[Risk] = field(default_factory=list)
    key_topics: list[str] = field(default_factory=list)
    status_updates: list[StatusUpdate] = field(default_factory=list)
    project_health: ProjectHealth = field(default_factory=ProjectHealth)
    schema_issues: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the JSON shape the prompt asks Claude to produce."""
        metadata_key = (
            "email_metadata" if self.mode is AnalysisMode.EMAIL else "meeting_metadata"
        )
        data: dict[str, Any] = {
            metadata_key: self.metadata.to_dict(),
            "action_items": [
                {
                    "task": a.task,
                    "assignee": a.assignee,
                    "due_date": a.due_date,
                    "priority": a.priority.value,
                }
                for a in self.action_items
            ],
            "decisions": [
                {"decision": d.decision, "context": d.context} for d in self.decisions
            ],
            "risks": [
                {
                    "risk": r.risk,
                    "severity": r.severity.value,
                    "impact": r.impact,
                    "mentioned_by": r.raised_by,
                }
                for r in self.risks
            ],
            "key_topics": list(self.key_topics),
        }
        if self.mode is AnalysisMode.EMAIL:
            data["status_updates"] = [
                {"area": s.area, "status": s.status, "type": s.type.value}
                for s in self.status_updates
            ]
        data["project_health"] = {
            "status": self.project_health.status.value,
            "summary": self.project_health.summary,
        }
        return data
