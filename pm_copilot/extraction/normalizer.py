"""Turn Claude's free-text reply into a validated ExtractionResult.

The prompt asks for bare JSON but nothing enforces it, so replies are cleaned
in stages:

1. de-fencing: Markdown code fences (with or without a language tag) are
   removed wherever they appear;
2. payload isolation: the text is cut down to the span between the first
   ``{`` and the last ``}``;
3. parsing: the span must parse as a JSON object, otherwise the request fails
   with ``MalformedResponse``;
4. coercion: missing or off-schema fields are replaced with defaults instead
   of failing the request.

Isolation is a heuristic, not a balanced-brace scanner. Stray braces in any
commentary around the JSON can produce an unparseable slice, which then fails
at step 3.
"""

from __future__ import annotations

import json
import logging
import re
from enum import Enum
from typing import Any, TypeVar

from pm_copilot.extraction.errors import EmptyResponse, MalformedResponse
from pm_copilot.extraction.models import (
    NOT_SPECIFIED,
    ActionItem,
    AnalysisMode,
    Decision,
    EmailMetadata,
    ExtractionResult,
    HealthStatus,
    MeetingMetadata,
    Priority,
    ProjectHealth,
    Risk,
    Severity,
    StatusUpdate,
    UpdateType,
)

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)

# Opening fence with optional language tag, or a bare closing fence.
_FENCE_RE = re.compile(r"```[ \t]*[a-z0-9_+-]*[ \t]*", re.IGNORECASE)
_ENUM_KEY_RE = re.compile(r"[\s_-]+")


# ---------------------------------------------------------------------------
# Text surgery
# ---------------------------------------------------------------------------


def strip_code_fences(text: str) -> str:
    """Remove every Markdown code fence marker from ``text``."""
    return _FENCE_RE.sub("", text).strip()


def isolate_payload(text: str) -> str:
    """Return the span from the first ``{`` to the last ``}`` inclusive.

    Text without such a span is returned unchanged so the parser can report
    on it.
    """
    start = text.find("{")
    end = text.rfind("}")
    if start != -1 and end > start:
        return text[start : end + 1]
    return text


def parse_payload(text: str) -> dict[str, Any]:
    """De-fence, isolate and parse a reply into a JSON object.

    Raises:
        EmptyResponse: ``text`` is empty or whitespace only.
        MalformedResponse: the isolated payload is not valid JSON, or is valid
            JSON whose top level is not an object.
    """
    if not text or not text.strip():
        raise EmptyResponse()

    cleaned = isolate_payload(strip_code_fences(text))
    logger.debug("Cleaned response: %s", cleaned[:200])

    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise MalformedResponse(cleaned_text=cleaned, parse_error=str(exc)) from exc

    if not isinstance(data, dict):
        raise MalformedResponse(
            "Claude reply was JSON but not an object",
            cleaned_text=cleaned,
            parse_error=f"top-level value is {type(data).__name__}",
        )
    return data


# ---------------------------------------------------------------------------
# Field coercion
# ---------------------------------------------------------------------------


class _Coercer:
    """Field-level coercion that records every substitution it makes."""

    def __init__(self) -> None:
        self.issues: list[str] = []

    def _note(self, path: str, problem: str) -> None:
        self.issues.append(f"{path}: {problem}")
        logger.warning("Schema mismatch at %s: %s", path, problem)

    def text(self, obj: dict[str, Any], key: str, path: str) -> str:
        value = obj.get(key)
        if value is None:
            self._note(f"{path}.{key}", "missing" if key not in obj else "null")
            return NOT_SPECIFIED
        if isinstance(value, str):
            return value
        if isinstance(value, (int, float, bool)):
            return str(value)
        self._note(f"{path}.{key}", f"expected string, got {type(value).__name__}")
        return NOT_SPECIFIED

    def enum(
        self, obj: dict[str, Any], key: str, path: str, enum_cls: type[E], default: E
    ) -> E:
        value = obj.get(key)
        if isinstance(value, str):
            wanted = _ENUM_KEY_RE.sub("", value).lower()
            for member in enum_cls:
                if _ENUM_KEY_RE.sub("", member.value).lower() == wanted:
                    return member
        self._note(f"{path}.{key}", f"{value!r} is not one of {[m.value for m in enum_cls]}")
        return default

    def array(self, obj: dict[str, Any], key: str, path: str) -> list[Any]:
        value = obj.get(key)
        if isinstance(value, list):
            return value
        self._note(f"{path}.{key}", "missing" if value is None else "not an array")
        return []

    def objects(
        self, obj: dict[str, Any], key: str, path: str
    ) -> list[tuple[str, dict[str, Any]]]:
        out: list[tuple[str, dict[str, Any]]] = []
        for i, entry in enumerate(self.array(obj, key, path)):
            if isinstance(entry, dict):
                out.append((f"{path}.{key}[{i}]", entry))
            else:
                self._note(f"{path}.{key}[{i}]", "dropped non-object entry")
        return out

    def strings(self, obj: dict[str, Any], key: str, path: str) -> list[str]:
        out: list[str] = []
        for entry in self.array(obj, key, path):
            if isinstance(entry, str):
                out.append(entry)
            elif isinstance(entry, (int, float)) and not isinstance(entry, bool):
                out.append(str(entry))
            else:
                self._note(f"{path}.{key}", f"dropped entry {entry!r}")
        return out

    def section(self, obj: dict[str, Any], key: str, path: str) -> dict[str, Any]:
        value = obj.get(key)
        if isinstance(value, dict):
            return value
        self._note(f"{path}.{key}", "missing" if value is None else "not an object")
        return {}


def normalize_payload(data: dict[str, Any], mode: AnalysisMode) -> ExtractionResult:
    """Coerce a parsed JSON object into an ExtractionResult.

    Never raises for field-level problems; each one is defaulted and recorded
    in ``schema_issues``.
    """
    c = _Coercer()
    root = "$"

    metadata: EmailMetadata | MeetingMetadata
    if mode is AnalysisMode.EMAIL:
        meta = c.section(data, "email_metadata", root)
        meta_path = f"{root}.email_metadata"
        metadata = EmailMetadata(
            subject=c.text(meta, "subject", meta_path),
            from_party=c.text(meta, "from", meta_path),
            date=c.text(meta, "date", meta_path),
            project_name=c.text(meta, "project_name", meta_path),
        )
    else:
        meta = c.section(data, "meeting_metadata", root)
        meta_path = f"{root}.meeting_metadata"
        metadata = MeetingMetadata(
            project_name=c.text(meta, "project_name", meta_path),
            date=c.text(meta, "date", meta_path),
            attendees=c.strings(meta, "attendees", meta_path),
        )

    action_items = [
        ActionItem(
            task=c.text(item, "task", path),
            assignee=c.text(item, "assignee", path),
            due_date=c.text(item, "due_date", path),
            priority=c.enum(item, "priority", path, Priority, Priority.MEDIUM),
        )
        for path, item in c.objects(data, "action_items", root)
    ]
    decisions = [
        Decision(
            decision=c.text(item, "decision", path),
            context=c.text(item, "context", path),
        )
        for path, item in c.objects(data, "decisions", root)
    ]
    risks = [
        Risk(
            risk=c.text(item, "risk", path),
            severity=c.enum(item, "severity", path, Severity, Severity.MEDIUM),
            impact=c.text(item, "impact", path),
            raised_by=c.text(item, "mentioned_by", path),
        )
        for path, item in c.objects(data, "risks", root)
    ]
    key_topics = c.strings(data, "key_topics", root)

    status_updates: list[StatusUpdate] = []
    if mode is AnalysisMode.EMAIL:
        status_updates = [
            StatusUpdate(
                area=c.text(item, "area", path),
                status=c.text(item, "status", path),
                type=c.enum(item, "type", path, UpdateType, UpdateType.OTHER),
            )
            for path, item in c.objects(data, "status_updates", root)
        ]

    health = c.section(data, "project_health", root)
    health_path = f"{root}.project_health"
    project_health = ProjectHealth(
        status=c.enum(health, "status", health_path, HealthStatus, HealthStatus.ON_TRACK),
        summary=c.text(health, "summary", health_path),
    )

    return ExtractionResult(
        mode=mode,
        metadata=metadata,
        action_items=action_items,
        decisions=decisions,
        risks=risks,
        key_topics=key_topics,
        status_updates=status_updates,
        project_health=project_health,
        schema_issues=c.issues,
    )


def normalize_reply(text: str, mode: AnalysisMode) -> ExtractionResult:
    """Run the full normalization pipeline on a raw Claude reply."""
    return normalize_payload(parse_payload(text), mode)
