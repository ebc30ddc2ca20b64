"""Extraction prompts for Claude.

The schema is described in plain language inside the prompt; Claude is not
forced into it, which is why replies go through the normalizer afterwards.
"""

from __future__ import annotations

from pm_copilot.extraction.models import AnalysisMode

JSON_ONLY_INSTRUCTION = (
    "CRITICAL: Your response must be ONLY valid JSON with no additional text, "
    "explanations, or markdown formatting. Do not wrap the JSON in code blocks "
    "or backticks."
)

_SHARED_SCHEMA = """  "action_items": [
    {
      "task": "string",
      "assignee": "string (name of person responsible)",
      "due_date": "string (extract if mentioned, otherwise 'Not specified')",
      "priority": "High|Medium|Low"
    }
  ],
  "decisions": [
    {
      "decision": "string",
      "context": "string (brief explanation)"
    }
  ],
  "risks": [
    {
      "risk": "string (description of the risk)",
      "severity": "High|Medium|Low",
      "impact": "string (what this affects)",
      "mentioned_by": "string (who raised it)"
    }
  ],
  "key_topics": ["array of main topics discussed"],"""

EMAIL_SCHEMA = (
    """{
  "email_metadata": {
    "subject": "string (extract from email if present)",
    "from": "string (sender name/email if mentioned)",
    "date": "string (extract if mentioned, otherwise 'Not specified')",
    "project_name": "string (infer from context)"
  },
"""
    + _SHARED_SCHEMA
    + """
  "status_updates": [
    {
      "area": "string (what aspect of the project)",
      "status": "string (the update or information)",
      "type": "Progress|Blocker|Delay|Resource Issue|Budget|Other"
    }
  ],
  "project_health": {
    "status": "On Track|At Risk|Blocked",
    "summary": "string (1-2 sentence overall assessment based on email content)"
  }
}"""
)

MEETING_SCHEMA = (
    """{
  "meeting_metadata": {
    "project_name": "string (infer from context)",
    "date": "string (extract if mentioned, otherwise 'Not specified')",
    "attendees": ["array of attendee names"]
  },
"""
    + _SHARED_SCHEMA
    + """
  "project_health": {
    "status": "On Track|At Risk|Blocked",
    "summary": "string (1-2 sentence overall assessment based on the meeting)"
  }
}"""
)

EMAIL_FOCUS = """Be thorough but concise. Extract information about:
- Project status updates
- Supply chain delays or issues
- Resource bottlenecks
- Client concerns
- Timeline slips
- Budget variances
- Any blockers or risks mentioned"""

MEETING_FOCUS = """Be thorough but concise. Extract information about:
- Commitments and who owns them
- Deadlines and dates that were agreed or changed
- Client concerns and escalations
- Schedule or supply risks
- Decisions that were made or deferred"""

_TEMPLATE = """You are an expert project management assistant. Analyze the following {noun} and extract structured project information.

{label}:
{text}

{json_only}

Provide your response in exactly this JSON structure:
{schema}

{focus}

If information isn't present, use "Not specified" or empty arrays as appropriate.

Remember: Respond with ONLY the JSON object, nothing else."""


def build_email_prompt(email_text: str) -> str:
    """Build the extraction prompt for a project email."""
    return _TEMPLATE.format(
        noun="email",
        label="Email Content",
        text=email_text,
        json_only=JSON_ONLY_INSTRUCTION,
        schema=EMAIL_SCHEMA,
        focus=EMAIL_FOCUS,
    )


def build_meeting_prompt(transcript: str) -> str:
    """Build the extraction prompt for a meeting transcript."""
    return _TEMPLATE.format(
        noun="meeting transcript",
        label="Meeting Transcript",
        text=transcript,
        json_only=JSON_ONLY_INSTRUCTION,
        schema=MEETING_SCHEMA,
        focus=MEETING_FOCUS,
    )


def build_prompt(mode: AnalysisMode, text: str) -> str:
    if mode is AnalysisMode.EMAIL:
        return build_email_prompt(text)
    return build_meeting_prompt(text)
