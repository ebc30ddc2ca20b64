"""End-to-end analysis: prompt, Claude call, normalization."""

from __future__ import annotations

import logging

from anthropic import Anthropic

from pm_copilot.extraction.client import generate
from pm_copilot.extraction.errors import InputMissing
from pm_copilot.extraction.models import AnalysisMode, ExtractionResult
from pm_copilot.extraction.normalizer import normalize_reply
from pm_copilot.extraction.prompts import build_prompt

logger = logging.getLogger(__name__)


def analyze(
    mode: AnalysisMode, text: str | None, *, client: Anthropic | None = None
) -> ExtractionResult:
    """Extract project information from an email or meeting transcript.

    This is the main entry point: builds the prompt, calls Claude once, and
    normalizes the reply.

    Args:
        mode: Whether ``text`` is an email or a meeting transcript.
        text: The raw source text.
        client: Optional Anthropic client, passed through to ``generate``.

    Returns:
        The normalized ExtractionResult.

    Raises:
        InputMissing: ``text`` is missing or blank.
        GenerationFailure, EmptyResponse, MalformedResponse: see ``errors``.
    """
    if not text or not text.strip():
        raise InputMissing()

    reply = generate(build_prompt(mode, text), client=client)
    logger.debug("Raw Claude response: %s", reply[:200])

    result = normalize_reply(reply, mode)
    logger.info(
        "Analyzed %s: %d action items, %d risks, %d decisions (%d schema issues)",
        mode.value,
        len(result.action_items),
        len(result.risks),
        len(result.decisions),
        len(result.schema_issues),
    )
    return result


def analyze_email(
    email_text: str | None, *, client: Anthropic | None = None
) -> ExtractionResult:
    return analyze(AnalysisMode.EMAIL, email_text, client=client)


def analyze_meeting(
    transcript: str | None, *, client: Anthropic | None = None
) -> ExtractionResult:
    return analyze(AnalysisMode.MEETING, transcript, client=client)
