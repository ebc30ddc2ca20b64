"""Single-shot Claude text generation."""

from __future__ import annotations

import logging

from anthropic import Anthropic, APIError
from anthropic.types import TextBlock

from pm_copilot.config import settings
from pm_copilot.extraction.errors import GenerationFailure

logger = logging.getLogger(__name__)


def _make_client() -> Anthropic:
    if not settings.anthropic_api_key:
        raise GenerationFailure("ANTHROPIC_API_KEY is not configured")
    # One call per request: SDK retries are disabled and the timeout is explicit.
    return Anthropic(
        api_key=settings.anthropic_api_key,
        timeout=settings.request_timeout,
        max_retries=0,
    )


def generate(prompt: str, *, client: Anthropic | None = None) -> str:
    """Send ``prompt`` to Claude and return the text of the first content block.

    Args:
        prompt: The full instruction string.
        client: Optional pre-built Anthropic client (tests inject a mock).

    Returns:
        The raw reply text, possibly empty; emptiness is judged downstream.

    Raises:
        GenerationFailure: missing credentials, any Anthropic API error, or a
            reply without a leading text block.
    """
    if client is None:
        client = _make_client()

    try:
        response = client.messages.create(
            model=settings.llm_model,
            max_tokens=settings.max_tokens,
            messages=[{"role": "user", "content": prompt}],
        )
    except APIError as exc:
        logger.warning("Claude call failed: %s", exc)
        raise GenerationFailure(f"Claude API error: {exc.message}") from exc

    if not response.content:
        raise GenerationFailure("Claude returned no content blocks")

    # response.content[0] is a union of block types; only plain text is usable.
    block = response.content[0]
    if not isinstance(block, TextBlock):
        raise GenerationFailure(
            f"Expected TextBlock from Claude, got {type(block).__name__}"
        )
    return block.text
