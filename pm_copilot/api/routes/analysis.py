"""Analysis endpoints: extract project information from emails and transcripts."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from pm_copilot.api.models import (
    AnalyzeEmailRequest,
    AnalyzeMeetingRequest,
    EmailAnalysisResponse,
    ErrorResponse,
    MeetingAnalysisResponse,
)
from pm_copilot.extraction.analyzer import analyze_email, analyze_meeting
from pm_copilot.extraction.errors import AnalysisError, InputMissing, MalformedResponse

logger = logging.getLogger(__name__)

router = APIRouter()

_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}

# path -> (subject, label used in the 400 message)
_ANALYSIS_PATHS = {
    "/api/analyze-email": ("email", "Email text"),
    "/api/analyze-meeting": ("meeting", "Transcript"),
}


def _error_response(exc: AnalysisError, *, subject: str, missing_label: str) -> JSONResponse:
    """Map an AnalysisError onto the uniform error body.

    Diagnostics (cleaned model output, parser error) go to the log only.
    """
    if isinstance(exc, InputMissing):
        return JSONResponse(
            status_code=400,
            content={"error": f"{missing_label} is required", "details": str(exc)},
        )

    if isinstance(exc, MalformedResponse):
        logger.error(
            "Malformed Claude reply while analyzing %s: %s | cleaned text: %s",
            subject,
            exc.parse_error,
            exc.cleaned_text[:500],
        )
    else:
        logger.error("Error analyzing %s: %s", subject, exc)

    return JSONResponse(
        status_code=500,
        content={"error": f"Failed to analyze {subject}", "details": str(exc)},
    )


# Sync handlers: FastAPI runs them in its threadpool, so the blocking Claude
# call does not stall the event loop.
@router.post(
    "/api/analyze-email",
    response_model=EmailAnalysisResponse,
    responses=_ERROR_RESPONSES,
)
def analyze_email_endpoint(body: AnalyzeEmailRequest | None = None) -> Any:
    """Extract action items, risks, decisions and status updates from an email."""
    try:
        result = analyze_email(body.email_text if body else None)
    except AnalysisError as exc:
        return _error_response(exc, subject="email", missing_label="Email text")
    return result.to_dict()


@router.post(
    "/api/analyze-meeting",
    response_model=MeetingAnalysisResponse,
    responses=_ERROR_RESPONSES,
)
def analyze_meeting_endpoint(body: AnalyzeMeetingRequest | None = None) -> Any:
    """Extract action items, risks and decisions from a meeting transcript."""
    try:
        result = analyze_meeting(body.transcript if body else None)
    except AnalysisError as exc:
        return _error_response(exc, subject="meeting", missing_label="Transcript")
    return result.to_dict()


async def analysis_validation_handler(request: Request, exc: RequestValidationError) -> Response:
    """Report unusable analysis request bodies as missing input.

    A missing body, invalid JSON or a non-string text field all mean there is
    no text to analyse, so they share the 400 shape instead of FastAPI's 422.
    Other routes keep the default handler.
    """
    target = _ANALYSIS_PATHS.get(request.url.path)
    if target is None:
        return await request_validation_exception_handler(request, exc)

    subject, label = target
    logger.warning("Rejected %s analysis request: %s", subject, exc.errors())
    return _error_response(
        InputMissing("Request body must be JSON with a text field"),
        subject=subject,
        missing_label=label,
    )
