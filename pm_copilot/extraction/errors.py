"""Error taxonomy for the analysis pipeline.

Every failure raised between the HTTP boundary and the Claude reply is an
``AnalysisError``. The API layer maps them to a single response shape; the
``error_code`` is stable and safe to show to callers, while the extra fields on
``MalformedResponse`` are for operator logs only.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class AnalysisError(Exception):
    """Base class for analysis pipeline errors."""

    message: str
    error_code: str

    def __str__(self) -> str:
        return f"{self.error_code}: {self.message}"


class InputMissing(AnalysisError):
    def __init__(self, message: str = "No text supplied for analysis") -> None:
        super().__init__(message=message, error_code="input_missing")


class GenerationFailure(AnalysisError):
    def __init__(self, message: str = "Claude generation call failed") -> None:
        super().__init__(message=message, error_code="generation_failed")


class EmptyResponse(AnalysisError):
    def __init__(self, message: str = "Claude returned an empty reply") -> None:
        super().__init__(message=message, error_code="empty_response")


class MalformedResponse(AnalysisError):
    """The reply could not be turned into a JSON object.

    ``cleaned_text`` is the de-fenced, isolated payload that was handed to the
    parser and ``parse_error`` is the parser's complaint (or a note that the
    top-level value was not an object).
    """

    def __init__(
        self,
        message: str = "Claude reply was not a valid JSON object",
        *,
        cleaned_text: str = "",
        parse_error: str = "",
    ) -> None:
        super().__init__(message=message, error_code="malformed_response")
        self.cleaned_text = cleaned_text
        self.parse_error = parse_error
