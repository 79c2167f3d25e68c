from __future__ import annotations


class FeedbackBotError(Exception):
    """Base class for errors converted to JSON error bodies at the route boundary."""

    status_code: int = 500
    error: str = "Internal server error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(FeedbackBotError):
    """Client sent something we refuse to process (e.g. rating out of range)."""

    status_code = 400
    error = "Invalid request."


class GenerationError(FeedbackBotError):
    """The model client failed; nothing from the submission was stored."""

    status_code = 500
    error = "Failed to process submission"


class InternalError(FeedbackBotError):
    status_code = 500
    error = "Failed to fetch submissions"
