# feedbackbot/exceptions/handlers.py
from __future__ import annotations

import logging
from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from feedbackbot.domain.schemas.submission import ErrorBody
from feedbackbot.exceptions.errors import (
    FeedbackBotError,
    GenerationError,
    InternalError,
    ValidationError,
)
from feedbackbot.shared.context import run_id_var

logger = logging.getLogger("feedbackbot")


def error_response(status_code: int, body: ErrorBody) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def register_exception_handlers(app) -> None:
    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.warning(
            "VALIDATION run_id=%s path=%s errors=%s",
            run_id_var.get(),
            request.url.path,
            exc.errors(),
        )
        return error_response(
            400,
            ErrorBody(error="Invalid request body.", detail=jsonable_encoder(exc.errors())),
        )

    @app.exception_handler(ValidationError)
    async def validation_handler(request: Request, exc: ValidationError):
        logger.warning(
            "VALIDATION run_id=%s path=%s error=%s",
            run_id_var.get(),
            request.url.path,
            exc.message,
        )
        return error_response(exc.status_code, ErrorBody(error=exc.message))

    @app.exception_handler(GenerationError)
    async def generation_handler(request: Request, exc: GenerationError):
        logger.error(
            "GENERATION_FAILED run_id=%s path=%s error=%s",
            run_id_var.get(),
            request.url.path,
            exc.message,
            exc_info=exc,
        )
        return error_response(exc.status_code, ErrorBody(error=exc.error, message=exc.message))

    @app.exception_handler(InternalError)
    async def internal_handler(request: Request, exc: InternalError):
        logger.error(
            "INTERNAL_ERROR run_id=%s path=%s error=%s",
            run_id_var.get(),
            request.url.path,
            exc.message,
            exc_info=exc,
        )
        return error_response(exc.status_code, ErrorBody(error=exc.error, message=exc.message))

    @app.exception_handler(FeedbackBotError)
    async def fallback_handler(request: Request, exc: FeedbackBotError):
        return error_response(exc.status_code, ErrorBody(error=exc.error, message=exc.message))
