from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from feedbackbot.api.routes import router
from feedbackbot.config.settings import settings
from feedbackbot.shared.logging import setup_logging
from feedbackbot.middleware.request_context import RequestContextMiddleware
from feedbackbot.exceptions.handlers import register_exception_handlers
from feedbackbot.services.submission_service import SubmissionService


def create_app(service: SubmissionService | None = None) -> FastAPI:
    setup_logging(settings.log_level)

    app = FastAPI(title="FeedbackBot", version="0.1.0")
    app.state.submission_service = service if service is not None else SubmissionService(settings=settings)
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)
    app.include_router(router)
    return app


app = create_app()
