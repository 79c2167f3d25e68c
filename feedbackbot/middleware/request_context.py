from __future__ import annotations

import logging
import re
import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from feedbackbot.shared.context import run_id_var

logger = logging.getLogger("feedbackbot")

RUN_ID_HEADER = "X-Run-Id"
_RUN_ID_RE = re.compile(r"^[A-Za-z0-9._-]{1,64}$")


def resolve_run_id(incoming: str | None) -> str:
    """Reuse a caller's run id when it looks sane, otherwise mint one."""
    if incoming and _RUN_ID_RE.match(incoming):
        return incoming
    return uuid.uuid4().hex


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Binds a run id to every request (contextvar + request.state), echoes it
    back in `X-Run-Id` and writes one REQ line per request.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        run_id = resolve_run_id(request.headers.get(RUN_ID_HEADER))
        request.state.run_id = run_id
        token = run_id_var.set(run_id)
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "REQ_FAILED run_id=%s %s %s elapsed=%.1fms",
                run_id,
                request.method,
                request.url.path,
                (time.perf_counter() - started) * 1000,
            )
            raise
        finally:
            run_id_var.reset(token)

        response.headers[RUN_ID_HEADER] = run_id
        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        logger.log(
            level,
            "REQ run_id=%s %s %s status=%s elapsed=%.1fms",
            run_id,
            request.method,
            request.url.path,
            response.status_code,
            (time.perf_counter() - started) * 1000,
        )
        return response
