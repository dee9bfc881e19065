"""Translate domain exceptions into HTTP responses"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..core.errors import (
    ActionFailed,
    ConfirmationRequired,
    FormValidationError,
    NotFound,
    UndoExpired,
    UpstreamError,
    UpstreamUnavailable,
)

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:

    @app.exception_handler(FormValidationError)
    async def form_invalid(request: Request, exc: FormValidationError):
        return JSONResponse(status_code=422, content={"detail": "Invalid form", "errors": exc.errors})

    @app.exception_handler(ConfirmationRequired)
    async def confirmation_required(request: Request, exc: ConfirmationRequired):
        return JSONResponse(
            status_code=409,
            content={"detail": exc.prompt, "affectedSites": exc.affected_sites},
        )

    @app.exception_handler(NotFound)
    async def not_found(request: Request, exc: NotFound):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(UndoExpired)
    async def undo_expired(request: Request, exc: UndoExpired):
        return JSONResponse(status_code=410, content={"detail": str(exc)})

    @app.exception_handler(ActionFailed)
    async def action_failed(request: Request, exc: ActionFailed):
        status_code = 503 if isinstance(exc.cause, UpstreamUnavailable) else 502
        return JSONResponse(status_code=status_code, content={"detail": exc.message})

    @app.exception_handler(UpstreamError)
    async def upstream_error(request: Request, exc: UpstreamError):
        status_code = 404 if exc.status_code == 404 else 502
        return JSONResponse(status_code=status_code, content={"detail": exc.detail})

    @app.exception_handler(UpstreamUnavailable)
    async def upstream_unavailable(request: Request, exc: UpstreamUnavailable):
        logger.error(str(exc))
        return JSONResponse(status_code=503, content={"detail": "Service unavailable"})
