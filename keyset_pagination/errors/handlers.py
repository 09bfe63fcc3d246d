"""Exception handlers for FastAPI applications that paginate with cursors."""

import logging
from fastapi import Request
from fastapi.responses import JSONResponse

from .problem_details import ProblemDetailException

logger = logging.getLogger(__name__)


async def problem_detail_exception_handler(
    request: Request,
    exc: ProblemDetailException
) -> JSONResponse:
    """Handle ProblemDetailException instances, including cursor errors."""
    logger.info(
        f"Problem detail exception: {exc.status} - {exc.title}",
        extra={
            "status_code": exc.status,
            "path": str(request.url.path),
            "method": request.method,
            "detail": exc.detail
        }
    )
    return exc.to_response(request)


def register_exception_handlers(app):
    """Register pagination exception handlers with a FastAPI app."""
    app.add_exception_handler(ProblemDetailException, problem_detail_exception_handler)
