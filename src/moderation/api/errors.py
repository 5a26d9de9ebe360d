"""HTTP mapping for Moderation domain errors.

Protean's handlers cover payload validation (400) and missing objects
(404). The Forbidden and Duplicate families need their own status codes.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from moderation.exceptions import Duplicate, Forbidden, NotFound


def _error_response(status_code: int, exc) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": {"code": exc.code, "message": exc.message}},
    )


def register_moderation_exception_handlers(app: FastAPI) -> None:
    register_exception_handlers(app)

    @app.exception_handler(NotFound)
    async def not_found_handler(request: Request, exc: NotFound):
        return _error_response(404, exc)

    @app.exception_handler(Forbidden)
    async def forbidden_handler(request: Request, exc: Forbidden):
        return _error_response(403, exc)

    @app.exception_handler(Duplicate)
    async def duplicate_handler(request: Request, exc: Duplicate):
        return _error_response(409, exc)
