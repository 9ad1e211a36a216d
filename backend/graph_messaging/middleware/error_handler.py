import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from pydantic import ValidationError
from fastapi.exceptions import HTTPException
from graph_messaging.errors import MessagingError

logger = logging.getLogger(__name__)


def _failure(status_code: int, code: str, message, **extra) -> JSONResponse:
    error = {"code": code, "message": message}
    error.update(extra)
    return JSONResponse(status_code=status_code, content={"success": False, "error": error})


async def messaging_error_handler(request: Request, exc: MessagingError) -> JSONResponse:
    return _failure(exc.status_code, exc.code, exc.message)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(MessagingError, messaging_error_handler)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)

        except ValidationError as ve:
            return _failure(422, "VALIDATION_ERROR", str(ve), details=ve.errors(include_context=False))

        except HTTPException as he:
            return _failure(he.status_code, "HTTP_EXCEPTION", he.detail)

        except Exception:
            logger.exception("Unhandled error on %s %s", request.method, request.url.path)
            return _failure(500, "INTERNAL_ERROR", "An internal error occurred.")
