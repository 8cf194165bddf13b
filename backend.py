"""Tutor Relay — DeepSeek-backed English tutor behind a single endpoint."""
from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from log import get_logger
from errors import RelayError
from models import ErrorEnvelope
from routes import router, cors_headers

logger = get_logger("tutor")

app = FastAPI(title="Tutor Relay")
app.include_router(router)


def error_response(status_code: int, error: str, details=None) -> JSONResponse:
    envelope = ErrorEnvelope(error=error, details=details)
    return JSONResponse(
        envelope.model_dump(exclude_none=True),
        status_code=status_code,
        headers=cors_headers(),
    )


@app.exception_handler(RelayError)
async def relay_error_handler(request: Request, exc: RelayError):
    if exc.status_code >= 500:
        logger.error("Function error", extra={"status_code": exc.status_code, "detail": exc.details})
    return error_response(exc.status_code, exc.error, exc.details)


@app.exception_handler(StarletteHTTPException)
async def routing_error_handler(request: Request, exc: StarletteHTTPException):
    # Methods outside the relay's routed list (TRACE, PROPFIND, ...) are rejected by the router itself.
    if exc.status_code == 405:
        logger.warning("Invalid method", extra={"method": request.method, "endpoint": request.url.path})
        return error_response(405, "Method Not Allowed")
    return await http_exception_handler(request, exc)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8847)
