from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from api_envelope.config import settings
from api_envelope.exceptions import ConflictError, DomainError, NotFoundError
from api_envelope.logging import get_logger
from api_envelope.middleware import RequestIDMiddleware
from api_envelope.response import EnvelopeRoute, ResponseEnvelope, is_valid_status_code
from api_envelope.routers.item import router as item_router

logger = get_logger(__name__)


app = FastAPI(
    title=settings.app_title,
    docs_url="/docs" if settings.docs_enabled else None,
    redoc_url="/redoc" if settings.docs_enabled else None,
    openapi_url="/openapi.json" if settings.docs_enabled else None,
)
app.router.route_class = EnvelopeRoute
app.add_middleware(RequestIDMiddleware)
app.include_router(item_router)


def _format_validation_errors(exc: RequestValidationError) -> str:
    """Flatten pydantic errors into one line: "body.name: Field required; ..."."""
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        parts.append(f"{location}: {error.get('msg', 'invalid')}" if location else error["msg"])
    return "; ".join(parts) or "Invalid request"


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError) -> Response:
    """Return 404 with the entity message."""
    return ResponseEnvelope.not_found(exc.message).to_response(request)


@app.exception_handler(ConflictError)
async def conflict_handler(request: Request, exc: ConflictError) -> Response:
    """Return 409 for duplicates."""
    logger.info("conflict", error=exc.message, path=request.url.path)
    return ResponseEnvelope.conflict(exc.message).to_response(request)


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError) -> Response:
    """Return 400 for generic domain-level violations."""
    logger.warning("domain_error", error=exc.message, path=request.url.path)
    return ResponseEnvelope.bad_request(exc.message).to_response(request)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> Response:
    """Return 422 with the validation errors flattened into the message."""
    return ResponseEnvelope.unprocessable(_format_validation_errors(exc)).to_response(request)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
    """Wrap router-level errors (unknown path, wrong method) in an envelope.

    Codes the envelope cannot carry are reported as 500.
    """
    status_code = exc.status_code
    if not (is_valid_status_code(status_code) and status_code >= 400):
        logger.warning("http_exception_status_rejected", status_code=status_code)
        status_code = 500
    response = ResponseEnvelope(status_code, error_message=str(exc.detail)).to_response(request)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> Response:
    """Log unhandled exceptions and return a safe error response.

    - Logs full exception with traceback (includes request_id from context)
    - Returns generic error to client (no stack traces leaked)
    """
    logger.exception("unhandled_exception", path=request.url.path, method=request.method)
    return ResponseEnvelope.server_error().to_response(request)


@app.get("/health")
async def health() -> ResponseEnvelope:
    """Liveness probe for load balancers and container orchestrators."""
    return ResponseEnvelope.ok({"status": "ok"})
