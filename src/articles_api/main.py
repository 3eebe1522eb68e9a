from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from typing import Any

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from articles_api.config import settings
from articles_api.db.session import create_tables, shutdown
from articles_api.dependencies import DB
from articles_api.exceptions import DomainError, FieldError, ValidationError
from articles_api.logging import get_logger
from articles_api.middleware import REQUEST_ID_HEADER, RequestIDMiddleware
from articles_api.routers import article
from articles_api.schemas.error import ErrorResponse, ErrorType, ValidationErrorItem

logger = get_logger(__name__)

# Locations of request parts other than the body in FastAPI's error `loc`
_PARAMETER_LOCATIONS = frozenset({"path", "query", "header", "cookie"})

# FastAPI raises HTTPException(400) with this detail when the body cannot be decoded at all
_BODY_PARSE_ERROR = "There was an error parsing the body"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create tables on startup (there are no migrations); dispose the pool on shutdown."""
    if settings.db_create_tables:
        await create_tables()
    logger.info("startup", database=settings.database_url.split("://", 1)[0])
    yield
    await shutdown()


app = FastAPI(
    title="Articles API",
    description="REST API for creating, listing, fetching and deleting articles.",
    version="1.0.0",
    contact={"name": "Articles API Team"},
    license_info={"name": "MIT License", "url": "https://opensource.org/licenses/MIT"},
    servers=[{"url": f"http://localhost:{settings.port}", "description": "Development server"}],
    openapi_tags=[{"name": "Articles", "description": "Article management endpoints"}],
    lifespan=lifespan,
)
app.add_middleware(RequestIDMiddleware)
app.include_router(article.router)


def _error_response(
    request: Request,
    *,
    status_code: int,
    error: ErrorType,
    message: str,
    details: str,
    validation_errors: Sequence[FieldError] | None = None,
    headers: dict[str, str] | None = None,
    with_traceback: bool = False,
) -> JSONResponse:
    """Build the standard error envelope and log it under its fresh error id."""
    body = ErrorResponse(
        status=status_code,
        error=error,
        message=message,
        details=details,
        path=request.url.path,
        validation_errors=(
            None
            if validation_errors is None
            else [
                ValidationErrorItem(
                    field=item.field, rejected_value=item.rejected_value, message=item.message
                )
                for item in validation_errors
            ]
        ),
    )
    if with_traceback:
        log = logger.exception
    elif status_code < 500:
        log = logger.warning
    else:
        log = logger.error
    log(
        "request_failed",
        error_id=body.error_id,
        status=status_code,
        error=str(error),
        message=message,
        path=request.url.path,
        method=request.method,
    )
    response = JSONResponse(status_code=status_code, content=body.to_json(), headers=headers)
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        response.headers[REQUEST_ID_HEADER] = request_id
    return response


def _field_errors(errors: Sequence[Any]) -> list[FieldError]:
    """Convert FastAPI body errors into FieldError records, dropping the `body` prefix."""
    return [
        FieldError(
            field=".".join(str(part) for part in err["loc"][1:]),
            rejected_value=err.get("input"),
            message=err["msg"],
        )
        for err in errors
    ]


def _expected_type(err: dict[str, Any]) -> str:
    # pydantic error types look like "int_parsing" or "string_type"
    kind: str = err.get("type", "")
    for suffix in ("_parsing", "_type"):
        if kind.endswith(suffix):
            return kind.removesuffix(suffix)
    return "unknown"


def _malformed_body(request: Request) -> JSONResponse:
    return _error_response(
        request,
        status_code=400,
        error=ErrorType.BAD_REQUEST,
        message="Malformed JSON request",
        details="The request body contains invalid JSON or missing required fields",
    )


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    """Return 400 listing every rejected field."""
    return _error_response(
        request,
        status_code=exc.status_code,
        error=exc.error_type,
        message=exc.message,
        details=exc.details,
        validation_errors=exc.errors,
    )


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """NotFoundError and other domain errors carry their own status and category."""
    return _error_response(
        request,
        status_code=exc.status_code,
        error=exc.error_type,
        message=exc.message,
        details=exc.details,
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Split FastAPI's 422 into malformed body, bad parameter and bad body field.

    - unparseable JSON, or a body that is not an object: 400 Bad Request
    - path/query/header/cookie value of the wrong type: 400 Bad Request
    - body field of the wrong JSON type: 400 Validation Error with field list
    """
    errors = exc.errors()

    if any(err.get("type") == "json_invalid" or tuple(err["loc"]) == ("body",) for err in errors):
        return _malformed_body(request)

    param_errors = [err for err in errors if err["loc"][0] in _PARAMETER_LOCATIONS]
    if param_errors:
        first = param_errors[0]
        received = first.get("input")
        return _error_response(
            request,
            status_code=400,
            error=ErrorType.BAD_REQUEST,
            message="Invalid parameter type",
            details=(
                f"Parameter '{first['loc'][-1]}' should be of type {_expected_type(first)} "
                f"but received: {'null' if received is None else received}"
            ),
        )

    return _error_response(
        request,
        status_code=400,
        error=ErrorType.VALIDATION_ERROR,
        message="Request binding failed",
        details="Invalid request format or missing required fields",
        validation_errors=_field_errors(errors),
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Unknown routes, unsupported methods and any explicit HTTPException."""
    if exc.status_code == 400 and exc.detail == _BODY_PARSE_ERROR:
        return _malformed_body(request)
    if exc.status_code == 404:
        return _error_response(
            request,
            status_code=404,
            error=ErrorType.RESOURCE_NOT_FOUND,
            message="Endpoint not found",
            details=f"No handler found for {request.method} {request.url.path}",
        )
    if exc.status_code == 405:
        allowed = (exc.headers or {}).get("Allow", "")
        return _error_response(
            request,
            status_code=405,
            error=ErrorType.BAD_REQUEST,
            message="HTTP method not supported",
            details=(
                f"Method '{request.method}' is not supported for this endpoint. "
                f"Supported methods: [{allowed}]"
            ),
            headers=exc.headers,
        )
    return _error_response(
        request,
        status_code=exc.status_code,
        error=ErrorType.for_status(exc.status_code),
        message=str(exc.detail),
        details="The requested operation could not be completed",
        headers=exc.headers,
    )


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Store or connection failure. The traceback goes to the log, never to the client."""
    return _error_response(
        request,
        status_code=500,
        error=ErrorType.DATABASE_ERROR,
        message="Database operation failed",
        details="An error occurred while accessing the database. Please try again later.",
        with_traceback=True,
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unhandled exceptions with traceback and return a safe error response."""
    return _error_response(
        request,
        status_code=500,
        error=ErrorType.INTERNAL_SERVER_ERROR,
        message="An unexpected error occurred",
        details="Please contact support if this problem persists",
        with_traceback=True,
    )


@app.get("/health", tags=["Health"])
async def health(db: DB) -> dict[str, str]:
    """Health check endpoint, verifies database connectivity.

    Returns 200 OK only if the database responds to a ping query.
    """
    await db.execute(text("SELECT 1"))
    return {"status": "ok"}


def run() -> None:
    """Console entry point: serve the app on the configured host and port."""
    # log_config=None keeps uvicorn from replacing our structlog handlers
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
