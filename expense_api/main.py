import logging
import time
import uuid

from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse, PlainTextResponse, Response

from expense_api.api.routes import expenses
from expense_api.core.config import settings
from expense_api.core.limiter import limiter
from expense_api.core.logging import client_ip_ctx, configure_logging, request_id_ctx
from expense_api.core.metrics import metrics
from expense_api.services.expense_store import ExpenseStore

configure_logging(settings.log_level, settings.log_format)

app = FastAPI(title=settings.app_name)
app.state.expense_store = ExpenseStore()

rate_limit_enabled = settings.env.lower() != "test"
if rate_limit_enabled:
    from slowapi.errors import RateLimitExceeded
    from slowapi.middleware import SlowAPIMiddleware

    app.state.limiter = limiter
    app.add_middleware(SlowAPIMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=settings.allowed_methods,
    allow_headers=settings.allowed_headers,
    max_age=settings.cors_max_age,
)


def _error_body(request: Request, code: str, message: str, details=None) -> dict:
    error = {
        "code": code,
        "message": message,
        "request_id": getattr(request.state, "request_id", None),
    }
    if details is not None:
        error["details"] = details
    return {"error": error}


# The last middleware registered runs outermost; add_request_id must stay last.
@app.middleware("http")
async def limit_body_size(request: Request, call_next):
    content_length = request.headers.get("content-length")
    if content_length and content_length.isdigit() and int(content_length) > settings.max_body_bytes:
        return JSONResponse(
            status_code=413,
            content=_error_body(request, "payload_too_large", "Request body too large"),
        )
    return await call_next(request)


@app.middleware("http")
async def enforce_json_content_type(request: Request, call_next):
    if request.method in {"POST", "PUT", "PATCH"}:
        content_length = request.headers.get("content-length")
        has_body = False
        if content_length:
            try:
                has_body = int(content_length) > 0
            except ValueError:
                has_body = False
        if has_body:
            content_type = request.headers.get("content-type", "")
            media_type = content_type.split(";")[0].strip().lower()
            if media_type != "application/json":
                return JSONResponse(
                    status_code=415,
                    content=_error_body(
                        request,
                        "unsupported_media_type",
                        "Content-Type must be application/json",
                    ),
                )
    return await call_next(request)


@app.middleware("http")
async def security_headers(request: Request, call_next):
    response: Response = await call_next(request)
    response.headers.setdefault("Content-Security-Policy", "default-src 'self'")
    response.headers.setdefault("X-Content-Type-Options", "nosniff")
    response.headers.setdefault("X-Frame-Options", "DENY")
    response.headers.setdefault("Referrer-Policy", "no-referrer")
    if settings.env.lower() == "production":
        response.headers.setdefault("Strict-Transport-Security", "max-age=63072000; includeSubDomains")
    return response


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id
    request_id_ctx.set(request_id)
    if request.client:
        client_ip_ctx.set(request.client.host)
    start = time.monotonic()
    response: Response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    duration_ms = int((time.monotonic() - start) * 1000)
    logging.getLogger("access").info(
        "request",
        extra={
            "event": {
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            }
        },
    )
    metrics.record(response.status_code, request.method, duration_ms)
    return response


@app.get("/health", response_class=PlainTextResponse)
def health():
    return "Ok"


@app.get("/health/live")
def live():
    return {"status": "ok"}


@app.get("/health/ready")
def ready(request: Request):
    ready_state = getattr(request.app.state, "expense_store", None) is not None
    return {"status": "ready" if ready_state else "starting"}


@app.get("/metrics")
def metrics_endpoint():
    return metrics.snapshot()


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    logging.getLogger("app").exception(
        "Unhandled exception",
        extra={
            "event": {
                "method": request.method,
                "path": request.url.path,
                "request_id": getattr(request.state, "request_id", None),
            }
        },
    )
    message = "An unexpected error occurred"
    details = None
    if settings.env.lower() != "production":
        message = f"{message}: {exc.__class__.__name__}: {exc}"
        details = [{"type": exc.__class__.__name__}]
    return JSONResponse(
        status_code=500,
        content=_error_body(request, "internal_server_error", message, details),
    )


async def rate_limit_handler(request: Request, exc: Exception):
    retry_after = None
    detail = getattr(exc, "detail", None)
    if isinstance(detail, dict):
        if "retry_after" in detail:
            retry_after = int(detail["retry_after"])
        elif "reset" in detail:
            retry_after = max(0, int(detail["reset"] - time.time()))
    headers = {}
    if retry_after is not None:
        headers["Retry-After"] = str(retry_after)
    return JSONResponse(
        status_code=429,
        headers=headers,
        content=_error_body(request, "rate_limited", "Too many requests"),
    )


if rate_limit_enabled:
    app.add_exception_handler(RateLimitExceeded, rate_limit_handler)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content=_error_body(
            request,
            "validation_error",
            "Validation failed",
            jsonable_encoder(exc.errors()),
        ),
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
        content=_error_body(request, f"http_{exc.status_code}", str(exc.detail)),
    )


app.include_router(expenses.router, prefix="/api")
