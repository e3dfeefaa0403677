"""
Centralized Error Handling and Request Logging
Every error leaves the API as a JSON body of the form {"message": ...}.
"""

import json
import logging
import traceback
import uuid
from datetime import datetime, timezone
from typing import Dict, Optional
from contextvars import ContextVar

from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

# Context variable for request tracing
request_id_var: ContextVar[str] = ContextVar('request_id', default='')

logger = logging.getLogger(__name__)

class ErrorHandlingConfig:
    """Centralized configuration for error handling behavior"""

    SENSITIVE_FIELD_PATTERNS = [
        'password', 'token', 'key', 'secret', 'authorization', 'cookie', 'credential'
    ]

    TRACE_ID_HEADER = "X-Trace-ID"
    GENERIC_ERROR_MESSAGE = "An unexpected error occurred"

    @classmethod
    def is_sensitive_field(cls, field_name: str) -> bool:
        """Check if a field contains sensitive data"""
        field_lower = field_name.lower()
        return any(pattern in field_lower for pattern in cls.SENSITIVE_FIELD_PATTERNS)

    @classmethod
    def sanitize_headers(cls, headers: Dict[str, str]) -> Dict[str, str]:
        return {
            key: "***REDACTED***" if cls.is_sensitive_field(key) else value
            for key, value in headers.items()
        }

class StructuredLogger:
    """Structured logging with consistent format and context"""

    @staticmethod
    def log_error(
        error_type: str,
        message: str,
        request: Optional[Request] = None,
        exception: Optional[Exception] = None,
        include_traceback: bool = True
    ) -> str:
        """Log structured error with full context, returning its trace ID"""
        trace_id = request_id_var.get('') or str(uuid.uuid4())[:8]

        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "trace_id": trace_id,
            "error_type": error_type,
            "message": message,
            "level": "ERROR"
        }

        if request:
            log_entry["request"] = {
                "method": request.method,
                "path": request.url.path,
                "query_params": dict(request.query_params),
                "headers": ErrorHandlingConfig.sanitize_headers(dict(request.headers)),
                "client_ip": request.client.host if request.client else None
            }

        if exception:
            log_entry["exception"] = {
                "type": type(exception).__name__,
                "details": str(exception)
            }
            if include_traceback:
                log_entry["exception"]["traceback"] = traceback.format_exc()

        logger.error(json.dumps(log_entry, indent=2, default=str))

        return trace_id

def format_timestamp(moment: datetime) -> str:
    """Local time as M/D/YYYY, h:mm:ss AM with no zero padding on month, day or hour"""
    hour = moment.hour % 12 or 12
    return f"{moment.month}/{moment.day}/{moment.year}, {hour}:{moment:%M:%S %p}"

class RequestContextMiddleware(BaseHTTPMiddleware):
    """Logs every request path with a timestamp and tags the response with a trace ID"""

    async def dispatch(self, request: Request, call_next):
        trace_id = str(uuid.uuid4())[:8]
        request_id_var.set(trace_id)
        request.state.trace_id = trace_id

        logger.info(f"Timestamp: {format_timestamp(datetime.now())} | Requested Endpoint: {request.url.path}")

        response = await call_next(request)
        response.headers[ErrorHandlingConfig.TRACE_ID_HEADER] = trace_id
        return response

def _message_response(status_code: int, message: str, trace_id: Optional[str] = None) -> JSONResponse:
    headers = {ErrorHandlingConfig.TRACE_ID_HEADER: trace_id} if trace_id else None
    return JSONResponse(status_code=status_code, content={"message": message}, headers=headers)

# Global Exception Handlers
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTP exceptions as {"message": detail}"""
    trace_id = None
    if exc.status_code >= 500:
        trace_id = StructuredLogger.log_error(
            f"http_{exc.status_code}",
            f"HTTP {exc.status_code}: {exc.detail}",
            request=request,
            include_traceback=False
        )
    else:
        logger.info(f"HTTP {exc.status_code} on {request.url.path}: {exc.detail}")

    return _message_response(exc.status_code, str(exc.detail), trace_id)

async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Handle bodies FastAPI could not parse (malformed JSON, non-object body).
    These are reported like any other failed write: HTTP 500 with a message.
    """
    details = [
        f"{' -> '.join(str(loc) for loc in error.get('loc', []))}: {error.get('msg', 'Invalid value')}"
        for error in exc.errors()
    ]
    message = "Request validation failed: " + "; ".join(details)

    trace_id = StructuredLogger.log_error(
        "request_validation_error",
        message,
        request=request,
        exception=exc,
        include_traceback=False
    )

    return _message_response(500, message, trace_id)

async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all other exceptions without exposing internal details"""
    trace_id = StructuredLogger.log_error(
        "internal_server_error",
        f"Unhandled exception: {str(exc)}",
        request=request,
        exception=exc,
        include_traceback=True
    )

    return _message_response(500, ErrorHandlingConfig.GENERIC_ERROR_MESSAGE, trace_id)

def setup_error_handling(app):
    """Setup request logging and error handling for FastAPI app"""

    app.add_middleware(RequestContextMiddleware)

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    logger.info("Centralized error handling system initialized")
