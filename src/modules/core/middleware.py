import time
import uuid
from contextvars import ContextVar
from typing import Callable

import structlog
from django.conf import settings
from django.http import HttpRequest, HttpResponse, HttpResponseForbidden, JsonResponse

from modules.core.apps import get_gateway

correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="")

logger = structlog.get_logger()

CORS_ERROR_MESSAGE = "Error de CORS"


class RequestLoggingMiddleware:
    """Logs every request and tags it with a correlation ID.

    Reads X-Request-ID from the incoming request, or generates a UUID4
    when absent.  The ID is bound into structlog's contextvars so every
    log line of the request carries it, and is echoed back on the
    X-Request-ID response header.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        cid = request.META.get("HTTP_X_REQUEST_ID") or str(uuid.uuid4())
        correlation_id_var.set(cid)

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(correlation_id=cid)

        logger.info(
            "request_started",
            method=request.method,
            path=request.get_full_path(),
        )

        start = time.monotonic()
        response = self.get_response(request)

        logger.info(
            "request_finished",
            method=request.method,
            path=request.get_full_path(),
            status_code=response.status_code,
            duration_ms=round((time.monotonic() - start) * 1000, 2),
        )

        response["X-Request-ID"] = cid
        return response


class CorsOriginGuardMiddleware:
    """Rejects cross-origin requests from anything but the configured origin.

    ``corsheaders`` only omits the CORS headers for a disallowed origin;
    this guard answers such requests with a plain 403 instead.  Requests
    without an Origin header, and same-origin requests, pass through.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        origin = request.headers.get("Origin")
        if origin and not self._is_allowed(request, origin):
            logger.warning("cors_origin_rejected", origin=origin)
            return HttpResponseForbidden(CORS_ERROR_MESSAGE)
        return self.get_response(request)

    @staticmethod
    def _is_allowed(request: HttpRequest, origin: str) -> bool:
        if origin in settings.CORS_ALLOWED_ORIGINS:
            return True
        own_origin = f"{request.scheme}://{request.get_host()}"
        return origin == own_origin


class ReadinessGateMiddleware:
    """Fails fast with 503 on API routes while the database is not Ready.

    Only active when ``READINESS_GATE_ENABLED`` is set; health and docs
    routes are never gated.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        if settings.READINESS_GATE_ENABLED and request.path.startswith(
            settings.READINESS_GATED_PREFIX
        ):
            gateway = get_gateway()
            if not gateway.is_ready:
                logger.warning("readiness_gate_rejected", state=str(gateway.state))
                return JsonResponse(
                    {"error": "Database not ready", "state": str(gateway.state)},
                    status=503,
                )
        return self.get_response(request)
