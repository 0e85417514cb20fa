from typing import Any, Dict

import structlog
from django.db import DatabaseError
from django.http import HttpRequest, JsonResponse
from django.utils import timezone

from modules.core.apps import get_gateway

logger = structlog.get_logger()


def health_check(request: HttpRequest) -> JsonResponse:
    gateway = get_gateway()
    services: Dict[str, Dict[str, Any]] = {}
    overall_healthy = True

    # Check database
    try:
        services["database"] = {
            "status": "up",
            "readiness": str(gateway.state),
            "response_time_ms": gateway.ping(),
        }
    except DatabaseError:
        services["database"] = {"status": "down", "readiness": str(gateway.state)}
        overall_healthy = False
        logger.error("health_check_db_failure")

    status_code = 200 if overall_healthy else 503

    logger.info(
        "health_check_completed", status="healthy" if overall_healthy else "unhealthy"
    )

    return JsonResponse(
        {
            "status": "healthy" if overall_healthy else "unhealthy",
            "timestamp": timezone.now().isoformat(),
            "services": services,
        },
        status=status_code,
    )
