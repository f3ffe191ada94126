from __future__ import annotations

import logging
import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from ecommerce_portal.core.metrics import request_metrics
from ecommerce_portal.core.request_context import clear_request_context, set_request_context

logger = logging.getLogger(__name__)


class ObservabilityMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        set_request_context(request_id=request_id)

        status_code = 500
        endpoint = _route_template(request)
        method = request.method
        response = None

        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            user_id, user_type = _principal_fields(request)
            duration_ms = round((time.perf_counter() - start) * 1000, 2)
            endpoint = _route_template(request) or endpoint

            set_request_context(user_id=user_id, user_type=user_type)
            request_metrics.observe(endpoint=endpoint, method=method, status_code=status_code, duration_ms=duration_ms)

            logger.info(
                "request completed",
                extra={
                    "request_id": request_id,
                    "user_id": user_id,
                    "user_type": user_type,
                    "endpoint": endpoint,
                    "method": method,
                    "status_code": status_code,
                    "duration_ms": duration_ms,
                },
            )

            if response is not None:
                response.headers["X-Request-ID"] = request_id

            clear_request_context()


def _route_template(request: Request) -> str:
    # /product/{product_id} instead of /product/42 keeps metric keys bounded
    route = request.scope.get("route")
    path = getattr(route, "path", None)
    return path or request.url.path


def _principal_fields(request: Request) -> tuple[str | None, str | None]:
    # Set by get_current_principal
    principal = getattr(request.state, "principal", None)
    if principal is None:
        return None, None
    user_type = getattr(principal, "user_type", None)
    return str(principal.user_id), getattr(user_type, "value", user_type)
