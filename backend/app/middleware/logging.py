from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable
from typing import Any
from uuid import uuid4

from fastapi import Request
from fastapi.responses import Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from ..metrics import REQUEST_COUNT, REQUEST_ERRORS, REQUEST_LATENCY

REQUEST_ID_HEADER = "X-Request-ID"
_MAX_REQUEST_ID_LENGTH = 64


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log each request as one structured record and feed Prometheus metrics."""

    def __init__(self, app: ASGIApp) -> None:
        super().__init__(app)
        self._logger = logging.getLogger("mindbloom.request")
        if self._logger.level == logging.NOTSET:
            self._logger.setLevel(logging.INFO)

    async def dispatch(  # type: ignore[override]
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        start = time.perf_counter()
        request_id = _incoming_request_id(request) or str(uuid4())
        request.state.request_id = request_id

        try:
            response = await call_next(request)
        except Exception:
            record = _request_record(request, request_id, 500, start)
            _observe_metrics(record)
            self._logger.error("request error", extra=record, exc_info=True)
            raise

        record = _request_record(request, request_id, response.status_code, start)
        _observe_metrics(record)
        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        self._logger.log(level, "request complete", extra=record)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


def _incoming_request_id(request: Request) -> str | None:
    value = (request.headers.get(REQUEST_ID_HEADER) or "").strip()
    if not value or len(value) > _MAX_REQUEST_ID_LENGTH:
        return None
    return value


def _resolve_path_template(request: Request) -> str:
    # route templates keep metric label cardinality bounded
    route = request.scope.get("route")
    if route is not None and hasattr(route, "path"):
        return str(route.path)
    return request.url.path


def _request_record(
    request: Request,
    request_id: str,
    status: int,
    started: float,
) -> dict[str, Any]:
    return {
        "request_id": request_id,
        "path": _resolve_path_template(request),
        "method": request.method,
        "status": status,
        "duration_ms": round((time.perf_counter() - started) * 1000, 3),
        "user": getattr(request.state, "telemetry_user", None),
    }


def _observe_metrics(record: dict[str, Any]) -> None:
    method = record["method"]
    path = record["path"]
    status = str(record["status"])
    REQUEST_COUNT.labels(method=method, path=path, status=status).inc()
    REQUEST_LATENCY.labels(method=method, path=path).observe(record["duration_ms"] / 1000)
    if record["status"] >= 500:
        REQUEST_ERRORS.labels(method=method, path=path, status=status).inc()


__all__ = ["REQUEST_ID_HEADER", "RequestLoggingMiddleware"]
