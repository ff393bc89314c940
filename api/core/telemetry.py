"""Request logging: one canonical log line per request.

A request-scoped dict is opened by RequestLoggingMiddleware when a request
starts. Route handlers and services add fields to it with annotate_request(),
and the middleware emits everything as a single ``request.completed`` event
once the response body has been sent.

Usage:
    from core.telemetry import annotate_request

    annotate_request(certificate_outcome="issued")
"""

import os
import time
import uuid
from contextvars import ContextVar
from typing import Any

from starlette.types import ASGIApp, Message, Receive, Scope, Send

from core.logger import get_logger

logger = get_logger(__name__)

SERVICE_NAME = os.getenv("SERVICE_NAME", "masterclass-certificates-api")
SERVICE_VERSION = os.getenv("SERVICE_VERSION", "1.0.0")

_request_event: ContextVar[dict[str, Any] | None] = ContextVar(
    "request_event", default=None
)


def start_request_event(**fields: Any) -> dict[str, Any]:
    """Open a fresh event dict for the current context and return it."""
    event: dict[str, Any] = dict(fields)
    _request_event.set(event)
    return event


def get_request_event() -> dict[str, Any]:
    """Return the current event dict, or an empty throwaway dict outside a request."""
    event = _request_event.get()
    return event if event is not None else {}


def annotate_request(**fields: Any) -> None:
    """Attach fields to the current request's log line.

    No-op outside a request (CLI, tests calling services directly).
    """
    event = _request_event.get()
    if event is not None:
        event.update(fields)


def end_request_event() -> None:
    _request_event.set(None)


class RequestLoggingMiddleware:
    """Times each request and emits the accumulated event at the end.

    Adds ``x-request-id`` and ``x-request-duration-ms`` response headers.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        start_time = time.perf_counter()
        path = scope.get("path", "")
        client = scope.get("client")
        request_id = str(uuid.uuid4())

        event = start_request_event(
            service_name=SERVICE_NAME,
            service_version=SERVICE_VERSION,
            request_id=request_id,
            http_method=scope.get("method", "UNKNOWN"),
            http_path=path,
            http_client_ip=client[0] if client else "unknown",
        )
        response_status: int | None = None

        async def send_wrapper(message: Message) -> None:
            nonlocal response_status

            if message["type"] == "http.response.start":
                response_status = int(message.get("status", 0))
                duration_ms = (time.perf_counter() - start_time) * 1000
                headers: list[tuple[bytes, bytes]] = list(message.get("headers", []))
                headers.append(
                    (b"x-request-duration-ms", f"{duration_ms:.2f}".encode())
                )
                headers.append((b"x-request-id", request_id.encode()))
                message["headers"] = headers

            elif message["type"] == "http.response.body" and not message.get(
                "more_body", False
            ):
                route = scope.get("route")
                event["http_route"] = getattr(route, "path", None) or path
                event["http_status_code"] = response_status
                event["duration_ms"] = round(
                    (time.perf_counter() - start_time) * 1000, 2
                )
                event["outcome"] = (
                    "success" if response_status and response_status < 400 else "error"
                )
                logger.info("request.completed", **event)
                end_request_event()

            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as exc:
            event["duration_ms"] = round((time.perf_counter() - start_time) * 1000, 2)
            event["outcome"] = "exception"
            event["exception_type"] = type(exc).__name__
            logger.info("request.completed", **event)
            end_request_event()
            raise
