"""ASGI middleware for response hardening."""

from __future__ import annotations

from starlette.types import ASGIApp, Message, Receive, Scope, Send


class SecurityHeadersMiddleware:
    """Adds security headers to every response.

    The API only serves JSON and PDF downloads, so the CSP forbids everything
    except the Swagger UI assets FastAPI pulls from jsdelivr when docs are on.
    """

    SECURITY_HEADERS: list[tuple[bytes, bytes]] = [
        (b"x-content-type-options", b"nosniff"),
        (b"x-frame-options", b"DENY"),
        (b"referrer-policy", b"no-referrer"),
        (
            b"content-security-policy",
            b"default-src 'none';"
            b" script-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net;"
            b" style-src 'self' https://cdn.jsdelivr.net;"
            b" img-src 'self' data: https://fastapi.tiangolo.com;"
            b" connect-src 'self';"
            b" frame-ancestors 'none'",
        ),
        (b"permissions-policy", b"camera=(), microphone=(), geolocation=()"),
    ]

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        async def send_wrapper(message: Message) -> None:
            if message.get("type") == "http.response.start":
                headers: list[tuple[bytes, bytes]] = list(message.get("headers", []))
                headers.extend(self.SECURITY_HEADERS)
                message["headers"] = headers
            await send(message)

        await self.app(scope, receive, send_wrapper)
