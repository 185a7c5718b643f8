"""
Secure HTTP headers middleware.

The API only serves JSON and plain-text status strings, so responses
forbid framing, sniffing and any embedded content. Headers are added
as the response starts, which also covers the error handler responses
and the rate limiter's 429.
"""

from starlette.datastructures import MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send

SECURE_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Content-Security-Policy": "default-src 'none'; frame-ancestors 'none'",
    "Referrer-Policy": "no-referrer",
    "Cache-Control": "no-store",
}

# Swagger UI and ReDoc load scripts and styles from a CDN.
DOCS_PATHS = ("/docs", "/redoc")


class SecurityHeadersMiddleware:
    """Pure ASGI middleware; leaves headers an endpoint already set."""

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        is_docs = scope["path"].startswith(DOCS_PATHS)

        async def send_with_headers(message: Message) -> None:
            if message["type"] == "http.response.start":
                headers = MutableHeaders(scope=message)
                for name, value in SECURE_HEADERS.items():
                    if name == "Content-Security-Policy" and is_docs:
                        continue
                    headers.setdefault(name, value)
            await send(message)

        await self.app(scope, receive, send_with_headers)
