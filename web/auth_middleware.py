"""
Access gate for HTTP requests.

Raw ASGI middleware: public routes pass straight through, everything else
needs a registered "token" cookie or is redirected to /auth.
"""

from typing import Optional

from starlette.types import ASGIApp, Receive, Scope, Send

from chatroom.auth.access_gate import AccessGate
from chatroom.utils.logger import get_logger

logger = get_logger(__name__)

LOGIN_PAGE = "/auth"

# (method, path) pairs served without a credential
PUBLIC_ROUTES = {
    ("GET", "/auth"),
    ("GET", "/auth.js"),
    ("POST", "/api/login"),
    ("POST", "/api/register"),
}


def is_public(method: str, path: str) -> bool:
    return (method.upper(), path) in PUBLIC_ROUTES


def _get_cookie_header(scope: Scope) -> Optional[str]:
    for key, value in scope.get("headers") or []:
        if key.lower() == b"cookie":
            return value.decode("latin-1")
    return None


class AccessGateMiddleware:
    """Redirects unauthenticated requests for protected routes"""

    def __init__(self, app: ASGIApp, gate: AccessGate):
        self.app = app
        self.gate = gate

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        method = scope.get("method") or "GET"
        path = scope.get("path") or ""
        if is_public(method, path):
            await self.app(scope, receive, send)
            return

        identity = self.gate.authorize_cookie(_get_cookie_header(scope))
        if identity is None:
            logger.debug("Redirecting unauthenticated request", method=method, path=path)
            await send({
                "type": "http.response.start",
                "status": 302,
                "headers": [[b"location", LOGIN_PAGE.encode("latin-1")], [b"content-length", b"0"]],
            })
            await send({"type": "http.response.body", "body": b""})
            return

        await self.app(scope, receive, send)
