"""
Admission checks for resource requests and real-time handshakes.

Resource requests carry the credential in the "token" cookie. Socket.IO
handshakes carry it in the auth payload field "cookie", either as the raw
value or as a cookie string.
"""

from typing import Any, Mapping, Optional

from starlette.requests import cookie_parser

from ..models.user import Identity
from .token_registry import TokenRegistry

TOKEN_COOKIE_NAME = "token"
HANDSHAKE_FIELD = "cookie"


def extract_token(cookie_header: Optional[str]) -> Optional[str]:
    """Read the token cookie out of a Cookie header value"""
    if not cookie_header:
        return None
    return cookie_parser(cookie_header).get(TOKEN_COOKIE_NAME) or None


class AccessGate:
    """Single place that decides whether a caller is authenticated"""

    def __init__(self, registry: TokenRegistry):
        self.registry = registry

    def authorize_token(self, token: Optional[str]) -> Optional[Identity]:
        return self.registry.identity_of(token)

    def authorize_cookie(self, cookie_header: Optional[str]) -> Optional[Identity]:
        """Identity for a Cookie header, or None when access is denied"""
        return self.authorize_token(extract_token(cookie_header))

    def authorize_handshake(self, auth: Any) -> Optional[Identity]:
        """Identity for a Socket.IO handshake auth payload, or None"""
        if not isinstance(auth, Mapping):
            return None
        carried = auth.get(HANDSHAKE_FIELD)
        if not isinstance(carried, str) or not carried:
            return None
        identity = self.authorize_token(carried)
        if identity is None and "=" in carried:
            identity = self.authorize_cookie(carried)
        return identity
