"""Session credentials and admission checks"""

from .token_registry import TokenRegistry
from .access_gate import AccessGate, TOKEN_COOKIE_NAME

__all__ = ["TokenRegistry", "AccessGate", "TOKEN_COOKIE_NAME"]
