"""Data models"""

from .user import Account, Identity
from .message import Message, ADMIN_SENDER

__all__ = ["Account", "Identity", "Message", "ADMIN_SENDER"]
