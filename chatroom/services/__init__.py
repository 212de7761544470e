"""Account and message persistence"""

from .user_store import UserStore
from .account_service import AccountService
from .message_store import MessageHistoryStore

__all__ = ["UserStore", "AccountService", "MessageHistoryStore"]
