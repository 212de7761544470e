"""Service container shared by the HTTP routes and the Socket.IO namespace"""

from dataclasses import dataclass

from fastapi import Request

from chatroom.auth.access_gate import AccessGate
from chatroom.auth.token_registry import TokenRegistry
from chatroom.hub.chat_hub import ChatHub
from chatroom.services.account_service import AccountService
from chatroom.services.message_store import MessageHistoryStore
from chatroom.services.user_store import UserStore
from chatroom.utils.config import Settings

from .assets import StaticAssets


@dataclass
class ChatServices:
    settings: Settings
    registry: TokenRegistry
    gate: AccessGate
    accounts: AccountService
    history: MessageHistoryStore
    hub: ChatHub
    assets: StaticAssets

    @classmethod
    def from_settings(cls, settings: Settings) -> "ChatServices":
        registry = TokenRegistry()
        history = MessageHistoryStore(settings.storage.messages_file)
        return cls(
            settings=settings,
            registry=registry,
            gate=AccessGate(registry),
            accounts=AccountService(UserStore(settings.storage.accounts_file)),
            history=history,
            hub=ChatHub(history),
            assets=StaticAssets(settings.storage.static_dir),
        )


def get_services(request: Request) -> ChatServices:
    """FastAPI dependency returning the app's service container"""
    return request.app.state.services
