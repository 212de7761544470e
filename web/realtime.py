"""
Socket.IO namespace for the shared chat channel.

The handshake is admitted only with a registered credential in the auth
payload; admitted connections are handed to the ChatHub.
"""

import socketio

from chatroom.auth.access_gate import AccessGate
from chatroom.hub.chat_hub import ChatHub
from chatroom.utils.exceptions import AuthorizationError, ValidationError
from chatroom.utils.logger import get_logger

logger = get_logger(__name__)


class ChatNamespace(socketio.AsyncNamespace):
    """Binds Socket.IO events to the hub"""

    def __init__(self, hub: ChatHub, gate: AccessGate, namespace: str = "/"):
        super().__init__(namespace)
        self.hub = hub
        self.gate = gate

    async def on_connect(self, sid, environ, auth=None):
        identity = self.gate.authorize_handshake(auth)
        if identity is None:
            logger.warning(
                "Connection refused",
                sid=sid,
                remote_addr=(environ or {}).get("REMOTE_ADDR"),
            )
            raise socketio.exceptions.ConnectionRefusedError("Not authorized")
        await self.hub.join(sid, identity)

    async def on_new_message(self, sid, text):
        try:
            await self.hub.post(sid, text)
        except (ValidationError, AuthorizationError) as e:
            logger.warning("Message rejected", sid=sid, error=str(e))

    async def on_disconnect(self, sid, reason=None):
        await self.hub.leave(sid)
