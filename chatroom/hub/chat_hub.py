"""
Chat hub module.

Keeps the set of admitted participants, replays history to each newcomer
and fans every incoming message out to everyone, in one total order.
"""

import asyncio
import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Protocol

from fastapi.concurrency import run_in_threadpool

from ..models.message import Message
from ..models.user import Identity
from ..services.message_store import MessageHistoryStore
from ..utils.exceptions import AuthorizationError, ValidationError
from ..utils.logger import get_logger

logger = get_logger(__name__)

HISTORY_EVENT = "history"
MESSAGE_EVENT = "message"


class Emitter(Protocol):
    """The slice of socketio.AsyncServer the hub needs"""

    async def emit(self, event: str, data: Any = None, to: Optional[str] = None, **kwargs) -> None:
        ...


@dataclass(frozen=True)
class Participant:
    sid: str
    identity: Identity
    connected_at: str = field(default_factory=lambda: datetime.now().isoformat())


class ChatHub:
    """
    Real-time coordination point.

    join() and post() run under the same lock, so a newcomer's snapshot holds
    exactly the messages committed before it was admitted, and its history
    event precedes any broadcast it receives.
    """

    def __init__(self, history: MessageHistoryStore, emitter: Optional[Emitter] = None):
        self.history = history
        self.emitter = emitter
        self._participants: Dict[str, Participant] = {}
        self.lock = asyncio.Lock()

    def bind(self, emitter: Emitter) -> None:
        self.emitter = emitter

    @property
    def participant_count(self) -> int:
        return len(self._participants)

    async def join(self, sid: str, identity: Identity) -> List[Message]:
        """Send the history snapshot to sid privately, then admit it"""
        async with self.lock:
            snapshot = await run_in_threadpool(self.history.all)
            await self.emitter.emit(HISTORY_EVENT, [m.to_wire() for m in snapshot], to=sid)
            self._participants[sid] = Participant(sid=sid, identity=identity)

        logger.info(
            "User connected",
            sid=sid,
            login=identity.login,
            history_size=len(snapshot),
            participants=self.participant_count,
        )
        return snapshot

    async def post(self, sid: str, text: Any) -> Message:
        """Commit a message from sid and broadcast it to every participant"""
        participant = self._participants.get(sid)
        if participant is None:
            raise AuthorizationError(f"Connection {sid} is not an admitted participant")
        if not isinstance(text, str):
            raise ValidationError("Message text must be a string")

        async with self.lock:
            message = Message.create(text, participant.identity.user_id)
            await run_in_threadpool(self.history.append, message)
            failed = await self._fan_out(message)

        logger.info(
            "Message posted",
            sid=sid,
            login=participant.identity.login,
            recipients=self.participant_count,
            failed=len(failed),
        )
        return message

    async def leave(self, sid: str) -> None:
        """Drop sid from the live set; others are not notified"""
        async with self.lock:
            participant = self._participants.pop(sid, None)

        if participant is not None:
            logger.info(
                "User disconnected",
                sid=sid,
                login=participant.identity.login,
                participants=self.participant_count,
            )

    async def _fan_out(self, message: Message) -> List[str]:
        payload = json.dumps(message.to_wire(), ensure_ascii=False)
        failed = []
        for sid in list(self._participants):
            try:
                await self.emitter.emit(MESSAGE_EVENT, payload, to=sid)
            except Exception as e:
                logger.error("Failed to deliver message", sid=sid, error=str(e))
                failed.append(sid)
        return failed
