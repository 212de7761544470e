"""
Append-only chat history, one JSON object per line.
"""

import json
import os
from pathlib import Path
from threading import Lock
from typing import List

from ..models.message import Message
from ..utils.logger import get_logger

logger = get_logger(__name__)


class MessageHistoryStore:
    """Durable, ordered message history"""

    def __init__(self, messages_path: Path):
        self.messages_path = Path(messages_path)
        self.messages_path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = Lock()

    def append(self, message: Message) -> None:
        """Write one message; returns once it is on disk"""
        line = json.dumps(message.to_wire(), ensure_ascii=False)
        with self._lock:
            with open(self.messages_path, "a", encoding="utf-8") as f:
                f.write(line + "\n")
                f.flush()
                os.fsync(f.fileno())

    def all(self) -> List[Message]:
        """Every stored message in insertion order"""
        with self._lock:
            if not self.messages_path.exists():
                return []
            lines = self.messages_path.read_text(encoding="utf-8").splitlines()

        messages = []
        for lineno, line in enumerate(lines, start=1):
            if not line.strip():
                continue
            try:
                messages.append(Message(**json.loads(line)))
            except (ValueError, TypeError) as e:
                logger.warning(
                    "Skipping unreadable history line",
                    path=str(self.messages_path),
                    line=lineno,
                    error=str(e),
                )
        return messages

    def clear(self) -> None:
        with self._lock:
            if self.messages_path.exists():
                self.messages_path.unlink()
