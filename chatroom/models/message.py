"""Chat message model"""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

# Every broadcast carries this label, whoever sent it
ADMIN_SENDER = "Admin"
TIME_FORMAT = "%H:%M"


class Message(BaseModel):
    """A committed chat message. Serialized with the wire name userId."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    sender: str = ADMIN_SENDER
    text: str
    time: str
    user_id: str = Field(alias="userId")

    @classmethod
    def create(cls, text: str, user_id: str, now: Optional[datetime] = None) -> "Message":
        now = now or datetime.now()
        return cls(text=text, time=now.strftime(TIME_FORMAT), user_id=user_id)

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)
