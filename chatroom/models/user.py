"""User data models for authentication"""

from datetime import datetime
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


class Account(BaseModel):
    """Stored user account"""
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    login: str
    password_hash: str
    created_at: str = Field(default_factory=lambda: datetime.utcnow().isoformat())

    @property
    def identity(self) -> "Identity":
        return Identity(user_id=self.id, login=self.login)


class Identity(BaseModel):
    """Who a validated credential belongs to"""
    model_config = ConfigDict(frozen=True)

    user_id: str
    login: str
