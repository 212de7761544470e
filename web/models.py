"""API request/response models"""

from typing import Optional

from pydantic import BaseModel


class CredentialsRequest(BaseModel):
    """Body of /api/login and /api/register"""
    login: Optional[str] = None
    password: Optional[str] = None


class TokenResponse(BaseModel):
    token: str


class StatusResponse(BaseModel):
    status: str = "Ok"


class ErrorResponse(BaseModel):
    error: str
