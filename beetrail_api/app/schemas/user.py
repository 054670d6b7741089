"""
Pydantic models for users and authentication.

Passwords only ever travel inbound; no schema returns a password or
its hash.  Usernames are stripped of surrounding whitespace, passwords
are taken verbatim.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, Field, StringConstraints

from .common import CamelModel


Username = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class UserCreate(BaseModel):
    """Registration payload."""

    username: Username = Field(..., examples=["bee1"])
    password: str = Field(..., min_length=6, examples=["password123"])
    role: Literal["beekeeper", "admin"] = Field(..., examples=["beekeeper"])


class UserLogin(BaseModel):
    username: Username = Field(..., examples=["bee1"])
    password: str = Field(..., min_length=1, examples=["password123"])


class UserRead(BaseModel):
    id: int
    username: str
    role: str


class TokenResponse(CamelModel):
    token: str
    issued_sync_token: int = Field(..., alias="issuedSyncToken")


class SyncResponse(CamelModel):
    sync_token: int = Field(..., alias="syncToken")
