# chat models — messages exchanged between the user and the ai companion

from typing import Literal, Optional
from pydantic import BaseModel, Field

from mindmate.models.common import UTCDateTime, utcnow


class ChatCreate(BaseModel):
    """payload for a chat message. timestamp defaults to creation time."""
    sender: Literal["user", "ai"]
    message: str
    timestamp: UTCDateTime = Field(default_factory=utcnow)


class ChatUpdate(BaseModel):
    sender: Optional[Literal["user", "ai"]] = None
    message: Optional[str] = None
    timestamp: Optional[UTCDateTime] = None
