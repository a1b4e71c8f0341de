# breathing session models — duration of a guided breathing exercise

from typing import Optional
from pydantic import BaseModel, Field

from mindmate.models.common import ShortText, UTCDateTime, utcnow


class BreathingSessionCreate(BaseModel):
    """payload for a finished breathing session"""
    duration: int = Field(..., description="session length in seconds or minutes, as the client records it")
    type: Optional[ShortText] = None
    date: UTCDateTime = Field(default_factory=utcnow)


class BreathingSessionUpdate(BaseModel):
    duration: Optional[int] = None
    type: Optional[ShortText] = None
    date: Optional[UTCDateTime] = None
