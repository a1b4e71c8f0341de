# journal models — titled free-text entries

from typing import Optional
from pydantic import BaseModel, Field

from mindmate.models.common import ShortText, UTCDateTime, utcnow


class JournalCreate(BaseModel):
    """payload for a new journal entry. date defaults to creation time."""
    title: ShortText
    content: str
    date: UTCDateTime = Field(default_factory=utcnow)


class JournalUpdate(BaseModel):
    title: Optional[ShortText] = None
    content: Optional[str] = None
    date: Optional[UTCDateTime] = None
