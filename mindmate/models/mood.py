# mood entry models — one mood label per timestamped check-in

from typing import Optional
from pydantic import BaseModel

from mindmate.models.common import ShortText, UTCDateTime


class MoodCreate(BaseModel):
    """payload for a new mood entry"""
    date: UTCDateTime
    mood: ShortText
    note: Optional[str] = None


class MoodUpdate(BaseModel):
    date: Optional[UTCDateTime] = None
    mood: Optional[ShortText] = None
    note: Optional[str] = None
