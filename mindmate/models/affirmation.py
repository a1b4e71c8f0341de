# affirmation models

from typing import Optional
from pydantic import BaseModel

from mindmate.models.common import ShortText


class AffirmationCreate(BaseModel):
    text: ShortText
    category: Optional[ShortText] = None


class AffirmationUpdate(BaseModel):
    text: Optional[ShortText] = None
    category: Optional[ShortText] = None
