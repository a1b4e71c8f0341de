# motivational quote models

from typing import Optional
from pydantic import BaseModel

from mindmate.models.common import ShortText


class QuoteCreate(BaseModel):
    text: str
    author: Optional[ShortText] = None
    category: Optional[ShortText] = None


class QuoteUpdate(BaseModel):
    text: Optional[str] = None
    author: Optional[ShortText] = None
    category: Optional[ShortText] = None
