# resource registry — one descriptor per independently stored record kind
# each descriptor is pure data: the storage layer and the crud router consume it

from dataclasses import dataclass, field
from typing import Type

from pydantic import BaseModel

from mindmate.models.affirmation import AffirmationCreate, AffirmationUpdate
from mindmate.models.breathing import BreathingSessionCreate, BreathingSessionUpdate
from mindmate.models.chat import ChatCreate, ChatUpdate
from mindmate.models.journal import JournalCreate, JournalUpdate
from mindmate.models.mood import MoodCreate, MoodUpdate
from mindmate.models.quote import QuoteCreate, QuoteUpdate


@dataclass(frozen=True)
class Resource:
    """a record kind: its pluralized name doubles as collection name and url segment"""
    name: str
    create_model: Type[BaseModel]
    update_model: Type[BaseModel]
    indexes: tuple[str, ...] = field(default_factory=tuple)

    @property
    def base_path(self) -> str:
        return f"/api/{self.name}"

    @property
    def required_fields(self) -> set[str]:
        return {
            name for name, info in self.create_model.model_fields.items()
            if info.is_required()
        }


MOODS = Resource("moods", MoodCreate, MoodUpdate, indexes=("date", "mood"))
JOURNALS = Resource("journals", JournalCreate, JournalUpdate, indexes=("date",))
AFFIRMATIONS = Resource("affirmations", AffirmationCreate, AffirmationUpdate)
BREATHING_SESSIONS = Resource("breathing_sessions", BreathingSessionCreate, BreathingSessionUpdate)
QUOTES = Resource("quotes", QuoteCreate, QuoteUpdate)
CHATS = Resource("chats", ChatCreate, ChatUpdate, indexes=("timestamp",))

RESOURCES: tuple[Resource, ...] = (
    MOODS,
    JOURNALS,
    AFFIRMATIONS,
    BREATHING_SESSIONS,
    QUOTES,
    CHATS,
)
