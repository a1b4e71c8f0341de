# mood aggregation — counts mood entries per label inside a calendar window

import calendar
from datetime import datetime, timedelta
from typing import Optional

from mindmate.resources import MOODS
from mindmate.services.db import Database
from mindmate.services.record_store import RecordStore

WEEK = timedelta(days=7)


def weekly_window(reference: Optional[datetime] = None) -> tuple[datetime, datetime]:
    """trailing seven days ending at the reference instant (default: now)"""
    now = reference or datetime.now()
    if now.tzinfo is None:
        now = now.astimezone()
    return now - WEEK, now


def monthly_window(reference: Optional[datetime] = None) -> tuple[datetime, datetime]:
    """first to last instant of the reference's calendar month.
    naive references (and the default) are read in the server's local time."""
    ref = reference or datetime.now()
    last_day = calendar.monthrange(ref.year, ref.month)[1]
    start = ref.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    end = ref.replace(day=last_day, hour=23, minute=59, second=59, microsecond=999999)
    if ref.tzinfo is None:
        # resolve each bound separately so a dst change mid-month gets the right offset
        start, end = start.astimezone(), end.astimezone()
    return start, end


async def mood_counts(db: Database, start: datetime, end: datetime) -> list[dict]:
    """[{mood, count}] for mood entries dated within [start, end]"""
    store = RecordStore(db, MOODS)
    return await store.count_grouped_by("mood", "date", start, end)
