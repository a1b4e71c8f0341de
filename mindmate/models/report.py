# report models — mood counts per label within a date window

from pydantic import BaseModel


class MoodCount(BaseModel):
    mood: str
    count: int


class MoodReportResponse(BaseModel):
    """response body for the weekly and monthly mood reports"""
    success: bool = True
    results: list[MoodCount]
