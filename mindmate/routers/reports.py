# reports router — weekly and monthly mood counts for the frontend graphs
# every request recomputes from the live moods collection

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from mindmate.models.report import MoodReportResponse
from mindmate.services.db import Database, get_db
from mindmate.services.mood_reports import monthly_window, mood_counts, weekly_window
from mindmate.services.record_store import StorageError

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/reports", tags=["reports"])


def _report_error(period: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"success": False, "message": f"Error fetching {period} report"},
    )


@router.get("/weekly", response_model=MoodReportResponse)
async def weekly_report(db: Database = Depends(get_db)):
    """mood counts for the last 7 days"""
    start, end = weekly_window()
    try:
        results = await mood_counts(db, start, end)
    except StorageError:
        logger.exception("Error fetching weekly report")
        return _report_error("weekly")
    return MoodReportResponse(results=results)


@router.get("/monthly", response_model=MoodReportResponse)
async def monthly_report(db: Database = Depends(get_db)):
    """mood counts for the current calendar month"""
    start, end = monthly_window()
    try:
        results = await mood_counts(db, start, end)
    except StorageError:
        logger.exception("Error fetching monthly report")
        return _report_error("monthly")
    return MoodReportResponse(results=results)
