"""
Reports API — dashboard cards and item usage over a period.
"""
from datetime import date, datetime
from typing import List, Tuple

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from sunatstock.api.deps import get_db, get_current_user
from sunatstock.core.exceptions import BusinessError
from sunatstock.models.user import User
from sunatstock.schemas.dates import to_naive_utc
from sunatstock.schemas.report import DashboardStats, UsageReportRow
from sunatstock.services import report_service

router = APIRouter()


def _check_range(start_date: datetime, end_date: datetime) -> Tuple[datetime, datetime]:
    start_date, end_date = to_naive_utc(start_date), to_naive_utc(end_date)
    if start_date > end_date:
        raise BusinessError.bad_request("start_date must not be after end_date")
    return start_date, end_date


@router.get("/dashboard", response_model=DashboardStats)
def get_dashboard_stats(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Item totals, critical items and procedure counts for today and this month."""
    return report_service.get_dashboard_stats(db)


@router.get("/usage", response_model=List[UsageReportRow])
def get_usage_report(
    start_date: datetime = Query(...),
    end_date: datetime = Query(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Total quantity used per item for procedures dated within the range (inclusive)."""
    start_date, end_date = _check_range(start_date, end_date)
    return report_service.get_usage_report(db, start_date, end_date)


# ==============================================================================
# EXPORT ENDPOINTS (CSV Download)
# ==============================================================================

@router.get("/usage/export")
def export_usage_report_csv(
    start_date: datetime = Query(...),
    end_date: datetime = Query(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Usage report as a CSV file."""
    start_date, end_date = _check_range(start_date, end_date)
    rows = report_service.get_usage_report(db, start_date, end_date)

    return StreamingResponse(
        iter([report_service.usage_report_csv(rows)]),
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename=usage_report_{date.today()}.csv"},
    )
