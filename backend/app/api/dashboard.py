"""Dashboard endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from backend.app.core.time import utc_today
from backend.app.db.session import get_db
from backend.app.schemas.dashboard import DashboardMetrics
from backend.app.services.dashboard_service import get_dashboard_metrics

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/metrics", response_model=DashboardMetrics)
def read_dashboard_metrics(
    period: str = "month",
    year: int | None = None,
    month: int | None = None,
    db: Session = Depends(get_db),
):
    today = utc_today()
    return get_dashboard_metrics(db, period, year or today.year, month=month, today=today)
