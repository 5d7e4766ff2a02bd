"""Invoice-based dashboard metrics.

Revenue is windowed by the requested period; pending amount and the invoice counts are
all-time figures.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from backend.app.core.errors import ValidationFailed
from backend.app.core.time import utc_today
from backend.app.models.invoice import Invoice, InvoiceStatus

logger = logging.getLogger(__name__)

PERIODS = ("month", "quarter", "year")
MIN_DASHBOARD_YEAR = 2000


def get_period_window(period: str, year: int, month: Optional[int], today: date) -> Tuple[date, date]:
    """Half-open ``[start, end)`` window for a month, quarter or year."""
    if period == "month":
        month = month or today.month
        start = date(year, month, 1)
        end = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)
    elif period == "quarter":
        quarter = ((month or today.month) - 1) // 3 + 1
        start_month = (quarter - 1) * 3 + 1
        start = date(year, start_month, 1)
        end = date(year + 1, 1, 1) if quarter == 4 else date(year, start_month + 3, 1)
    elif period == "year":
        start = date(year, 1, 1)
        end = date(year + 1, 1, 1)
    else:
        logger.warning("Invalid period for dashboard metrics: %s", period)
        raise ValidationFailed("Invalid period. Use 'month', 'quarter', or 'year'")
    return start, end


def sum_invoice_amount(db: Session, status: InvoiceStatus, window: Optional[Tuple[date, date]] = None) -> Decimal:
    query = db.query(func.coalesce(func.sum(Invoice.total_amount), 0)).filter(Invoice.status == status.value)
    if window is not None:
        start, end = window
        query = query.filter(Invoice.date >= start, Invoice.date < end)
    total = query.scalar()
    return Decimal(str(total or 0)).quantize(Decimal("0.01"))


def count_invoices(db: Session, status: Optional[InvoiceStatus] = None) -> int:
    query = db.query(Invoice)
    if status is not None:
        query = query.filter(Invoice.status == status.value)
    return query.count()


def get_dashboard_metrics(
    db: Session,
    period: str,
    year: int,
    month: Optional[int] = None,
    today: Optional[date] = None,
) -> dict:
    today = today or utc_today()
    if year < MIN_DASHBOARD_YEAR or year > today.year + 1:
        logger.warning("Invalid year for dashboard metrics: %s", year)
        raise ValidationFailed("Invalid year")
    if month is not None and not 1 <= month <= 12:
        logger.warning("Invalid month for dashboard metrics: %s", month)
        raise ValidationFailed("Invalid month")

    window = get_period_window(period, year, month, today)
    logger.debug("Dashboard window for %s %s/%s: %s to %s", period, year, month, window[0], window[1])

    return {
        "period": period,
        "period_start": window[0].isoformat(),
        "period_end": window[1].isoformat(),
        "total_revenue_period": float(sum_invoice_amount(db, InvoiceStatus.PAID, window)),
        "pending_invoices_amount": float(sum_invoice_amount(db, InvoiceStatus.SENT)),
        "total_invoices_count": count_invoices(db),
        "paid_invoices_count": count_invoices(db, InvoiceStatus.PAID),
        "pending_invoices_count": count_invoices(db, InvoiceStatus.SENT),
    }
