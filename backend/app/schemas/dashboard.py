"""Dashboard schemas."""

from pydantic import BaseModel


class DashboardMetrics(BaseModel):
    period: str
    period_start: str
    period_end: str
    total_revenue_period: float
    pending_invoices_amount: float
    total_invoices_count: int
    paid_invoices_count: int
    pending_invoices_count: int
