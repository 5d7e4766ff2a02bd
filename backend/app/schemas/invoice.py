"""Invoice schemas."""

import datetime as dt
from typing import Optional

from pydantic import BaseModel, ConfigDict


class InvoiceGenerateRequest(BaseModel):
    client_id: int
    start_date: dt.date
    end_date: dt.date
    language: Optional[str] = None


class InvoiceGenerateResponse(BaseModel):
    invoice_id: int
    invoice_number: str
    pdf_base64: str


class InvoiceSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    invoice_number: str
    client_name: str
    date: dt.date
    total_amount: float
    status: str
    due_date: Optional[dt.date] = None
    paid_date: Optional[dt.date] = None
    created_at: dt.datetime


class InvoiceStatusUpdate(BaseModel):
    # Plain string: the closed set is enforced by the service so that an unknown
    # value is reported like every other invoice validation failure.
    status: str
    paid_date: Optional[dt.date] = None
