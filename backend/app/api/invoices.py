"""Invoice endpoints: generation, listing, status, PDF download and deletion."""

import base64
from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from backend.app.core.settings import get_settings
from backend.app.core.time import utc_today
from backend.app.db.session import get_db
from backend.app.schemas.invoice import (
    InvoiceGenerateRequest,
    InvoiceGenerateResponse,
    InvoiceStatusUpdate,
    InvoiceSummary,
)
from backend.app.services import invoices as invoice_service

router = APIRouter(prefix="/invoices", tags=["invoices"])


@router.post("/generate", response_model=InvoiceGenerateResponse, status_code=status.HTTP_201_CREATED)
def generate_invoice(payload: InvoiceGenerateRequest, db: Session = Depends(get_db)):
    settings = get_settings()
    generated = invoice_service.generate_invoice(
        db,
        client_id=payload.client_id,
        start_date=payload.start_date,
        end_date=payload.end_date,
        invoice_dir=settings.invoice_dir,
        language=payload.language or settings.default_language,
        today=utc_today(),
    )
    return {
        "invoice_id": generated.invoice_id,
        "invoice_number": generated.invoice_number,
        "pdf_base64": base64.b64encode(generated.pdf_bytes).decode("ascii"),
    }


@router.get("", response_model=List[InvoiceSummary])
def list_invoices(db: Session = Depends(get_db)):
    return invoice_service.list_invoices(db)


@router.get("/{invoice_id}", response_model=InvoiceSummary)
def get_invoice(invoice_id: int, db: Session = Depends(get_db)):
    return invoice_service.get_invoice_summary(db, invoice_id)


@router.patch("/{invoice_id}/status", status_code=status.HTTP_204_NO_CONTENT)
def update_invoice_status(invoice_id: int, payload: InvoiceStatusUpdate, db: Session = Depends(get_db)):
    invoice_service.update_invoice_status(db, invoice_id, payload.status, payload.paid_date)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{invoice_id}/pdf")
def download_invoice_pdf(invoice_id: int, db: Session = Depends(get_db)):
    pdf_bytes, invoice_number = invoice_service.get_invoice_pdf(db, invoice_id, get_settings().invoice_dir)
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="invoice_{invoice_number}.pdf"'},
    )


@router.delete("/{invoice_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_invoice(invoice_id: int, db: Session = Depends(get_db)):
    invoice_service.delete_invoice(db, invoice_id, get_settings().invoice_dir)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
