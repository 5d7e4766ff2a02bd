"""Invoice generation, numbering and lifecycle.

Invoices are numbered ``YYYY-NNNN`` per calendar year of issue. The sequence read, the
row insert and the PDF write share one database transaction; the
``(year, sequence_number)`` unique constraint rejects a concurrent duplicate instead of
letting two invoices share a number.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, time, timedelta
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from backend.app.core.errors import (
    BusinessRuleViolation,
    Conflict,
    NotFound,
    StorageError,
    ValidationFailed,
)
from backend.app.core.time import utc_today
from backend.app.i18n.translations import parse_language
from backend.app.models.client import Client
from backend.app.models.invoice import Invoice, InvoiceStatus
from backend.app.models.session import Session as SessionModel
from backend.app.models.user_profile import UserProfile
from backend.app.services.clients import get_client
from backend.app.services.invoice_pdf import render_invoice_pdf
from backend.app.services.sessions import duration_minutes, get_sessions_for_client_in_range
from backend.app.services.user_profile import get_profile

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")
INVOICE_DUE_DAYS = 30
MAX_RANGE_DAYS = 365
MIN_INVOICE_YEAR = 2000
VALID_STATUSES = [s.value for s in InvoiceStatus]


class ArtifactMissing(StorageError):
    def __init__(self):
        super().__init__("PDF file not found")


@dataclass
class InvoiceLineItem:
    name: str
    date: date
    start_time: time
    end_time: time
    duration_hours: float
    amount: Decimal


@dataclass
class InvoiceDocument:
    invoice_number: str
    year: int
    sequence_number: int
    issue_date: date
    due_date: date
    profile: UserProfile
    client: Client
    line_items: List[InvoiceLineItem] = field(default_factory=list)
    total_hours: float = 0.0
    total_amount: Decimal = Decimal("0.00")


@dataclass
class GeneratedInvoice:
    invoice_id: int
    invoice_number: str
    pdf_bytes: bytes


def format_invoice_number(year: int, sequence_number: int) -> str:
    return f"{year}-{sequence_number:04d}"


def invoice_pdf_path(invoice_dir: str | Path, invoice_number: str) -> Path:
    return Path(invoice_dir) / f"invoice_{invoice_number}.pdf"


def build_line_items(
    sessions: Sequence[SessionModel], hourly_rate: Decimal
) -> Tuple[List[InvoiceLineItem], float, Decimal]:
    """Turn sessions into billable lines; the total is the sum of the rounded line amounts."""
    rate = Decimal(str(hourly_rate))
    items: List[InvoiceLineItem] = []
    total_minutes = 0
    total_amount = Decimal("0.00")

    for session_obj in sessions:
        minutes = duration_minutes(session_obj.start_time, session_obj.end_time)
        amount = (Decimal(minutes) * rate / Decimal("60")).quantize(CENT, rounding=ROUND_HALF_UP)
        items.append(
            InvoiceLineItem(
                name=session_obj.name,
                date=session_obj.date,
                start_time=session_obj.start_time,
                end_time=session_obj.end_time,
                duration_hours=minutes / 60.0,
                amount=amount,
            )
        )
        total_minutes += minutes
        total_amount += amount

    return items, total_minutes / 60.0, total_amount


def get_next_sequence_number(db: Session, year: int, today: Optional[date] = None) -> int:
    today = today or utc_today()
    if year < MIN_INVOICE_YEAR or year > today.year + 1:
        logger.warning("Invalid target year for invoice sequence: %s", year)
        raise ValidationFailed("Invalid year for invoice generation")

    max_sequence = db.query(func.max(Invoice.sequence_number)).filter(Invoice.year == year).scalar()
    next_sequence = (max_sequence or 0) + 1
    logger.debug("Next sequence number for year %s: %s", year, next_sequence)
    return next_sequence


def validate_invoice_request(client_id: int, start_date: date, end_date: date) -> None:
    if client_id <= 0:
        logger.warning("Attempted to generate invoice with invalid client ID: %s", client_id)
        raise ValidationFailed("Invalid client ID")
    if end_date <= start_date:
        logger.warning("Attempted to generate invoice with invalid date range: %s to %s", start_date, end_date)
        raise ValidationFailed("End date must be after start date")
    span_days = (end_date - start_date).days
    if span_days > MAX_RANGE_DAYS:
        logger.warning("Attempted to generate invoice with date range longer than 1 year: %s days", span_days)
        raise BusinessRuleViolation("Date range cannot exceed 1 year")


def build_invoice_document(
    db: Session,
    client_id: int,
    start_date: date,
    end_date: date,
    today: Optional[date] = None,
) -> InvoiceDocument:
    """Validate the request and aggregate everything the rendered invoice needs.

    Nothing is written here; the sequence number is read inside the caller's transaction.
    """
    validate_invoice_request(client_id, start_date, end_date)

    profile = get_profile(db)
    if profile is None:
        logger.warning("Invoice generation requested before a profile exists")
        raise NotFound("User profile not found - please create a user profile first")

    client = get_client(db, client_id)
    if client is None:
        logger.warning("Invoice generation requested for unknown client %s", client_id)
        raise NotFound("Client not found")

    sessions = get_sessions_for_client_in_range(db, client_id, start_date, end_date)
    if not sessions:
        logger.warning("No sessions found for client %s in date range %s to %s", client_id, start_date, end_date)
        raise NotFound("No sessions found in the specified date range")

    hourly_rate = Decimal(str(client.hourly_rate or 0))
    if hourly_rate <= 0:
        logger.error("Client %s has invalid hourly rate: %s", client.id, hourly_rate)
        raise BusinessRuleViolation("Client has invalid hourly rate")

    issue_date = today or utc_today()
    sequence_number = get_next_sequence_number(db, issue_date.year, today=issue_date)
    invoice_number = format_invoice_number(issue_date.year, sequence_number)

    items, total_hours, total_amount = build_line_items(sessions, hourly_rate)
    if total_amount <= 0:
        logger.warning("Invoice %s would have zero or negative amount: %s", invoice_number, total_amount)
        raise BusinessRuleViolation("Invoice amount must be positive")

    logger.info("Invoice %s totals: %.2f hours, %s amount", invoice_number, total_hours, total_amount)

    return InvoiceDocument(
        invoice_number=invoice_number,
        year=issue_date.year,
        sequence_number=sequence_number,
        issue_date=issue_date,
        due_date=issue_date + timedelta(days=INVOICE_DUE_DAYS),
        profile=profile,
        client=client,
        line_items=items,
        total_hours=total_hours,
        total_amount=total_amount,
    )


def save_invoice(db: Session, document: InvoiceDocument, pdf_bytes: bytes, invoice_dir: str | Path) -> int:
    """Insert the invoice row and write its PDF; both become visible on commit."""
    pdf_path = invoice_pdf_path(invoice_dir, document.invoice_number)
    invoice = Invoice(
        invoice_number=document.invoice_number,
        client_id=document.client.id,
        date=document.issue_date,
        total_amount=document.total_amount,
        pdf_path=str(pdf_path),
        status=InvoiceStatus.CREATED.value,
        due_date=document.due_date,
        year=document.year,
        sequence_number=document.sequence_number,
    )
    db.add(invoice)
    try:
        db.flush()
    except IntegrityError as exc:
        db.rollback()
        logger.warning("Invoice number %s was taken by a concurrent generation", document.invoice_number)
        raise Conflict(f"Invoice number {document.invoice_number} is already taken, please try again") from exc

    try:
        pdf_path.parent.mkdir(parents=True, exist_ok=True)
        pdf_path.write_bytes(pdf_bytes)
    except OSError as exc:
        db.rollback()
        logger.exception("Failed to save PDF for invoice %s to %s", document.invoice_number, pdf_path)
        raise StorageError("Failed to save invoice PDF") from exc

    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        pdf_path.unlink(missing_ok=True)
        logger.exception("Failed to save invoice %s", document.invoice_number)
        raise StorageError("Failed to save invoice") from exc

    logger.debug("Saved PDF for invoice %s to %s", document.invoice_number, pdf_path)
    return invoice.id


def generate_invoice(
    db: Session,
    client_id: int,
    start_date: date,
    end_date: date,
    invoice_dir: str | Path,
    language: Optional[str] = None,
    today: Optional[date] = None,
) -> GeneratedInvoice:
    logger.info("Generating invoice for client %s from %s to %s", client_id, start_date, end_date)
    document = build_invoice_document(db, client_id, start_date, end_date, today=today)

    try:
        pdf_bytes = render_invoice_pdf(document, parse_language(language))
    except Exception as exc:
        db.rollback()
        logger.exception("Failed to render PDF for invoice %s", document.invoice_number)
        raise StorageError("Failed to generate PDF") from exc

    invoice_id = save_invoice(db, document, pdf_bytes, invoice_dir)
    logger.info("Generated invoice %s with ID %s", document.invoice_number, invoice_id)
    return GeneratedInvoice(invoice_id=invoice_id, invoice_number=document.invoice_number, pdf_bytes=pdf_bytes)


def _summary_row(invoice: Invoice, client_name: str) -> dict:
    return {
        "id": invoice.id,
        "invoice_number": invoice.invoice_number,
        "client_name": client_name,
        "date": invoice.date,
        "total_amount": float(invoice.total_amount),
        "status": invoice.status,
        "due_date": invoice.due_date,
        "paid_date": invoice.paid_date,
        "created_at": invoice.created_at,
    }


def list_invoices(db: Session) -> List[dict]:
    rows = (
        db.query(Invoice, Client.name)
        .join(Client, Invoice.client_id == Client.id)
        .order_by(Invoice.created_at.desc(), Invoice.id.desc())
        .all()
    )
    return [_summary_row(invoice, client_name) for invoice, client_name in rows]


def _check_invoice_id(invoice_id: int) -> None:
    if invoice_id <= 0:
        logger.warning("Invalid invoice ID: %s", invoice_id)
        raise ValidationFailed("Invalid invoice ID")


def get_invoice_or_404(db: Session, invoice_id: int) -> Invoice:
    _check_invoice_id(invoice_id)
    invoice = db.query(Invoice).filter(Invoice.id == invoice_id).first()
    if invoice is None:
        raise NotFound("Invoice not found")
    return invoice


def get_invoice_summary(db: Session, invoice_id: int) -> dict:
    invoice = get_invoice_or_404(db, invoice_id)
    return _summary_row(invoice, invoice.client.name)


def update_invoice_status(db: Session, invoice_id: int, status: str, paid_date: Optional[date] = None) -> None:
    _check_invoice_id(invoice_id)
    try:
        new_status = InvoiceStatus(status)
    except ValueError:
        logger.warning("Invalid status for invoice %s: %s", invoice_id, status)
        raise ValidationFailed(f"Invalid status. Must be one of: {', '.join(VALID_STATUSES)}") from None
    if new_status is InvoiceStatus.PAID and paid_date is None:
        logger.warning("Attempted to mark invoice %s as paid without paid_date", invoice_id)
        raise ValidationFailed("Paid date is required when marking invoice as paid")

    updated = (
        db.query(Invoice)
        .filter(Invoice.id == invoice_id)
        .update({Invoice.status: new_status.value, Invoice.paid_date: paid_date}, synchronize_session=False)
    )
    if updated == 0:
        db.rollback()
        logger.warning("Attempted to update non-existent invoice: %s", invoice_id)
        raise NotFound("Invoice not found")
    db.commit()
    logger.info("Updated invoice %s status to %s", invoice_id, new_status.value)


def delete_invoice(db: Session, invoice_id: int, invoice_dir: str | Path) -> None:
    """Delete the invoice row and its PDF; the billed sessions are left untouched."""
    invoice = get_invoice_or_404(db, invoice_id)
    pdf_path = invoice_pdf_path(invoice_dir, invoice.invoice_number)
    try:
        pdf_path.unlink()
    except FileNotFoundError:
        logger.info("PDF for invoice %s already absent: %s", invoice.invoice_number, pdf_path)
    except OSError as exc:
        logger.exception("Failed to delete PDF file %s", pdf_path)
        raise StorageError("Failed to delete invoice PDF") from exc

    db.delete(invoice)
    db.commit()
    logger.info("Deleted invoice %s (%s)", invoice.invoice_number, invoice_id)


def get_invoice_pdf(db: Session, invoice_id: int, invoice_dir: str | Path) -> Tuple[bytes, str]:
    """Read the stored PDF; its location is derived from the invoice number, not the row."""
    invoice = get_invoice_or_404(db, invoice_id)

    pdf_path = invoice_pdf_path(invoice_dir, invoice.invoice_number)
    if not pdf_path.exists():
        logger.error("PDF file not found for invoice %s: %s", invoice.invoice_number, pdf_path)
        raise ArtifactMissing()
    try:
        pdf_bytes = pdf_path.read_bytes()
    except OSError as exc:
        logger.exception("Failed to read PDF file %s", pdf_path)
        raise StorageError("Failed to read invoice PDF") from exc
    return pdf_bytes, invoice.invoice_number
