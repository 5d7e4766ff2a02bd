"""Client store: CRUD helpers and the rate/recipient lookup used by invoicing."""

import logging
from decimal import Decimal
from typing import List

from sqlalchemy.orm import Session

from backend.app.core.errors import BusinessRuleViolation, NotFound, ValidationFailed
from backend.app.models.client import Client
from backend.app.models.invoice import Invoice
from backend.app.models.session import Session as SessionModel
from backend.app.schemas.client import ClientCreate, ClientUpdate

logger = logging.getLogger(__name__)


def _clean_required(value: str | None, field: str) -> str:
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValidationFailed(f"Client {field} must not be empty")
    return cleaned


def _check_rate(rate: float) -> Decimal:
    if rate is None or rate <= 0:
        raise BusinessRuleViolation("Hourly rate must be greater than zero")
    return Decimal(str(rate)).quantize(Decimal("0.01"))


def _ensure_unique_name(db: Session, name: str, exclude_id: int | None = None) -> None:
    query = db.query(Client).filter(Client.name == name)
    if exclude_id is not None:
        query = query.filter(Client.id != exclude_id)
    if query.first() is not None:
        raise BusinessRuleViolation(f"A client named '{name}' already exists")


def get_client(db: Session, client_id: int) -> Client | None:
    return db.query(Client).filter(Client.id == client_id).first()


def get_client_or_404(db: Session, client_id: int) -> Client:
    client = get_client(db, client_id)
    if client is None:
        raise NotFound("Client not found")
    return client


def list_clients(db: Session) -> List[Client]:
    return db.query(Client).order_by(Client.name.asc()).all()


def create_client(db: Session, payload: ClientCreate) -> Client:
    name = _clean_required(payload.name, "name")
    address = _clean_required(payload.address, "address")
    rate = _check_rate(payload.hourly_rate)
    _ensure_unique_name(db, name)

    client = Client(
        name=name,
        address=address,
        contact_person=(payload.contact_person or "").strip() or None,
        hourly_rate=rate,
    )
    db.add(client)
    db.commit()
    db.refresh(client)
    logger.info("Created client %s (%s)", client.id, client.name)
    return client


def update_client(db: Session, client_id: int, payload: ClientUpdate) -> Client:
    client = get_client_or_404(db, client_id)
    if payload.name is not None:
        name = _clean_required(payload.name, "name")
        _ensure_unique_name(db, name, exclude_id=client.id)
        client.name = name
    if payload.address is not None:
        client.address = _clean_required(payload.address, "address")
    if payload.contact_person is not None:
        client.contact_person = payload.contact_person.strip() or None
    if payload.hourly_rate is not None:
        client.hourly_rate = _check_rate(payload.hourly_rate)
    db.commit()
    db.refresh(client)
    return client


def delete_client(db: Session, client_id: int) -> None:
    """Delete a client that has no sessions and no invoices."""
    client = get_client_or_404(db, client_id)

    session_count = db.query(SessionModel).filter(SessionModel.client_id == client_id).count()
    if session_count > 0:
        logger.warning("Attempted to delete client %s with %s associated sessions", client_id, session_count)
        raise BusinessRuleViolation(f"Cannot delete client with {session_count} associated sessions")
    invoice_count = db.query(Invoice).filter(Invoice.client_id == client_id).count()
    if invoice_count > 0:
        logger.warning("Attempted to delete client %s with %s associated invoices", client_id, invoice_count)
        raise BusinessRuleViolation(f"Cannot delete client with {invoice_count} associated invoices")

    db.delete(client)
    db.commit()
    logger.info("Deleted client %s", client_id)
