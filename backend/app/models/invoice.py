"""Invoice model and its lifecycle states."""

import enum

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, Numeric, String, UniqueConstraint
from sqlalchemy.orm import relationship

from backend.app.db.base_class import Base
from backend.app.core.time import utc_now


class InvoiceStatus(str, enum.Enum):
    CREATED = "created"
    SENT = "sent"
    PAID = "paid"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"


class Invoice(Base):
    __tablename__ = "invoices"
    __table_args__ = (UniqueConstraint("year", "sequence_number", name="uq_invoices_year_sequence"),)

    id = Column(Integer, primary_key=True, index=True)
    invoice_number = Column(String, nullable=False, unique=True)
    client_id = Column(Integer, ForeignKey("clients.id", ondelete="RESTRICT"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    total_amount = Column(Numeric(10, 2), nullable=False)
    pdf_path = Column(String, nullable=False)
    status = Column(String(20), nullable=False, default=InvoiceStatus.CREATED.value)
    due_date = Column(Date, nullable=True)
    paid_date = Column(Date, nullable=True)
    year = Column(Integer, nullable=False)
    sequence_number = Column(Integer, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utc_now)

    client = relationship("Client", back_populates="invoices")
