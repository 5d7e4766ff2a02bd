"""Client model: the invoice recipient and source of the hourly rate.

A client with sessions or invoices cannot be deleted; see services/clients.delete_client.
"""

from sqlalchemy import Column, DateTime, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from backend.app.db.base_class import Base
from backend.app.core.time import utc_now


class Client(Base):
    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, unique=True)
    address = Column(Text, nullable=False)
    contact_person = Column(String, nullable=True)
    hourly_rate = Column(Numeric(10, 2), nullable=False)
    created_at = Column(DateTime, nullable=False, default=utc_now)
    updated_at = Column(DateTime, nullable=False, default=utc_now, onupdate=utc_now)

    sessions = relationship("Session", back_populates="client")
    invoices = relationship("Invoice", back_populates="client")
