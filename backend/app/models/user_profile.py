"""Operator billing profile; exactly one row exists system-wide."""

from sqlalchemy import Column, DateTime, Integer, String, Text

from backend.app.db.base_class import Base
from backend.app.core.time import utc_now


class UserProfile(Base):
    __tablename__ = "user_profile"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    address = Column(Text, nullable=False)
    tax_id = Column(String, nullable=True)
    bank_details = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utc_now)
    updated_at = Column(DateTime, nullable=False, default=utc_now, onupdate=utc_now)
