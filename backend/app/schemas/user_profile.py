"""Operator profile schemas."""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class UserProfileUpdate(BaseModel):
    name: Optional[str] = None
    address: Optional[str] = None
    tax_id: Optional[str] = None
    bank_details: Optional[str] = None


class UserProfileRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    address: str
    tax_id: Optional[str] = None
    bank_details: Optional[str] = None
