"""Singleton operator profile store."""

import logging

from sqlalchemy.orm import Session

from backend.app.core.errors import BusinessRuleViolation, ValidationFailed
from backend.app.models.user_profile import UserProfile
from backend.app.schemas.user_profile import UserProfileUpdate

logger = logging.getLogger(__name__)


def get_profile(db: Session) -> UserProfile | None:
    return db.query(UserProfile).order_by(UserProfile.id.asc()).first()


def create_profile(db: Session, payload: UserProfileUpdate) -> UserProfile:
    """Insert the single profile row; a second row is rejected."""
    if get_profile(db) is not None:
        raise BusinessRuleViolation("A profile already exists")
    name = (payload.name or "").strip()
    address = (payload.address or "").strip()
    if not name or not address:
        raise ValidationFailed("Profile name and address are required")

    profile = UserProfile(
        name=name,
        address=address,
        tax_id=payload.tax_id,
        bank_details=payload.bank_details,
    )
    db.add(profile)
    db.commit()
    db.refresh(profile)
    logger.info("Created operator profile %s", profile.id)
    return profile


def upsert_profile(db: Session, payload: UserProfileUpdate) -> UserProfile:
    profile = get_profile(db)
    if profile is None:
        return create_profile(db, payload)

    if payload.name is not None:
        if not payload.name.strip():
            raise ValidationFailed("Profile name must not be empty")
        profile.name = payload.name.strip()
    if payload.address is not None:
        if not payload.address.strip():
            raise ValidationFailed("Profile address must not be empty")
        profile.address = payload.address.strip()
    if payload.tax_id is not None:
        profile.tax_id = payload.tax_id or None
    if payload.bank_details is not None:
        profile.bank_details = payload.bank_details or None
    db.commit()
    db.refresh(profile)
    return profile
