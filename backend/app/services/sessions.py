"""Work session store."""

import logging
from datetime import date, datetime, time, timedelta
from typing import List

from sqlalchemy.orm import Session, joinedload

from backend.app.core.errors import NotFound, ValidationFailed
from backend.app.models.client import Client
from backend.app.models.session import Session as SessionModel
from backend.app.schemas.session import SessionCreate, SessionUpdate

logger = logging.getLogger(__name__)


def _check_times(start_time: time, end_time: time) -> None:
    if end_time <= start_time:
        raise ValidationFailed("End time must be after start time")


def _check_name(name: str | None) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationFailed("Session name must not be empty")
    return cleaned


def _require_client(db: Session, client_id: int) -> Client:
    client = db.query(Client).filter(Client.id == client_id).first()
    if client is None:
        raise NotFound("Client not found")
    return client


def duration_minutes(start_time: time, end_time: time) -> int:
    """Minutes between two wall-clock times; an end before the start crosses midnight."""
    start = datetime.combine(date.min, start_time)
    end = datetime.combine(date.min, end_time)
    if end < start:
        end += timedelta(hours=24)
    return int((end - start).total_seconds() // 60)


def get_session_or_404(db: Session, session_id: int) -> SessionModel:
    session_obj = db.query(SessionModel).filter(SessionModel.id == session_id).first()
    if session_obj is None:
        raise NotFound("Session not found")
    return session_obj


def list_sessions(
    db: Session,
    client_id: int | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
) -> List[SessionModel]:
    query = db.query(SessionModel).options(joinedload(SessionModel.client))
    if client_id is not None:
        query = query.filter(SessionModel.client_id == client_id)
    if start_date is not None:
        query = query.filter(SessionModel.date >= start_date)
    if end_date is not None:
        query = query.filter(SessionModel.date <= end_date)
    return query.order_by(SessionModel.date.desc(), SessionModel.start_time.desc()).all()


def get_sessions_for_client_in_range(
    db: Session, client_id: int, start_date: date, end_date: date
) -> List[SessionModel]:
    """Sessions of one client dated within [start_date, end_date], oldest first."""
    return (
        db.query(SessionModel)
        .filter(
            SessionModel.client_id == client_id,
            SessionModel.date >= start_date,
            SessionModel.date <= end_date,
        )
        .order_by(SessionModel.date.asc(), SessionModel.start_time.asc(), SessionModel.id.asc())
        .all()
    )


def create_session(db: Session, payload: SessionCreate) -> SessionModel:
    _require_client(db, payload.client_id)
    name = _check_name(payload.name)
    _check_times(payload.start_time, payload.end_time)

    session_obj = SessionModel(
        client_id=payload.client_id,
        name=name,
        date=payload.date,
        start_time=payload.start_time.replace(second=0, microsecond=0),
        end_time=payload.end_time.replace(second=0, microsecond=0),
    )
    db.add(session_obj)
    db.commit()
    db.refresh(session_obj)
    logger.debug("Created session %s for client %s on %s", session_obj.id, session_obj.client_id, session_obj.date)
    return session_obj


def update_session(db: Session, session_id: int, payload: SessionUpdate) -> SessionModel:
    session_obj = get_session_or_404(db, session_id)
    if payload.client_id is not None:
        _require_client(db, payload.client_id)
        session_obj.client_id = payload.client_id
    if payload.name is not None:
        session_obj.name = _check_name(payload.name)
    if payload.date is not None:
        session_obj.date = payload.date

    start_time = payload.start_time if payload.start_time is not None else session_obj.start_time
    end_time = payload.end_time if payload.end_time is not None else session_obj.end_time
    _check_times(start_time, end_time)
    session_obj.start_time = start_time.replace(second=0, microsecond=0)
    session_obj.end_time = end_time.replace(second=0, microsecond=0)

    db.commit()
    db.refresh(session_obj)
    return session_obj


def delete_session(db: Session, session_id: int) -> None:
    session_obj = get_session_or_404(db, session_id)
    db.delete(session_obj)
    db.commit()
