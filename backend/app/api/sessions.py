"""Work session endpoints."""

from datetime import date
from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from backend.app.db.session import get_db
from backend.app.models.session import Session as SessionModel
from backend.app.schemas.session import SessionCreate, SessionRead, SessionUpdate, SessionWithDuration
from backend.app.services import sessions as session_service

router = APIRouter(prefix="/sessions", tags=["sessions"])


def _with_duration(session_obj: SessionModel) -> dict:
    return {
        "id": session_obj.id,
        "client_id": session_obj.client_id,
        "client_name": session_obj.client.name,
        "name": session_obj.name,
        "date": session_obj.date,
        "start_time": session_obj.start_time,
        "end_time": session_obj.end_time,
        "duration_minutes": session_service.duration_minutes(session_obj.start_time, session_obj.end_time),
        "created_at": session_obj.created_at,
    }


@router.get("", response_model=List[SessionWithDuration])
def list_sessions(
    client_id: int | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
    db: Session = Depends(get_db),
):
    sessions = session_service.list_sessions(db, client_id=client_id, start_date=start_date, end_date=end_date)
    return [_with_duration(session_obj) for session_obj in sessions]


@router.get("/{session_id}", response_model=SessionWithDuration)
def get_session(session_id: int, db: Session = Depends(get_db)):
    return _with_duration(session_service.get_session_or_404(db, session_id))


@router.post("", response_model=SessionRead, status_code=status.HTTP_201_CREATED)
def create_session(payload: SessionCreate, db: Session = Depends(get_db)):
    return session_service.create_session(db, payload)


@router.put("/{session_id}", response_model=SessionRead)
def update_session(session_id: int, payload: SessionUpdate, db: Session = Depends(get_db)):
    return session_service.update_session(db, session_id, payload)


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_session(session_id: int, db: Session = Depends(get_db)):
    session_service.delete_session(db, session_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
