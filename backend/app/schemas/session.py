"""Work session schemas."""

import datetime as dt
from typing import Optional

from pydantic import BaseModel, ConfigDict


class SessionBase(BaseModel):
    client_id: int
    name: str
    date: dt.date
    start_time: dt.time
    end_time: dt.time


class SessionCreate(SessionBase):
    pass


class SessionUpdate(BaseModel):
    client_id: Optional[int] = None
    name: Optional[str] = None
    date: Optional[dt.date] = None
    start_time: Optional[dt.time] = None
    end_time: Optional[dt.time] = None


class SessionRead(SessionBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: dt.datetime


class SessionWithDuration(SessionRead):
    client_name: str
    duration_minutes: int
