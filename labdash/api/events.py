"""Personal calendar: events and the month grid."""

import datetime as dt
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..core.auth import AuthContext, require_auth
from ..database import get_db
from ..exceptions import ConfirmationRequiredError, DatabaseError, ValidationError
from ..schemas.calendar import CalendarDayResponse, CalendarMonthResponse
from ..schemas.event import EventCreate, EventResponse, EventUpdate
from ..schemas.project import ProjectResponse
from ..services import CalendarService, EventService

router = APIRouter(prefix="/api/events", tags=["events"])
calendar_router = APIRouter(prefix="/api/calendar", tags=["calendar"])


@router.get("", response_model=List[EventResponse])
def list_events(db: Session = Depends(get_db), auth: AuthContext = Depends(require_auth)):
    return EventService(db).get_user_events(auth.user_id)


@router.post("", response_model=EventResponse, status_code=201)
def create_event(
    data: EventCreate,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
):
    event = EventService(db).create_event(auth.user_id, data)
    if event is None:
        raise DatabaseError("Event could not be created")
    return event


@router.put("/{event_id}", response_model=EventResponse)
def update_event(
    event_id: str,
    data: EventUpdate,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
):
    event = EventService(db).update_event(auth.user_id, event_id, data)
    if event is None:
        raise DatabaseError("Event could not be updated")
    return event


@router.delete("/{event_id}", status_code=204)
def delete_event(
    event_id: str,
    confirm: bool = Query(False),
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
):
    if not confirm:
        raise ConfirmationRequiredError("event", event_id)
    if not EventService(db).delete_event(auth.user_id, event_id):
        raise DatabaseError("Event could not be deleted")


@calendar_router.get("", response_model=CalendarMonthResponse)
def get_month(
    year: Optional[int] = Query(None, ge=1000, le=9998),
    month: Optional[int] = Query(None),
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
):
    """42-day grid for the month (current month by default) with the caller's
    events and favorite projects placed on the days they cover."""
    today = dt.date.today()
    if year is None:
        year = today.year
    if month is None:
        month = today.month
    if not 1 <= month <= 12:
        raise ValidationError(f"Invalid month: {month}", field="month")

    days = CalendarService(db).month_for_user(auth.user_id, year, month, today=today)
    return CalendarMonthResponse(
        year=year,
        month=month,
        days=[
            CalendarDayResponse(
                date=d.date,
                is_current_month=d.is_current_month,
                is_today=d.is_today,
                events=[EventResponse.model_validate(e) for e in d.events],
                projects=[ProjectResponse.model_validate(p) for p in d.projects],
            )
            for d in days
        ],
    )
