"""Calendar grid schemas."""

import datetime as dt
from typing import List

from pydantic import BaseModel

from .event import EventResponse
from .project import ProjectResponse


class CalendarDayResponse(BaseModel):
    date: dt.date
    is_current_month: bool
    is_today: bool
    events: List[EventResponse] = []
    projects: List[ProjectResponse] = []


class CalendarMonthResponse(BaseModel):
    year: int
    month: int
    days: List[CalendarDayResponse]
