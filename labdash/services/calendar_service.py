"""Month grid for the calendar.

The grid is always 42 cells (six weeks) starting on the Sunday on or
before the 1st. Membership is decided on calendar dates only: datetimes
and ISO timestamps are truncated to their date first, so an event ending
``2024-03-05T23:30`` still covers the 5th and nothing after it.
"""

import datetime as dt
import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from sqlalchemy.orm import Session

from ..core.identifiers import is_valid_uuid
from ..exceptions import ValidationError
from .event_service import EventService
from .favorite_service import FavoriteService
from .project_service import ProjectService

logger = logging.getLogger(__name__)

GRID_CELLS = 42

DateLike = Union[dt.date, dt.datetime, str, None]


@dataclass
class CalendarDay:
    date: dt.date
    is_current_month: bool
    is_today: bool
    events: list = field(default_factory=list)
    projects: list = field(default_factory=list)


def to_date(value: DateLike) -> Optional[dt.date]:
    """Coerce a date, datetime or ISO string to a plain date. None stays None."""
    if value is None or value == "":
        return None
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    text = str(value).strip()
    try:
        return dt.date.fromisoformat(text[:10])
    except ValueError:
        logger.warning("Unparseable date %r", value)
        return None


def month_grid_start(year: int, month: int) -> dt.date:
    """The Sunday on or before the first of the month."""
    first = dt.date(year, month, 1)
    # weekday(): Monday=0 .. Sunday=6
    return first - dt.timedelta(days=(first.weekday() + 1) % 7)


def occupies(start: DateLike, end: DateLike, day: dt.date) -> bool:
    """True iff ``start <= day <= end``. A missing bound never matches."""
    start_d, end_d = to_date(start), to_date(end)
    if start_d is None or end_d is None:
        return False
    return start_d <= day <= end_d


def shift_month(year: int, month: int, delta: int) -> Tuple[int, int]:
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def build_month(
    year: int,
    month: int,
    events: Sequence = (),
    projects: Sequence = (),
    favorite_ids: Iterable[str] = (),
    today: Optional[dt.date] = None,
) -> List[CalendarDay]:
    """Lay out the 42-cell grid for ``year``/``month``.

    Events land on every day they cover. Projects only show when the
    user has favorited them and both dates are set.
    """
    if not 1 <= month <= 12:
        raise ValidationError(f"Invalid month: {month}", field="month")
    today = today or dt.date.today()
    favorites = set(favorite_ids)
    pinned = [p for p in projects if p.id in favorites]
    start = month_grid_start(year, month)

    days = []
    for offset in range(GRID_CELLS):
        day = start + dt.timedelta(days=offset)
        days.append(CalendarDay(
            date=day,
            is_current_month=day.month == month,
            is_today=day == today,
            events=[e for e in events if occupies(e.start_date, e.end_date, day)],
            projects=[p for p in pinned if occupies(p.start_date, p.end_date, day)],
        ))
    return days


class CalendarService:

    def __init__(self, db: Session):
        self.db = db

    def month_for_user(
        self, user_id: str, year: int, month: int, today: Optional[dt.date] = None
    ) -> List[CalendarDay]:
        if not is_valid_uuid(user_id):
            return build_month(year, month, today=today)
        events = EventService(self.db).get_user_events(user_id)
        favorite_ids = FavoriteService(self.db).get_user_favorites(user_id)
        projects = ProjectService(self.db).list_projects() if favorite_ids else []
        return build_month(year, month, events, projects, favorite_ids, today=today)
