"""Repository for calendar events."""

from typing import List

from .base import BaseRepository
from ..models.event import Event
from ..exceptions import EventNotFoundError


class EventRepository(BaseRepository[Event]):
    model_class = Event
    not_found_error = EventNotFoundError

    def list_for_user(self, user_id: str) -> List[Event]:
        return self._fetch_all(
            self.db.query(Event)
            .filter(Event.user_id == user_id)
            .order_by(Event.start_date.asc(), Event.created_at.asc())
        )
