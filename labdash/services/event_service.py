"""Calendar events of one user."""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from ..core.identifiers import is_valid_uuid
from ..exceptions import EventNotFoundError, ValidationError
from ..models.event import Event
from ..repositories import EventRepository
from ..schemas.event import EventCreate, EventUpdate

logger = logging.getLogger(__name__)


class EventService:
    """CRUD for events, always scoped to the owning user.

    Another user's event is reported as not found.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = EventRepository(db)

    def get_user_events(self, user_id: str) -> List[Event]:
        if not is_valid_uuid(user_id):
            return []
        return self.repo.list_for_user(user_id)

    def create_event(self, user_id: str, data: EventCreate) -> Optional[Event]:
        if not is_valid_uuid(user_id):
            return None
        return self.repo.add(Event(user_id=user_id, **data.model_dump()))

    def update_event(self, user_id: str, event_id: str, data: EventUpdate) -> Optional[Event]:
        event = self._owned(user_id, event_id)
        changes = data.model_dump(exclude_unset=True)
        start = changes.get("start_date", event.start_date)
        end = changes.get("end_date", event.end_date)
        if start is None or end is None or end < start:
            raise ValidationError("end_date must not be before start_date", field="end_date")
        for field, value in changes.items():
            setattr(event, field, value)
        return self.repo.save(event)

    def delete_event(self, user_id: str, event_id: str) -> bool:
        return self.repo.delete(self._owned(user_id, event_id))

    def _owned(self, user_id: str, event_id: str) -> Event:
        event = self.repo.get_by_id(event_id)
        if event.user_id != user_id:
            raise EventNotFoundError(event_id)
        return event
