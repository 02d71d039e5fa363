import logging

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError
from app.database.db import transaction
from app.models.events import DEFAULT_CATEGORY, Event
from app.models.registrations import Registration
from app.schemas.events import EventCreate, EventUpdate

logger = logging.getLogger(__name__)

# Descriptive fields replaced wholesale by an update
MUTABLE_FIELDS = (
    "title",
    "description",
    "date",
    "location",
    "latitude",
    "longitude",
    "capacity",
    "image",
)


def list_events(db: Session) -> list[Event]:
    return list(db.scalars(select(Event).order_by(Event.date.desc(), Event.id.desc())))


def get_event(db: Session, event_id: int) -> Event:
    event = db.get(Event, event_id)
    if event is None:
        raise NotFoundError("Event not found", field="event")
    return event


def create_event(db: Session, payload: EventCreate) -> Event:
    event = Event(
        **{name: getattr(payload, name) for name in MUTABLE_FIELDS},
        category=payload.category or DEFAULT_CATEGORY,
        created_by=payload.created_by,
        attendees=0,
    )
    with transaction(db):
        db.add(event)
    db.refresh(event)
    logger.info("Created event %s (%s)", event.id, event.title)
    return event


def update_event(db: Session, event_id: int, payload: EventUpdate) -> Event:
    """Full replace of the descriptive fields; the attendee counter is left alone."""
    with transaction(db):
        event = db.get(Event, event_id)
        if event is None:
            raise NotFoundError("Event not found", field="event")
        for name in MUTABLE_FIELDS:
            setattr(event, name, getattr(payload, name))
        event.category = payload.category or DEFAULT_CATEGORY
    db.refresh(event)
    logger.info("Updated event %s", event.id)
    return event


def delete_event(db: Session, event_id: int) -> int:
    """
    Remove an event together with every registration that references it.
    Both deletes share one transaction. Unknown ids are not an error.
    Returns the number of registrations removed.
    """
    with transaction(db):
        res = db.execute(delete(Registration).where(Registration.event_id == event_id))
        removed = res.rowcount or 0  # type: ignore
        db.execute(delete(Event).where(Event.id == event_id))
    logger.info("Deleted event %s and %s registration(s)", event_id, removed)
    return removed
