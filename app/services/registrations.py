import logging
from contextlib import contextmanager

import redis
from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core import config
from app.core.errors import (
    CapacityExceededError,
    DuplicateRegistrationError,
    NotFoundError,
    NotRegisteredError,
    TransactionError,
)
from app.database.db import transaction
from app.models.events import Event
from app.models.notifications import Notification
from app.models.registrations import Registration
from app.models.users import User
from app.services.notifications import append_notification

logger = logging.getLogger(__name__)

REGISTRATION_MESSAGE = 'You have successfully registered for the event "{title}"'


def get_redis_client():
    """Get Redis client for locking."""
    return redis.from_url(config.get_redis_url(), decode_responses=True)


@contextmanager
def event_lock(event_id: int):
    """
    Hold the per-event Redis lock so only one join for an event runs at a time.
    No-op when the lock is disabled in configuration.
    """
    if not config.REGISTRATION_LOCK_ENABLED:
        yield
        return

    redis_client = get_redis_client()
    lock = redis_client.lock(
        f"event_lock:{event_id}",
        timeout=config.REGISTRATION_LOCK_TIMEOUT,
        blocking_timeout=config.REGISTRATION_LOCK_BLOCKING_TIMEOUT,
    )
    try:
        acquired = lock.acquire(blocking=True)
    except redis.exceptions.RedisError as e:
        logger.exception("Registration lock unavailable for event %s", event_id)
        raise TransactionError() from e
    if not acquired:
        logger.warning("Timed out waiting for registration lock on event %s", event_id)
        raise TransactionError()

    try:
        yield
    finally:
        try:
            lock.release()
        except redis.exceptions.LockError:
            # TTL expired while we held it; the transaction outcome stands
            logger.warning("Registration lock for event %s expired before release", event_id)


def join_event(db: Session, *, event_id: int, user_id: int) -> Notification:
    """
    Register a user for an event.

    The registration insert, the attendee increment and the confirmation
    notification commit together or not at all. Returns the notification so
    the caller can hand it to the delivery task once committed.
    """
    with event_lock(event_id):
        with transaction(db):
            notification = _join_in_transaction(db, event_id, user_id)
    logger.info("User %s joined event %s", user_id, event_id)
    return notification


def _join_in_transaction(db: Session, event_id: int, user_id: int) -> Notification:
    """Internal function to register within a transaction."""
    event = db.scalar(
        select(Event)
        .where(Event.id == event_id)
        .with_for_update()
        .execution_options(populate_existing=True)
    )
    if event is None:
        raise NotFoundError("Event not found", field="event")
    if db.get(User, user_id) is None:
        raise NotFoundError("User not found", field="user")

    if event.attendees >= event.capacity:
        logger.info("Event %s is full (%s/%s)", event_id, event.attendees, event.capacity)
        raise CapacityExceededError()
    title = event.title

    db.add(Registration(user_id=user_id, event_id=event_id))
    try:
        db.flush()
    except IntegrityError as e:
        raise DuplicateRegistrationError() from e

    # Check capacity and increment attendees atomically
    stmt = (
        update(Event)
        .where(Event.id == event_id)
        .where(Event.attendees < Event.capacity)
        .values(attendees=Event.attendees + 1)
        .execution_options(synchronize_session=False)
    )
    res = db.execute(stmt)
    if res.rowcount != 1:  # type: ignore
        raise CapacityExceededError()

    return append_notification(db, user_id=user_id, message=REGISTRATION_MESSAGE.format(title=title))


def leave_event(db: Session, *, event_id: int, user_id: int) -> None:
    """Delete the registration and decrement the attendee counter as one unit."""
    with transaction(db):
        registration = db.scalar(
            select(Registration)
            .where(Registration.user_id == user_id, Registration.event_id == event_id)
            .with_for_update()
        )
        if registration is None:
            raise NotRegisteredError()

        db.execute(
            delete(Registration)
            .where(Registration.id == registration.id)
            .execution_options(synchronize_session=False)
        )
        db.execute(
            update(Event)
            .where(Event.id == event_id)
            .values(attendees=Event.attendees - 1)
            .execution_options(synchronize_session=False)
        )
    logger.info("User %s left event %s", user_id, event_id)


def list_event_ids_for_user(db: Session, user_id: int) -> list[int]:
    return list(db.scalars(select(Registration.event_id).where(Registration.user_id == user_id)))


def count_registrations(db: Session, event_id: int) -> int:
    count = db.scalar(select(func.count(Registration.id)).where(Registration.event_id == event_id))
    return int(count or 0)
