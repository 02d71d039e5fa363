import logging

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from app.database.db import transaction
from app.models.notifications import Notification

logger = logging.getLogger(__name__)


def append_notification(db: Session, *, user_id: int, message: str) -> Notification:
    """Add an unread notification to the caller's open transaction. Does not commit."""
    notification = Notification(user_id=user_id, message=message, read=False)
    db.add(notification)
    db.flush()  # gets notification.id
    return notification


def list_notifications_for_user(db: Session, user_id: int) -> list[Notification]:
    stmt = (
        select(Notification)
        .where(Notification.user_id == user_id)
        .order_by(Notification.created_at.desc(), Notification.id.desc())
    )
    return list(db.scalars(stmt))


def mark_notification_read(db: Session, notification_id: int) -> None:
    """Flip the read flag. Unknown ids and already-read notifications are no-ops."""
    with transaction(db):
        res = db.execute(
            update(Notification).where(Notification.id == notification_id).values(read=True)
        )
    if res.rowcount == 0:  # type: ignore
        logger.debug("mark-read on unknown notification %s ignored", notification_id)
