"""
Test the notification outbox.
"""
from sqlalchemy.orm import Session

from app.models.notifications import Notification
from app.models.users import User
from app.services.notifications import (
    append_notification,
    list_notifications_for_user,
    mark_notification_read,
)
from app.services.registrations import join_event
from app.tests.conftest import make_event


class TestNotificationOutbox:
    def test_append_is_not_committed_by_itself(self, db_session: Session, alice: User):
        """Test append only stages the row in the caller's transaction."""
        append_notification(db_session, user_id=alice.id, message="staged")
        db_session.rollback()

        assert list_notifications_for_user(db_session, alice.id) == []

    def test_list_most_recent_first(self, db_session: Session, alice: User, bob: User):
        for title in ("First", "Second", "Third"):
            event = make_event(db_session, title=title)
            join_event(db_session, event_id=event.id, user_id=alice.id)
        other = make_event(db_session, title="Bob's")
        join_event(db_session, event_id=other.id, user_id=bob.id)

        messages = [n.message for n in list_notifications_for_user(db_session, alice.id)]

        assert len(messages) == 3
        assert '"Third"' in messages[0]
        assert '"First"' in messages[-1]

    def test_mark_read(self, db_session: Session, alice: User):
        event = make_event(db_session, title="Readable")
        notification = join_event(db_session, event_id=event.id, user_id=alice.id)

        mark_notification_read(db_session, notification.id)
        db_session.refresh(notification)
        assert notification.read is True

        # idempotent
        mark_notification_read(db_session, notification.id)
        db_session.refresh(notification)
        assert notification.read is True

    def test_mark_read_unknown_id_is_noop(self, db_session: Session):
        mark_notification_read(db_session, 99999)
        assert db_session.query(Notification).count() == 0
