"""
Test event catalog service functions.
"""
import datetime as dt

import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError, TransactionError
from app.models.events import Event
from app.models.registrations import Registration
from app.models.users import User
from app.schemas.events import EventCreate, EventUpdate
from app.services.events import create_event, delete_event, get_event, list_events, update_event
from app.services.registrations import join_event, list_event_ids_for_user
from app.tests.conftest import make_event, make_user


def event_payload(**overrides) -> dict:
    data = {
        "title": "Python Meetup",
        "description": "Monthly meetup",
        "date": dt.date(2025, 3, 14),
        "location": "Library",
        "capacity": 40,
    }
    data.update(overrides)
    return data


class TestCreateEvent:
    def test_create_defaults(self, db_session: Session):
        """Test a new event gets an id, zero attendees and the default category."""
        event = create_event(db_session, EventCreate(**event_payload(createdBy=7)))

        assert event.id is not None
        assert event.attendees == 0
        assert event.category == "Other"
        assert event.created_by == 7
        assert event.latitude is None

    def test_create_keeps_category_and_coordinates(self, db_session: Session):
        event = create_event(
            db_session,
            EventCreate(**event_payload(category="Music", latitude=40.4, longitude=-3.7, image="data:x")),
        )
        assert event.category == "Music"
        assert event.latitude == pytest.approx(40.4)
        assert event.longitude == pytest.approx(-3.7)
        assert event.image == "data:x"


class TestUpdateEvent:
    def test_update_replaces_fields(self, db_session: Session, alice: User):
        """Test update replaces descriptive fields but keeps the counter."""
        event = make_event(db_session, title="Old Title", capacity=10, category="Music", created_by=3)
        join_event(db_session, event_id=event.id, user_id=alice.id)

        updated = update_event(
            db_session,
            event.id,
            EventUpdate(**event_payload(title="New Title", capacity=20, image=None)),
        )

        assert updated.title == "New Title"
        assert updated.capacity == 20
        assert updated.category == "Other"
        assert updated.attendees == 1
        assert updated.created_by == 3

    def test_update_missing_event(self, db_session: Session):
        with pytest.raises(NotFoundError):
            update_event(db_session, 99999, EventUpdate(**event_payload()))


class TestDeleteEvent:
    def test_delete_cascades_registrations(self, db_session: Session):
        """Test deleting an event removes all of its registrations."""
        event = make_event(db_session, title="Doomed", capacity=10)
        other = make_event(db_session, title="Survivor", capacity=10)
        users = [make_user(db_session, f"attendee{i}") for i in range(3)]
        for user in users:
            join_event(db_session, event_id=event.id, user_id=user.id)
        join_event(db_session, event_id=other.id, user_id=users[0].id)
        event_id = event.id

        removed = delete_event(db_session, event_id)

        assert removed == 3
        assert db_session.get(Event, event_id) is None
        remaining = db_session.scalars(select(Registration.event_id)).all()
        assert remaining == [other.id]
        for user in users:
            assert event_id not in list_event_ids_for_user(db_session, user.id)

    def test_delete_missing_event_is_lenient(self, db_session: Session):
        assert delete_event(db_session, 99999) == 0

    def test_delete_rolls_back_on_failure(
        self, db_session: Session, alice: User, monkeypatch: pytest.MonkeyPatch
    ):
        """Test a failure deleting the event keeps its registrations."""
        event = make_event(db_session, title="Sticky", capacity=10)
        join_event(db_session, event_id=event.id, user_id=alice.id)
        event_id = event.id

        original_execute = db_session.execute
        calls = []

        def failing_execute(statement, *args, **kwargs):
            calls.append(statement)
            if len(calls) == 2:
                raise OperationalError("DELETE FROM events", {}, Exception("database is locked"))
            return original_execute(statement, *args, **kwargs)

        monkeypatch.setattr(db_session, "execute", failing_execute)

        with pytest.raises(TransactionError):
            delete_event(db_session, event_id)

        monkeypatch.undo()
        assert db_session.get(Event, event_id) is not None
        assert list_event_ids_for_user(db_session, alice.id) == [event_id]


class TestListAndGet:
    def test_list_orders_by_date_descending(self, db_session: Session):
        make_event(db_session, title="Middle", date=dt.date(2025, 6, 1))
        make_event(db_session, title="Oldest", date=dt.date(2024, 1, 1))
        make_event(db_session, title="Newest", date=dt.date(2026, 1, 1))

        assert [e.title for e in list_events(db_session)] == ["Newest", "Middle", "Oldest"]

    def test_list_empty(self, db_session: Session):
        assert list_events(db_session) == []

    def test_get_event(self, db_session: Session):
        event = make_event(db_session, title="Lookup")
        assert get_event(db_session, event.id).title == "Lookup"

        with pytest.raises(NotFoundError):
            get_event(db_session, 99999)
