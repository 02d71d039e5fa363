"""
Sample data seeded on first start.

Guarded by the existence of the ``admin`` user, so running it on every
start is safe.
"""
import logging
from datetime import date

from sqlalchemy.orm import Session

from app.core.security import hash_password
from app.database.db import transaction
from app.models.events import Event
from app.models.users import User, UserRole
from app.services.users import get_user_by_username

logger = logging.getLogger(__name__)


def seed_sample_data(db: Session) -> bool:
    """Create the sample users and events. Returns False when already seeded."""
    if get_user_by_username(db, "admin") is not None:
        return False

    with transaction(db):
        admin = User(
            username="admin",
            password_hash=hash_password("admin123"),
            name="Administrator",
            role=UserRole.ADMIN.value,
        )
        user = User(
            username="user",
            password_hash=hash_password("user123"),
            name="Regular User",
            role=UserRole.USER.value,
        )
        db.add_all([admin, user])
        db.flush()

        db.add_all(
            [
                Event(
                    title="Tech Conference 2024",
                    description="Conference about technology",
                    date=date(2024, 12, 20),
                    location="Convention Center",
                    capacity=200,
                    attendees=0,
                    created_by=admin.id,
                    category="Technology",
                ),
                Event(
                    title="React Workshop",
                    description="Hands-on React workshop",
                    date=date(2024, 12, 15),
                    location="Room 101",
                    capacity=30,
                    attendees=0,
                    created_by=user.id,
                    category="Workshop",
                ),
            ]
        )
    logger.info("Sample users and events created")
    return True
