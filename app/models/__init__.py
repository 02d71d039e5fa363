# Import models so that they register with Base.metadata
from app.models.events import Event
from app.models.notifications import Notification
from app.models.registrations import Registration
from app.models.users import User, UserRole

__all__ = ["Event", "Notification", "Registration", "User", "UserRole"]
