from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database.db import get_db
from app.schemas.notifications import NotificationOut
from app.schemas.registrations import MessageOut
from app.services.notifications import list_notifications_for_user, mark_notification_read

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("/user/{user_id}", response_model=list[NotificationOut])
def user_notifications(user_id: int, db: Session = Depends(get_db)):
    return list_notifications_for_user(db, user_id)


@router.patch("/{notification_id}/read", response_model=MessageOut)
def mark_read(notification_id: int, db: Session = Depends(get_db)):
    mark_notification_read(db, notification_id)
    return {"message": "Notification marked as read"}
