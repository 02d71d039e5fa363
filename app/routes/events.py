from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.database.db import get_db
from app.schemas.events import EventCreate, EventOut, EventUpdate
from app.schemas.registrations import AttendanceRequest, MessageOut
from app.services import events as catalog
from app.services.registrations import join_event, leave_event
from app.tasks import enqueue_notification_delivery

router = APIRouter(prefix="/events", tags=["events"])


@router.get("", response_model=list[EventOut])
def list_events(db: Session = Depends(get_db)):
    return catalog.list_events(db)


@router.post("", response_model=EventOut, status_code=status.HTTP_201_CREATED)
def create_event(payload: EventCreate, db: Session = Depends(get_db)):
    return catalog.create_event(db, payload)


@router.get("/{event_id}", response_model=EventOut)
def get_event(event_id: int, db: Session = Depends(get_db)):
    return catalog.get_event(db, event_id)


@router.put("/{event_id}", response_model=EventOut)
def update_event(event_id: int, payload: EventUpdate, db: Session = Depends(get_db)):
    return catalog.update_event(db, event_id, payload)


@router.delete("/{event_id}", response_model=MessageOut)
def delete_event(event_id: int, db: Session = Depends(get_db)):
    catalog.delete_event(db, event_id)
    return {"message": "Event and registrations deleted"}


@router.post("/{event_id}/register", response_model=MessageOut)
def register_for_event(event_id: int, payload: AttendanceRequest, db: Session = Depends(get_db)):
    notification = join_event(db, event_id=event_id, user_id=payload.user_id)

    # hand the committed notification to the delivery worker
    enqueue_notification_delivery(notification.id, notification.user_id, notification.message)
    return {"message": "Registration successful"}


@router.post("/{event_id}/unregister", response_model=MessageOut)
def unregister_from_event(event_id: int, payload: AttendanceRequest, db: Session = Depends(get_db)):
    leave_event(db, event_id=event_id, user_id=payload.user_id)
    return {"message": "Registration cancelled successfully"}
