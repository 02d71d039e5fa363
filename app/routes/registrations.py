from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database.db import get_db
from app.services.registrations import list_event_ids_for_user

router = APIRouter(prefix="/registrations", tags=["registrations"])


@router.get("/user/{user_id}", response_model=list[int])
def user_registrations(user_id: int, db: Session = Depends(get_db)):
    """Event ids the user is currently registered for."""
    return list_event_ids_for_user(db, user_id)
