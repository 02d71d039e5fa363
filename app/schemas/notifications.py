from datetime import datetime

from pydantic import BaseModel


class NotificationOut(BaseModel):
    id: int
    user_id: int
    message: str
    read: bool
    created_at: datetime | None

    class Config:
        from_attributes = True
