import datetime as dt

from pydantic import BaseModel, Field


# ---------- Event ----------
class EventUpdate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: str
    date: dt.date
    location: str
    latitude: float | None = None
    longitude: float | None = None
    capacity: int = Field(ge=0)
    category: str | None = None
    image: str | None = None


class EventCreate(EventUpdate):
    created_by: int | None = Field(default=None, alias="createdBy")

    class Config:
        populate_by_name = True


class EventOut(BaseModel):
    id: int
    title: str
    description: str
    date: dt.date
    location: str
    latitude: float | None
    longitude: float | None
    capacity: int
    attendees: int
    category: str
    image: str | None
    created_by: int | None
    created_at: dt.datetime | None

    class Config:
        from_attributes = True
