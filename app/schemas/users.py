from datetime import datetime

from pydantic import BaseModel


class LoginRequest(BaseModel):
    username: str | None = None
    password: str | None = None


class RegisterRequest(BaseModel):
    # Presence and length are checked by the identity service so that
    # missing fields come back as field-tagged 400s
    username: str | None = None
    password: str | None = None
    name: str | None = None


class UserOut(BaseModel):
    id: int
    username: str
    name: str
    role: str
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class UserEnvelope(BaseModel):
    user: UserOut
