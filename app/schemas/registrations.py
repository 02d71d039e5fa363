from pydantic import BaseModel, Field


class AttendanceRequest(BaseModel):
    user_id: int = Field(ge=1, alias="userId")

    class Config:
        populate_by_name = True


class MessageOut(BaseModel):
    message: str
