from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.database.db import get_db
from app.schemas.users import LoginRequest, RegisterRequest, UserEnvelope
from app.services.users import authenticate, register_user

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=UserEnvelope)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    user = authenticate(db, payload.username, payload.password)
    return {"user": user}


@router.post("/register", response_model=UserEnvelope, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    user = register_user(db, username=payload.username, password=payload.password, name=payload.name)
    return {"user": user}
