"""Registration, login and profile endpoints."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from hagwon.app.db.session import get_db
from hagwon.app.dependencies.auth import get_current_user
from hagwon.app.models.user import User
from hagwon.app.schemas.user import LoginRequest, TokenResponse, UserCreate, UserRead
from hagwon.app.services.accounts import authenticate, register_tenant_admin

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register_user(user_in: UserCreate, db: Session = Depends(get_db)):
    return register_tenant_admin(db, user_in)


@router.post("/login", response_model=TokenResponse)
def login(credentials: LoginRequest, db: Session = Depends(get_db)):
    token = authenticate(db, credentials.email, credentials.password)
    return TokenResponse(access_token=token)


@router.get("/me", response_model=UserRead)
def read_me(current_user: User = Depends(get_current_user)):
    return current_user
