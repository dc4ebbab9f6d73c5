# app/api/v1/endpoints/auth.py
from datetime import timedelta

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.security import authenticate_user, create_access_token
from app.db.session import get_db
from app.models.user import User
from app.schemas.auth import AuthResponse, LoginRequest, RegisterRequest, Token
from app.schemas.user import UserPublic
from app.services import user_service

router = APIRouter()


def _issue_token(user: User) -> str:
    access_token_expires = timedelta(
        minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES
    )
    return create_access_token(
        data={"sub": str(user.id)},
        expires_delta=access_token_expires,
    )


def _login_or_401(db: Session, email: str, password: str) -> User:
    user = authenticate_user(db, email, password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Account is deactivated. Please contact admin.",
        )
    if not user.college.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Your college is currently inactive. Please contact admin.",
        )
    return user


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register_user(payload: RegisterRequest, db: Session = Depends(get_db)):
    # the email domain picks the college
    user = user_service.register_user(db, obj_in=payload)
    return AuthResponse(access_token=_issue_token(user), user=UserPublic.model_validate(user))


@router.post("/login", response_model=AuthResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    user = _login_or_401(db, payload.email, payload.password)
    return AuthResponse(access_token=_issue_token(user), user=UserPublic.model_validate(user))


@router.post("/token", response_model=Token)
def login_for_access_token_form(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
):
    """
    OAuth2 form login; put the email address in ``username``.
    """
    user = _login_or_401(db, form_data.username, form_data.password)
    return Token(access_token=_issue_token(user))
