from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from store_rating.auth.permissions import Operation, requires
from store_rating.auth.utils import Identity
from store_rating.core.config import get_settings
from store_rating.db.session import get_db
from store_rating.model.user_schema import (
    LoginResponse,
    ProfileUpdate,
    UserEnvelope,
    UserLogin,
    UserRegister,
    UserResponse,
)
from store_rating.service import user as user_service

router = APIRouter(prefix="/api/auth", tags=["Auth"])


def set_session_cookie(response: Response, token: str):
    settings = get_settings()
    response.set_cookie(
        key=settings.COOKIE_NAME,
        value=token,
        max_age=settings.cookie_max_age,
        httponly=True,
        secure=settings.is_production,
        samesite="strict",
    )


@router.post("/register", response_model=UserEnvelope, status_code=status.HTTP_201_CREATED)
def register(data: UserRegister, db: Session = Depends(get_db)):
    user = user_service.register_user(db, data)
    return UserEnvelope(message="User registered successfully", user=UserResponse.model_validate(user))


@router.post("/login", response_model=LoginResponse)
def login(data: UserLogin, response: Response, db: Session = Depends(get_db)):
    user, token = user_service.login(db, data.email, data.password)
    set_session_cookie(response, token)
    return LoginResponse(
        message="Login successful",
        access_token=token,
        user=UserResponse.model_validate(user),
    )


@router.post("/logout")
def logout(response: Response):
    settings = get_settings()
    response.delete_cookie(
        key=settings.COOKIE_NAME,
        httponly=True,
        secure=settings.is_production,
        samesite="strict",
    )
    return {"message": "Logged out"}


@router.get("/me", response_model=UserEnvelope)
def me(identity: Identity = Depends(requires(Operation.VIEW_PROFILE)), db: Session = Depends(get_db)):
    user = user_service.get_profile(db, identity)
    return UserEnvelope(user=UserResponse.model_validate(user))


@router.patch("/me", response_model=UserEnvelope)
def update_me(
    data: ProfileUpdate,
    identity: Identity = Depends(requires(Operation.UPDATE_PROFILE)),
    db: Session = Depends(get_db),
):
    user = user_service.update_profile(db, identity, data)
    return UserEnvelope(message="Profile updated", user=UserResponse.model_validate(user))
