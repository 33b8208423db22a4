from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from taskmanager.core import responses
from taskmanager.core.database import get_db
from taskmanager.core.deps import get_current_user
from taskmanager.core.messages import AuthMessages
from taskmanager.models.user import User
from taskmanager.schemas.user import (
    ChangePasswordRequest,
    GoogleSignInRequest,
    LoginRequest,
    RegisterRequest,
    UpdateProfileRequest,
    public_profile,
)
from taskmanager.services import auth_service

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", status_code=201)
def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    """Créer un compte et recevoir un token"""
    user, token = auth_service.register(db, payload.email, payload.password, payload.display_name)
    return responses.created(AuthMessages.REGISTERED, {"user": public_profile(user), "token": token})


@router.post("/login")
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    """Se connecter et recevoir un token"""
    user, token = auth_service.login(db, payload.email, payload.password)
    return responses.success(AuthMessages.LOGGED_IN, {"user": public_profile(user), "token": token})


@router.post("/google")
def google_sign_in(payload: GoogleSignInRequest, db: Session = Depends(get_db)):
    user, token = auth_service.google_sign_in(
        db,
        payload.google_id,
        payload.email,
        display_name=payload.display_name,
        avatar=payload.avatar
    )
    return responses.success(AuthMessages.GOOGLE_SIGNED_IN, {"user": public_profile(user), "token": token})


@router.get("/profile")
def get_profile(current_user: User = Depends(get_current_user)):
    return responses.success(AuthMessages.PROFILE_RETRIEVED, {"user": public_profile(current_user)})


@router.put("/profile")
def update_profile(
    payload: UpdateProfileRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    user = auth_service.update_profile(db, current_user, payload.changes())
    return responses.success(AuthMessages.PROFILE_UPDATED, {"user": public_profile(user)})


@router.put("/change-password")
def change_password(
    payload: ChangePasswordRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    auth_service.change_password(db, current_user, payload.current_password, payload.new_password)
    return responses.success(AuthMessages.PASSWORD_CHANGED)


@router.post("/logout")
def logout(current_user: User = Depends(get_current_user)):
    # JWT sans état : le client jette son token
    return responses.success(AuthMessages.LOGGED_OUT)
