"""
Router utilisateur : profil, stats, activité, suppression du compte
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from taskmanager.core import responses
from taskmanager.core.database import get_db
from taskmanager.core.deps import get_current_user
from taskmanager.core.messages import AuthMessages, UserMessages
from taskmanager.models.user import User
from taskmanager.schemas.user import (
    ChangePasswordRequest,
    DeleteAccountRequest,
    UpdateProfileRequest,
    public_profile,
)
from taskmanager.services import auth_service, user_service

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/profile")
def get_user_profile(current_user: User = Depends(get_current_user)):
    return responses.success(UserMessages.PROFILE_RETRIEVED, {"user": public_profile(current_user)})


@router.put("/profile")
def update_user_profile(
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


@router.get("/stats")
def get_user_stats(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return responses.success(UserMessages.STATS, user_service.get_user_stats(db, current_user.id))


@router.get("/activity")
def get_user_activity(
    days: int = Query(30, ge=1, le=365),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    activity = user_service.get_user_activity(db, current_user.id, days)
    return responses.success(UserMessages.ACTIVITY, {"activity": activity})


@router.delete("/account")
def delete_account(
    payload: DeleteAccountRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    user_service.delete_account(db, current_user, payload.password)
    return responses.success(UserMessages.ACCOUNT_DELETED)
