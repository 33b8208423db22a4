"""
Service d'authentification - inscription, login, Google, profil, mot de passe
"""

import logging
from datetime import datetime
from typing import Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from taskmanager.core.exceptions import AuthenticationError, ConflictError
from taskmanager.core.messages import AuthMessages
from taskmanager.core.security import create_access_token, unusable_password
from taskmanager.models.user import User

logger = logging.getLogger(__name__)


def default_display_name(email: str) -> str:
    return email.split("@")[0][:50]


def _issue_token(db: Session, user: User) -> str:
    # le lastLogin part dans le même commit que l'écriture principale
    user.last_login = datetime.utcnow()
    db.commit()
    db.refresh(user)
    return create_access_token(user.id)


def register(db: Session, email: str, password: str, display_name: Optional[str] = None) -> Tuple[User, str]:
    if db.query(User).filter(User.email == email).first():
        raise ConflictError(AuthMessages.EMAIL_TAKEN)

    user = User(email=email, display_name=display_name or default_display_name(email))
    user.set_password(password)
    db.add(user)
    try:
        db.flush()
    except IntegrityError:
        # inscription concurrente avec le même email
        db.rollback()
        raise ConflictError(AuthMessages.EMAIL_TAKEN)

    token = _issue_token(db, user)
    logger.info("User %s registered", user.id)
    return user, token


def login(db: Session, email: str, password: str) -> Tuple[User, str]:
    user = db.query(User).filter(User.email == email).first()
    if not user:
        logger.warning("Login failed: unknown email")
        raise AuthenticationError(AuthMessages.INVALID_CREDENTIALS)

    if not user.is_active:
        logger.warning("Login refused for deactivated user %s", user.id)
        raise AuthenticationError(AuthMessages.ACCOUNT_DEACTIVATED)

    if not user.verify_password(password):
        logger.warning("Login failed for user %s: bad password", user.id)
        raise AuthenticationError(AuthMessages.INVALID_CREDENTIALS)

    token = _issue_token(db, user)
    logger.info("User %s logged in", user.id)
    return user, token


def google_sign_in(
    db: Session,
    google_id: str,
    email: str,
    display_name: Optional[str] = None,
    avatar: Optional[str] = None
) -> Tuple[User, str]:
    """
    Connexion Google.

    - compte trouvé (googleId, puis email) : on complète googleId / displayName /
      avatar s'ils sont vides, sans écraser l'existant
    - sinon : nouveau compte avec un mot de passe inutilisable
    """
    # googleId d'abord : sinon on pourrait lier le googleId d'un autre compte
    user = db.query(User).filter(User.google_id == google_id).first()
    if not user:
        user = db.query(User).filter(User.email == email).first()

    if user:
        if not user.is_active:
            raise AuthenticationError(AuthMessages.ACCOUNT_DEACTIVATED)
        if not user.google_id:
            user.google_id = google_id
        if display_name and not user.display_name:
            user.display_name = display_name
        if avatar and not user.avatar:
            user.avatar = avatar
    else:
        user = User(
            google_id=google_id,
            email=email,
            display_name=display_name or default_display_name(email),
            avatar=avatar,
            password_hash=unusable_password()
        )
        db.add(user)
        db.flush()
        logger.info("User %s created from Google sign-in", user.id)

    token = _issue_token(db, user)
    return user, token


def update_profile(db: Session, user: User, changes: dict) -> User:
    # seuls les champs envoyés sont modifiés
    for field in ("display_name", "avatar"):
        if field in changes:
            setattr(user, field, changes[field])

    db.commit()
    db.refresh(user)
    return user


def change_password(db: Session, user: User, current_password: str, new_password: str) -> None:
    if not user.verify_password(current_password):
        raise AuthenticationError(AuthMessages.CURRENT_PASSWORD_INCORRECT)

    user.set_password(new_password)
    db.commit()
    logger.info("User %s changed password", user.id)
