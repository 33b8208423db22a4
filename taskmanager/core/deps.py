from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from taskmanager.core.database import get_db
from taskmanager.core.exceptions import AuthenticationError
from taskmanager.core.messages import AuthMessages
from taskmanager.core.security import decode_token
from taskmanager.models.user import User


def get_current_user(
    db: Session = Depends(get_db),
    authorization: Optional[str] = Header(None)
) -> User:
    """Récupère l'utilisateur courant via le JWT (header Authorization: Bearer ...)"""
    scheme, _, token = (authorization or "").partition(" ")
    # le schéma HTTP est insensible à la casse
    if scheme.lower() != "bearer" or not token.strip():
        raise AuthenticationError(AuthMessages.TOKEN_MISSING)

    token = token.strip()
    user_id = decode_token(token)
    if not user_id:
        raise AuthenticationError(AuthMessages.TOKEN_INVALID)

    user = db.query(User).filter(User.id == user_id).first()
    # compte supprimé ou désactivé : même réponse
    if not user or not user.is_active:
        raise AuthenticationError(AuthMessages.USER_NOT_FOUND)

    return user
