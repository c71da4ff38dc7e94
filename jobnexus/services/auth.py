"""Session and credential handling.

Passwords are hashed with werkzeug; the logged-in user id lives in the signed
session cookie managed by Starlette's ``SessionMiddleware``.
"""

import logging
from typing import Callable, Optional

from fastapi import Depends, Request
from werkzeug.security import generate_password_hash, check_password_hash

from jobnexus.errors import Forbidden, Unauthorized
from jobnexus.models import User, UserType
from jobnexus.services.storage import Storage, get_storage

logger = logging.getLogger(__name__)

SESSION_USER_KEY = "user_id"


def hash_password(password: str) -> str:
    return generate_password_hash(password)


def verify_password(password_hash: str, password: str) -> bool:
    return check_password_hash(password_hash, password)


def authenticate(storage: Storage, username: str, password: str) -> Optional[User]:
    user = storage.get_user_by_username(username)
    if user and verify_password(user.password, password):
        return user
    return None


def login_user(request: Request, user: User) -> None:
    request.session.clear()
    request.session[SESSION_USER_KEY] = user.id


def logout_user(request: Request) -> None:
    request.session.clear()


def get_current_user(request: Request, storage: Storage = Depends(get_storage)) -> User:
    """Dependency: the logged-in user, or 401."""
    user_id = request.session.get(SESSION_USER_KEY)
    if user_id is None:
        raise Unauthorized("Unauthorized")
    user = storage.get_user(user_id)
    if user is None:
        request.session.clear()
        raise Unauthorized("Unauthorized")
    return user


def require_role(*roles: UserType, message: str = "Forbidden") -> Callable[..., User]:
    """Dependency factory: the logged-in user if their type is one of ``roles``, else 403."""
    allowed = {role.value for role in roles}

    def dependency(user: User = Depends(get_current_user)) -> User:
        if user.user_type not in allowed:
            logger.warning(
                "User %s (%s) denied, requires %s", user.id, user.user_type, "/".join(sorted(allowed))
            )
            raise Forbidden(message)
        return user

    return dependency
