import logging
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Request

from jobnexus.errors import Conflict, Forbidden, Unauthorized, validate_payload
from jobnexus.models import User, UserType
from jobnexus.schemas.user import LoginRequest, UserCreate, UserResponse
from jobnexus.services.auth import (
    authenticate,
    get_current_user,
    hash_password,
    login_user,
    logout_user,
)
from jobnexus.services.storage import DuplicateRecordError, Storage, get_storage

logger = logging.getLogger(__name__)

router = APIRouter()


def create_account(storage: Storage, data: UserCreate) -> User:
    """Store a new user with a hashed password; taken usernames are a conflict."""
    if storage.get_user_by_username(data.username):
        raise Conflict("Username already exists")
    try:
        user = storage.create_user({**data.model_dump(), "password": hash_password(data.password)})
    except DuplicateRecordError as exc:
        raise Conflict("Username already exists") from exc
    logger.info("Registered user %s (%s) as %s", user.id, user.username, user.user_type)
    return user


@router.post("/register", response_model=UserResponse, status_code=201)
def register(
    request: Request,
    payload: Optional[dict[str, Any]] = Body(None),
    storage: Storage = Depends(get_storage),
):
    data = validate_payload(UserCreate, payload, "Invalid registration data")
    if data.user_type == UserType.ADMIN:
        raise Forbidden("Admin accounts cannot be self-registered")
    user = create_account(storage, data)
    login_user(request, user)
    return user


@router.post("/login", response_model=UserResponse)
def login(
    request: Request,
    payload: Optional[dict[str, Any]] = Body(None),
    storage: Storage = Depends(get_storage),
):
    data = validate_payload(LoginRequest, payload, "Invalid login data")
    user = authenticate(storage, data.username, data.password)
    if not user:
        logger.warning("Failed login for %s", data.username)
        raise Unauthorized("Invalid username or password")
    login_user(request, user)
    return user


@router.post("/logout")
def logout(request: Request):
    logout_user(request)
    return {"message": "Logged out"}


@router.get("/user", response_model=UserResponse)
def current_user(user: User = Depends(get_current_user)):
    return user
