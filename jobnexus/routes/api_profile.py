import logging
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends

from jobnexus.errors import Conflict, Forbidden, NotFound, validate_payload
from jobnexus.models import User, UserType
from jobnexus.schemas.profile import (
    EmployerProfileCreate,
    EmployerProfileResponse,
    EmployerProfileUpdate,
    SeekerProfileCreate,
    SeekerProfileResponse,
    SeekerProfileUpdate,
)
from jobnexus.services.auth import get_current_user, require_role
from jobnexus.services.storage import DuplicateRecordError, Storage, get_storage

logger = logging.getLogger(__name__)

router = APIRouter()

_PROFILE_EXISTS = "Profile already exists. Use PUT to update."


def _check_own_profile(profile, profile_id: int, user: User):
    if not profile:
        raise NotFound("Profile not found")
    if profile.id != profile_id:
        logger.warning("User %s tried to update profile %s", user.id, profile_id)
        raise Forbidden("You can only update your own profile")


# Seeker

@router.get("/seeker", response_model=SeekerProfileResponse)
def get_seeker_profile(user: User = Depends(get_current_user), storage: Storage = Depends(get_storage)):
    profile = storage.get_seeker_profile(user.id)
    if not profile:
        raise NotFound("Profile not found")
    return profile


@router.post("/seeker", response_model=SeekerProfileResponse, status_code=201)
def create_seeker_profile(
    payload: Optional[dict[str, Any]] = Body(None),
    user: User = Depends(require_role(UserType.SEEKER, message="Only job seekers can create a seeker profile")),
    storage: Storage = Depends(get_storage),
):
    if storage.get_seeker_profile(user.id):
        raise Conflict(_PROFILE_EXISTS)
    data = validate_payload(SeekerProfileCreate, payload, "Invalid profile data")
    try:
        profile = storage.create_seeker_profile({**data.model_dump(), "user_id": user.id})
    except DuplicateRecordError as exc:
        raise Conflict(_PROFILE_EXISTS) from exc
    logger.info("Created seeker profile %s for user %s", profile.id, user.id)
    return profile


@router.put("/seeker/{profile_id}", response_model=SeekerProfileResponse)
def update_seeker_profile(
    profile_id: int,
    payload: Optional[dict[str, Any]] = Body(None),
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    _check_own_profile(storage.get_seeker_profile(user.id), profile_id, user)
    data = validate_payload(SeekerProfileUpdate, payload, "Invalid profile data")
    profile = storage.update_seeker_profile(profile_id, data.model_dump(exclude_unset=True))
    if not profile:
        raise NotFound("Profile not found")
    return profile


# Employer

@router.get("/employer", response_model=EmployerProfileResponse)
def get_employer_profile(user: User = Depends(get_current_user), storage: Storage = Depends(get_storage)):
    profile = storage.get_employer_profile(user.id)
    if not profile:
        raise NotFound("Profile not found")
    return profile


@router.post("/employer", response_model=EmployerProfileResponse, status_code=201)
def create_employer_profile(
    payload: Optional[dict[str, Any]] = Body(None),
    user: User = Depends(require_role(UserType.EMPLOYER, message="Only employers can create an employer profile")),
    storage: Storage = Depends(get_storage),
):
    if storage.get_employer_profile(user.id):
        raise Conflict(_PROFILE_EXISTS)
    data = validate_payload(EmployerProfileCreate, payload, "Invalid profile data")
    try:
        profile = storage.create_employer_profile({**data.model_dump(), "user_id": user.id})
    except DuplicateRecordError as exc:
        raise Conflict(_PROFILE_EXISTS) from exc
    logger.info("Created employer profile %s for user %s", profile.id, user.id)
    return profile


@router.put("/employer/{profile_id}", response_model=EmployerProfileResponse)
def update_employer_profile(
    profile_id: int,
    payload: Optional[dict[str, Any]] = Body(None),
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    _check_own_profile(storage.get_employer_profile(user.id), profile_id, user)
    data = validate_payload(EmployerProfileUpdate, payload, "Invalid profile data")
    changes = data.model_dump(exclude_unset=True)
    # company_name is required on the record, so a null cannot clear it.
    if changes.get("company_name", "") is None:
        changes.pop("company_name")
    profile = storage.update_employer_profile(profile_id, changes)
    if not profile:
        raise NotFound("Profile not found")
    return profile
