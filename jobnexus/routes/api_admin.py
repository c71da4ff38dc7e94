import logging
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends

from jobnexus.errors import NotFound, validate_payload
from jobnexus.models import User, UserType
from jobnexus.routes.api_auth import create_account
from jobnexus.schemas.admin import AdminStatsResponse
from jobnexus.schemas.job import JobListingFilters, JobListingResponse
from jobnexus.schemas.user import UserCreate, UserResponse
from jobnexus.services.auth import require_role
from jobnexus.services.storage import Storage, get_storage

logger = logging.getLogger(__name__)

router = APIRouter()

require_admin = require_role(UserType.ADMIN, message="Admin access required")


@router.get("/stats", response_model=AdminStatsResponse)
def get_stats(admin: User = Depends(require_admin), storage: Storage = Depends(get_storage)):
    return AdminStatsResponse(**storage.count_records())


@router.get("/users", response_model=list[UserResponse])
def list_users(
    user_type: Optional[UserType] = None,
    admin: User = Depends(require_admin),
    storage: Storage = Depends(get_storage),
):
    return storage.list_users(user_type.value if user_type else None)


@router.post("/users", response_model=UserResponse, status_code=201)
def create_user(
    payload: Optional[dict[str, Any]] = Body(None),
    admin: User = Depends(require_admin),
    storage: Storage = Depends(get_storage),
):
    data = validate_payload(UserCreate, payload, "Invalid user data")
    user = create_account(storage, data)
    logger.info("Admin %s created user %s", admin.id, user.id)
    return user


@router.get("/jobs", response_model=list[JobListingResponse])
def list_all_jobs(
    keyword: Optional[str] = None,
    location: Optional[str] = None,
    job_type: Optional[str] = None,
    employer_id: Optional[int] = None,
    admin: User = Depends(require_admin),
    storage: Storage = Depends(get_storage),
):
    """Every listing, inactive ones included."""
    filters = JobListingFilters(
        keyword=keyword,
        location=location,
        job_type=job_type,
        employer_id=employer_id,
    )
    return storage.get_job_listings(filters, include_inactive=True)


@router.delete("/jobs/{job_id}")
def deactivate_job(job_id: int, admin: User = Depends(require_admin), storage: Storage = Depends(get_storage)):
    if not storage.delete_job_listing(job_id):
        raise NotFound("Job not found")
    logger.info("Admin %s deactivated job %s", admin.id, job_id)
    return {"message": "Job listing deleted successfully", "job_id": job_id}
