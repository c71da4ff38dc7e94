from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends

from jobnexus.errors import Forbidden, NotFound, validate_payload
from jobnexus.models import User, UserType
from jobnexus.schemas.job import (
    JobListingCreate,
    JobListingUpdate,
    JobListingResponse,
    JobListingFilters,
)
from jobnexus.services.auth import get_current_user, require_role
from jobnexus.services.storage import Storage, get_storage

logger = logging.getLogger(__name__)

router = APIRouter()

# Fields a partial update may clear by sending null.
_NULLABLE_FIELDS = {"salary_min", "salary_max", "skills", "application_deadline"}


def _get_owned_job(storage: Storage, job_id: int, user: User, action: str):
    job = storage.get_job_listing(job_id)
    if not job:
        raise NotFound("Job not found")
    if job.employer_id != user.id:
        logger.warning("User %s tried to %s job %s owned by %s", user.id, action, job_id, job.employer_id)
        raise Forbidden(f"You can only {action} your own job listings")
    return job


@router.get("", response_model=list[JobListingResponse])
def list_jobs(
    keyword: Optional[str] = None,
    location: Optional[str] = None,
    job_type: Optional[str] = None,
    employer_id: Optional[int] = None,
    storage: Storage = Depends(get_storage),
):
    filters = JobListingFilters(
        keyword=keyword,
        location=location,
        job_type=job_type,
        employer_id=employer_id,
    )
    return storage.get_job_listings(filters)


@router.get("/{job_id}", response_model=JobListingResponse)
def get_job(job_id: int, storage: Storage = Depends(get_storage)):
    job = storage.get_job_listing(job_id)
    if not job:
        raise NotFound("Job not found")
    return job


@router.post("", response_model=JobListingResponse, status_code=201)
def create_job(
    payload: Optional[dict[str, Any]] = Body(None),
    user: User = Depends(require_role(UserType.EMPLOYER, message="Only employers can post jobs")),
    storage: Storage = Depends(get_storage),
):
    data = validate_payload(JobListingCreate, payload, "Invalid job data")
    # The poster is always the caller, whatever the body says.
    job = storage.create_job_listing({**data.model_dump(), "employer_id": user.id})
    logger.info("Employer %s posted job %s (%s)", user.id, job.id, job.title)
    return job


@router.put("/{job_id}", response_model=JobListingResponse)
def update_job(
    job_id: int,
    payload: Optional[dict[str, Any]] = Body(None),
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    _get_owned_job(storage, job_id, user, "update")
    data = validate_payload(JobListingUpdate, payload, "Invalid job data")
    changes = {
        field: value
        for field, value in data.model_dump(exclude_unset=True).items()
        if value is not None or field in _NULLABLE_FIELDS
    }
    job = storage.update_job_listing(job_id, changes)
    if not job:
        raise NotFound("Job not found")
    logger.info("Employer %s updated job %s: %s", user.id, job_id, sorted(changes))
    return job


@router.delete("/{job_id}")
def delete_job(
    job_id: int,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    _get_owned_job(storage, job_id, user, "delete")
    storage.delete_job_listing(job_id)
    logger.info("Employer %s deactivated job %s", user.id, job_id)
    return {"message": "Job listing deleted successfully", "job_id": job_id}
