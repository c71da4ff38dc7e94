from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends

from jobnexus.errors import Conflict, Forbidden, NotFound, ValidationFailed, validate_payload
from jobnexus.models import ApplicationStatus, JobApplication, User, UserType
from jobnexus.schemas.application import (
    ApplicationStatusUpdate,
    ApplicationWithJobResponse,
    ApplicationWithSeekerResponse,
    JobApplicationCreate,
    JobApplicationResponse,
)
from jobnexus.schemas.job import JobListingResponse
from jobnexus.schemas.profile import SeekerProfileResponse
from jobnexus.schemas.user import UserResponse
from jobnexus.services.auth import get_current_user, require_role
from jobnexus.services.storage import DuplicateRecordError, Storage, get_storage

logger = logging.getLogger(__name__)

router = APIRouter()

_VALID_STATUSES = {status.value for status in ApplicationStatus}
_ALREADY_APPLIED = "You have already applied for this job"


def _with_job(storage: Storage, application: JobApplication) -> ApplicationWithJobResponse:
    job = storage.get_job_listing(application.job_id)
    return ApplicationWithJobResponse(
        **JobApplicationResponse.model_validate(application).model_dump(),
        job=JobListingResponse.model_validate(job) if job else None,
    )


def _with_seeker(storage: Storage, application: JobApplication) -> ApplicationWithSeekerResponse:
    seeker = storage.get_user(application.seeker_id)
    profile = storage.get_seeker_profile(application.seeker_id)
    return ApplicationWithSeekerResponse(
        **JobApplicationResponse.model_validate(application).model_dump(),
        seeker=UserResponse.model_validate(seeker) if seeker else None,
        seeker_profile=SeekerProfileResponse.model_validate(profile) if profile else None,
    )


@router.post("", response_model=JobApplicationResponse, status_code=201)
def create_application(
    payload: Optional[dict[str, Any]] = Body(None),
    user: User = Depends(require_role(UserType.SEEKER, message="Only job seekers can apply for jobs")),
    storage: Storage = Depends(get_storage),
):
    """Apply to an active job. Status starts at "applied" and the applicant is the caller."""
    data = validate_payload(JobApplicationCreate, payload, "Invalid application data")

    job = storage.get_job_listing(data.job_id)
    if not job or not job.is_active:
        raise NotFound("Job not found or no longer active")

    existing = storage.get_job_applications_by_seeker(user.id)
    if any(application.job_id == data.job_id for application in existing):
        raise Conflict(_ALREADY_APPLIED)

    try:
        application = storage.create_job_application({**data.model_dump(), "seeker_id": user.id})
    except DuplicateRecordError as exc:
        raise Conflict(_ALREADY_APPLIED) from exc

    logger.info("Seeker %s applied to job %s (application %s)", user.id, job.id, application.id)
    return application


@router.get("/seeker", response_model=list[ApplicationWithJobResponse])
def list_seeker_applications(
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    applications = storage.get_job_applications_by_seeker(user.id)
    return [_with_job(storage, application) for application in applications]


@router.get("/job/{job_id}", response_model=list[ApplicationWithSeekerResponse])
def list_job_applications(
    job_id: int,
    user: User = Depends(require_role(UserType.EMPLOYER, message="Only employers can view job applications")),
    storage: Storage = Depends(get_storage),
):
    job = storage.get_job_listing(job_id)
    if not job:
        raise NotFound("Job not found")
    if job.employer_id != user.id:
        logger.warning("Employer %s tried to view applications for job %s", user.id, job_id)
        raise Forbidden("You can only view applications for your own jobs")

    applications = storage.get_job_applications_by_job(job_id)
    return [_with_seeker(storage, application) for application in applications]


@router.put("/{application_id}/status", response_model=JobApplicationResponse)
def update_application_status(
    application_id: int,
    payload: Optional[dict[str, Any]] = Body(None),
    user: User = Depends(require_role(UserType.EMPLOYER, message="Only employers can update application status")),
    storage: Storage = Depends(get_storage),
):
    data = validate_payload(ApplicationStatusUpdate, payload, "Invalid application status")
    if not data.status or data.status not in _VALID_STATUSES:
        raise ValidationFailed("Invalid application status")

    application = storage.get_job_application(application_id)
    if not application:
        raise NotFound("Application not found")

    job = storage.get_job_listing(application.job_id)
    if not job or job.employer_id != user.id:
        logger.warning("Employer %s tried to update application %s", user.id, application_id)
        raise Forbidden("You can only update applications for your own jobs")

    updated = storage.update_job_application_status(application_id, data.status)
    if not updated:
        raise NotFound("Application not found")
    logger.info(
        "Application %s moved from %s to %s by employer %s",
        application_id, application.status, updated.status, user.id,
    )
    return updated
