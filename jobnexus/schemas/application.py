from pydantic import BaseModel
from typing import Optional
from datetime import datetime

from jobnexus.models.application import ApplicationStatus
from jobnexus.schemas.job import JobListingResponse
from jobnexus.schemas.profile import SeekerProfileResponse
from jobnexus.schemas.user import UserResponse


class JobApplicationCreate(BaseModel):
    job_id: int
    cover_letter: Optional[str] = None
    resume: Optional[str] = None


class ApplicationStatusUpdate(BaseModel):
    # Checked by the handler so an unknown value reports "Invalid application status".
    status: Optional[str] = None


class JobApplicationResponse(BaseModel):
    id: int
    job_id: int
    seeker_id: int
    status: ApplicationStatus
    cover_letter: Optional[str] = None
    resume: Optional[str] = None
    applied_at: datetime

    model_config = {"from_attributes": True}


class ApplicationWithJobResponse(JobApplicationResponse):
    job: Optional[JobListingResponse] = None


class ApplicationWithSeekerResponse(JobApplicationResponse):
    seeker: Optional[UserResponse] = None
    seeker_profile: Optional[SeekerProfileResponse] = None
