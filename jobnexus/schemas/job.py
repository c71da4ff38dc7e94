from pydantic import BaseModel
from typing import Optional
from datetime import datetime

from jobnexus.models.job import JobType


class JobListingCreate(BaseModel):
    title: str
    description: str
    location: str
    job_type: JobType
    salary_min: Optional[int] = None
    salary_max: Optional[int] = None
    skills: Optional[list[str]] = None
    application_deadline: Optional[datetime] = None


class JobListingUpdate(BaseModel):
    """Partial update; any subset of fields, unknown keys are dropped."""

    title: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    job_type: Optional[JobType] = None
    salary_min: Optional[int] = None
    salary_max: Optional[int] = None
    skills: Optional[list[str]] = None
    application_deadline: Optional[datetime] = None
    is_active: Optional[bool] = None


class JobListingResponse(BaseModel):
    id: int
    employer_id: int
    title: str
    description: str
    location: str
    job_type: JobType
    salary_min: Optional[int] = None
    salary_max: Optional[int] = None
    skills: Optional[list[str]] = None
    application_deadline: Optional[datetime] = None
    posted_at: datetime
    is_active: bool = True

    model_config = {"from_attributes": True}


class JobListingFilters(BaseModel):
    keyword: Optional[str] = None
    location: Optional[str] = None
    job_type: Optional[str] = None
    employer_id: Optional[int] = None
