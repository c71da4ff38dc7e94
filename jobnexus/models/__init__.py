from jobnexus.models.user import User, UserType
from jobnexus.models.profile import SeekerProfile, EmployerProfile
from jobnexus.models.job import JobListing, JobType
from jobnexus.models.application import JobApplication, ApplicationStatus

__all__ = [
    "User",
    "UserType",
    "SeekerProfile",
    "EmployerProfile",
    "JobListing",
    "JobType",
    "JobApplication",
    "ApplicationStatus",
]
