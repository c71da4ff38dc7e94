import enum

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, UniqueConstraint

from jobnexus.database import Base


class ApplicationStatus(str, enum.Enum):
    APPLIED = "applied"
    REVIEWING = "reviewing"
    INTERVIEW = "interview"
    REJECTED = "rejected"
    ACCEPTED = "accepted"


class JobApplication(Base):
    __tablename__ = "job_applications"
    __table_args__ = (UniqueConstraint("job_id", "seeker_id", name="uq_job_applications_job_seeker"),)

    id = Column(Integer, primary_key=True, index=True)
    job_id = Column(Integer, ForeignKey("job_listings.id"), nullable=False, index=True)
    seeker_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    status = Column(String(20), nullable=False, default=ApplicationStatus.APPLIED.value)
    cover_letter = Column(Text, nullable=True)
    resume = Column(String(500), nullable=True)
    applied_at = Column(DateTime, nullable=False)
