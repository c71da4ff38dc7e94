import enum

from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, ForeignKey, JSON

from jobnexus.database import Base


class JobType(str, enum.Enum):
    FULL_TIME = "full-time"
    PART_TIME = "part-time"
    CONTRACT = "contract"
    REMOTE = "remote"


class JobListing(Base):
    __tablename__ = "job_listings"

    id = Column(Integer, primary_key=True, index=True)
    employer_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(300), nullable=False)
    description = Column(Text, nullable=False)
    location = Column(String(200), nullable=False)
    job_type = Column(String(20), nullable=False)
    salary_min = Column(Integer, nullable=True)
    salary_max = Column(Integer, nullable=True)
    skills = Column(JSON, nullable=True)
    application_deadline = Column(DateTime, nullable=True)
    posted_at = Column(DateTime, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
