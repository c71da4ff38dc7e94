from sqlalchemy import Column, Integer, String, Text, ForeignKey, JSON

from jobnexus.database import Base


class SeekerProfile(Base):
    __tablename__ = "seeker_profiles"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, unique=True)
    title = Column(String(200), nullable=True)
    skills = Column(JSON, nullable=True)
    education = Column(JSON, nullable=True)
    experience = Column(JSON, nullable=True)
    bio = Column(Text, nullable=True)
    location = Column(String(200), nullable=True)
    phone = Column(String(50), nullable=True)
    resume = Column(String(500), nullable=True)  # URL or opaque reference


class EmployerProfile(Base):
    __tablename__ = "employer_profiles"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, unique=True)
    company_name = Column(String(200), nullable=False)
    company_size = Column(String(50), nullable=True)
    industry = Column(String(200), nullable=True)
    description = Column(Text, nullable=True)
    location = Column(String(200), nullable=True)
    website = Column(String(500), nullable=True)
    logo = Column(String(500), nullable=True)
