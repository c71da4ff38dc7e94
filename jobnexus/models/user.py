import enum

from sqlalchemy import Column, Integer, String, DateTime

from jobnexus.database import Base


class UserType(str, enum.Enum):
    SEEKER = "seeker"
    EMPLOYER = "employer"
    ADMIN = "admin"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(100), nullable=False, unique=True)
    password = Column(String(255), nullable=False)
    email = Column(String(200), nullable=False)
    name = Column(String(200), nullable=False)
    user_type = Column(String(20), nullable=False)
    created_at = Column(DateTime)
