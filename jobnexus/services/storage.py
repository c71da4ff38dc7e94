"""Repositories for users, profiles, job listings and applications.

``Storage`` is the interface the route layer depends on. ``MemStorage`` keeps
records in per-type dicts with their own id counters; ``SqlStorage`` keeps
them in the SQLAlchemy tables from ``jobnexus.models``. Both return model
instances, report absence as ``None`` and raise ``DuplicateRecordError`` only
when a uniqueness rule would be broken.
"""

from __future__ import annotations

import enum
import itertools
import logging
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterator, Optional

from fastapi import Request
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from jobnexus.models import (
    User,
    SeekerProfile,
    EmployerProfile,
    JobListing,
    JobApplication,
    ApplicationStatus,
)
from jobnexus.schemas.job import JobListingFilters

logger = logging.getLogger(__name__)


class DuplicateRecordError(Exception):
    """A create would break a uniqueness rule (username, profile per user, application per job)."""


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _columns(model) -> set[str]:
    return set(model.__table__.columns.keys())


def _clean(model, data: dict[str, Any]) -> dict[str, Any]:
    """Keep only mapped columns, never the id, and store enum members as their values."""
    allowed = _columns(model) - {"id"}
    cleaned = {}
    for key, value in data.items():
        if key not in allowed:
            continue
        if isinstance(value, enum.Enum):
            value = value.value
        cleaned[key] = value
    return cleaned


def _matches_text(job: JobListing, filters: JobListingFilters) -> bool:
    if filters.keyword:
        keyword = filters.keyword.lower()
        in_skills = any(keyword in str(skill).lower() for skill in (job.skills or []))
        if not (
            keyword in (job.title or "").lower()
            or keyword in (job.description or "").lower()
            or in_skills
        ):
            return False
    if filters.location and filters.location.lower() not in (job.location or "").lower():
        return False
    return True


def _matches(job: JobListing, filters: JobListingFilters) -> bool:
    if filters.job_type and job.job_type != filters.job_type:
        return False
    if filters.employer_id is not None and job.employer_id != filters.employer_id:
        return False
    return _matches_text(job, filters)


class Storage(ABC):
    # Users
    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]: ...

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[User]: ...

    @abstractmethod
    def get_user_by_email(self, email: str) -> Optional[User]: ...

    @abstractmethod
    def create_user(self, data: dict[str, Any]) -> User: ...

    @abstractmethod
    def list_users(self, user_type: Optional[str] = None) -> list[User]: ...

    # Seeker profiles, looked up by owning user
    @abstractmethod
    def get_seeker_profile(self, user_id: int) -> Optional[SeekerProfile]: ...

    @abstractmethod
    def create_seeker_profile(self, data: dict[str, Any]) -> SeekerProfile: ...

    @abstractmethod
    def update_seeker_profile(self, profile_id: int, data: dict[str, Any]) -> Optional[SeekerProfile]: ...

    # Employer profiles, looked up by owning user
    @abstractmethod
    def get_employer_profile(self, user_id: int) -> Optional[EmployerProfile]: ...

    @abstractmethod
    def create_employer_profile(self, data: dict[str, Any]) -> EmployerProfile: ...

    @abstractmethod
    def update_employer_profile(self, profile_id: int, data: dict[str, Any]) -> Optional[EmployerProfile]: ...

    # Job listings
    @abstractmethod
    def get_job_listing(self, job_id: int) -> Optional[JobListing]: ...

    @abstractmethod
    def get_job_listings(
        self,
        filters: Optional[JobListingFilters] = None,
        include_inactive: bool = False,
    ) -> list[JobListing]: ...

    @abstractmethod
    def create_job_listing(self, data: dict[str, Any]) -> JobListing: ...

    @abstractmethod
    def update_job_listing(self, job_id: int, data: dict[str, Any]) -> Optional[JobListing]: ...

    @abstractmethod
    def delete_job_listing(self, job_id: int) -> bool: ...

    # Applications
    @abstractmethod
    def get_job_application(self, application_id: int) -> Optional[JobApplication]: ...

    @abstractmethod
    def get_job_applications_by_seeker(self, seeker_id: int) -> list[JobApplication]: ...

    @abstractmethod
    def get_job_applications_by_job(self, job_id: int) -> list[JobApplication]: ...

    @abstractmethod
    def create_job_application(self, data: dict[str, Any]) -> JobApplication: ...

    @abstractmethod
    def update_job_application_status(self, application_id: int, status: str) -> Optional[JobApplication]: ...

    @abstractmethod
    def count_records(self) -> dict[str, Any]: ...


class MemStorage(Storage):
    """In-process store. Ids come from one counter per type and are never reused."""

    def __init__(self):
        self._users: dict[int, User] = {}
        self._seeker_profiles: dict[int, SeekerProfile] = {}
        self._employer_profiles: dict[int, EmployerProfile] = {}
        self._job_listings: dict[int, JobListing] = {}
        self._job_applications: dict[int, JobApplication] = {}

        self._user_ids = itertools.count(1)
        self._seeker_profile_ids = itertools.count(1)
        self._employer_profile_ids = itertools.count(1)
        self._job_listing_ids = itertools.count(1)
        self._job_application_ids = itertools.count(1)

        # Held across every check-then-insert so duplicate guards stay atomic
        # when handlers run on the thread pool.
        self._lock = threading.RLock()

    def _rows(self, table: dict) -> list:
        with self._lock:
            return list(table.values())

    @staticmethod
    def _merged(record, data: dict[str, Any]):
        """Shallow merge: supplied fields replace whole values, the rest are kept."""
        model = type(record)
        values = {name: getattr(record, name) for name in _columns(model)}
        values.update(_clean(model, data))
        return model(**values)

    def _update(self, table: dict, record_id: int, data: dict[str, Any]):
        with self._lock:
            existing = table.get(record_id)
            if existing is None:
                return None
            updated = self._merged(existing, data)
            table[record_id] = updated
            return updated

    # Users
    def get_user(self, user_id: int) -> Optional[User]:
        return self._users.get(user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self._rows(self._users) if u.username == username), None)

    def get_user_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self._rows(self._users) if u.email == email), None)

    def create_user(self, data: dict[str, Any]) -> User:
        values = _clean(User, data)
        with self._lock:
            if self.get_user_by_username(values.get("username")) is not None:
                raise DuplicateRecordError(f"username {values.get('username')!r} is taken")
            values.setdefault("created_at", utcnow())
            user = User(id=next(self._user_ids), **values)
            self._users[user.id] = user
        return user

    def list_users(self, user_type: Optional[str] = None) -> list[User]:
        users = self._rows(self._users)
        if user_type:
            users = [u for u in users if u.user_type == user_type]
        return users

    # Seeker profiles
    def get_seeker_profile(self, user_id: int) -> Optional[SeekerProfile]:
        return next((p for p in self._rows(self._seeker_profiles) if p.user_id == user_id), None)

    def create_seeker_profile(self, data: dict[str, Any]) -> SeekerProfile:
        values = _clean(SeekerProfile, data)
        with self._lock:
            if self.get_seeker_profile(values.get("user_id")) is not None:
                raise DuplicateRecordError(f"user {values.get('user_id')} already has a seeker profile")
            profile = SeekerProfile(id=next(self._seeker_profile_ids), **values)
            self._seeker_profiles[profile.id] = profile
        return profile

    def update_seeker_profile(self, profile_id: int, data: dict[str, Any]) -> Optional[SeekerProfile]:
        return self._update(self._seeker_profiles, profile_id, data)

    # Employer profiles
    def get_employer_profile(self, user_id: int) -> Optional[EmployerProfile]:
        return next((p for p in self._rows(self._employer_profiles) if p.user_id == user_id), None)

    def create_employer_profile(self, data: dict[str, Any]) -> EmployerProfile:
        values = _clean(EmployerProfile, data)
        with self._lock:
            if self.get_employer_profile(values.get("user_id")) is not None:
                raise DuplicateRecordError(f"user {values.get('user_id')} already has an employer profile")
            profile = EmployerProfile(id=next(self._employer_profile_ids), **values)
            self._employer_profiles[profile.id] = profile
        return profile

    def update_employer_profile(self, profile_id: int, data: dict[str, Any]) -> Optional[EmployerProfile]:
        return self._update(self._employer_profiles, profile_id, data)

    # Job listings
    def get_job_listing(self, job_id: int) -> Optional[JobListing]:
        return self._job_listings.get(job_id)

    def get_job_listings(
        self,
        filters: Optional[JobListingFilters] = None,
        include_inactive: bool = False,
    ) -> list[JobListing]:
        filters = filters or JobListingFilters()
        listings = [
            job for job in self._rows(self._job_listings)
            if (include_inactive or job.is_active) and _matches(job, filters)
        ]
        # sorted() is stable with reverse=True, so equal timestamps keep id order.
        return sorted(listings, key=lambda job: job.posted_at, reverse=True)

    def create_job_listing(self, data: dict[str, Any]) -> JobListing:
        values = _clean(JobListing, data)
        values["posted_at"] = utcnow()
        values["is_active"] = True
        with self._lock:
            job = JobListing(id=next(self._job_listing_ids), **values)
            self._job_listings[job.id] = job
        return job

    def update_job_listing(self, job_id: int, data: dict[str, Any]) -> Optional[JobListing]:
        return self._update(self._job_listings, job_id, data)

    def delete_job_listing(self, job_id: int) -> bool:
        return self._update(self._job_listings, job_id, {"is_active": False}) is not None

    # Applications
    def get_job_application(self, application_id: int) -> Optional[JobApplication]:
        return self._job_applications.get(application_id)

    def get_job_applications_by_seeker(self, seeker_id: int) -> list[JobApplication]:
        apps = [a for a in self._rows(self._job_applications) if a.seeker_id == seeker_id]
        return sorted(apps, key=lambda a: a.applied_at, reverse=True)

    def get_job_applications_by_job(self, job_id: int) -> list[JobApplication]:
        apps = [a for a in self._rows(self._job_applications) if a.job_id == job_id]
        return sorted(apps, key=lambda a: a.applied_at, reverse=True)

    def create_job_application(self, data: dict[str, Any]) -> JobApplication:
        values = _clean(JobApplication, data)
        values["status"] = ApplicationStatus.APPLIED.value
        values["applied_at"] = utcnow()
        with self._lock:
            duplicate = any(
                a.job_id == values.get("job_id") and a.seeker_id == values.get("seeker_id")
                for a in self._rows(self._job_applications)
            )
            if duplicate:
                raise DuplicateRecordError(
                    f"seeker {values.get('seeker_id')} already applied to job {values.get('job_id')}"
                )
            application = JobApplication(id=next(self._job_application_ids), **values)
            self._job_applications[application.id] = application
        return application

    def update_job_application_status(self, application_id: int, status: str) -> Optional[JobApplication]:
        return self._update(self._job_applications, application_id, {"status": status})

    def count_records(self) -> dict[str, Any]:
        users = self._rows(self._users)
        jobs = self._rows(self._job_listings)
        by_type: dict[str, int] = {}
        for user in users:
            by_type[user.user_type] = by_type.get(user.user_type, 0) + 1
        return {
            "total_users": len(users),
            "total_job_listings": len(jobs),
            "active_job_listings": sum(1 for job in jobs if job.is_active),
            "total_applications": len(self._rows(self._job_applications)),
            "users_by_type": by_type,
        }


class SqlStorage(Storage):
    """Same contract over SQLAlchemy; uniqueness comes from the table constraints."""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    @contextmanager
    def _session(self) -> Iterator[Session]:
        db = self._session_factory()
        try:
            yield db
        finally:
            db.close()

    def _insert(self, record):
        with self._session() as db:
            db.add(record)
            try:
                db.commit()
            except IntegrityError as exc:
                db.rollback()
                raise DuplicateRecordError(str(exc.orig)) from exc
            db.refresh(record)
            return record

    def _update(self, model, record_id: int, data: dict[str, Any]):
        with self._session() as db:
            record = db.get(model, record_id)
            if record is None:
                return None
            for field, value in _clean(model, data).items():
                setattr(record, field, value)
            db.commit()
            db.refresh(record)
            return record

    # Users
    def get_user(self, user_id: int) -> Optional[User]:
        with self._session() as db:
            return db.get(User, user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        with self._session() as db:
            return db.query(User).filter(User.username == username).first()

    def get_user_by_email(self, email: str) -> Optional[User]:
        with self._session() as db:
            return db.query(User).filter(User.email == email).order_by(User.id).first()

    def create_user(self, data: dict[str, Any]) -> User:
        values = _clean(User, data)
        values.setdefault("created_at", utcnow())
        return self._insert(User(**values))

    def list_users(self, user_type: Optional[str] = None) -> list[User]:
        with self._session() as db:
            query = db.query(User)
            if user_type:
                query = query.filter(User.user_type == user_type)
            return query.order_by(User.id).all()

    # Seeker profiles
    def get_seeker_profile(self, user_id: int) -> Optional[SeekerProfile]:
        with self._session() as db:
            return db.query(SeekerProfile).filter(SeekerProfile.user_id == user_id).first()

    def create_seeker_profile(self, data: dict[str, Any]) -> SeekerProfile:
        return self._insert(SeekerProfile(**_clean(SeekerProfile, data)))

    def update_seeker_profile(self, profile_id: int, data: dict[str, Any]) -> Optional[SeekerProfile]:
        return self._update(SeekerProfile, profile_id, data)

    # Employer profiles
    def get_employer_profile(self, user_id: int) -> Optional[EmployerProfile]:
        with self._session() as db:
            return db.query(EmployerProfile).filter(EmployerProfile.user_id == user_id).first()

    def create_employer_profile(self, data: dict[str, Any]) -> EmployerProfile:
        return self._insert(EmployerProfile(**_clean(EmployerProfile, data)))

    def update_employer_profile(self, profile_id: int, data: dict[str, Any]) -> Optional[EmployerProfile]:
        return self._update(EmployerProfile, profile_id, data)

    # Job listings
    def get_job_listing(self, job_id: int) -> Optional[JobListing]:
        with self._session() as db:
            return db.get(JobListing, job_id)

    def get_job_listings(
        self,
        filters: Optional[JobListingFilters] = None,
        include_inactive: bool = False,
    ) -> list[JobListing]:
        filters = filters or JobListingFilters()
        with self._session() as db:
            query = db.query(JobListing)
            if not include_inactive:
                query = query.filter(JobListing.is_active.is_(True))
            if filters.job_type:
                query = query.filter(JobListing.job_type == filters.job_type)
            if filters.employer_id is not None:
                query = query.filter(JobListing.employer_id == filters.employer_id)
            rows = query.order_by(JobListing.posted_at.desc(), JobListing.id.asc()).all()
        # Keyword also matches skills stored as JSON, so text filters run here
        # to keep one definition of matching for both backends.
        return [job for job in rows if _matches_text(job, filters)]

    def create_job_listing(self, data: dict[str, Any]) -> JobListing:
        values = _clean(JobListing, data)
        values["posted_at"] = utcnow()
        values["is_active"] = True
        return self._insert(JobListing(**values))

    def update_job_listing(self, job_id: int, data: dict[str, Any]) -> Optional[JobListing]:
        return self._update(JobListing, job_id, data)

    def delete_job_listing(self, job_id: int) -> bool:
        return self._update(JobListing, job_id, {"is_active": False}) is not None

    # Applications
    def get_job_application(self, application_id: int) -> Optional[JobApplication]:
        with self._session() as db:
            return db.get(JobApplication, application_id)

    def get_job_applications_by_seeker(self, seeker_id: int) -> list[JobApplication]:
        with self._session() as db:
            return (
                db.query(JobApplication)
                .filter(JobApplication.seeker_id == seeker_id)
                .order_by(JobApplication.applied_at.desc(), JobApplication.id.asc())
                .all()
            )

    def get_job_applications_by_job(self, job_id: int) -> list[JobApplication]:
        with self._session() as db:
            return (
                db.query(JobApplication)
                .filter(JobApplication.job_id == job_id)
                .order_by(JobApplication.applied_at.desc(), JobApplication.id.asc())
                .all()
            )

    def create_job_application(self, data: dict[str, Any]) -> JobApplication:
        values = _clean(JobApplication, data)
        values["status"] = ApplicationStatus.APPLIED.value
        values["applied_at"] = utcnow()
        return self._insert(JobApplication(**values))

    def update_job_application_status(self, application_id: int, status: str) -> Optional[JobApplication]:
        return self._update(JobApplication, application_id, {"status": status})

    def count_records(self) -> dict[str, Any]:
        with self._session() as db:
            by_type = dict(
                db.query(User.user_type, func.count(User.id)).group_by(User.user_type).all()
            )
            return {
                "total_users": db.query(func.count(User.id)).scalar() or 0,
                "total_job_listings": db.query(func.count(JobListing.id)).scalar() or 0,
                "active_job_listings": (
                    db.query(func.count(JobListing.id)).filter(JobListing.is_active.is_(True)).scalar() or 0
                ),
                "total_applications": db.query(func.count(JobApplication.id)).scalar() or 0,
                "users_by_type": by_type,
            }


def build_storage(backend: str, database_url: str, echo: bool = False) -> Storage:
    """Create the configured backend. The SQL backend creates its tables on first use."""
    if backend == "memory":
        logger.info("Using in-memory storage")
        return MemStorage()
    if backend == "sql":
        from jobnexus.database import init_db, make_engine, make_session_factory

        engine = make_engine(database_url, echo=echo)
        if engine.url.drivername.startswith("sqlite") and engine.url.database not in (None, "", ":memory:"):
            Path(engine.url.database).parent.mkdir(parents=True, exist_ok=True)
        init_db(engine)
        logger.info("Using SQL storage at %s", engine.url.render_as_string(hide_password=True))
        return SqlStorage(make_session_factory(engine))
    raise ValueError(f"Unknown storage backend: {backend}")


def get_storage(request: Request) -> Storage:
    """FastAPI dependency returning the storage bound to the running app."""
    return request.app.state.storage
