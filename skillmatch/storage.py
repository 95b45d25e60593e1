"""
Profile and job persistence.

Records go in and come out as plain dicts so the scoring and suggestion
code never sees ORM objects. The session is always passed in by the
caller; nothing here holds a connection between calls.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError

from .database import Job, Profile
from .errors import DuplicateProfileError
from .logger import get_logger
from .normalize import dedupe_skills
from .schema import validate_job, validate_or_raise, validate_profile


def profile_to_dict(profile: Profile) -> Dict[str, Any]:
    return {
        "id": profile.id,
        "name": profile.name,
        "email": profile.email,
        "bio": profile.bio or "",
        "skills": list(profile.skills or []),
        "created_at": profile.created_at,
    }


def job_to_dict(job: Job) -> Dict[str, Any]:
    return {
        "id": job.id,
        "title": job.title,
        "description": job.description,
        "location": job.location,
        "job_type": job.job_type,
        "experience_level": job.experience_level,
        "budget": job.budget,
        "skills": list(job.skills or []),
        "status": job.status,
        "posted_by": job.posted_by,
        "created_at": job.created_at,
    }


def _created_at(value: Any) -> datetime:
    # JSON input carries ISO timestamps; validated by schema beforehand
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    if value is None:
        return datetime.now()
    if value.tzinfo is not None:
        value = value.astimezone().replace(tzinfo=None)
    return value


def add_profile(session, data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Validate and persist a profile.

    Raises:
        ValidationError: If the record is invalid
        DuplicateProfileError: If a profile with the same email exists
    """
    validate_or_raise(validate_profile(data))

    email = data["email"].strip().lower()
    if session.query(Profile).filter_by(email=email).first() is not None:
        raise DuplicateProfileError(f"Profile already exists: {email}")

    profile = Profile(
        name=data["name"].strip(),
        email=email,
        bio=(data.get("bio") or "").strip(),
        skills=dedupe_skills(data.get("skills")),
        created_at=_created_at(data.get("created_at")),
    )
    session.add(profile)
    try:
        session.commit()
    except IntegrityError as e:
        session.rollback()
        raise DuplicateProfileError(f"Profile already exists: {email}") from e

    get_logger().info("Profile added", profile_id=profile.id, skills=len(profile.skills))
    return profile_to_dict(profile)


def add_job(session, data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Validate and persist a job posting.

    Raises:
        ValidationError: If the record is invalid
    """
    validate_or_raise(validate_job(data))

    budget = data.get("budget")
    if budget is not None:
        budget = {
            "min": budget["min"],
            "max": budget["max"],
            "currency": budget.get("currency", "USD"),
        }

    job = Job(
        title=data["title"].strip(),
        description=data["description"].strip(),
        location=data["location"].strip(),
        job_type=data["job_type"],
        experience_level=data["experience_level"],
        budget=budget,
        skills=dedupe_skills(data.get("skills")),
        status=data.get("status", "Active"),
        posted_by=data.get("posted_by"),
        created_at=_created_at(data.get("created_at")),
    )
    session.add(job)
    session.commit()

    get_logger().info("Job added", job_id=job.id, skills=len(job.skills))
    return job_to_dict(job)


def get_profile(session, profile_id: Optional[int] = None, email: Optional[str] = None) -> Optional[Dict[str, Any]]:
    """Look up a profile by id or email. Returns None when nothing matches."""
    query = session.query(Profile)
    if profile_id is not None:
        profile = query.filter_by(id=profile_id).first()
    elif email:
        profile = query.filter_by(email=email.strip().lower()).first()
    else:
        return None
    return profile_to_dict(profile) if profile is not None else None


def list_profiles(session) -> List[Dict[str, Any]]:
    return [profile_to_dict(p) for p in session.query(Profile).order_by(Profile.id).all()]


def list_jobs(session, status: Optional[str] = None) -> List[Dict[str, Any]]:
    query = session.query(Job)
    if status is not None:
        query = query.filter_by(status=status)
    return [job_to_dict(j) for j in query.order_by(Job.id).all()]
