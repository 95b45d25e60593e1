"""
Database schema and connection management.

Uses SQLite with SQLAlchemy for profile and job storage.
"""

from datetime import datetime
from pathlib import Path
from sqlalchemy import create_engine, Column, DateTime, ForeignKey, Integer, JSON, String, Text
from sqlalchemy.orm import declarative_base, sessionmaker

Base = declarative_base()


class Profile(Base):
    """User skills profile."""

    __tablename__ = "profiles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False, unique=True)  # stored lower-cased
    bio = Column(Text, nullable=False, default="")
    skills = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, nullable=False, default=datetime.now)


class Job(Base):
    """Job posting model."""

    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    location = Column(String, nullable=False)
    job_type = Column(String, nullable=False)  # Full-time, Part-time, Contract, ...
    experience_level = Column(String, nullable=False)  # Entry, Mid, Senior, Expert
    budget = Column(JSON, nullable=True)  # {"min", "max", "currency"}
    skills = Column(JSON, nullable=False, default=list)
    status = Column(String, nullable=False, default="Active")
    posted_by = Column(Integer, ForeignKey("profiles.id"), nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.now)


def init_database(db_path: Path) -> None:
    """
    Initialize database and create tables.

    Args:
        db_path: Path to SQLite database file
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(engine)


def get_session(db_path: Path):
    """
    Get database session.

    Args:
        db_path: Path to SQLite database file

    Returns:
        SQLAlchemy session
    """
    engine = create_engine(f"sqlite:///{db_path}")
    Session = sessionmaker(bind=engine)
    return Session()
