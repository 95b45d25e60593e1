"""Exception types raised by skillmatch outside the pure scoring functions."""

from typing import List, Optional


class SkillmatchError(Exception):
    """Base class for all skillmatch errors."""
    pass


class ValidationError(SkillmatchError):
    """Raised when a profile or job record fails validation."""

    def __init__(self, errors: List[str], message: Optional[str] = None):
        self.errors = list(errors)
        super().__init__(message or "; ".join(self.errors))


class DuplicateProfileError(SkillmatchError):
    """Raised when a profile with the same email already exists."""
    pass


class EntityServiceError(SkillmatchError):
    """Raised when the entity extraction service cannot be used."""
    pass
