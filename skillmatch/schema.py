import re
from datetime import datetime
from typing import Any, Dict, List

from .errors import ValidationError

EMAIL_RE = re.compile(r"^\w+([.-]?\w+)*@\w+([.-]?\w+)*(\.\w{2,3})+$")

MAX_BIO_LENGTH = 500
MAX_TITLE_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 2000

JOB_TYPES = ["Full-time", "Part-time", "Contract", "Freelance", "Internship"]
EXPERIENCE_LEVELS = ["Entry", "Mid", "Senior", "Expert"]
CURRENCIES = ["USD", "EUR", "GBP", "INR"]
JOB_STATUSES = ["Active", "Paused", "Closed", "Draft"]


def _is_non_empty_str(v: Any) -> bool:
    return isinstance(v, str) and v.strip() != ""


def _is_number(v: Any) -> bool:
    return isinstance(v, (int, float)) and not isinstance(v, bool)


def _check_required(data: Dict[str, Any], fields: List[str], errors: List[str]) -> None:
    for f in fields:
        if f not in data:
            errors.append(f"Missing required field: {f}")
        elif not _is_non_empty_str(data[f]):
            errors.append(f"Field '{f}' must be a non-empty string")


def _check_skills(data: Dict[str, Any], errors: List[str]) -> None:
    skills = data.get("skills")
    if skills is None:
        return
    if not isinstance(skills, list) or not all(isinstance(s, str) for s in skills):
        errors.append("Field 'skills' must be a list of strings")


def _check_timestamp(data: Dict[str, Any], field: str, errors: List[str]) -> None:
    value = data.get(field)
    if value is None or isinstance(value, datetime):
        return
    if isinstance(value, str):
        try:
            datetime.fromisoformat(value)
            return
        except ValueError:
            pass
    errors.append(f"Field '{field}' must be an ISO 8601 timestamp")


def _check_max_length(data: Dict[str, Any], field: str, limit: int, errors: List[str]) -> None:
    value = data.get(field)
    if isinstance(value, str) and len(value) > limit:
        errors.append(f"Field '{field}' cannot exceed {limit} characters")


def _check_choice(data: Dict[str, Any], field: str, choices: List[str], errors: List[str]) -> None:
    if data.get(field) not in choices:
        errors.append(f"Field '{field}' must be one of: {', '.join(choices)}")


def validate_profile(data: Dict[str, Any]) -> List[str]:
    """
    Returns a list of validation error messages. Empty list means valid.
    """
    errors: List[str] = []

    _check_required(data, ["name", "email"], errors)
    if _is_non_empty_str(data.get("email")) and not EMAIL_RE.match(data["email"].strip()):
        errors.append("Field 'email' must be a valid email address")

    if "bio" in data and data["bio"] is not None:
        if not isinstance(data["bio"], str):
            errors.append("Field 'bio' must be a string if provided")
        else:
            _check_max_length(data, "bio", MAX_BIO_LENGTH, errors)

    _check_skills(data, errors)
    _check_timestamp(data, "created_at", errors)
    return errors


def validate_job(data: Dict[str, Any]) -> List[str]:
    """
    Returns a list of validation error messages. Empty list means valid.
    """
    errors: List[str] = []

    _check_required(data, ["title", "description", "location"], errors)
    _check_max_length(data, "title", MAX_TITLE_LENGTH, errors)
    _check_max_length(data, "description", MAX_DESCRIPTION_LENGTH, errors)

    _check_choice(data, "job_type", JOB_TYPES, errors)
    _check_choice(data, "experience_level", EXPERIENCE_LEVELS, errors)

    budget = data.get("budget")
    if budget is not None:
        if not isinstance(budget, dict):
            errors.append("Field 'budget' must be an object with min and max")
        else:
            low, high = budget.get("min"), budget.get("max")
            if not (_is_number(low) and _is_number(high)) or low < 0 or high < 0:
                errors.append("Budget min and max must be non-negative numbers")
            elif low > high:
                errors.append("Budget min cannot exceed budget max")
            if budget.get("currency", "USD") not in CURRENCIES:
                errors.append(f"Budget currency must be one of: {', '.join(CURRENCIES)}")

    if "status" in data:
        _check_choice(data, "status", JOB_STATUSES, errors)

    _check_skills(data, errors)
    _check_timestamp(data, "created_at", errors)
    return errors


def validate_or_raise(errors: List[str]) -> None:
    if errors:
        raise ValidationError(errors)
