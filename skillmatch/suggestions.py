"""
Personalized suggestions built on the matching scores.

Works on already-fetched plain records:
- profile: {"id", "name", "skills", "bio", ...}
- job: {"id", "title", "description", "skills", "status", "posted_by", "created_at", ...}

Nothing here touches the database; callers fetch and pass the records.
"""

from collections import Counter
from datetime import datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional

from .logger import get_logger
from .matching import match_skills, text_similarity, user_similarity

SUGGESTION_KINDS = ("all", "jobs", "connections", "skills", "learning")

JOB_MIN_SCORE = 30
JOB_LIMIT = 5
CONNECTION_MIN_SCORE = 20
CONNECTION_LIMIT = 8
SKILL_WINDOW_DAYS = 30
SKILL_LIMIT = 10
LEARNING_MIN_SCORE = 60
LEARNING_LIMIT = 5


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'s' if count > 1 else ''}"


def _as_datetime(value: Any) -> Optional[datetime]:
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    if value is not None and value.tzinfo is not None:
        # Compare in naive local time, like the cutoff
        value = value.astimezone().replace(tzinfo=None)
    return value


def suggest_jobs(
    profile: Dict[str, Any],
    jobs: Iterable[Dict[str, Any]],
    min_score: int = JOB_MIN_SCORE,
    limit: int = JOB_LIMIT,
) -> List[Dict[str, Any]]:
    """
    Active jobs, not posted by the profile, scored against its skills.

    Returns:
        Up to ``limit`` entries {"job", "match"} with score > min_score,
        best first; equal scores keep input order
    """
    skills = profile.get("skills") or []
    scored = []
    for job in jobs:
        if job.get("status", "Active") != "Active":
            continue
        if profile.get("id") is not None and job.get("posted_by") == profile.get("id"):
            continue
        scored.append({"job": job, "match": match_skills(skills, job.get("skills"))})

    get_logger().record_match(len(scored))

    matches = [s for s in scored if s["match"].score > min_score]
    matches.sort(key=lambda s: s["match"].score, reverse=True)
    return matches[:limit]


def suggest_connections(
    profile: Dict[str, Any],
    others: Iterable[Dict[str, Any]],
    min_score: int = CONNECTION_MIN_SCORE,
    limit: int = CONNECTION_LIMIT,
) -> List[Dict[str, Any]]:
    """People whose skill sets overlap the profile's, most similar first."""
    skills = profile.get("skills") or []
    scored = []
    for other in others:
        if profile.get("id") is not None and other.get("id") == profile.get("id"):
            continue
        if not other.get("skills"):
            continue
        similarity = user_similarity(skills, other["skills"])
        if similarity.common_skills:
            reason = f"{len(similarity.common_skills)} skills in common"
        else:
            reason = "Similar professional background"
        scored.append({"profile": other, "similarity": similarity, "reason": reason})

    get_logger().record_similarity(len(scored))

    matches = [s for s in scored if s["similarity"].score > min_score]
    matches.sort(key=lambda s: s["similarity"].score, reverse=True)
    return matches[:limit]


def suggest_skills(
    profile: Dict[str, Any],
    jobs: Iterable[Dict[str, Any]],
    days: int = SKILL_WINDOW_DAYS,
    limit: int = SKILL_LIMIT,
    now: Optional[datetime] = None,
) -> List[Dict[str, Any]]:
    """
    Skills in demand across recent Active jobs that the profile lacks.

    Jobs without a created_at are not counted as recent.
    """
    cutoff = _as_datetime(now or datetime.now()) - timedelta(days=days)
    known = {s.strip().lower() for s in profile.get("skills") or []}

    frequency: Counter = Counter()
    for job in jobs:
        if job.get("status", "Active") != "Active":
            continue
        created_at = _as_datetime(job.get("created_at"))
        if created_at is None or created_at < cutoff:
            continue
        for skill in job.get("skills") or []:
            skill = skill.strip()
            if skill and skill.lower() not in known:
                frequency[skill] += 1

    # most_common keeps first-seen order among equal counts
    return [
        {
            "skill": skill,
            "frequency": count,
            "reason": f"Mentioned in {_plural(count, 'recent job')}",
        }
        for skill, count in frequency.most_common(limit)
    ]


def suggest_learning(
    job_suggestions: Iterable[Dict[str, Any]],
    min_score: int = LEARNING_MIN_SCORE,
    limit: int = LEARNING_LIMIT,
) -> List[Dict[str, Any]]:
    """Missing skills of high-match job suggestions, most requested first."""
    counts: Counter = Counter()
    for entry in job_suggestions:
        match = entry["match"]
        if match.score > min_score:
            counts.update(match.missing_skills)

    suggestions = []
    for skill, count in counts.most_common(limit):
        if count > 2:
            priority = "High"
        elif count > 1:
            priority = "Medium"
        else:
            priority = "Low"
        suggestions.append({
            "skill": skill,
            "priority": priority,
            "reason": f"Required by {_plural(count, 'high-match job')}",
            "job_count": count,
        })
    return suggestions


def rank_jobs_by_text(profile: Dict[str, Any], jobs: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Jobs ordered by how closely their description reads like the profile's bio."""
    bio = profile.get("bio") or ""
    ranked = [
        {"job": job, "text_score": text_similarity(bio, job.get("description") or "")}
        for job in jobs
    ]
    get_logger().record_text_comparison(len(ranked))
    ranked.sort(key=lambda r: r["text_score"], reverse=True)
    return ranked


def build_suggestions(
    profile: Dict[str, Any],
    jobs: List[Dict[str, Any]],
    profiles: List[Dict[str, Any]],
    kind: str = "all",
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    Assemble the requested suggestion sections for one profile.

    Args:
        profile: The profile suggestions are for
        jobs: Candidate job records
        profiles: Other profiles (the profile itself is skipped)
        kind: One of all, jobs, connections, skills, learning

    Raises:
        ValueError: If kind is not recognized
    """
    if kind not in SUGGESTION_KINDS:
        raise ValueError(f"Unknown suggestion type: {kind} (expected one of {', '.join(SUGGESTION_KINDS)})")

    suggestions: Dict[str, Any] = {}
    job_suggestions = None

    if kind in ("all", "jobs"):
        job_suggestions = suggest_jobs(profile, jobs)
        suggestions["jobs"] = job_suggestions

    if kind in ("all", "connections"):
        suggestions["connections"] = suggest_connections(profile, profiles)

    if kind in ("all", "skills"):
        suggestions["skills"] = suggest_skills(profile, jobs, now=now)

    if kind in ("all", "learning"):
        if job_suggestions is None:
            job_suggestions = suggest_jobs(profile, jobs)
        suggestions["learning"] = suggest_learning(job_suggestions)

    get_logger().debug("Suggestions built", kind=kind, sections=sorted(suggestions))
    return {
        "suggestions": suggestions,
        "profile": {
            "name": profile.get("name"),
            "skill_count": len(profile.get("skills") or []),
            "has_bio": bool(profile.get("bio")),
        },
    }
