"""
Skill and text matching.

Three pure scoring functions used to rank jobs for a candidate and
people for a profile:

- match_skills: how much of a job's required skill list a candidate covers
- user_similarity: Jaccard overlap between two people's skill sets
- text_similarity: term-frequency cosine similarity between two texts

Invariant:
Given identical inputs these functions always return the same result.
They hold no state, do no I/O and never raise on string input.
"""

import math
from collections import Counter
from dataclasses import asdict, dataclass, field
from typing import Dict, List, Optional, Sequence

from .normalize import tokenize

EXACT_WEIGHT = 1.0
PARTIAL_WEIGHT = 0.6
MAX_UNIQUE_SKILLS = 5
MIN_TOKEN_LENGTH = 3

NO_SKILLS_EXPLANATION = "No skills to compare"

# (lower bound, explanation), checked top-down
SCORE_BANDS = [
    (80, "Excellent match! You have most required skills."),
    (60, "Good match! You meet many requirements."),
    (40, "Partial match. Consider applying if interested."),
    (20, "Limited match. May require additional skills."),
]
LOW_MATCH_EXPLANATION = "Low match. Significant skill gap exists."


@dataclass(frozen=True)
class MatchResult:
    score: int
    common_skills: List[str] = field(default_factory=list)
    missing_skills: List[str] = field(default_factory=list)
    explanation: str = NO_SKILLS_EXPLANATION

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass(frozen=True)
class SimilarityResult:
    score: int
    common_skills: List[str] = field(default_factory=list)
    unique_skills: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return asdict(self)


def _round(value: float) -> int:
    # Half-up, so 50.5 -> 51 rather than banker's 50
    return int(math.floor(value + 0.5))


def _clamp(score: int) -> int:
    return max(0, min(100, score))


def _key(skill: str) -> str:
    return skill.strip().lower()


def explain_score(score: int) -> str:
    """Map a 0-100 match score to its human-readable band."""
    for lower, explanation in SCORE_BANDS:
        if score >= lower:
            return explanation
    return LOW_MATCH_EXPLANATION


def match_skills(
    candidate_skills: Optional[Sequence[str]],
    required_skills: Optional[Sequence[str]],
) -> MatchResult:
    """
    Score how well a candidate's skills cover a job's required skills.

    Each required skill is an exact match (same normalized text as some
    candidate skill), a partial match (substring of, or superstring of,
    some candidate skill) or missing. Exact matches weigh 1.0, partial
    matches 0.6, and the total is divided by the number of required
    skills, so the score reads as "how much of what the job wants, the
    candidate has".

    Args:
        candidate_skills: The candidate's skills, any casing
        required_skills: The job's skills; output keeps their original casing

    Returns:
        MatchResult whose common_skills and missing_skills partition
        required_skills in its original order
    """
    required = list(required_skills or [])
    if not candidate_skills or not required:
        return MatchResult(
            score=0,
            common_skills=[],
            missing_skills=required,
            explanation=NO_SKILLS_EXPLANATION,
        )

    candidates = [_key(s) for s in candidate_skills]
    candidate_set = set(candidates)

    exact_count = 0
    partial_count = 0
    common: List[str] = []
    missing: List[str] = []

    for skill in required:
        norm = _key(skill)
        if norm in candidate_set:
            exact_count += 1
            common.append(skill)
        elif any(norm in c or c in norm for c in candidates):
            partial_count += 1
            common.append(skill)
        else:
            missing.append(skill)

    weighted = exact_count * EXACT_WEIGHT + partial_count * PARTIAL_WEIGHT
    score = _clamp(_round(weighted / len(required) * 100))

    return MatchResult(
        score=score,
        common_skills=common,
        missing_skills=missing,
        explanation=explain_score(score),
    )


def user_similarity(
    skills_a: Optional[Sequence[str]],
    skills_b: Optional[Sequence[str]],
) -> SimilarityResult:
    """
    Jaccard similarity between two people's skill sets.

    common_skills is reported from A's side (A's spelling), unique_skills
    lists up to five of B's skills that A lacks. The score compares the
    distinct case-insensitive sets, so it does not depend on argument order.
    """
    if not skills_a or not skills_b:
        return SimilarityResult(score=0, common_skills=[], unique_skills=[])

    # Case folding only; unlike match_skills, whitespace is significant here
    keys_a = {s.lower() for s in skills_a}
    keys_b = {s.lower() for s in skills_b}

    common = [s for s in skills_a if s.lower() in keys_b]
    unique = [s for s in skills_b if s.lower() not in keys_a]

    union = keys_a | keys_b
    intersection = keys_a & keys_b
    score = _clamp(_round(len(intersection) / len(union) * 100))

    return SimilarityResult(
        score=score,
        common_skills=common,
        unique_skills=unique[:MAX_UNIQUE_SKILLS],
    )


def _term_frequencies(text: str) -> Counter:
    return Counter(tokenize(text, min_length=MIN_TOKEN_LENGTH))


def text_similarity(text_a: Optional[str], text_b: Optional[str]) -> int:
    """
    Cosine similarity of word-frequency vectors, as an integer 0-100.

    Words of two characters or fewer are ignored. Returns 0 when either
    text is empty or has no qualifying words.
    """
    if not text_a or not text_b:
        return 0

    freq_a = _term_frequencies(text_a)
    freq_b = _term_frequencies(text_b)

    dot = 0
    norm_a = 0
    norm_b = 0
    for term in set(freq_a) | set(freq_b):
        fa = freq_a.get(term, 0)
        fb = freq_b.get(term, 0)
        dot += fa * fb
        norm_a += fa * fa
        norm_b += fb * fb

    if norm_a == 0 or norm_b == 0:
        return 0

    cosine = dot / (math.sqrt(norm_a) * math.sqrt(norm_b))
    return _clamp(_round(cosine * 100))
