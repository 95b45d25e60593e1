import re
from typing import Iterable, List, Optional, Union

# ASCII word characters only, so "café" tokenizes as "caf"
WORD_RE = re.compile(r"\b\w+\b", re.ASCII)


def normalize_text(s: str) -> str:
    return " ".join(s.strip().lower().split())


def normalize_skill(skill: str) -> str:
    return normalize_text(skill)


def tokenize(text: Optional[str], min_length: int = 3) -> List[str]:
    """Lower-case word tokens of at least ``min_length`` characters."""
    if not text:
        return []
    return [w for w in WORD_RE.findall(text.lower()) if len(w) >= min_length]


def dedupe_skills(skills: Optional[Iterable[str]]) -> List[str]:
    """Drop blanks and case-insensitive duplicates, keeping the first spelling."""
    seen = set()
    result = []
    for skill in skills or []:
        cleaned = skill.strip()
        key = normalize_skill(cleaned)
        if not key or key in seen:
            continue
        seen.add(key)
        result.append(cleaned)
    return result


def parse_skill_list(raw: Union[str, Iterable[str], None]) -> List[str]:
    if raw is None:
        return []
    if isinstance(raw, str):
        return dedupe_skills(raw.split(","))
    return dedupe_skills(raw)
