"""
Tests for normalize.py - skill and text normalization helpers.
"""

from skillmatch.normalize import (
    dedupe_skills,
    normalize_skill,
    parse_skill_list,
    tokenize,
)


class TestNormalizeSkill:
    """Test skill normalization."""

    def test_trims_and_lowercases(self):
        assert normalize_skill("  Node.JS ") == "node.js"

    def test_collapses_inner_whitespace(self):
        assert normalize_skill("Machine   Learning") == "machine learning"


class TestTokenize:
    """Test word tokenization."""

    def test_drops_short_tokens(self):
        """Tokens shorter than min_length are dropped."""
        assert tokenize("An ML engineer in Go") == ["engineer"]

    def test_lowercases_and_splits_on_punctuation(self):
        assert tokenize("Python, Django/REST!") == ["python", "django", "rest"]

    def test_non_ascii_letters_split_words(self):
        """Only ASCII letters, digits and underscore form words."""
        assert tokenize("Café résumé") == ["caf", "sum"]

    def test_custom_min_length(self):
        assert tokenize("go to ai lab", min_length=2) == ["go", "to", "ai", "lab"]

    def test_empty(self):
        assert tokenize("") == []
        assert tokenize(None) == []


class TestDedupeSkills:
    """Test skill de-duplication."""

    def test_keeps_first_spelling(self):
        """Case-insensitive duplicates collapse to the first spelling."""
        assert dedupe_skills(["Python", "python", " PYTHON ", "SQL"]) == ["Python", "SQL"]

    def test_drops_blanks(self):
        assert dedupe_skills(["", "  ", "Go"]) == ["Go"]

    def test_none(self):
        assert dedupe_skills(None) == []


class TestParseSkillList:
    """Test parsing skills from CLI/JSON input."""

    def test_comma_separated(self):
        assert parse_skill_list("React, Node.js,,react ") == ["React", "Node.js"]

    def test_list_input(self):
        assert parse_skill_list(["Go", " go", "Rust"]) == ["Go", "Rust"]

    def test_none(self):
        assert parse_skill_list(None) == []
