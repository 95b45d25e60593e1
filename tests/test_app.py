"""
Tests for the skillmatch CLI.
"""

import json
import pytest

from skillmatch import __version__
from skillmatch.app import main


@pytest.fixture
def cli_env(tmp_path, monkeypatch):
    """Isolate the CLI: temp cwd, temp database and log dir, no API key."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("SKILLMATCH_DB_PATH", str(tmp_path / "data" / "cli.db"))
    monkeypatch.setenv("SKILLMATCH_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.delenv("HF_API_KEY", raising=False)
    return tmp_path


def write_json(path, data):
    path.write_text(json.dumps(data))
    return str(path)


class TestScoringCommands:
    """Test match, similarity and text commands."""

    def test_match_json(self, cli_env, capsys):
        main(["match", "--candidate", "React,Node.js,MongoDB", "--required", "React,Python,SQL", "--json"])

        result = json.loads(capsys.readouterr().out)
        assert result == {
            "score": 33,
            "common_skills": ["React"],
            "missing_skills": ["Python", "SQL"],
            "explanation": "Limited match. May require additional skills.",
        }

    def test_match_text(self, cli_env, capsys):
        main(["match", "--candidate", "JavaScript", "--required", "JavaScript, TypeScript"])

        out = capsys.readouterr().out
        assert "Score: 50" in out
        assert "Missing: TypeScript" in out
        assert "Partial match. Consider applying if interested." in out

    def test_similarity_json(self, cli_env, capsys):
        main(["similarity", "--a", "Python,SQL", "--b", "Python,SQL,Python", "--json"])

        result = json.loads(capsys.readouterr().out)
        assert result["score"] == 100
        assert result["common_skills"] == ["Python", "SQL"]

    def test_text(self, cli_env, capsys):
        main(["text", "--a", "machine learning engineer", "--b", "machine learning expert"])
        assert capsys.readouterr().out.strip() == "67"

    def test_version(self, cli_env, capsys):
        main(["--version"])
        assert capsys.readouterr().out.strip() == __version__


class TestExtractCommand:
    """Test skill extraction command."""

    def test_extract_text(self, cli_env, capsys):
        main(["extract", "--text", "Django and Docker developer"])

        out = capsys.readouterr().out
        assert "Extracted 2 skills:" in out
        assert " - Django" in out

    def test_extract_resume_file(self, cli_env, capsys):
        resume = cli_env / "resume.txt"
        resume.write_text("Python, PostgreSQL and Kubernetes")

        main(["extract", "--input", str(resume), "--kind", "resume"])

        out = capsys.readouterr().out
        assert "Extracted 3 skills:" in out

    def test_extract_short_description(self, cli_env, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["extract", "--text", "Go"])

        assert exc_info.value.code == 2
        assert "at least 10 characters" in capsys.readouterr().err


class TestRecordCommands:
    """Test validate, add, list and suggest commands."""

    def test_validate_invalid_profile(self, cli_env, capsys):
        path = write_json(cli_env / "p.json", {"name": "Ada", "email": "nope"})

        with pytest.raises(SystemExit) as exc_info:
            main(["validate", "--input", path, "--kind", "profile"])

        assert exc_info.value.code == 2
        assert "email" in capsys.readouterr().out

    def test_validate_valid_job(self, cli_env, capsys, valid_job_data):
        path = write_json(cli_env / "j.json", valid_job_data)
        main(["validate", "--input", path, "--kind", "job"])
        assert capsys.readouterr().out.strip() == "Valid"

    def test_validate_missing_file(self, cli_env):
        with pytest.raises(SystemExit, match="Input file not found"):
            main(["validate", "--input", "missing.json", "--kind", "job"])

    def test_add_and_list(self, cli_env, capsys, valid_profile_data, valid_job_data):
        main(["add-profile", "--input", write_json(cli_env / "p.json", valid_profile_data)])
        main(["add-job", "--input", write_json(cli_env / "j.json", valid_job_data),
              "--posted-by", "ada@example.com"])
        capsys.readouterr()

        main(["list", "--kind", "jobs"])
        out = capsys.readouterr().out
        assert "Found 1 jobs" in out
        assert "Title: Data Engineer" in out

        main(["list", "--kind", "profiles"])
        assert "Email: ada@example.com" in capsys.readouterr().out

    def test_add_duplicate_profile(self, cli_env, valid_profile_data):
        path = write_json(cli_env / "p.json", valid_profile_data)
        main(["add-profile", "--input", path])

        with pytest.raises(SystemExit, match="Profile already exists"):
            main(["add-profile", "--input", path])

    def test_suggest_json(self, cli_env, capsys, valid_profile_data, valid_job_data):
        main(["add-profile", "--input", write_json(cli_env / "p.json", valid_profile_data)])
        main(["add-profile", "--input", write_json(cli_env / "g.json", {
            "name": "Grace", "email": "grace@example.com", "skills": ["Python", "SQL", "Kubernetes"],
        })])
        main(["add-job", "--input", write_json(cli_env / "j.json", valid_job_data)])
        capsys.readouterr()

        main(["suggest", "--email", "ada@example.com", "--json"])
        result = json.loads(capsys.readouterr().out)

        assert result["profile"] == {"name": "Ada Lovelace", "skill_count": 3, "has_bio": True}
        jobs = result["suggestions"]["jobs"]
        assert jobs[0]["title"] == "Data Engineer"
        assert jobs[0]["match"]["score"] == 67
        assert result["suggestions"]["connections"][0]["email"] == "grace@example.com"
        assert result["suggestions"]["learning"][0]["skill"] == "Airflow"

    def test_suggest_single_type_json(self, cli_env, capsys, valid_profile_data, valid_job_data):
        """--type limits the JSON output to that one section."""
        main(["add-profile", "--input", write_json(cli_env / "p.json", valid_profile_data)])
        main(["add-job", "--input", write_json(cli_env / "j.json", valid_job_data)])
        capsys.readouterr()

        main(["suggest", "--email", "ada@example.com", "--type", "skills", "--json"])
        result = json.loads(capsys.readouterr().out)

        assert list(result["suggestions"]) == ["skills"]
        assert result["suggestions"]["skills"][0]["skill"] == "Airflow"

    def test_add_job_bad_timestamp(self, cli_env, capsys, valid_job_data):
        """A malformed created_at is a validation failure (exit 2)."""
        valid_job_data["created_at"] = "yesterday"
        path = write_json(cli_env / "j.json", valid_job_data)

        with pytest.raises(SystemExit) as exc_info:
            main(["add-job", "--input", path])

        assert exc_info.value.code == 2
        assert "created_at" in capsys.readouterr().err

    def test_suggest_unknown_profile(self, cli_env):
        with pytest.raises(SystemExit, match="Profile not found"):
            main(["suggest", "--email", "nobody@example.com"])
