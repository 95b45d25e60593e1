"""
Tests for env.py - .env loading and settings.
"""

from pathlib import Path

from skillmatch.env import Settings, load_env


class TestSettings:
    """Test settings from the environment."""

    def test_defaults(self, monkeypatch):
        for name in ["SKILLMATCH_DB_PATH", "SKILLMATCH_LOG_DIR", "SKILLMATCH_LOG_LEVEL", "HF_API_KEY"]:
            monkeypatch.delenv(name, raising=False)

        settings = Settings.from_env()

        assert settings.db_path == Path("data/skillmatch.db")
        assert settings.log_dir == Path("logs")
        assert settings.log_level == "INFO"
        assert settings.hf_api_key is None

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("SKILLMATCH_DB_PATH", "/tmp/x.db")
        monkeypatch.setenv("SKILLMATCH_LOG_LEVEL", "debug")
        monkeypatch.setenv("HF_API_KEY", "hf_123")

        settings = Settings.from_env()

        assert settings.db_path == Path("/tmp/x.db")
        assert settings.log_level == "DEBUG"
        assert settings.hf_api_key == "hf_123"


class TestLoadEnv:
    """Test .env loading."""

    def test_loads_dotenv_from_cwd(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("HF_API_KEY", raising=False)
        (tmp_path / ".env").write_text("HF_API_KEY=hf_from_file\n")

        load_env()

        assert Settings.from_env().hf_api_key == "hf_from_file"
        monkeypatch.delenv("HF_API_KEY")

    def test_environment_wins_over_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("HF_API_KEY", "hf_env")
        (tmp_path / ".env").write_text("HF_API_KEY=hf_from_file\n")

        load_env()

        assert Settings.from_env().hf_api_key == "hf_env"

    def test_missing_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        load_env()
