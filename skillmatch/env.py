import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

DEFAULT_DB_PATH = "data/skillmatch.db"
DEFAULT_LOG_DIR = "logs"
DEFAULT_LOG_LEVEL = "INFO"


def load_env() -> None:
    """Load .env from the working directory if present.

    Variables already set in the environment win over the file.
    """
    env_path = Path.cwd() / ".env"
    if env_path.exists():
        load_dotenv(dotenv_path=env_path, override=False)


@dataclass
class Settings:
    db_path: Path
    log_dir: Path
    log_level: str = DEFAULT_LOG_LEVEL
    hf_api_key: Optional[str] = None

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            db_path=Path(os.getenv("SKILLMATCH_DB_PATH") or DEFAULT_DB_PATH),
            log_dir=Path(os.getenv("SKILLMATCH_LOG_DIR") or DEFAULT_LOG_DIR),
            log_level=(os.getenv("SKILLMATCH_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper(),
            hf_api_key=os.getenv("HF_API_KEY") or None,
        )
