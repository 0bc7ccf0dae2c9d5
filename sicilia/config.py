"""
Runtime configuration for Sicilia.

Values come from the environment (optionally a .env file in the
working directory).
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel


DEFAULT_DATA_DIR = Path.home() / ".sicilia"
DEFAULT_DB_PATH = DEFAULT_DATA_DIR / "sicilia.db"
DEFAULT_SEED_PATH = Path(__file__).parent / "data" / "seed_catalog.json"
DEFAULT_TUTOR_MODEL = "llama-3.3-70b-versatile"
DEFAULT_TUTOR_BASE_URL = "https://api.groq.com/openai/v1"


class Settings(BaseModel):
    db_path: Path = DEFAULT_DB_PATH
    seed_path: Path = DEFAULT_SEED_PATH
    groq_api_key: Optional[str] = None
    tutor_model: str = DEFAULT_TUTOR_MODEL
    tutor_base_url: str = DEFAULT_TUTOR_BASE_URL
    revenuecat_api_key: Optional[str] = None
    revenuecat_app_user_id: str = "default"

    @classmethod
    def from_env(cls, env_file: Optional[Path] = None) -> "Settings":
        """Build settings from environment variables (after loading .env)."""
        load_dotenv(env_file)

        return cls(
            db_path=Path(os.environ.get("SICILIA_DB_PATH", DEFAULT_DB_PATH)),
            seed_path=Path(os.environ.get("SICILIA_SEED_PATH", DEFAULT_SEED_PATH)),
            groq_api_key=os.environ.get("GROQ_API_KEY") or None,
            tutor_model=os.environ.get("SICILIA_TUTOR_MODEL", DEFAULT_TUTOR_MODEL),
            tutor_base_url=os.environ.get("SICILIA_TUTOR_BASE_URL", DEFAULT_TUTOR_BASE_URL),
            revenuecat_api_key=os.environ.get("REVENUECAT_API_KEY") or None,
            revenuecat_app_user_id=os.environ.get("REVENUECAT_APP_USER_ID", "default"),
        )
