from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parents[3]
ENV_PATH = BASE_DIR / ".env"
load_dotenv(ENV_PATH)

DOCUMENTS_PATH = Path(os.path.expanduser("~")) / "Documents"
APP_NAME = os.getenv("APP_NAME", "Bunk Calculator")


def _default_app_data_dir() -> Path:
    return Path(os.getenv("APP_DATA_DIR", str(DOCUMENTS_PATH / APP_NAME))).expanduser()


@dataclass(frozen=True)
class Settings:
    app_name: str = APP_NAME
    app_data_dir: Path = _default_app_data_dir()
    session_file: Path = Path(
        os.getenv("SESSION_FILE", str(_default_app_data_dir() / "session.json"))
    ).expanduser()
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

    def __repr__(self) -> str:
        return (
            f"Settings(app_name={self.app_name}, "
            f"app_data_dir={self.app_data_dir}, "
            f"session_file={self.session_file}, "
            f"log_level={self.log_level})"
        )


settings = Settings()
