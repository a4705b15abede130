"""Project-level configuration and path helpers."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Union

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
DATA_DIR = PROJECT_ROOT / "03_data"
LOGS_DIR = PROJECT_ROOT / "04_logs"
DEFAULT_DB_PATH = DATA_DIR / "relay.db"
DEFAULT_LOG_PATH = LOGS_DIR / "app.log"
DEFAULT_PORT = 3978

DATA_DIR.mkdir(parents=True, exist_ok=True)
LOGS_DIR.mkdir(parents=True, exist_ok=True)


PathLike = Union[str, Path]


def resolve_db_path(env_value: PathLike | None = None) -> PathLike:
    """Resolve DATABASE_URL to an absolute path."""
    if not env_value:
        return DEFAULT_DB_PATH

    if str(env_value) == ":memory:":
        return ":memory:"

    candidate = Path(env_value)
    return candidate if candidate.is_absolute() else PROJECT_ROOT / candidate


@dataclass
class Settings:
    """Runtime settings read from the environment."""

    engine_url: str | None = None
    sheet_id: str | None = None
    app_id: str | None = None
    app_password: str | None = None
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    db_path: PathLike = DEFAULT_DB_PATH
    engine_timeout: float = 10.0
    engine_connect_retries: int = 1
    reference_max_entries: int = 10_000
    reference_max_age_days: int = 30

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables (call load_dotenv first)."""
        return cls(
            engine_url=os.getenv("TENEO_ENGINE_URL"),
            sheet_id=os.getenv("GOOGLE_SHEET_ID"),
            app_id=os.getenv("MICROSOFT_APP_ID") or None,
            app_password=os.getenv("MICROSOFT_APP_PASSWORD") or None,
            host=os.getenv("API_HOST", "0.0.0.0"),
            # Hosting platforms disagree on the casing of the port variable
            port=int(os.getenv("port") or os.getenv("PORT") or DEFAULT_PORT),
            db_path=resolve_db_path(os.getenv("DATABASE_URL")),
            engine_timeout=float(os.getenv("ENGINE_TIMEOUT_SECONDS", "10")),
            engine_connect_retries=int(os.getenv("ENGINE_CONNECT_RETRIES", "1")),
            reference_max_entries=int(os.getenv("REFERENCE_MAX_ENTRIES", "10000")),
            reference_max_age_days=int(os.getenv("REFERENCE_MAX_AGE_DAYS", "30")),
        )
