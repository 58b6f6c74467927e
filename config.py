import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent

load_dotenv(BASE_DIR / ".env")

DEFAULT_MONGODB_URI = "mongodb://127.0.0.1:27017/qmanage"


def _get_list(name: str, fallback: str = "") -> List[str]:
    raw_value = os.getenv(name, fallback)
    if not raw_value:
        return []
    return [item.strip() for item in raw_value.split(",") if item.strip()]


def _database_name_from_uri(uri: str) -> Optional[str]:
    # mongodb://host:port/<name>?options
    rest = uri.split("://", 1)[-1]
    if "/" not in rest:
        return None
    name = rest.split("/", 1)[1].split("?", 1)[0]
    return name or None


@dataclass(frozen=True)
class Settings:
    mongodb_uri: str = os.getenv("MONGODB_URI") or os.getenv("DATABASE_URL") or DEFAULT_MONGODB_URI
    database_name_override: Optional[str] = os.getenv("DATABASE_NAME")
    allowed_origins: List[str] = field(
        default_factory=lambda: _get_list("ALLOWED_ORIGINS", "*")
    )
    port: int = int(os.getenv("PORT", "5000"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()
    sample_data_dir: Path = Path(os.getenv("SAMPLE_DATA_DIR") or BASE_DIR / "data")

    @property
    def database_name(self) -> str:
        return (
            self.database_name_override
            or _database_name_from_uri(self.mongodb_uri)
            or "qmanage"
        )


settings = Settings()
