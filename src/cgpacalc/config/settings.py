from dataclasses import dataclass
import os
from dotenv import load_dotenv


load_dotenv()


def _split_csv(value: str) -> tuple[str, ...]:
    return tuple(item.strip() for item in value.split(",") if item.strip())


def _flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    default_grade_system: str = os.getenv("CGPA_DEFAULT_GRADE_SYSTEM", "10")
    export_filename: str = os.getenv("CGPA_EXPORT_FILENAME", "cgpa_data.json")
    data_dir: str = os.getenv("CGPA_DATA_DIR", "data")
    strict_import: bool = _flag("CGPA_STRICT_IMPORT")

    log_level: str = os.getenv("CGPA_LOG_LEVEL", "INFO").upper()

    web_mode: bool = _flag("CGPA_WEB")
    port: int = int(os.getenv("PORT", "8550"))

    cors_allowed_origins: tuple[str, ...] = _split_csv(
        os.getenv("CORS_ALLOWED_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173")
    )


settings = Settings()
