import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


def _bool(val: str | None, default: bool = False) -> bool:
    if val is None:
        return default
    return val.strip().lower() in {"1", "true", "yes", "y", "on"}


def _csv(val: str | None, default: list[str]) -> list[str]:
    if not val:
        return default
    return [v.strip() for v in val.split(",") if v.strip()]


def _int(val: str | None, default: int) -> int:
    if val is None or not val.strip():
        return default
    return int(val)


@dataclass(frozen=True)
class Settings:
    env: str = os.getenv("ENV", "local")

    # Server
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = _int(os.getenv("PORT"), 9000)
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

    storage_backend: str = os.getenv("STORAGE_BACKEND", "local")
    # Storage root is relative to the working directory unless absolute
    storage_root: Path = Path(os.getenv("STORAGE_ROOT", "public"))
    upload_chunk_bytes: int = _int(os.getenv("UPLOAD_CHUNK_BYTES"), 1024 * 1024)
    atomic_uploads: bool = _bool(os.getenv("ATOMIC_UPLOADS"), default=True)

    # CORS
    cors_allow_origins: list[str] = field(
        default_factory=lambda: _csv(os.getenv("CORS_ALLOW_ORIGINS"), default=["*"])
    )

    # Security headers
    security_headers_enabled: bool = _bool(
        os.getenv("SECURITY_HEADERS_ENABLED"),
        default=True,
    )

    # Metrics
    metrics_enabled: bool = _bool(os.getenv("METRICS_ENABLED"), default=True)


settings = Settings()
