import os
import tomllib
from dataclasses import dataclass
from pathlib import Path


PROJECT_ROOT = Path(__file__).resolve().parent
DEFAULT_STORAGE_PATH = str(Path.home() / ".resume_dashboard" / "storage.json")


def _load_secrets() -> dict:
    secrets_path = PROJECT_ROOT / ".streamlit" / "secrets.toml"
    if not secrets_path.exists():
        return {}
    try:
        return tomllib.loads(secrets_path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError):
        return {}


_SECRETS = _load_secrets().get("dashboard", {})


def _setting(name: str, secret_key: str, default: str) -> str:
    value = os.getenv(name)
    if value is not None and value.strip():
        return value.strip()
    secret = _SECRETS.get(secret_key)
    if secret is not None and str(secret).strip():
        return str(secret).strip()
    return default


def _env_bool(name: str, secret_key: str, default: bool = False) -> bool:
    value = _setting(name, secret_key, "").lower()
    if not value:
        return default
    return value in ("1", "true", "yes", "on")


def _env_int(name: str, secret_key: str, default: int) -> int:
    try:
        return max(1, int(_setting(name, secret_key, str(default))))
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    api_url: str = _setting("RESUME_DASHBOARD_API_URL", "api_url", "http://localhost:5000").rstrip("/")
    public_url: str = _setting("RESUME_DASHBOARD_PUBLIC_URL", "public_url", "http://localhost:8501").rstrip("/")
    storage_path: str = _setting("RESUME_DASHBOARD_STORAGE_PATH", "storage_path", DEFAULT_STORAGE_PATH)
    page_size: int = _env_int("RESUME_DASHBOARD_PAGE_SIZE", "page_size", 6)
    health_interval_sec: int = _env_int("RESUME_DASHBOARD_HEALTH_INTERVAL_SEC", "health_interval_sec", 10)
    live_updates: bool = _env_bool("RESUME_DASHBOARD_LIVE_UPDATES", "live_updates", True)
    log_level: str = _setting("RESUME_DASHBOARD_LOG_LEVEL", "log_level", "INFO").upper()


settings = Settings()
