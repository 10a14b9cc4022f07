"""
Single place to read settings from the environment.

A local .env is loaded first (dev convenience); in prod the platform injects
the variables. Nothing here talks to the network or touches the game.
"""

import os
from dataclasses import dataclass
from typing import Optional, Tuple

from dotenv import load_dotenv

# 1) Load env vars from .env if present
load_dotenv()


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    app_env: str = "local"
    host: str = "127.0.0.1"
    port: int = 3001
    cors_origins: Tuple[str, ...] = ("*",)
    # Player secret used until /api/init is called; None = wait for /api/init
    default_secret: Optional[str] = None
    use_random_org: bool = True
    random_org_timeout: float = 3.0
    log_level: str = "INFO"


def get_settings() -> Settings:
    # Read on every call so tests can monkeypatch the environment
    origins = os.getenv("EATBITE_CORS_ORIGINS", "*")
    return Settings(
        app_env=os.getenv("APP_ENV", "local"),
        host=os.getenv("EATBITE_HOST", "127.0.0.1"),
        port=int(os.getenv("EATBITE_PORT", "3001")),
        cors_origins=tuple(o.strip() for o in origins.split(",") if o.strip()),
        default_secret=os.getenv("EATBITE_DEFAULT_SECRET") or None,
        use_random_org=_flag("EATBITE_USE_RANDOM_ORG", "1"),
        random_org_timeout=float(os.getenv("EATBITE_RANDOM_ORG_TIMEOUT", "3.0")),
        log_level=os.getenv("EATBITE_LOG_LEVEL", "INFO").upper(),
    )
