# pantryscan/config.py
from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

DEFAULT_MODEL = "gpt-4o-mini"


def _float_env(key: str, default: float) -> float:
    raw = os.getenv(key)
    if raw is None or not raw.strip():
        return default
    return float(raw)


def _int_env(key: str, default: int) -> int:
    raw = os.getenv(key)
    if raw is None or not raw.strip():
        return default
    return int(raw)


@dataclass(frozen=True)
class Settings:
    openai_api_key: str = ""
    model: str = DEFAULT_MODEL
    max_tokens: int = 1000
    temperature: float = 0.1
    shared_secret: Optional[str] = None
    environment: str = "development"
    log_level: str = "INFO"

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @classmethod
    def from_env(cls, dotenv: bool = True) -> "Settings":
        """Read settings from the process environment (and .env, if present).

        A missing OPENAI_API_KEY is not an error here: the endpoint reports it
        as a configuration error per request, so sentinel and validation paths
        keep working without a key.
        """
        if dotenv:
            load_dotenv()
        return cls(
            openai_api_key=os.getenv("OPENAI_API_KEY", "").strip(),
            model=os.getenv("MODEL", DEFAULT_MODEL),
            max_tokens=_int_env("OPENAI_MAX_TOKENS", 1000),
            temperature=_float_env("OPENAI_TEMPERATURE", 0.1),
            shared_secret=os.getenv("PANTRYSCAN_SHARED_SECRET") or None,
            environment=os.getenv("ENVIRONMENT", "development"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )
