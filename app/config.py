# app/config.py
from __future__ import annotations
import os
from dataclasses import dataclass

FUNCTION_BACKEND = "function"
COMPLETION_BACKEND = "completion"

def _as_float(v: str | None, default: float) -> float:
    try:
        return float(v) if v is not None else default
    except ValueError:
        return default

@dataclass
class Settings:
    # Inbound HTTP
    port: int = int(os.getenv("PORT", "3000"))

    # Which generator handles generateCalendar: "function" or "completion"
    backend: str = os.getenv("CALENDAR_BACKEND", FUNCTION_BACKEND).strip().lower()

    # Variant A: hosted generator function
    generator_url: str = os.getenv(
        "GENERATOR_URL", "https://lovable-content-wiz.lovable.app/functions/v1/generate"
    )

    # Variant B: chat completion API
    completion_url: str = os.getenv("COMPLETION_URL", "https://api.openai.com/v1/chat/completions")
    # Checked per request, a missing key is not a startup failure
    openai_api_key: str | None = os.getenv("OPENAI_API_KEY") or None
    completion_model: str = os.getenv("COMPLETION_MODEL", "gpt-4o-mini")
    completion_temperature: float = _as_float(os.getenv("COMPLETION_TEMPERATURE"), 0.7)

    # Transport default for the single outbound call
    upstream_timeout: float = _as_float(os.getenv("UPSTREAM_TIMEOUT_SECONDS"), 120.0)

_settings: Settings | None = None

def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
