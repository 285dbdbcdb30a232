"""Runtime configuration read from the environment (and backend/.env)."""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load backend/.env early so provider keys and limits are honored consistently.
env_path = Path(__file__).resolve().parent / ".env"
load_dotenv(dotenv_path=env_path, override=False)


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(name)
    return value if value not in (None, "") else default


def _env_int(name: str, default: int, min_value: int, max_value: int) -> int:
    raw = os.getenv(name)
    try:
        value = int(raw) if raw not in (None, "") else default
    except Exception:
        value = default
    return max(min_value, min(max_value, value))


def _env_float(name: str, default: float, min_value: float, max_value: float) -> float:
    raw = os.getenv(name)
    try:
        value = float(raw) if raw not in (None, "") else default
    except Exception:
        value = default
    return max(min_value, min(max_value, value))


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw in (None, ""):
        return default
    return str(raw).strip().lower() in ("1", "true", "yes", "on")


# Provider credentials are looked up by name: "grok" -> GROK_API_KEY.
PROVIDER_KEY_ENV = {
    "grok": "GROK_API_KEY",
    "groq": "GROQ_API_KEY",
}


def provider_api_keys() -> dict[str, Optional[str]]:
    return {name: _env(env_name) for name, env_name in PROVIDER_KEY_ENV.items()}


def default_provider() -> Optional[str]:
    value = _env("DEFAULT_LLM_PROVIDER")
    return value.strip().lower() if value else None


LLM_MAX_TOKENS = _env_int("LLM_MAX_TOKENS", 800, 64, 4096)
LLM_TEMPERATURE = _env_float("LLM_TEMPERATURE", 0.7, 0.0, 2.0)
LLM_HISTORY_WINDOW = _env_int("LLM_HISTORY_WINDOW", 10, 0, 100)
LLM_HTTP_TIMEOUT_SEC = _env_float("LLM_HTTP_TIMEOUT_SEC", 75.0, 5.0, 300.0)

GROK_REQUESTS_PER_MINUTE = _env_int("GROK_REQUESTS_PER_MINUTE", 60, 1, 10000)
GROQ_REQUESTS_PER_MINUTE = _env_int("GROQ_REQUESTS_PER_MINUTE", 30, 1, 10000)

SESSION_TTL_SEC = _env_float("SESSION_TTL_SEC", 3600.0, 60.0, 7 * 24 * 3600.0)
SESSION_MAX_COUNT = _env_int("SESSION_MAX_COUNT", 1000, 1, 1_000_000)

LOG_LEVEL = (_env("LOG_LEVEL", "INFO") or "INFO").upper()

# Hard ceiling for a client-supplied max_attempts on /api/chat.
AUTO_REPAIR_ATTEMPTS_LIMIT = 5
AUTO_REPAIR_MAX_ATTEMPTS = _env_int("AUTO_REPAIR_MAX_ATTEMPTS", 2, 1, AUTO_REPAIR_ATTEMPTS_LIMIT)
