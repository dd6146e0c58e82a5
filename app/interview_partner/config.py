from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


def ensure_env_loaded() -> None:

    # Load .env early
    project_root = Path(__file__).resolve().parents[2]  # repo root
    env_path = project_root / ".env"
    if env_path.exists():
        load_dotenv(dotenv_path=env_path, override=False)
    else:
        load_dotenv(override=False)


ensure_env_loaded()


@dataclass(frozen=True)
class Settings:
    openai_api_key: Optional[str]
    model: str
    tts_model: str
    tts_voice: str
    stt_model: str
    request_timeout: float
    temperature: float
    voice_enabled: bool
    log_level: str
    log_file: Optional[str]


def _read_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def _read_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def load_settings() -> Settings:
    timeout = _read_float("OPENAI_TIMEOUT", 30.0)
    if timeout <= 0:
        raise ValueError("OPENAI_TIMEOUT must be positive")
    return Settings(
        openai_api_key=os.getenv("OPENAI_API_KEY") or None,
        model=os.getenv("OPENAI_MODEL", "gpt-4o-mini"),
        tts_model=os.getenv("OPENAI_TTS_MODEL", "gpt-4o-mini-tts"),
        tts_voice=os.getenv("OPENAI_TTS_VOICE", "alloy"),
        stt_model=os.getenv("OPENAI_STT_MODEL", "whisper-1"),
        request_timeout=timeout,
        temperature=_read_float("LLM_TEMPERATURE", 0.7),
        voice_enabled=_read_bool("VOICE_ENABLED", True),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        log_file=os.getenv("LOG_FILE") or None,
    )


settings = load_settings()
