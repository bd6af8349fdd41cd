from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from dotenv import find_dotenv, load_dotenv

from doc_chat.errors import ConfigurationError
from doc_chat.llm import Provider, parse_provider


@dataclass(frozen=True)
class Settings:
    provider: str
    model: str | None

    openai_api_key: str | None
    openrouter_api_key: str | None

    timeout_s: float | None
    log_dir: Path
    log_level: str


def load_settings() -> Settings:
    # Allow users to keep secrets in a `.env` next to where they run (not committed).
    load_dotenv(find_dotenv(usecwd=True), override=False)

    def getenv(key: str, default: str | None = None) -> str | None:
        v = os.getenv(key)
        if v is None or v == "":
            return default
        return v

    provider = (getenv("DOCCHAT_PROVIDER", "openai") or "openai").strip().lower()
    model = getenv("DOCCHAT_MODEL", None)

    timeout_raw = getenv("DOCCHAT_TIMEOUT_S", None)
    try:
        timeout_s = float(timeout_raw) if timeout_raw is not None else None
    except ValueError as exc:
        raise ConfigurationError(f"DOCCHAT_TIMEOUT_S must be a number, got {timeout_raw!r}") from exc

    log_level = (getenv("DOCCHAT_LOG_LEVEL", "WARNING") or "WARNING").strip().upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ConfigurationError(f"DOCCHAT_LOG_LEVEL must be a logging level name, got {log_level!r}")

    return Settings(
        provider=provider,
        model=model,
        openai_api_key=getenv("OPENAI_API_KEY", None),
        openrouter_api_key=getenv("OPENROUTER_API_KEY", None),
        timeout_s=timeout_s,
        log_dir=Path(getenv("DOCCHAT_LOG_DIR", "logs") or "logs").resolve(),
        log_level=log_level,
    )


class StaticCredentials:
    """Credential source backed by a provider -> API key mapping."""

    def __init__(self, keys: Mapping[Provider | str, str | None]) -> None:
        self._keys = {parse_provider(p): k for p, k in keys.items()}

    @classmethod
    def from_settings(cls, settings: Settings) -> "StaticCredentials":
        return cls(
            {
                Provider.OPENAI: settings.openai_api_key,
                Provider.OPENROUTER: settings.openrouter_api_key,
            }
        )

    def resolve_credential(self, provider: Provider | str) -> str:
        p = parse_provider(provider)
        key = self._keys.get(p)
        if not key:
            env = f"{p.value.upper()}_API_KEY"
            raise ConfigurationError(f"Missing {env} for provider {p.value} (set it in the environment or .env)")
        return key
