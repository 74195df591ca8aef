import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from dotenv import load_dotenv

from webgen.ir.errors import ConfigurationError


DEFAULT_LLM_BASE_URL = "https://api.deepseek.com/v1"
DEFAULT_LLM_MODEL = "deepseek-chat"
DEFAULT_DATABASE_URL = "sqlite:///./webgen.db"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "WARN", "INFO", "DEBUG", "NOTSET")


@dataclass(frozen=True)
class Settings:
    api_key: str
    llm_base_url: str = DEFAULT_LLM_BASE_URL
    llm_model: str = DEFAULT_LLM_MODEL
    temperature: float = 0.7
    max_tokens: int = 4000
    top_p: float = 1.0
    frequency_penalty: float = 0.0
    presence_penalty: float = 0.0
    timeout: float = 300
    database_url: str = DEFAULT_DATABASE_URL
    cors_origins: Tuple[str, ...] = ("*",)
    log_level: str = "INFO"


def _number(env: Mapping[str, str], name: str, default, cast):
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from e


def _log_level(env: Mapping[str, str]) -> str:
    level = (env.get("LOG_LEVEL") or "INFO").strip().upper()
    if level not in LOG_LEVELS:
        raise ConfigurationError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {level!r}")
    return level


def parse_origins(raw: Optional[str]) -> Tuple[str, ...]:
    origins = tuple(o.strip() for o in (raw or "*").split(",") if o.strip())
    return origins or ("*",)


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Read process configuration once.

    When env is omitted, .env is loaded into os.environ first. A missing
    DEEPSEEK_API_KEY is a fatal ConfigurationError.
    """
    if env is None:
        load_dotenv()
        env = os.environ

    api_key = (env.get("DEEPSEEK_API_KEY") or "").strip()
    if not api_key:
        raise ConfigurationError("DEEPSEEK_API_KEY is not set")

    return Settings(
        api_key=api_key,
        llm_base_url=env.get("LLM_BASE_URL", DEFAULT_LLM_BASE_URL),
        llm_model=env.get("LLM_MODEL", DEFAULT_LLM_MODEL),
        temperature=_number(env, "LLM_TEMPERATURE", 0.7, float),
        max_tokens=_number(env, "LLM_MAX_TOKENS", 4000, int),
        top_p=_number(env, "LLM_TOP_P", 1.0, float),
        frequency_penalty=_number(env, "LLM_FREQUENCY_PENALTY", 0.0, float),
        presence_penalty=_number(env, "LLM_PRESENCE_PENALTY", 0.0, float),
        timeout=_number(env, "LLM_TIMEOUT", 300, float),
        database_url=env.get("DATABASE_URL", DEFAULT_DATABASE_URL),
        cors_origins=parse_origins(env.get("CORS_ORIGINS")),
        log_level=_log_level(env),
    )
