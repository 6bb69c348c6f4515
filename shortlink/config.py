import os
from dataclasses import dataclass


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8000"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    static_dir: str = os.getenv("STATIC_DIR", "static")
    token_bytes: int = int(os.getenv("TOKEN_BYTES", "4"))
    token_length: int = int(os.getenv("TOKEN_LENGTH", "6"))
    unique_tokens: bool = _env_flag("UNIQUE_TOKENS")
    max_token_retries: int = int(os.getenv("MAX_TOKEN_RETRIES", "10"))

settings = Settings()
