# common/settings.py
from __future__ import annotations

import logging
import sys
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator


class Settings(BaseSettings):
    # -------- Logging ----------
    # We expose them in lowercase, but accept .env UPPERCASE via alias.
    log_level: str = Field("INFO", alias="FORM_LOG_LEVEL")
    log_failures: bool = Field(True, alias="FORM_LOG_FAILURES")  # False -> failures go to DEBUG

    # pydantic-settings config
    model_config = SettingsConfigDict(
        env_file=".env",                 # load env from repo root
        env_file_encoding="utf-8",
        case_sensitive=False,            # allow lower/upper in env
        populate_by_name=True,
        extra="ignore",                  # ignore unknown env keys
    )

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        v = v.strip().upper()
        if not isinstance(logging.getLevelName(v), int):
            raise ValueError(f"FORM_LOG_LEVEL must be a logging level name, got {v!r}")
        return v


def _pretty_fail(msg: str) -> None:
    print(f"\n[settings] {msg}\n", file=sys.stderr)
    sys.exit(1)


try:
    settings = Settings()
except Exception as e:
    _pretty_fail(
        "Invalid settings. Check .env (repo root) or the environment:\n"
        "  FORM_LOG_LEVEL=DEBUG|INFO|WARNING|ERROR\n"
        "  FORM_LOG_FAILURES=true|false\n\n"
        f"Raw error: {e}"
    )
