"""Explicit configuration for the generation service."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv

DEFAULT_GEMINI_MODEL = "gemini-1.5-flash"
DEFAULT_GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"

_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class GeneratorConfig:
    gemini_api_key: Optional[str] = None
    gemini_model: str = DEFAULT_GEMINI_MODEL
    gemini_base_url: str = DEFAULT_GEMINI_BASE_URL
    request_timeout_seconds: float = 30.0
    schema_version: str = "1.0.0"
    analytics_enabled: bool = True
    database_url: Optional[str] = None

    @classmethod
    def from_env(cls, env_file: Optional[Union[str, Path]] = None) -> "GeneratorConfig":
        """Read configuration from the process environment after loading a .env file."""
        load_dotenv(dotenv_path=env_file)

        raw_timeout = os.getenv("ECHOPROMPT_REQUEST_TIMEOUT")
        timeout = cls.request_timeout_seconds
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError as e:
                raise ValueError(
                    f"ECHOPROMPT_REQUEST_TIMEOUT must be a number, got {raw_timeout!r}"
                ) from e

        analytics_flag = os.getenv("ECHOPROMPT_ANALYTICS_ENABLED", "true")

        return cls(
            gemini_api_key=os.getenv("GEMINI_API_KEY") or None,
            gemini_model=os.getenv("ECHOPROMPT_GEMINI_MODEL") or DEFAULT_GEMINI_MODEL,
            gemini_base_url=os.getenv("ECHOPROMPT_GEMINI_BASE_URL") or DEFAULT_GEMINI_BASE_URL,
            request_timeout_seconds=timeout,
            analytics_enabled=analytics_flag.strip().lower() not in _FALSE_VALUES,
            database_url=os.getenv("ECHOPROMPT_DATABASE_URL") or None,
        )
