"""Configuration management for esquery."""

import os

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    """Parse a true/false environment variable."""
    return os.getenv(name, default).strip().lower() == "true"


class Settings(BaseModel):
    """Library settings."""

    # Substitution mode: ":name" tokens instead of "?N" positions
    use_named_parameters: bool = _env_flag("ESQUERY_USE_NAMED_PARAMETERS", "false")

    # Fail on ":name" tokens in a template that no parameter declares
    strict_named_parameters: bool = _env_flag("ESQUERY_STRICT_NAMED_PARAMETERS", "false")

    # Prefix of named placeholder tokens built from parameter names
    named_parameter_prefix: str = os.getenv("ESQUERY_NAMED_PARAMETER_PREFIX", ":")

    # Fall back to str(value) for types the conversion context can't handle
    allow_fallback_conversion: bool = _env_flag("ESQUERY_ALLOW_FALLBACK_CONVERSION", "true")

    # Logging
    log_level: str = os.getenv("ESQUERY_LOG_LEVEL", "WARNING")


settings = Settings()
